# exceptions/extraction.py
"""
Payload extraction exceptions.
"""


class PayloadShapeError(Exception):
    """
    Raised when no record array can be found in an upstream payload
    """

    pass
