# exceptions/notifier.py
"""
Notification exceptions.
"""


class NotificationError(Exception):
    """
    Raised when an outbound alert could not be delivered
    """

    pass
