# exceptions/configuration.py
"""
Configuration related exceptions.
"""


class ConfigurationError(Exception):
    """
    Raised when required configuration is missing or invalid
    """

    pass
