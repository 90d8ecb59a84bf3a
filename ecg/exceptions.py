"""
ECG Exceptions

Custom exceptions for the health check app.
"""

from django.core.exceptions import ImproperlyConfigured


class ECGException(Exception):
    """Base exception for health check errors"""


class ConfigurationError(ECGException, ImproperlyConfigured):
    """Invalid health check configuration"""


class CheckNotFound(ECGException, KeyError):
    """Check name not present in the registry"""

    def __init__(self, name: str):
        self.check_name = name
        super().__init__(f"Health check '{name}' is not registered")

    def __str__(self):
        return self.args[0]
