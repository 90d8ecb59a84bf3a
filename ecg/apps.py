"""
ECG App Configuration
"""

from django.apps import AppConfig
from django.conf import settings


class ECGConfig(AppConfig):
    name = 'ecg'
    verbose_name = 'ECG Health Checks'

    def ready(self):
        """Validate the ECG setting so configuration errors fail at startup"""
        if hasattr(settings, 'ECG'):
            from .middleware import HealthCheckService
            HealthCheckService()
