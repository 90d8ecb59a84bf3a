"""
Health Check URLs
"""
from django.urls import path

from .views import HealthCheckView, PingView

app_name = 'ecg'

urlpatterns = [
    path('', HealthCheckView.as_view(), name='health'),
    path('ping/', PingView.as_view(), name='ping'),
]
