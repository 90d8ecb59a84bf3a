"""
Health Check Views

For projects that route the health endpoint through the URLconf instead of
the middleware.
"""
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.cache import never_cache

from .conf import get_config
from .middleware import HealthCheckService
from .response import ResponseBuilder


@method_decorator(never_cache, name='dispatch')
class HealthCheckView(View):
    """Runs the configured checks"""

    config = None
    registry = None

    def get(self, request):
        service = HealthCheckService(self.config, registry=self.registry)
        return service.health_response()


@method_decorator(never_cache, name='dispatch')
class PingView(View):
    """Liveness probe; runs no checks"""

    config = None

    def get(self, request):
        config = get_config(self.config)
        return ResponseBuilder(failure_status=config['failure_status']).build_ping()
