"""
ECG Middleware

Serves the health endpoint from inside the middleware stack. Requests to the
configured paths are answered here; every other request is passed to the
wrapped application untouched.
"""

import logging
from typing import Any, Dict, Optional

from django.http import HttpRequest, HttpResponse

from .conf import get_config
from .registry import CheckRegistry
from .response import ResponseBuilder
from .runner import CheckRunner, HealthReport

logger = logging.getLogger(__name__)


class HealthCheckService:
    """Configured runner, response builder and hook, shared by the entry points"""

    def __init__(self, config: Optional[Dict[str, Any]] = None, registry: Optional[CheckRegistry] = None):
        self.config = get_config(config)
        self.runner = CheckRunner.from_config(self.config['checks'], registry=registry)
        self.builder = ResponseBuilder(failure_status=self.config['failure_status'])
        self.hook = self.config['hook']

    def run(self, labels=None) -> HealthReport:
        report = self.runner.run(labels)

        if self.hook is not None:
            logger.info(f"Calling health check hook {self.hook!r}")
            self.hook(report.is_healthy, report.results)

        return report

    def health_response(self) -> HttpResponse:
        return self.builder.build(self.run())

    def ping_response(self) -> HttpResponse:
        return self.builder.build_ping()


class ECGMiddleware:
    """
    Middleware exposing the health check endpoint.

    Configured through the ``ECG`` setting::

        ECG = {
            'at': '/__healthcheck',
            'checks': {'git_revision': True},
        }
    """

    def __init__(self, get_response, config: Optional[Dict[str, Any]] = None, registry: Optional[CheckRegistry] = None):
        self.get_response = get_response
        self.service = HealthCheckService(config, registry=registry)
        self.at = self.service.config['at']
        self.ping_at = self.service.config['ping_at']

        logger.info(
            f"Health checks mounted at {self.at} "
            f"({', '.join(self.service.runner.labels) or 'no checks'})"
        )

    def __call__(self, request: HttpRequest) -> HttpResponse:
        path = request.path_info

        if path == self.at:
            return self.service.health_response()

        if self.ping_at is not None and path == self.ping_at:
            return self.service.ping_response()

        return self.get_response(request)
