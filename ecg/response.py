"""
Response builder

Renders a HealthReport as the JSON response served by the health endpoint.
"""

from django.http import JsonResponse

from . import __version__
from .conf import DEFAULT_FAILURE_STATUS
from .runner import HealthReport

VERSION_HEADER = 'X-ECG-Version'


class ResponseBuilder:
    """Builds health endpoint responses"""

    def __init__(self, failure_status: int = DEFAULT_FAILURE_STATUS, version: str = __version__):
        self.failure_status = failure_status
        self.version = version

    def build(self, report: HealthReport) -> JsonResponse:
        status_code = 200 if report.is_healthy else self.failure_status
        response = JsonResponse(report.to_dict(), status=status_code)
        return self._add_headers(response)

    def build_ping(self) -> JsonResponse:
        """Liveness response; no checks are run"""
        return self.build(HealthReport())

    def _add_headers(self, response: JsonResponse) -> JsonResponse:
        response[VERSION_HEADER] = self.version
        response['Cache-Control'] = 'no-cache, no-store, must-revalidate, max-age=0'
        return response
