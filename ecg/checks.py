"""
Health Check Implementation

Every check produces exactly one CheckResult. Failures inside a check are
contained by Check.result() and reported as unhealthy results, so a broken
dependency never breaks the health endpoint itself.
"""
import logging
import subprocess
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from django.conf import settings
from django.core.cache import caches
from django.core.cache.backends.base import InvalidCacheBackendError
from django.db import connections
from django.utils.connection import ConnectionDoesNotExist
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckResult:
    """Result of a health check"""
    name: str
    is_healthy: bool
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {'isHealthy': self.is_healthy, 'message': self.message}


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an external command"""
    success: bool
    stdout: str
    stderr: str


class CommandRunner:
    """Runs an external command and captures its output"""

    def run(self, args: List[str], cwd: Optional[str] = None) -> CommandResult:
        raise NotImplementedError


class SubprocessCommandRunner(CommandRunner):
    """CommandRunner backed by subprocess.run"""

    def run(self, args: List[str], cwd: Optional[str] = None) -> CommandResult:
        completed = subprocess.run(args, cwd=cwd, capture_output=True, text=True)
        return CommandResult(
            success=completed.returncode == 0,
            stdout=completed.stdout or '',
            stderr=completed.stderr or '',
        )


class Check:
    """
    Base health check class.

    Subclasses set ``name`` to their registry key and implement
    ``_perform_check`` returning ``(is_healthy, message)``. The result is
    reported under ``label``, which defaults to ``name``.
    """

    name = 'check'

    def __init__(self, label: Optional[str] = None):
        self.label = label or self.name

    def result(self) -> CheckResult:
        """Run the health check"""
        start_time = time.time()

        try:
            is_healthy, message = self._perform_check()
        except Exception as e:
            logger.exception(f"Health check {self.label} failed: {e}")
            is_healthy, message = False, f"{type(e).__name__}: {e}"

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(f"Health check {self.label} finished in {duration_ms:.1f}ms")

        return CheckResult(
            name=self.label,
            is_healthy=bool(is_healthy),
            message=str(message),
        )

    def _perform_check(self) -> Tuple[bool, str]:
        """Perform the actual health check - override in subclasses"""
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}(label={self.label!r})"


class HttpCheck(Check):
    """Reports that the request reached the application"""

    name = 'http'

    def _perform_check(self):
        return True, 'online'


class ErrorCheck(Check):
    """Always unhealthy; exercises the failure path"""

    name = 'error'

    def _perform_check(self):
        return False, 'An error occurred'


class StaticCheck(Check):
    """Reports a fixed, configured outcome"""

    name = 'static'

    def __init__(self, label: Optional[str] = None, success: bool = True, value: Any = ''):
        super().__init__(label)
        self.success = success
        self.value = value

    def _perform_check(self):
        return bool(self.success), str(self.value)


class GitRevisionCheck(Check):
    """Reports the commit currently checked out"""

    name = 'git_revision'
    default_command = ['git', 'rev-parse', 'HEAD']

    def __init__(
        self,
        label: Optional[str] = None,
        command: Optional[List[str]] = None,
        cwd: Optional[str] = None,
        runner: Optional[CommandRunner] = None,
    ):
        super().__init__(label)
        self.command = list(command or self.default_command)
        self.cwd = cwd
        self.runner = runner or SubprocessCommandRunner()

    def _perform_check(self):
        try:
            outcome = self.runner.run(self.command, cwd=self.cwd)
        except OSError as e:
            logger.error(f"Could not run {' '.join(self.command)}: {e}")
            return False, f"Could not run {self.command[0]}: {e}"

        output = outcome.stdout if outcome.success else outcome.stderr
        return outcome.success, output.strip()


class ConstantCheck(Check):
    """
    Reports the value of a named constant.

    Dotted names (``sys.version``) are imported; bare names are looked up
    on the Django settings object.
    """

    name = 'constant'

    def __init__(self, label: Optional[str] = None, name: str = ''):
        super().__init__(label or name or None)
        self.constant_name = name

    def _perform_check(self):
        missing = f"Constant ( {self.constant_name} ) missing"

        if not self.constant_name:
            return False, missing

        if '.' in self.constant_name:
            try:
                value = import_string(self.constant_name)
            except (ImportError, ValueError):
                return False, missing
        else:
            sentinel = object()
            value = getattr(settings, self.constant_name, sentinel)
            if value is sentinel:
                return False, missing

        return True, str(value)


class DatabaseCheck(Check):
    """Database connectivity check"""

    name = 'database'

    def __init__(self, label: Optional[str] = None, using: str = 'default'):
        super().__init__(label)
        self.using = using

    def _get_connection(self):
        try:
            return connections[self.using]
        except ConnectionDoesNotExist:
            return None

    def _perform_check(self):
        connection = self._get_connection()
        if connection is None:
            return False, f"Database ( {self.using} ) not found"

        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()

        return True, connection.vendor


class MigrationVersionCheck(DatabaseCheck):
    """Reports the latest applied schema migration"""

    name = 'migration_version'
    default_query = (
        "SELECT name FROM django_migrations ORDER BY applied DESC, id DESC LIMIT 1"
    )

    def __init__(self, label: Optional[str] = None, using: str = 'default', query: Optional[str] = None):
        super().__init__(label, using=using)
        self.query = query or self.default_query

    def _perform_check(self):
        connection = self._get_connection()
        if connection is None:
            return False, f"Database ( {self.using} ) not found"

        with connection.cursor() as cursor:
            cursor.execute(self.query)
            row = cursor.fetchone()

        if not row or row[0] is None:
            return True, ''

        return True, str(row[0])


class CacheCheck(Check):
    """Cache read/write check"""

    name = 'cache'
    test_key = '_ecg_health_check'
    test_value = 'healthy'

    def __init__(self, label: Optional[str] = None, using: str = 'default'):
        super().__init__(label)
        self.using = using

    def _perform_check(self):
        try:
            cache = caches[self.using]
        except InvalidCacheBackendError:
            return False, f"Cache ( {self.using} ) not found"

        cache.set(self.test_key, self.test_value, 10)
        value = cache.get(self.test_key)
        cache.delete(self.test_key)

        if value != self.test_value:
            return False, 'Cache read/write mismatch'

        return True, 'Cache is healthy'
