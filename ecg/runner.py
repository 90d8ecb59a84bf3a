"""
Check runner

Turns the ``checks`` configuration into check instances and runs them in
configuration order.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .checks import Check, CheckResult
from .exceptions import CheckNotFound, ConfigurationError
from .registry import CheckRegistry, check_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckSpec:
    """One enabled entry of the ``checks`` configuration"""
    check: str
    label: str
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class HealthReport:
    """Aggregated outcome of one run"""
    results: List[CheckResult] = field(default_factory=list)

    @property
    def is_healthy(self) -> bool:
        return all(result.is_healthy for result in self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'healthChecks': {
                result.name: result.to_dict()
                for result in self.results
            }
        }


def parse_check_specs(checks: Dict[str, Any]) -> List[CheckSpec]:
    """
    Normalise the ``checks`` configuration.

    ``True`` enables a check with its defaults, ``False`` or ``None``
    disables it and a dict supplies parameters (an optional ``label`` key
    renames the result).

    Raises:
        ConfigurationError: If an entry is neither a bool nor a dict
    """
    specs = []

    for name, value in checks.items():
        if value is None or value is False:
            continue

        if value is True:
            specs.append(CheckSpec(check=name, label=name))
            continue

        if not isinstance(value, dict):
            raise ConfigurationError(
                f"Health check '{name}' must be configured with a bool or a dict, got {value!r}"
            )

        options = dict(value)
        label = options.pop('label', None) or name
        if not isinstance(label, str):
            raise ConfigurationError(f"Health check '{name}' label must be a string, got {label!r}")

        specs.append(CheckSpec(check=name, label=label, options=options))

    labels = [spec.label for spec in specs]
    duplicates = sorted({label for label in labels if labels.count(label) > 1})
    if duplicates:
        raise ConfigurationError(f"Duplicate health check labels: {', '.join(duplicates)}")

    return specs


class CheckRunner:
    """
    Runs the configured checks sequentially.

    Every spec is resolved against the registry when the runner is built, so
    unknown names and bad parameters fail at startup rather than on the first
    health request.
    """

    def __init__(self, specs: List[CheckSpec], registry: Optional[CheckRegistry] = None):
        self.registry = registry if registry is not None else check_registry
        self.specs = list(specs)
        self.checks: List[Check] = [self._build(spec) for spec in self.specs]

    @classmethod
    def from_config(cls, checks: Dict[str, Any], registry: Optional[CheckRegistry] = None) -> 'CheckRunner':
        return cls(parse_check_specs(checks), registry=registry)

    def _build(self, spec: CheckSpec) -> Check:
        try:
            factory = self.registry.lookup(spec.check)
        except CheckNotFound as e:
            available = ', '.join(sorted(self.registry.all_registered_names()))
            raise ConfigurationError(f"{e}. Available checks: {available}") from e

        try:
            return factory(label=spec.label, **spec.options)
        except TypeError as e:
            raise ConfigurationError(f"Invalid options for health check '{spec.check}': {e}") from e

    def run(self, labels: Optional[List[str]] = None) -> HealthReport:
        """
        Run the checks and collect one result per spec.

        Args:
            labels: Restrict the run to these labels, in configuration order
        """
        report = HealthReport()
        start_time = time.time()

        for check in self.checks:
            if labels is not None and check.label not in labels:
                continue
            report.results.append(check.result())

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            f"Ran {len(report.results)} health checks in {duration_ms:.1f}ms "
            f"(healthy={report.is_healthy})"
        )

        return report

    @property
    def labels(self) -> List[str]:
        return [check.label for check in self.checks]
