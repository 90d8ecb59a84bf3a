"""
Check registry

Maps check names to the factories that build them. The default registry is
populated once at import time by ``build_default_registry`` and only read
while requests are being handled.
"""

import logging
from typing import Callable, Dict, Optional, Set

from .checks import (
    CacheCheck,
    Check,
    ConstantCheck,
    DatabaseCheck,
    ErrorCheck,
    GitRevisionCheck,
    HttpCheck,
    MigrationVersionCheck,
    StaticCheck,
)
from .exceptions import CheckNotFound

logger = logging.getLogger(__name__)

CheckFactory = Callable[..., Check]

BUILTIN_CHECKS = (
    HttpCheck,
    ErrorCheck,
    StaticCheck,
    GitRevisionCheck,
    ConstantCheck,
    DatabaseCheck,
    MigrationVersionCheck,
    CacheCheck,
)


class CheckRegistry:
    """Registry for health check factories"""

    def __init__(self):
        self._factories: Dict[str, CheckFactory] = {}

    def register(self, name: str, factory: CheckFactory) -> None:
        """
        Register a check factory under ``name``.

        Registering an existing name replaces the previous factory.
        """
        if name in self._factories:
            logger.debug(f"Replacing health check factory for {name}")
        self._factories[name] = factory
        logger.debug(f"Registered health check: {name}")

    def unregister(self, name: str) -> None:
        """Unregister a check factory"""
        self._factories.pop(name, None)

    def lookup(self, name: str) -> CheckFactory:
        """
        Return the factory registered under ``name``.

        Raises:
            CheckNotFound: If no factory is registered under that name
        """
        try:
            return self._factories[name]
        except KeyError:
            raise CheckNotFound(name) from None

    def get(self, name: str, default: Optional[CheckFactory] = None) -> Optional[CheckFactory]:
        return self._factories.get(name, default)

    def all_registered_names(self) -> Set[str]:
        return set(self._factories)

    def __contains__(self, name):
        return name in self._factories

    def __len__(self):
        return len(self._factories)

    def __repr__(self):
        return f"CheckRegistry(checks={sorted(self._factories)})"


def register_default_checks(registry: CheckRegistry) -> CheckRegistry:
    """Register the built-in checks"""
    for check_class in BUILTIN_CHECKS:
        registry.register(check_class.name, check_class)
    return registry


def build_default_registry() -> CheckRegistry:
    return register_default_checks(CheckRegistry())


# Global registry instance
check_registry = build_default_registry()
