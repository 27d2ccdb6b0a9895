"""
Endpoint Scanner - Discovers controller operations in Python modules

Finds:
- Controller classes (controller / request_mapping decorated) in definition order
- Their mapping-decorated operations (get_mapping, post_mapping, ...)
- Controllers of every submodule when the target is a package
"""

import importlib
import inspect
import logging
import pkgutil
from dataclasses import dataclass
from types import ModuleType
from typing import Callable, Iterable, List, Optional, Union

from apidoc.builder.operation_analyzer import operation_key
from apidoc.introspection.annotations import CONTROLLER_ATTRIBUTE, MAPPINGS_ATTRIBUTE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    """A controller operation to analyze"""

    owner: type
    function: Callable

    @property
    def key(self) -> str:
        return operation_key(self.owner, self.function)


def is_controller(cls: type) -> bool:
    return inspect.isclass(cls) and CONTROLLER_ATTRIBUTE in cls.__dict__


def is_operation(function: Callable) -> bool:
    return inspect.isfunction(function) and bool(getattr(function, MAPPINGS_ATTRIBUTE, ()))


class EndpointScanner:
    """
    Scans modules and packages for controller operations

    Usage:
    ```python
    scanner = EndpointScanner(exclude_classes={"HealthController"})
    endpoints = scanner.scan("myapp.controllers")
    ```
    """

    def __init__(self, exclude_classes: Optional[Iterable[str]] = None):
        """
        Initialize EndpointScanner

        Args:
            exclude_classes: Class names (simple or qualified) to skip
        """
        self.exclude_classes = frozenset(exclude_classes or ())

    def scan(self, target: Union[str, ModuleType]) -> List[Endpoint]:
        """
        Scan a module or package

        Args:
            target: Module object or dotted module/package name

        Returns:
            Endpoints in discovery order

        Raises:
            ValueError: If the target cannot be imported
        """
        module = self._import(target) if isinstance(target, str) else target
        if not hasattr(module, "__path__"):
            return self.scan_module(module)

        endpoints = self.scan_module(module)
        for info in pkgutil.walk_packages(module.__path__, prefix=f"{module.__name__}."):
            endpoints.extend(self.scan_module(self._import(info.name)))
        return endpoints

    def scan_module(self, module: ModuleType) -> List[Endpoint]:
        """Endpoints of the controllers defined in a module"""
        endpoints = []
        for cls in vars(module).values():
            if not is_controller(cls) or cls.__module__ != module.__name__:
                continue
            if self.is_excluded(cls):
                logger.info(f"Skipping excluded controller {cls.__qualname__}")
                continue
            endpoints.extend(self.scan_class(cls))
        logger.debug(f"{module.__name__}: {len(endpoints)} endpoints")
        return endpoints

    @staticmethod
    def scan_class(cls: type) -> List[Endpoint]:
        return [Endpoint(cls, function) for function in vars(cls).values() if is_operation(function)]

    def is_excluded(self, cls: type) -> bool:
        return cls.__name__ in self.exclude_classes or f"{cls.__module__}.{cls.__qualname__}" in self.exclude_classes

    @staticmethod
    def _import(name: str) -> ModuleType:
        try:
            return importlib.import_module(name)
        except ImportError as e:
            raise ValueError(f"Cannot import '{name}': {e}") from e
