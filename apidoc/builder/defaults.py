"""
Default Value Probe - Best-effort default values of class members

Instantiates a representative instance of the declaring class through:
1. A zero-argument ``builder()`` factory whose result has ``build()``
2. A constructor callable without arguments

and reads the member value off it. Classes without a usable factory or
constructor have no defaults; errors raised by a constructor body or by
reading the member (properties) are fatal and propagate as DefaultValueError.
"""

import inspect
import logging
from enum import Enum
from typing import Any, Dict

logger = logging.getLogger(__name__)


class DefaultValueError(RuntimeError):
    """Raised when a constructor or factory fails while probing defaults"""


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT = _NoDefault()


def _accepts_no_arguments(target: Any) -> bool:
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError):
        return False
    return all(
        p.default is not inspect.Parameter.empty
        or p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for p in signature.parameters.values()
    )


def _is_instantiable(cls: type) -> bool:
    if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
        return False
    return _accepts_no_arguments(cls)


def normalize_default(value: Any) -> Any:
    """Drop empty values; enums are reported by member name"""
    if value is None or value is NO_DEFAULT:
        return None
    if isinstance(value, str) and value == "":
        return None
    if isinstance(value, Enum):
        return value.name
    return value


class DefaultValueProbe:
    """
    Probes default member values, one representative instance per class

    A probe belongs to a single operation analysis; instances are not
    shared across analyses.
    """

    def __init__(self):
        self._instances: Dict[type, Any] = {}

    def instance_of(self, cls: type) -> Any:
        """
        Get a representative instance of the class

        Returns:
            The instance, or NO_DEFAULT when no usable factory/constructor exists

        Raises:
            DefaultValueError: If the factory or constructor raised
        """
        if cls not in self._instances:
            self._instances[cls] = self._instantiate(cls)
        return self._instances[cls]

    def default_of(self, cls: type, attribute: str) -> Any:
        """Default value of an attribute, or None when there is none"""
        instance = self.instance_of(cls)
        if instance is NO_DEFAULT:
            return None
        try:
            value = getattr(instance, attribute, None)
        except Exception as e:
            raise DefaultValueError(f"Failed to read {cls.__qualname__}.{attribute}: {e}") from e
        return normalize_default(value)

    def _instantiate(self, cls: type) -> Any:
        instance = NO_DEFAULT
        try:
            # Builder-style factory first
            factory = getattr(cls, "builder", None)
            if callable(factory) and _accepts_no_arguments(factory):
                builder = factory()
                build = getattr(builder, "build", None)
                if callable(build):
                    instance = build()

            if not isinstance(instance, cls):
                if not _is_instantiable(cls):
                    logger.debug(f"No usable constructor for {cls.__qualname__}")
                    return NO_DEFAULT
                instance = cls()
        except Exception as e:
            raise DefaultValueError(f"Failed to instantiate {cls.__qualname__}: {e}") from e
        return instance
