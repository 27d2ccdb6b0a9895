"""
Naming Resolver - Computes the externally visible name of members

Precedence for members:
1. Rename marker
2. JsonProperty marker
3. Naming strategy (own JsonNaming marker, else snake_case when case
   conversion is enabled, else identity)

Parameters use RequestParam value/name, else the declared name.
"""

import logging
import re
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from apidoc.introspection.annotations import JsonNaming, JsonProperty, Rename, RequestParam, find_marker

logger = logging.getLogger(__name__)

_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


class NamingStrategy(str, Enum):
    """Known case conversion strategies"""
    IDENTITY = "identity"
    SNAKE_CASE = "snake_case"
    UPPER_CAMEL_CASE = "upper_camel_case"
    LOWER_CASE = "lower_case"
    KEBAB_CASE = "kebab_case"
    LOWER_CAMEL_CASE = "lower_camel_case"


def split_words(name: str) -> List[str]:
    """Split snake_case, kebab-case and camelCase identifiers into words"""
    return _WORD_PATTERN.findall(name)


def _snake_case(name: str) -> str:
    return "_".join(word.lower() for word in split_words(name))


def _kebab_case(name: str) -> str:
    return "-".join(word.lower() for word in split_words(name))


def _lower_case(name: str) -> str:
    return "".join(word.lower() for word in split_words(name))


def _upper_camel_case(name: str) -> str:
    return "".join(word.capitalize() for word in split_words(name))


def _lower_camel_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return name
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


_STRATEGIES: Dict[str, Callable[[str], str]] = {
    NamingStrategy.IDENTITY.value: lambda name: name,
    NamingStrategy.SNAKE_CASE.value: _snake_case,
    NamingStrategy.UPPER_CAMEL_CASE.value: _upper_camel_case,
    NamingStrategy.LOWER_CASE.value: _lower_case,
    NamingStrategy.KEBAB_CASE.value: _kebab_case,
    NamingStrategy.LOWER_CAMEL_CASE.value: _lower_camel_case,
}


def register_naming_strategy(identifier: str, transform: Callable[[str], str]) -> None:
    """Register a custom strategy usable as JsonNaming(identifier)"""
    _STRATEGIES[identifier] = transform


def get_naming_strategy(identifier: Union[str, NamingStrategy, None]) -> Callable[[str], str]:
    """
    Look up a strategy transform

    Unknown identifiers fall back to lower camel case.
    """
    key = identifier.value if isinstance(identifier, NamingStrategy) else identifier
    transform = _STRATEGIES.get(key)
    if transform is None:
        logger.debug(f"Unknown naming strategy {identifier!r}, using lower camel case")
        return _STRATEGIES[NamingStrategy.LOWER_CAMEL_CASE.value]
    return transform


def _marker_text(metadata: Tuple[Any, ...], marker_type: type, attribute: str = "value") -> Optional[str]:
    marker = find_marker(metadata, marker_type)
    if marker is None:
        return None
    return getattr(marker, attribute).strip() or None


def resolve_member_name(name: str, metadata: Tuple[Any, ...], enable_case_conversion: bool = False) -> str:
    """
    Resolve the external name of a class member

    Args:
        name: Declared attribute name
        metadata: Annotated metadata of the member
        enable_case_conversion: Process-wide snake_case conversion flag

    Returns:
        External member name
    """
    explicit = _marker_text(metadata, Rename) or _marker_text(metadata, JsonProperty)
    if explicit:
        return explicit

    naming = find_marker(metadata, JsonNaming)
    if naming is not None:
        return get_naming_strategy(naming.strategy)(name)
    if enable_case_conversion:
        return _snake_case(name)
    return name


def resolve_parameter_name(name: str, metadata: Tuple[Any, ...]) -> str:
    """Resolve the external name of an operation parameter"""
    return _marker_text(metadata, RequestParam) or _marker_text(metadata, RequestParam, "name") or name
