"""
Constraint Extractor - Reads validation, formatting and visibility metadata

Sources (Annotated metadata markers):
- Required: NotNull / NotBlank / NotEmpty / Size(min > 0) / RequestParam(required)
- Size range: Size, else Min/Max, else DecimalMin/DecimalMax
- Format: DateTimeFormat, else JsonFormat, else Pattern
- Deprecated: Deprecated marker (or the declaring class for operations)
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from apidoc.introspection.annotations import (
    DateTimeFormat,
    DecimalMax,
    DecimalMin,
    Deprecated,
    JsonFormat,
    Max,
    Min,
    NotBlank,
    NotEmpty,
    NotNull,
    Pattern,
    RequestParam,
    Size,
    find_marker,
    has_marker,
    is_deprecated,
)
from apidoc.schema.models import SizeRange


@dataclass(frozen=True)
class Constraints:
    """Constraints of a single member or parameter"""

    required: bool = False
    size: Optional[SizeRange] = None
    format: Optional[str] = None
    deprecated: bool = False


def is_required(metadata: Tuple[Any, ...], parameter: bool = False) -> bool:
    if has_marker(metadata, NotNull) or has_marker(metadata, NotBlank) or has_marker(metadata, NotEmpty):
        return True
    size = find_marker(metadata, Size)
    if size is not None and size.min > 0:
        return True
    if parameter:
        request_param = find_marker(metadata, RequestParam)
        return request_param is not None and request_param.required
    return False


def extract_size(metadata: Tuple[Any, ...]) -> Optional[SizeRange]:
    size = find_marker(metadata, Size)
    if size is not None:
        return SizeRange.of(size.min, size.max)

    lower, upper = find_marker(metadata, Min), find_marker(metadata, Max)
    if lower is not None or upper is not None:
        return SizeRange.of(lower.value if lower else None, upper.value if upper else None)

    lower, upper = find_marker(metadata, DecimalMin), find_marker(metadata, DecimalMax)
    if lower is not None or upper is not None:
        return SizeRange.of(lower.value if lower else None, upper.value if upper else None)
    return None


def extract_format(metadata: Tuple[Any, ...]) -> Optional[str]:
    for marker_type, attribute in ((DateTimeFormat, "pattern"), (JsonFormat, "pattern"), (Pattern, "regexp")):
        marker = find_marker(metadata, marker_type)
        if marker is not None and getattr(marker, attribute):
            return getattr(marker, attribute)
    return None


def extract_constraints(
    metadata: Tuple[Any, ...],
    parameter: bool = False,
    declaring: Optional[Any] = None,
) -> Constraints:
    """
    Extract the constraints of an element

    Args:
        metadata: Annotated metadata of the element
        parameter: Element is an operation parameter (RequestParam counts)
        declaring: Declaring class or operation also checked for deprecation

    Returns:
        Constraints of the element
    """
    deprecated = has_marker(metadata, Deprecated) or (declaring is not None and is_deprecated(declaring))
    return Constraints(
        required=is_required(metadata, parameter),
        size=extract_size(metadata),
        format=extract_format(metadata),
        deprecated=deprecated,
    )
