"""
Annotation vocabulary - metadata markers read by the analyzer

Member and parameter markers are attached with ``typing.Annotated``:

    name: Annotated[str, NotBlank(), Size(min=1, max=64), Rename("user_name")]

Class and function markers are plain decorators:
- controller / request_mapping / get_mapping / post_mapping / ...
- deprecated (sets the PEP 702 ``__deprecated__`` attribute)
- json_type_info / json_subtype (polymorphic subtype registration)
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple, Type, Union


# ============================================================================
# Validation markers
# ============================================================================


@dataclass(frozen=True)
class NotNull:
    """Value must be present"""


@dataclass(frozen=True)
class NotBlank:
    """Text value must contain a non-whitespace character"""


@dataclass(frozen=True)
class NotEmpty:
    """Value must not be empty"""


@dataclass(frozen=True)
class Size:
    """Length bounds of a text or collection value"""
    min: int = 0
    max: Optional[int] = None


@dataclass(frozen=True)
class Min:
    value: int


@dataclass(frozen=True)
class Max:
    value: int


@dataclass(frozen=True)
class DecimalMin:
    value: str


@dataclass(frozen=True)
class DecimalMax:
    value: str


@dataclass(frozen=True)
class Pattern:
    regexp: str


# ============================================================================
# Formatting / serialization markers
# ============================================================================


@dataclass(frozen=True)
class DateTimeFormat:
    """Date pattern in ``strftime`` syntax (e.g. "%Y-%m-%d")"""
    pattern: str = ""


@dataclass(frozen=True)
class JsonFormat:
    pattern: str = ""


@dataclass(frozen=True)
class JsonProperty:
    """External property name"""
    value: str = ""


@dataclass(frozen=True)
class Rename:
    """Form parameter rename, wins over every other naming source"""
    value: str = ""


@dataclass(frozen=True)
class JsonNaming:
    """Naming strategy of a single member (NamingStrategy or registered key)"""
    strategy: Any = None


@dataclass(frozen=True)
class JsonIgnore:
    """Member is excluded from the schema"""


@dataclass(frozen=True)
class Deprecated:
    """Member is deprecated"""


# ============================================================================
# Request binding markers
# ============================================================================


@dataclass(frozen=True)
class RequestParam:
    """Request parameter binding (name, required flag, default value)"""
    value: str = ""
    name: str = ""
    required: bool = True
    default_value: str = ""


@dataclass(frozen=True)
class RequestBody:
    """Parameter is bound from a JSON request body"""


@dataclass(frozen=True)
class SessionAttribute:
    """Parameter is injected from the session and never documented"""


def find_marker(metadata: Tuple[Any, ...], marker_type: Type) -> Optional[Any]:
    """Return the first metadata entry of the given marker type"""
    for item in metadata or ():
        if isinstance(item, marker_type):
            return item
    return None


def has_marker(metadata: Tuple[Any, ...], marker_type: Type) -> bool:
    return find_marker(metadata, marker_type) is not None


# ============================================================================
# Controller decorators
# ============================================================================

CONTROLLER_ATTRIBUTE = "__apidoc_controller__"
MAPPINGS_ATTRIBUTE = "__apidoc_mappings__"
TYPE_INFO_ATTRIBUTE = "__apidoc_type_info__"


@dataclass(frozen=True)
class RequestMapping:
    """Path and HTTP methods declared on a class or operation"""
    path: str = ""
    methods: Tuple[str, ...] = ()


def controller(path: str = "") -> Callable[[type], type]:
    """Mark a class as an API controller, optionally with a base path"""
    def decorator(cls: type) -> type:
        setattr(cls, CONTROLLER_ATTRIBUTE, RequestMapping(path=path.strip()))
        return cls
    return decorator


def request_mapping(path: str = "", methods: Union[str, Tuple[str, ...], List[str]] = ()) -> Callable:
    """Declare a request mapping on a controller class or operation"""
    if isinstance(methods, str):
        methods = (methods,)
    mapping = RequestMapping(path=path.strip(), methods=tuple(m.upper() for m in methods))

    def decorator(target):
        if isinstance(target, type):
            setattr(target, CONTROLLER_ATTRIBUTE, mapping)
            return target
        mappings = list(getattr(target, MAPPINGS_ATTRIBUTE, ()))
        # Decorators apply bottom-up; keep declaration order
        mappings.insert(0, mapping)
        setattr(target, MAPPINGS_ATTRIBUTE, tuple(mappings))
        return target
    return decorator


def get_mapping(path: str = "") -> Callable:
    return request_mapping(path, methods=("GET",))


def post_mapping(path: str = "") -> Callable:
    return request_mapping(path, methods=("POST",))


def put_mapping(path: str = "") -> Callable:
    return request_mapping(path, methods=("PUT",))


def delete_mapping(path: str = "") -> Callable:
    return request_mapping(path, methods=("DELETE",))


def patch_mapping(path: str = "") -> Callable:
    return request_mapping(path, methods=("PATCH",))


def deprecated(reason: str = "deprecated") -> Callable:
    """Mark a class or operation as deprecated (PEP 702 attribute)"""
    def decorator(target):
        target.__deprecated__ = reason
        return target
    return decorator


def is_deprecated(target: Any) -> bool:
    return bool(getattr(target, "__deprecated__", None))


# ============================================================================
# Polymorphic subtypes
# ============================================================================


@dataclass
class TypeInfo:
    """Type indicator property plus the subtypes registered for it"""
    property: str
    subtypes: List[type] = field(default_factory=list)


def json_type_info(property: str = "type") -> Callable[[type], type]:
    """Declare a polymorphic base class with a named type indicator property"""
    def decorator(cls: type) -> type:
        setattr(cls, TYPE_INFO_ATTRIBUTE, TypeInfo(property=property))
        return cls
    return decorator


def json_subtype() -> Callable[[type], type]:
    """Register a class as subtype of its nearest json_type_info base"""
    def decorator(cls: type) -> type:
        for base in cls.__mro__[1:]:
            info = base.__dict__.get(TYPE_INFO_ATTRIBUTE)
            if info is not None:
                if cls not in info.subtypes:
                    info.subtypes.append(cls)
                break
        else:
            raise TypeError(f"{cls.__qualname__} has no json_type_info base class")
        return cls
    return decorator


def get_type_info(cls: type) -> Optional[TypeInfo]:
    """Type info declared directly on the class (not inherited)"""
    return cls.__dict__.get(TYPE_INFO_ATTRIBUTE) if isinstance(cls, type) else None
