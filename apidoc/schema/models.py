"""Modelos do schema de operações da API."""
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


class Kind(str, Enum):
    """Semantic kind of a schema member"""
    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    FILE = "file"
    READER = "reader-stream"
    WRITER = "writer-stream"
    OBJECT = "object"
    ENUMERABLE_OBJECT = "enumerable-object"

    @property
    def is_numeric(self) -> bool:
        return self in (Kind.INTEGER, Kind.FLOAT)

    @property
    def is_stream(self) -> bool:
        return self in (Kind.FILE, Kind.READER, Kind.WRITER)


def _empty_bindings() -> Mapping[Any, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class TypeDescriptor:
    """A resolved type at one point of the walk"""

    declared: Any  # hint after type variable substitution
    original: type  # normalized class (element class for arrays/containers)
    element: Any = None  # element hint, possibly parameterized
    multiple: bool = False
    bindings: Mapping[Any, Any] = field(default_factory=_empty_bindings, compare=False)


def normalize_bound(value: Any) -> Optional[str]:
    """
    Normalize a numeric bound to a plain decimal string

    Trailing zeros are stripped: 10.50 -> "10.5", 10.0 -> "10".
    """
    if value is None:
        return None
    try:
        number = Decimal(str(value)).normalize()
    except InvalidOperation:
        return str(value).strip() or None
    return format(number, "f")


@dataclass(frozen=True)
class SizeRange:
    """Represents a min/max bound of a member"""

    min: Optional[str] = None
    max: Optional[str] = None

    @classmethod
    def of(cls, min_value: Any = None, max_value: Any = None) -> "SizeRange":
        return cls(min=normalize_bound(min_value), max=normalize_bound(max_value))

    def render(self, numeric: bool) -> str:
        """Render as {min-max} for numbers or {min..max} for lengths."""
        separator = "-" if numeric else ".."
        return f"{{{self.min or ''}{separator}{self.max or ''}}}"

    def to_dict(self) -> Dict[str, Any]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class Option:
    """Represents one selectable value of an enumerable member."""

    key: str
    value: Optional[str] = None
    deprecated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "value": self.value, "deprecated": self.deprecated}


@dataclass(frozen=True)
class Member:
    """
    One node of the schema tree: a parameter, a return value or a nested field

    ``children`` is None for a true leaf and an empty tuple for a compound
    type without analyzable members (or whose expansion was cut).
    """

    name: str
    kind: Kind
    original: type = object
    multiple: bool = False
    required: bool = False
    deprecated: bool = False
    size: Optional[SizeRange] = None
    format: Optional[str] = None
    default: Any = None
    example: Optional[str] = None
    description: Optional[str] = None
    options: Tuple[Option, ...] = ()
    children: Optional[Tuple["Member", ...]] = None

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def size_label(self) -> Optional[str]:
        if self.size is None:
            return None
        return self.size.render(self.kind.is_numeric)

    def child(self, name: str) -> Optional["Member"]:
        """Retorna filho pelo nome."""
        for member in self.children or ():
            if member.name == name:
                return member
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "type": _type_name(self.original),
            "multiple": self.multiple,
            "required": self.required,
            "deprecated": self.deprecated,
            "size": self.size.to_dict() if self.size else None,
            "size_label": self.size_label,
            "format": self.format,
            "default": self.default,
            "example": self.example,
            "description": self.description,
            "options": [o.to_dict() for o in self.options],
            "children": None if self.children is None else [c.to_dict() for c in self.children],
        }


@dataclass(frozen=True)
class OperationSchema:
    """Schema of a single documented API operation"""

    key: str
    name: str
    group: str
    url: str = ""
    header: str = ""
    description: Optional[str] = None
    deprecated: bool = False
    methods: Tuple[str, ...] = ()
    date: Optional[str] = None
    author: Optional[str] = None
    version: Optional[str] = None
    parameters: Tuple[Member, ...] = ()
    returned: Optional[Member] = None

    def get_parameter(self, name: str) -> Optional[Member]:
        """Retorna parâmetro pelo nome."""
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        return {
            "key": self.key,
            "name": self.name,
            "group": self.group,
            "url": self.url,
            "header": self.header,
            "description": self.description,
            "deprecated": self.deprecated,
            "methods": list(self.methods),
            "date": self.date,
            "author": self.author,
            "version": self.version,
            "parameters": [p.to_dict() for p in self.parameters],
            "returned": self.returned.to_dict() if self.returned else None,
        }


@dataclass(frozen=True)
class OperationFailure:
    """An operation skipped because its analysis failed"""

    key: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "error": self.error}


@dataclass
class AnalysisReport:
    """Result of analyzing a set of operations."""

    operations: List[OperationSchema] = field(default_factory=list)
    failures: List[OperationFailure] = field(default_factory=list)

    def get_operation(self, key: str) -> Optional[OperationSchema]:
        for operation in self.operations:
            if operation.key == key:
                return operation
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operations": [o.to_dict() for o in self.operations],
            "failures": [f.to_dict() for f in self.failures],
        }


def _type_name(cls: Any) -> str:
    module = getattr(cls, "__module__", None)
    name = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", None) or str(cls)
    if module in (None, "builtins"):
        return name
    return f"{module}.{name}"
