"""
Operation Analyzer - Builds the schema of one controller operation

Features:
- Request parameters: atomic and nested container parameters kept as
  members, compound parameters of included modules flattened into their
  members, others dropped
- Return value documented as a single member named "/"
- Operation metadata: key, url, HTTP methods, content-type header, name,
  group, description, deprecation and author/date/version notes
- One DefaultValueProbe per analysis; any error raised while analyzing
  the operation becomes OperationAnalysisError
"""

import dataclasses
import inspect
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple, get_type_hints

from config import AnalysisConfig
from apidoc.builder.defaults import DefaultValueError, DefaultValueProbe, normalize_default
from apidoc.builder.examples import ExampleSynthesizer
from apidoc.builder.schema_builder import SchemaBuilder
from apidoc.introspection.annotations import (
    CONTROLLER_ATTRIBUTE,
    MAPPINGS_ATTRIBUTE,
    RequestBody,
    RequestMapping,
    RequestParam,
    SessionAttribute,
    find_marker,
    has_marker,
    is_deprecated,
)
from apidoc.introspection.constraints import extract_constraints
from apidoc.introspection.documentation import DocComment, DocumentationLookup
from apidoc.introspection.generic_resolver import resolve, unwrap
from apidoc.introspection.member_enumerator import AnnotationMemberEnumerator
from apidoc.introspection.naming import resolve_parameter_name
from apidoc.introspection.type_classifier import NONE_TYPE, classify, is_atomic, is_container
from apidoc.schema.models import Kind, Member, OperationSchema, TypeDescriptor

logger = logging.getLogger(__name__)

ALL_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE")
RETURN_NAME = "/"

HEADER_JSON = "{String} Content-Type application/json"
HEADER_MULTIPART = "{String} Content-Type multipart/form-data"
HEADER_FORM = "{String} Content-Type application/x-www-form-urlencoded"

_IMPLICIT_PARAMETERS = ("self", "cls")


class OperationAnalysisError(RuntimeError):
    """Raised when an operation cannot be analyzed"""

    def __init__(self, key: str, message: str):
        super().__init__(f"{key}: {message}")
        self.key = key
        self.message = message


def operation_key(owner: type, function: Callable) -> str:
    """Unique key of an operation: module.Class.method"""
    return f"{owner.__module__}.{owner.__qualname__}.{function.__name__}"


def join_url(*paths: str) -> str:
    """'/' + class path + '/' + method path, repeated slashes collapsed"""
    return re.sub(r"/{2,}", "/", "/" + "/".join(paths))


def class_mapping(owner: type) -> RequestMapping:
    return getattr(owner, CONTROLLER_ATTRIBUTE, None) or RequestMapping()


def operation_mappings(function: Callable) -> Tuple[RequestMapping, ...]:
    return tuple(getattr(function, MAPPINGS_ATTRIBUTE, ()))


def operation_methods(function: Callable) -> Tuple[str, ...]:
    """Union of the mapped HTTP methods in declaration order; all when none"""
    methods: List[str] = []
    for mapping in operation_mappings(function):
        for method in mapping.methods:
            if method not in methods:
                methods.append(method)
    return tuple(methods) or ALL_METHODS


def operation_path(function: Callable) -> str:
    for mapping in operation_mappings(function):
        if mapping.path:
            return mapping.path
    return ""


@dataclasses.dataclass(frozen=True)
class _Parameter:
    """A declared operation parameter after unwrapping"""

    name: str
    hint: Any
    metadata: Tuple[Any, ...]
    default: Any
    resolved: TypeDescriptor


class OperationAnalyzer:
    """
    Analyzes one operation of a controller class

    Usage:
    ```python
    analyzer = OperationAnalyzer(UserController, UserController.find, documentation, config)
    schema = analyzer.analyze()
    ```
    """

    def __init__(
        self,
        owner: type,
        function: Callable,
        documentation: Optional[DocumentationLookup] = None,
        config: Optional[AnalysisConfig] = None,
    ):
        """
        Initialize OperationAnalyzer

        Args:
            owner: Controller class declaring the operation
            function: The operation function
            documentation: Shared documentation lookup
            config: Analysis configuration snapshot
        """
        self.owner = owner
        self.function = function
        self.documentation = documentation or DocumentationLookup()
        self.config = config or AnalysisConfig()
        self.key = operation_key(owner, function)

    def analyze(self) -> OperationSchema:
        """
        Build the operation schema

        Returns:
            OperationSchema of the operation

        Raises:
            OperationAnalysisError: If anything fails while analyzing this
                operation (unresolvable annotations, default value probes)
        """
        logger.debug(f"Analyzing operation {self.key}")
        try:
            return self._analyze()
        except OperationAnalysisError:
            raise
        except DefaultValueError as e:
            raise OperationAnalysisError(self.key, str(e)) from e
        except Exception as e:
            raise OperationAnalysisError(self.key, f"{type(e).__name__}: {e}") from e

    def _analyze(self) -> OperationSchema:
        builder = SchemaBuilder(
            self.documentation,
            enable_name_case_conversion=self.config.enable_name_case_conversion,
            probe=DefaultValueProbe(),
            examples=ExampleSynthesizer(),
        )
        hints = self._type_hints()
        declared = self._declared_parameters(hints)
        class_doc = self.documentation.comment(self.owner) or DocComment()
        method_doc = self.documentation.operation(self.owner, self.function.__name__) or DocComment()

        return OperationSchema(
            key=self.key,
            name=method_doc.outline or self.function.__name__,
            group=class_doc.outline or self.owner.__name__,
            url=join_url(class_mapping(self.owner).path, operation_path(self.function)),
            header=self.header(declared),
            description=method_doc.description,
            deprecated=is_deprecated(self.function) or is_deprecated(self.owner),
            methods=operation_methods(self.function),
            date=method_doc.note("date") or class_doc.note("date"),
            author=method_doc.note("author") or class_doc.note("author"),
            version=method_doc.note("version") or class_doc.note("version"),
            parameters=self.build_parameters(builder, declared, method_doc),
            returned=self.build_returned(builder, hints, method_doc),
        )

    def _type_hints(self) -> Dict[str, Any]:
        try:
            return get_type_hints(self.function, include_extras=True)
        except (NameError, TypeError) as e:
            raise OperationAnalysisError(self.key, f"Unresolvable annotation: {e}") from e

    def _declared_parameters(self, hints: Dict[str, Any]) -> List[_Parameter]:
        parameters = []
        for name, parameter in inspect.signature(self.function).parameters.items():
            if name in _IMPLICIT_PARAMETERS or parameter.kind in (
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            ):
                continue
            hint = hints.get(name, Any)
            _, metadata = unwrap(hint)
            default = None if parameter.default is inspect.Parameter.empty else parameter.default
            parameters.append(_Parameter(name, hint, metadata, default, resolve(hint)))
        return parameters

    def is_request_parameter(self, parameter: _Parameter) -> bool:
        """Atomic and nested container parameters, compound parameters of included modules"""
        if has_marker(parameter.metadata, SessionAttribute):
            return False
        original = parameter.resolved.original
        if is_atomic(original) or is_container(original):
            return True
        return self.config.is_included(getattr(original, "__module__", None))

    def build_parameters(self, builder: SchemaBuilder, declared: List[_Parameter], method_doc: DocComment) -> Tuple[Member, ...]:
        members: List[Member] = []
        for parameter in declared:
            if not self.is_request_parameter(parameter):
                logger.debug(f"{self.key}: parameter '{parameter.name}' is not a request parameter")
                continue
            resolved = parameter.resolved
            if is_atomic(resolved.original) or is_container(resolved.original):
                members.append(self.parameter_member(builder, parameter, method_doc))
            else:
                # Compound parameters are bound field by field
                members.extend(builder.expand_root(resolved.original, resolved.bindings))
        return tuple(members)

    def parameter_member(self, builder: SchemaBuilder, parameter: _Parameter, method_doc: DocComment) -> Member:
        """Member of an atomic parameter; nested containers keep their element child"""
        resolved = parameter.resolved
        constraints = extract_constraints(parameter.metadata, parameter=True)
        member = Member(
            name=resolve_parameter_name(parameter.name, parameter.metadata),
            kind=classify(resolved.original),
            original=resolved.original,
            multiple=resolved.multiple,
            required=constraints.required,
            deprecated=constraints.deprecated,
            size=constraints.size,
            format=constraints.format,
            default=self.parameter_default(parameter),
            description=method_doc.param(parameter.name),
            options=builder.options_for(resolved),
            children=builder.children_for(resolved, []),
        )
        return builder.with_example(member)

    @staticmethod
    def parameter_default(parameter: _Parameter) -> Any:
        request_param = find_marker(parameter.metadata, RequestParam)
        if request_param is not None and request_param.default_value:
            return request_param.default_value
        return normalize_default(parameter.default)

    def build_returned(self, builder: SchemaBuilder, hints: Dict[str, Any], method_doc: DocComment) -> Optional[Member]:
        """Return member named '/', None for operations returning nothing"""
        hint = hints.get("return", inspect.Signature.empty)
        if hint in (inspect.Signature.empty, None, NONE_TYPE):
            return None

        resolved = resolve(hint)
        member = Member(
            name=RETURN_NAME,
            kind=classify(resolved.original),
            original=resolved.original,
            multiple=resolved.multiple,
            description=method_doc.note("return"),
            options=builder.options_for(resolved),
            children=builder.children_for(resolved, []),
        )
        return builder.with_example(member, method_doc.example)

    def header(self, declared: List[_Parameter]) -> str:
        """Content-Type header implied by the parameter bindings"""
        if any(has_marker(parameter.metadata, RequestBody) for parameter in declared):
            return HEADER_JSON

        for parameter in declared:
            if has_marker(parameter.metadata, SessionAttribute):
                continue
            original = parameter.resolved.original
            if is_atomic(original) or is_container(original):
                continue
            if declares_file(original):
                return HEADER_MULTIPART
        return HEADER_FORM


def declares_file(cls: type) -> bool:
    """Whether a class declares a file member; unresolvable annotations count as non-file"""
    try:
        members = AnnotationMemberEnumerator().list_own_members(cls)
    except (NameError, TypeError) as e:
        logger.debug(f"Cannot read members of {cls.__qualname__}: {e}")
        return False
    return any(classify(resolve(descriptor.hint).original) is Kind.FILE for descriptor in members)
