"""
Generic Resolver - Substitutes type variables while descending a type graph

Supports:
- TypeVar substitution at any depth (Page[List[T]] -> Page[List[User]])
- Optional / Annotated / NewType unwrapping
- Array (tuple[X, ...]) and container element extraction
- Fresh binding maps per parameterized type (never merged with the caller's)
- Generic ancestors declared through __orig_bases__
"""

import logging
import types
from types import MappingProxyType
from typing import Annotated, Any, Dict, Generic, Literal, Mapping, Protocol, Tuple, TypeVar, Union, get_args, get_origin

from apidoc.introspection.type_classifier import is_container
from apidoc.schema.models import TypeDescriptor

logger = logging.getLogger(__name__)

EMPTY_BINDINGS: Mapping[Any, Any] = MappingProxyType({})

UNION_TYPES = (Union, types.UnionType)


def unwrap(hint: Any) -> Tuple[Any, Tuple[Any, ...]]:
    """
    Strip Annotated, Optional and NewType wrappers

    Returns:
        Tuple of (bare hint, collected Annotated metadata)
    """
    metadata: Tuple[Any, ...] = ()
    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            metadata += tuple(hint.__metadata__)
            hint = hint.__origin__
        elif origin in UNION_TYPES:
            candidates = [arg for arg in get_args(hint) if arg is not type(None)]
            if len(candidates) != 1:
                # Real unions have no single concrete type
                return object, metadata
            hint = candidates[0]
        elif hasattr(hint, "__supertype__"):
            hint = hint.__supertype__
        else:
            return hint, metadata


def substitute(hint: Any, bindings: Mapping[Any, Any]) -> Any:
    """Replace every type variable in the hint using the binding map"""
    if isinstance(hint, TypeVar):
        if hint in bindings:
            return bindings[hint]
        logger.debug(f"Unresolved type variable {hint}, using object")
        return object

    parameters = getattr(hint, "__parameters__", ())
    if parameters and get_origin(hint) is not None:
        try:
            return hint[tuple(substitute(p, bindings) for p in parameters)]
        except TypeError as e:
            logger.debug(f"Could not substitute {hint}: {e}")
            return get_origin(hint)
    return hint


def raw_class(hint: Any) -> type:
    """Runtime class of a hint; object when the hint is not class-like"""
    if hint is Any:
        return object
    origin = get_origin(hint)
    if origin is Literal:
        values = get_args(hint)
        return type(values[0]) if values else str
    if origin is not None:
        hint = origin
    return hint if isinstance(hint, type) else object


def literal_values(hint: Any) -> Tuple[Any, ...]:
    return get_args(hint) if get_origin(hint) is Literal else ()


def parameter_bindings(hint: Any) -> Mapping[Any, Any]:
    """
    Fresh binding map for a parameterized type

    Page[User] -> {T: User}, following Page.__parameters__ declaration order.
    """
    origin = get_origin(hint)
    if not isinstance(origin, type):
        return EMPTY_BINDINGS
    parameters = getattr(origin, "__parameters__", ())
    if not parameters:
        return EMPTY_BINDINGS
    return MappingProxyType(dict(zip(parameters, get_args(hint))))


def ancestor_bindings(cls: type, bindings: Mapping[Any, Any]) -> Dict[type, Mapping[Any, Any]]:
    """
    Binding maps for the generic ancestors of a class

    class UserPage(Page[User]) gives {UserPage: bindings, Page: {T: User}}.
    """
    result: Dict[type, Mapping[Any, Any]] = {cls: bindings}
    for klass in getattr(cls, "__mro__", (cls,)):
        own = result.get(klass, EMPTY_BINDINGS)
        for base in klass.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if not isinstance(origin, type) or origin in (Generic, Protocol) or origin in result:
                continue
            arguments = tuple(substitute(arg, own) for arg in get_args(base))
            result[origin] = MappingProxyType(dict(zip(getattr(origin, "__parameters__", ()), arguments)))
    return result


def resolve(hint: Any, bindings: Mapping[Any, Any] = EMPTY_BINDINGS) -> TypeDescriptor:
    """
    Resolve a declared hint into a concrete TypeDescriptor

    Args:
        hint: Declared type hint (possibly generic, optional or annotated)
        bindings: Binding map visible at this point of the walk

    Returns:
        TypeDescriptor with the element class, multiplicity and the fresh
        binding map for expanding the element's members
    """
    hint, _ = unwrap(hint)
    declared, _ = unwrap(substitute(hint, bindings))

    element = declared
    multiple = False
    cls = raw_class(declared)
    if cls is tuple or is_container(cls):
        arguments = [arg for arg in get_args(declared) if arg is not Ellipsis]
        element = arguments[0] if arguments else object
        element, _ = unwrap(element)
        multiple = True

    return TypeDescriptor(
        declared=declared,
        original=raw_class(element),
        element=element,
        multiple=multiple,
        bindings=parameter_bindings(element),
    )
