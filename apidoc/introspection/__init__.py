"""
Introspection Module - Reflection over declared Python types

Reads everything the schema builder needs from classes and functions:
- Type classification (atomic, container, compound) and member kinds
- Generic type variable resolution through nesting and inheritance
- Declared members, naming strategies and validation constraints
- Class, method and attribute docstrings (cached, thread-safe)
"""

from .constraints import Constraints, extract_constraints
from .documentation import ClassDoc, DocComment, DocumentationLookup, parse_docstring
from .generic_resolver import ancestor_bindings, resolve, substitute, unwrap
from .member_enumerator import AnnotationMemberEnumerator, MemberDescriptor, MemberEnumerator
from .naming import NamingStrategy, get_naming_strategy, register_naming_strategy, resolve_member_name
from .type_classifier import classify, is_atomic, is_compound, is_container

__all__ = [
    "Constraints",
    "extract_constraints",
    "ClassDoc",
    "DocComment",
    "DocumentationLookup",
    "parse_docstring",
    "ancestor_bindings",
    "resolve",
    "substitute",
    "unwrap",
    "AnnotationMemberEnumerator",
    "MemberDescriptor",
    "MemberEnumerator",
    "NamingStrategy",
    "get_naming_strategy",
    "register_naming_strategy",
    "resolve_member_name",
    "classify",
    "is_atomic",
    "is_compound",
    "is_container",
]
