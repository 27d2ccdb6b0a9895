"""
Schema Builder - Recursive expansion of compound types into member trees

Handles:
- Own members, then value-object ancestors (stopping at atomic/container ancestors)
- Polymorphic subtypes registered with json_type_info / json_subtype
- Generic bindings propagated by value to each subtree
- Nested containers documented as nested multiplicity
- Self-reference unfolded one extra level, then cut
"""

import dataclasses
import logging
from enum import Enum
from typing import Any, Generic, List, Mapping, Optional, Protocol, Set, Tuple

from apidoc.builder.defaults import DefaultValueProbe
from apidoc.builder.examples import ExampleSynthesizer
from apidoc.introspection.annotations import get_type_info
from apidoc.introspection.constraints import extract_constraints
from apidoc.introspection.documentation import DocComment, DocumentationLookup
from apidoc.introspection.generic_resolver import EMPTY_BINDINGS, ancestor_bindings, literal_values, resolve
from apidoc.introspection.member_enumerator import AnnotationMemberEnumerator, MemberDescriptor, MemberEnumerator
from apidoc.introspection.naming import resolve_member_name
from apidoc.introspection.type_classifier import classify, is_atomic, is_compound, is_container
from apidoc.schema.models import Member, Option, TypeDescriptor

logger = logging.getLogger(__name__)

ELEMENT_NAME = "item"
_SKIPPED_ANCESTORS = (Generic, Protocol)


def is_recursing(stack: List[type], cls: type) -> bool:
    """A class is recursing once it appears more than once in the stack"""
    return stack.count(cls) > 1


class SchemaBuilder:
    """
    Builds schema members for compound types

    Usage:
    ```python
    builder = SchemaBuilder(DocumentationLookup())
    members = builder.expand_root(Order, bindings={})
    ```
    """

    def __init__(
        self,
        documentation: DocumentationLookup,
        enable_name_case_conversion: bool = False,
        enumerator: Optional[MemberEnumerator] = None,
        probe: Optional[DefaultValueProbe] = None,
        examples: Optional[ExampleSynthesizer] = None,
    ):
        """
        Initialize SchemaBuilder

        Args:
            documentation: Documentation collaborator (shared, thread-safe)
            enable_name_case_conversion: Convert member names to snake_case
            enumerator: Member enumeration capability
            probe: Default value probe of the current analysis
            examples: Example synthesizer
        """
        self.documentation = documentation
        self.enable_name_case_conversion = enable_name_case_conversion
        self.enumerator = enumerator or AnnotationMemberEnumerator()
        self.probe = probe or DefaultValueProbe()
        self.examples = examples or ExampleSynthesizer()

    def expand_root(self, cls: type, bindings: Mapping[Any, Any] = EMPTY_BINDINGS) -> Tuple[Member, ...]:
        """Expand a root compound type (a parameter or return type)"""
        return self._expand(cls, bindings, [])

    def build_members(self, cls: type, bindings: Mapping[Any, Any], stack: List[type]) -> List[Member]:
        """
        Build the members of a compound class

        Args:
            cls: Compound class being expanded
            bindings: Fresh binding map of the class's type parameters
            stack: Visited stack (classes currently being expanded)

        Returns:
            Members in declaration order: own, ancestors, then subtypes.
            An atomic class yields a single leaf member.
        """
        if is_atomic(cls):
            return [self.element_member(cls, stack)]

        members: List[Member] = []
        seen: Set[str] = set()

        per_class = ancestor_bindings(cls, bindings)
        for klass in cls.__mro__:
            if klass in _SKIPPED_ANCESTORS:
                continue
            if klass is not cls and (is_atomic(klass) or is_container(klass)):
                break
            self._collect(klass, per_class.get(klass, EMPTY_BINDINGS), stack, members, seen)

        type_info = get_type_info(cls)
        if type_info is not None and type_info.property:
            # Every subtype contributes its own declared members
            for subtype in type_info.subtypes:
                self._collect(subtype, bindings, stack, members, set())
        return members

    def build_member(self, descriptor: MemberDescriptor, bindings: Mapping[Any, Any], stack: List[type]) -> Member:
        """Build one member: resolve, name, constrain, default, exemplify, expand"""
        resolved = resolve(descriptor.hint, bindings)
        constraints = extract_constraints(descriptor.metadata)
        comment = self.documentation.member(descriptor.owner, descriptor.name) or DocComment()

        member = Member(
            name=resolve_member_name(descriptor.name, descriptor.metadata, self.enable_name_case_conversion),
            kind=classify(resolved.original),
            original=resolved.original,
            multiple=resolved.multiple,
            required=constraints.required,
            deprecated=constraints.deprecated,
            size=constraints.size,
            format=constraints.format,
            default=self.probe.default_of(descriptor.owner, descriptor.name),
            description=comment.text,
            options=self.options_for(resolved),
            children=self.children_for(resolved, stack),
        )
        return self.with_example(member, comment.example)

    def children_for(self, resolved: TypeDescriptor, stack: List[type]) -> Optional[Tuple[Member, ...]]:
        """Children of a resolved type; None for atomic leaves"""
        original = resolved.original
        if is_container(original):
            return (self.element_member(resolved.element, stack),)
        if not is_compound(original):
            return None
        if is_recursing(stack, original):
            logger.debug(f"Recursive type {original.__qualname__}, expansion cut")
            return ()
        return self._expand(original, resolved.bindings, stack)

    def element_member(self, hint: Any, stack: List[type]) -> Member:
        """Anonymous element member of a nested container"""
        resolved = resolve(hint)
        member = Member(
            name=ELEMENT_NAME,
            kind=classify(resolved.original),
            original=resolved.original,
            multiple=resolved.multiple,
            options=self.options_for(resolved),
            children=self.children_for(resolved, stack),
        )
        return self.with_example(member)

    def options_for(self, resolved: TypeDescriptor) -> Tuple[Option, ...]:
        """Selectable options of enums and Literal types"""
        values = literal_values(resolved.element)
        if values:
            return tuple(Option(key=str(value)) for value in values)

        original = resolved.original
        if not (isinstance(original, type) and issubclass(original, Enum)):
            return ()
        options = []
        for item in original:
            comment = self.documentation.member(original, item.name) or DocComment()
            options.append(Option(key=item.name, value=comment.text, deprecated=comment.deprecated))
        return tuple(options)

    def with_example(self, member: Member, declared: Optional[str] = None) -> Member:
        example = declared or self.examples.synthesize(member)
        return dataclasses.replace(member, example=example)

    def _expand(self, cls: type, bindings: Mapping[Any, Any], stack: List[type]) -> Tuple[Member, ...]:
        stack.append(cls)
        try:
            return tuple(self.build_members(cls, bindings, stack))
        finally:
            stack.pop()

    def _collect(
        self,
        cls: type,
        bindings: Mapping[Any, Any],
        stack: List[type],
        members: List[Member],
        seen: Set[str],
    ) -> None:
        for descriptor in self.enumerator.list_own_members(cls):
            # A redeclared attribute overrides the ancestor's declaration
            if descriptor.name in seen:
                continue
            seen.add(descriptor.name)
            members.append(self.build_member(descriptor, bindings, stack))
