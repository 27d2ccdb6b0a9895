"""
Unit tests for the Recursive Schema Builder

Tests:
- Member trees of value objects (naming, constraints, defaults, docs)
- Nested containers, generics and inherited generics
- Polymorphic subtypes appended after base members
- Self reference unfolded one level, then cut
- Deterministic output
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

import pytest

from apidoc.builder.schema_builder import SchemaBuilder, is_recursing
from apidoc.introspection.annotations import json_subtype, json_type_info
from apidoc.introspection.documentation import DocumentationLookup
from apidoc.introspection.generic_resolver import resolve
from apidoc.schema.models import Kind
from tests.sample_api import Node, Page, Profile, Shape, User, UserPage

T = TypeVar("T")


@json_type_info(property="kind")
@dataclass
class Animal:
    kind: str = ""


@json_subtype()
@dataclass
class Dog(Animal):
    size: int = 0


@json_subtype()
@dataclass
class Fish(Animal):
    size: str = ""
    fins: int = 0


@dataclass
class Box(Generic[T]):
    content: Optional[T] = None


@dataclass
class Pair:
    left: Optional[Box[User]] = None
    right: Optional[Box[int]] = None


@pytest.fixture
def builder():
    return SchemaBuilder(DocumentationLookup())


@pytest.fixture
def user_members(builder):
    return {member.name: member for member in builder.expand_root(User)}


# ============================================================================
# TEST: value objects
# ============================================================================


class TestValueObject:
    """Tests for members of a plain value object"""

    def test_member_order_and_names(self, builder):
        names = [member.name for member in builder.expand_root(User)]

        assert names == ["name", "id", "mail", "status", "tags", "matrix", "created", "score", "age", "nickname"]

    def test_ignored_private_and_class_members(self, user_members):
        assert "secret" not in user_members
        assert "_internal" not in user_members
        assert "level" not in user_members

    def test_leaf(self, user_members):
        name = user_members["name"]

        assert name.kind is Kind.STRING
        assert name.is_leaf
        assert name.required
        assert name.size_label == "{1..64}"
        assert name.description == "User name"
        assert name.default is None
        assert name.example == '""'

    def test_numeric_size_label(self, user_members):
        assert user_members["score"].kind is Kind.FLOAT
        assert user_members["score"].size_label == "{0-10.5}"
        assert user_members["age"].size_label == "{1-}"

    def test_length_size_label(self, user_members):
        nickname = user_members["nickname"]

        assert nickname.size_label == "{1..}"
        assert nickname.required

    def test_declared_example_wins(self, user_members):
        assert user_members["nickname"].example == '"neo"'
        assert user_members["nickname"].default == "anonymous"

    def test_enum_options(self, user_members):
        status = user_members["status"]

        assert status.kind is Kind.STRING
        assert [option.key for option in status.options] == ["ACTIVE", "BLOCKED"]
        assert status.options[0].value == "Account is active"
        assert not status.options[0].deprecated
        assert status.options[1].deprecated
        assert status.default == "ACTIVE"
        assert status.example == '"ACTIVE"'

    def test_date_format(self, user_members):
        created = user_members["created"]

        assert created.kind is Kind.DATE
        assert created.format == "%Y-%m-%d"

    def test_multiple(self, user_members):
        tags = user_members["tags"]

        assert tags.multiple
        assert tags.kind is Kind.STRING
        assert tags.example == '[""]'

    def test_nested_container_multiplicity(self, user_members):
        """List[List[int]] keeps the inner multiplicity"""
        matrix = user_members["matrix"]

        assert matrix.multiple
        assert len(matrix.children) == 1
        assert matrix.children[0].multiple
        assert matrix.children[0].kind is Kind.INTEGER
        assert matrix.example == "[[1]]"

    def test_atomic_class_is_single_leaf(self, builder):
        members = builder.build_members(int, {}, [])

        assert len(members) == 1
        assert members[0].kind is Kind.INTEGER
        assert members[0].is_leaf

    def test_naming_strategies(self, builder):
        names = [member.name for member in builder.expand_root(Profile)]

        assert names == ["first_name", "lastName", "language", "wallet", "level"]

    def test_case_conversion(self):
        builder = SchemaBuilder(DocumentationLookup(), enable_name_case_conversion=True)

        assert [member.name for member in builder.expand_root(Profile)][:2] == ["first_name", "last_name"]

    def test_literal_and_enumerable(self, builder):
        members = {member.name: member for member in builder.expand_root(Profile)}

        assert [option.key for option in members["level"].options] == ["low", "high"]
        assert members["level"].example == '"low"'
        assert members["wallet"].kind is Kind.ENUMERABLE_OBJECT
        assert members["wallet"].example == '"REAL"'
        assert members["wallet"].is_leaf


# ============================================================================
# TEST: generics / inheritance / subtypes
# ============================================================================


class TestGenerics:
    """Tests for generic expansion"""

    def test_parameterized_class(self, builder):
        resolved = resolve(Page[User])
        members = builder.expand_root(resolved.original, resolved.bindings)
        items = members[0]

        assert [member.name for member in members] == ["items", "total"]
        assert items.multiple
        assert items.original is User
        assert items.description == "Page content"
        assert items.child("name") is not None

    def test_inherited_generic(self, builder):
        items = builder.expand_root(UserPage)[0]

        assert items.original is User
        assert items.child("mail").kind is Kind.STRING

    def test_sibling_bindings_are_independent(self, builder):
        left, right = builder.expand_root(Pair)

        assert left.child("content").original is User
        assert left.child("content").child("name") is not None
        assert right.child("content").original is int
        assert right.child("content").is_leaf

    def test_unbound_generic_is_object_leaf(self, builder):
        items = builder.expand_root(Page)[0]

        assert items.original is object
        assert items.is_leaf


class TestSubtypes:
    """Tests for polymorphic subtypes"""

    def test_subtype_members_after_base(self, builder):
        names = [member.name for member in builder.expand_root(Shape)]

        assert names == ["type", "radius", "side"]

    def test_subtypes_keep_their_own_declarations(self, builder):
        """Same-named members of sibling subtypes are all listed"""
        members = builder.expand_root(Animal)

        assert [member.name for member in members] == ["kind", "size", "size", "fins"]
        assert [member.kind for member in members[1:3]] == [Kind.INTEGER, Kind.STRING]


# ============================================================================
# TEST: recursion
# ============================================================================


class TestRecursion:
    """Tests for the cycle rule"""

    def test_is_recursing(self):
        assert not is_recursing([Node], Node)
        assert is_recursing([Node, Node], Node)

    def test_self_reference_is_cut(self, builder):
        members = builder.expand_root(Node)
        nested = members[1]

        assert [member.name for member in members] == ["value", "next"]
        assert nested.kind is Kind.OBJECT
        assert [member.name for member in nested.children] == ["value", "next"]
        assert nested.child("next").children == ()

    def test_self_reference_example(self, builder):
        nested = builder.expand_root(Node)[1]

        assert nested.example == '{"value":1, "next":null}'

    def test_deterministic(self, builder):
        first = builder.expand_root(User)
        second = SchemaBuilder(DocumentationLookup()).expand_root(User)

        assert [m.to_dict() for m in first] == [m.to_dict() for m in second]
