"""
Unit tests for the Generic Resolver

Tests:
- unwrap: Annotated / Optional / NewType
- resolve: substitution, containers, tuples, fresh bindings
- ancestor_bindings: generic base classes
"""

from typing import Annotated, Dict, List, NewType, Optional, Set, Tuple, TypeVar, Union

from apidoc.introspection.annotations import NotNull, Size
from apidoc.introspection.generic_resolver import (
    ancestor_bindings,
    parameter_bindings,
    resolve,
    substitute,
    unwrap,
)
from tests.sample_api import T, Page, User, UserPage

UserId = NewType("UserId", int)
K = TypeVar("K")


# ============================================================================
# TEST: unwrap
# ============================================================================


class TestUnwrap:
    """Tests for unwrap()"""

    def test_annotated_metadata(self):
        hint, metadata = unwrap(Annotated[str, NotNull(), Size(max=3)])

        assert hint is str
        assert metadata == (NotNull(), Size(max=3))

    def test_optional(self):
        assert unwrap(Optional[int]) == (int, ())

    def test_optional_annotated(self):
        hint, metadata = unwrap(Annotated[Optional[int], NotNull()])

        assert hint is int
        assert metadata == (NotNull(),)

    def test_real_union_is_object(self):
        """Unions of several types have no single concrete type"""
        assert unwrap(Union[int, str])[0] is object

    def test_new_type(self):
        assert unwrap(UserId)[0] is int


# ============================================================================
# TEST: resolve
# ============================================================================


class TestResolve:
    """Tests for resolve()"""

    def test_plain_class(self):
        descriptor = resolve(int)

        assert descriptor.original is int
        assert descriptor.multiple is False

    def test_bound_type_variable(self):
        descriptor = resolve(T, {T: User})

        assert descriptor.original is User

    def test_unbound_type_variable_is_object(self):
        """Unresolvable bindings fail soft"""
        assert resolve(T).original is object

    def test_nested_substitution(self):
        """Page[List[T]] becomes Page[List[User]]"""
        descriptor = resolve(Page[List[K]], {K: User})

        assert descriptor.original is Page
        assert descriptor.bindings[T] == List[User]

    def test_container_element(self):
        descriptor = resolve(List[User])

        assert descriptor.original is User
        assert descriptor.multiple is True

    def test_variadic_tuple(self):
        descriptor = resolve(Tuple[int, ...])

        assert descriptor.original is int
        assert descriptor.multiple is True

    def test_set_of_type_variable(self):
        descriptor = resolve(Set[T], {T: str})

        assert descriptor.original is str
        assert descriptor.multiple is True

    def test_nested_container_keeps_inner_multiplicity(self):
        descriptor = resolve(List[List[int]])

        assert descriptor.original is list
        assert descriptor.multiple is True
        assert resolve(descriptor.element).multiple is True

    def test_mapping_is_not_multiple(self):
        assert resolve(Dict[str, int]).multiple is False

    def test_fresh_bindings(self):
        """Bindings of Page[User] are its own, not the caller's"""
        caller = {K: str}
        descriptor = resolve(Page[User], caller)

        assert dict(descriptor.bindings) == {T: User}
        assert caller == {K: str}


# ============================================================================
# TEST: generic ancestors
# ============================================================================


class TestAncestorBindings:
    """Tests for parameter_bindings / ancestor_bindings"""

    def test_parameter_bindings(self):
        assert dict(parameter_bindings(Page[int])) == {T: int}

    def test_non_generic_has_no_bindings(self):
        assert dict(parameter_bindings(User)) == {}

    def test_inherited_generic(self):
        bindings = ancestor_bindings(UserPage, {})

        assert dict(bindings[Page]) == {T: User}

    def test_substitute_leaves_concrete_hints(self):
        assert substitute(List[int], {T: str}) == List[int]
