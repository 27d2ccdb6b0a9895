"""
Member Enumerator - Lists the declared members of a class

The schema builder only depends on the MemberEnumerator protocol; the
default implementation reflects on class annotations.
"""

import dataclasses
import inspect
from dataclasses import dataclass
from typing import Any, ClassVar, List, Protocol, Tuple, get_origin, get_type_hints

from apidoc.introspection.annotations import JsonIgnore, has_marker
from apidoc.introspection.generic_resolver import unwrap


@dataclass(frozen=True)
class MemberDescriptor:
    """A declared member of a class"""

    name: str
    hint: Any
    owner: type
    metadata: Tuple[Any, ...] = ()


class MemberEnumerator(Protocol):
    def list_own_members(self, cls: type) -> List[MemberDescriptor]:
        ...


class AnnotationMemberEnumerator:
    """Enumerates the annotated attributes a class declares itself"""

    def list_own_members(self, cls: type) -> List[MemberDescriptor]:
        names = list(inspect.get_annotations(cls))
        if not names:
            return []

        # get_type_hints resolves string annotations and keeps Annotated extras
        hints = get_type_hints(cls, include_extras=True)

        members = []
        for name in names:
            hint = hints.get(name)
            if name.startswith("_") or self._is_excluded(hint):
                continue
            _, metadata = unwrap(hint)
            if has_marker(metadata, JsonIgnore):
                continue
            members.append(MemberDescriptor(name=name, hint=hint, owner=cls, metadata=metadata))
        return members

    @staticmethod
    def _is_excluded(hint: Any) -> bool:
        if hint is None:
            return True
        bare = hint.__origin__ if hasattr(hint, "__metadata__") else hint
        return (
            bare is ClassVar
            or get_origin(bare) is ClassVar
            or bare is dataclasses.InitVar
            or isinstance(bare, dataclasses.InitVar)
        )
