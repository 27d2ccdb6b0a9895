"""
Example Synthesizer - Representative example values of schema members

Examples are purely structural (no instantiation) and rendered as JSON
literals:
- object with children -> {"name":<child example>, ...}
- boolean -> true, integer -> 1, float -> 1.0
- string -> first option key, current locale/timezone, or ""
- date -> now formatted with the member format, else epoch milliseconds
- file/stream -> a single byte array
- multiple -> [<example>] or []
"""

import json
import locale
import time
from datetime import datetime, tzinfo
from typing import Optional

from apidoc.introspection.type_classifier import is_container
from apidoc.introspection.types import Locale
from apidoc.schema.models import Kind, Member

STREAM_PLACEHOLDER = "[1]"


def default_locale() -> str:
    return locale.getlocale()[0] or "en_US"


def default_timezone() -> str:
    return time.tzname[0]


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _literal(example: Optional[str]) -> str:
    return "null" if example is None else example


class ExampleSynthesizer:
    """Builds example JSON literals bottom-up from already built children"""

    def synthesize(self, member: Member) -> Optional[str]:
        """
        Synthesize the example of a member

        Args:
            member: Member whose children already carry their examples

        Returns:
            JSON literal, or None when no example can be produced
        """
        example = self._single(member)
        if member.multiple:
            return "[]" if example is None else f"[{example}]"
        return example

    def _single(self, member: Member) -> Optional[str]:
        kind = member.kind
        if kind is Kind.OBJECT:
            if not member.children:
                return None
            if is_container(member.original):
                # Nested container: the element already carries its own brackets
                return member.children[0].example
            fields = ", ".join(f"{_quote(child.name)}:{_literal(child.example)}" for child in member.children)
            return f"{{{fields}}}"
        if kind is Kind.BOOLEAN:
            return "true"
        if kind in (Kind.STRING, Kind.ENUMERABLE_OBJECT):
            return self._string(member)
        if kind is Kind.INTEGER:
            return "1"
        if kind is Kind.FLOAT:
            return "1.0"
        if kind is Kind.DATE:
            if member.format:
                return _quote(datetime.now().strftime(member.format))
            return str(int(time.time() * 1000))
        if kind.is_stream:
            return STREAM_PLACEHOLDER
        return None

    @staticmethod
    def _string(member: Member) -> str:
        original = member.original
        if isinstance(original, type) and issubclass(original, Locale):
            return _quote(default_locale())
        if isinstance(original, type) and issubclass(original, tzinfo):
            return _quote(default_timezone())
        if member.options:
            return _quote(member.options[0].key)
        return _quote("")
