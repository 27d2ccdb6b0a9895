"""
Documentation Lookup - Structured docstrings of classes, members and operations

Features:
- Class, method and attribute docstrings parsed from source with ``ast``
- Outline (first line), description (remaining lines) and tagged notes
- Tags in epydoc (``@author x``) and Sphinx (``:author: x``) forms:
  author, date, version, param <name>, return(s), example
- Read-through cache, at most one parse per class under concurrent access

Missing source or documentation degrades to None, never to an error.
"""

import ast
import inspect
import logging
import re
import textwrap
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

_EPYDOC_TAG = re.compile(r"^@(\w+)\b\s*(.*)$")
_SPHINX_TAG = re.compile(r"^:(\w+)((?:\s+[^\s:]+)*):\s*(.*)$")
_TAG_ALIASES = {"returns": "return", "authors": "author"}
_DEPRECATED_DIRECTIVE = ".. deprecated::"


def _empty_mapping() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class DocComment:
    """A parsed docstring"""

    outline: Optional[str] = None
    description: Optional[str] = None
    text: Optional[str] = None
    notes: Mapping[str, str] = field(default_factory=_empty_mapping)

    def note(self, name: str) -> Optional[str]:
        return self.notes.get(name)

    def param(self, name: str) -> Optional[str]:
        return self.notes.get(f"param {name}")

    @property
    def example(self) -> Optional[str]:
        return self.notes.get("example")

    @property
    def deprecated(self) -> bool:
        return "deprecated" in self.notes or _DEPRECATED_DIRECTIVE in (self.text or "")


@dataclass(frozen=True)
class ClassDoc:
    """Documentation of one class"""

    comment: DocComment = field(default_factory=DocComment)
    members: Mapping[str, DocComment] = field(default_factory=_empty_mapping)
    operations: Mapping[str, DocComment] = field(default_factory=_empty_mapping)


def parse_docstring(docstring: Optional[str]) -> DocComment:
    """
    Parse a docstring into outline, description and tagged notes

    Tag lines are excluded from the outline/description text. The first
    non-empty value of a repeated tag wins.
    """
    if not docstring:
        return DocComment()

    lines: List[str] = []
    notes: Dict[str, str] = {}
    for raw_line in inspect.cleandoc(docstring).split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        tag = _parse_tag(line)
        if tag is None:
            lines.append(line)
            continue
        name, value = tag
        if name == "deprecated" or value:
            notes.setdefault(name, value)

    return DocComment(
        outline=lines[0] if lines else None,
        description="\n".join(lines[1:]) if len(lines) > 1 else None,
        text="\n".join(lines) if lines else None,
        notes=MappingProxyType(notes),
    )


def _parse_tag(line: str) -> Optional[tuple]:
    match = _SPHINX_TAG.match(line)
    if match:
        name, arguments, value = match.groups()
        name = _TAG_ALIASES.get(name, name)
        # ":param int id:" documents "id"; the type word is dropped
        words = arguments.split()
        if words:
            name = f"{name} {words[-1]}"
        return name, value.strip()

    match = _EPYDOC_TAG.match(line)
    if match:
        name, value = match.groups()
        name = _TAG_ALIASES.get(name, name)
        if name == "param":
            argument, _, value = value.partition(" ")
            name = f"param {argument}"
        return name, value.strip()
    return None


def _parse_class_node(node: ast.ClassDef) -> ClassDoc:
    members: Dict[str, DocComment] = {}
    operations: Dict[str, DocComment] = {}

    body = node.body
    for index, statement in enumerate(body):
        if isinstance(statement, (ast.FunctionDef, ast.AsyncFunctionDef)):
            operations[statement.name] = parse_docstring(ast.get_docstring(statement))
            continue

        # Attribute docstring: a string literal right after the assignment
        names = _assigned_names(statement)
        if not names or index + 1 >= len(body):
            continue
        following = body[index + 1]
        if (
            isinstance(following, ast.Expr)
            and isinstance(following.value, ast.Constant)
            and isinstance(following.value.value, str)
        ):
            comment = parse_docstring(following.value.value)
            for name in names:
                members[name] = comment

    return ClassDoc(
        comment=parse_docstring(ast.get_docstring(node)),
        members=MappingProxyType(members),
        operations=MappingProxyType(operations),
    )


def _assigned_names(statement: ast.stmt) -> List[str]:
    if isinstance(statement, ast.AnnAssign) and isinstance(statement.target, ast.Name):
        return [statement.target.id]
    if isinstance(statement, ast.Assign):
        return [target.id for target in statement.targets if isinstance(target, ast.Name)]
    return []


class DocumentationLookup:
    """
    Read-through documentation cache keyed by class

    Usage:
    ```python
    documentation = DocumentationLookup()
    comment = documentation.member(User, "email")
    ```
    """

    def __init__(self):
        self._cache: Dict[type, Optional[ClassDoc]] = {}
        self._lock = threading.Lock()
        self._class_locks: Dict[type, threading.Lock] = {}

    def __call__(self, cls: type) -> Optional[ClassDoc]:
        """Get documentation of a class, parsing its source at most once"""
        with self._lock:
            if cls in self._cache:
                return self._cache[cls]
            class_lock = self._class_locks.setdefault(cls, threading.Lock())

        with class_lock:
            with self._lock:
                if cls in self._cache:
                    return self._cache[cls]
            document = self._parse_class(cls)
            with self._lock:
                self._cache[cls] = document
                self._class_locks.pop(cls, None)
            return document

    def comment(self, cls: type) -> Optional[DocComment]:
        document = self(cls)
        return document.comment if document else None

    def member(self, cls: type, name: str) -> Optional[DocComment]:
        document = self(cls)
        return document.members.get(name) if document else None

    def operation(self, cls: type, name: str) -> Optional[DocComment]:
        document = self(cls)
        if document is not None and name in document.operations:
            return document.operations[name]
        function = getattr(cls, name, None)
        return parse_docstring(inspect.getdoc(function)) if function is not None else None

    def _parse_class(self, cls: type) -> Optional[ClassDoc]:
        """Parse the class source; None when it is not available"""
        try:
            source = textwrap.dedent(inspect.getsource(cls))
            tree = ast.parse(source)
        except (OSError, TypeError, SyntaxError) as e:
            logger.debug(f"No source documentation for {cls!r}: {e}")
            return None

        for node in tree.body:
            if isinstance(node, ast.ClassDef):
                return _parse_class_node(node)
        return None
