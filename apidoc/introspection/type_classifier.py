"""
Type Classifier - Maps Python classes to schema member kinds

Decides:
- The semantic kind of a class (integer, string, date, object, ...)
- Whether a class is atomic (a schema leaf) or compound (expanded into members)
- Whether a class is a container (list/set/tuple-like)

All functions are pure.
"""

import collections.abc
import io
import numbers
import os
import pathlib
import typing
import uuid
from datetime import date, time, tzinfo
from decimal import Decimal
from enum import Enum

from apidoc.introspection.types import InputStream, Locale, MultipartFile, OutputStream
from apidoc.schema.models import Kind

NONE_TYPE = type(None)

TEXT_TYPES = (str, bytes, bytearray)
STRING_TYPES = (Locale, tzinfo, str, bytes, bytearray, uuid.UUID)
DATE_TYPES = (date, time)  # datetime subclasses date
FILE_TYPES = (pathlib.PurePath, os.PathLike, MultipartFile)
READER_TYPES = (typing.IO, io.BufferedReader, InputStream)
WRITER_TYPES = (io.BufferedWriter, OutputStream)
CONTAINER_TYPES = (collections.abc.Sequence, collections.abc.Set)

ATOMIC_TYPES = (
    bool,
    numbers.Number,
    Decimal,
    collections.abc.Mapping,
    Enum,
) + STRING_TYPES + DATE_TYPES + FILE_TYPES + READER_TYPES + WRITER_TYPES


def _is_class(cls) -> bool:
    return isinstance(cls, type)


def is_atomic(cls) -> bool:
    """Check if the class is a terminal schema type (never expanded)"""
    if not _is_class(cls) or cls in (object, NONE_TYPE):
        return True
    return issubclass(cls, ATOMIC_TYPES)


def is_container(cls) -> bool:
    """Check if the class is a collection of elements (excluding text)"""
    if not _is_class(cls) or issubclass(cls, TEXT_TYPES):
        return False
    return issubclass(cls, CONTAINER_TYPES)


def is_compound(cls) -> bool:
    return not is_atomic(cls) and not is_container(cls)


def is_stream(cls) -> bool:
    return _is_class(cls) and issubclass(cls, FILE_TYPES + READER_TYPES + WRITER_TYPES)


def _has_compound_values(enum_cls) -> bool:
    return any(is_compound(type(member.value)) for member in enum_cls)


def classify(cls) -> Kind:
    """
    Classify a class into a schema kind

    Args:
        cls: Normalized class (element class for arrays/containers)

    Returns:
        Kind of the class; Kind.OBJECT when nothing more specific applies
    """
    if not _is_class(cls):
        return Kind.OBJECT

    # bool is an int subclass, check it first
    if issubclass(cls, bool):
        return Kind.BOOLEAN
    if issubclass(cls, Enum):
        return Kind.ENUMERABLE_OBJECT if _has_compound_values(cls) else Kind.STRING
    if issubclass(cls, numbers.Integral):
        return Kind.INTEGER
    if issubclass(cls, (float, Decimal, numbers.Real)):
        return Kind.FLOAT
    if issubclass(cls, STRING_TYPES):
        return Kind.STRING
    if issubclass(cls, DATE_TYPES):
        return Kind.DATE
    if issubclass(cls, FILE_TYPES):
        return Kind.FILE
    if issubclass(cls, READER_TYPES):
        return Kind.READER
    if issubclass(cls, WRITER_TYPES):
        return Kind.WRITER
    return Kind.OBJECT
