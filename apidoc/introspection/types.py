"""Marker types for values that have no standard library class."""
import io
from abc import ABC


class Locale(str):
    """A locale identifier such as "pt_BR"."""


class MultipartFile(ABC):
    """
    An uploaded file

    Framework upload classes can be registered as virtual subclasses:

        MultipartFile.register(UploadFile)
    """


class InputStream(ABC):
    """A readable byte or text source"""


class OutputStream(ABC):
    """A writable byte or text sink"""


InputStream.register(io.BufferedReader)
InputStream.register(io.BytesIO)
InputStream.register(io.StringIO)
OutputStream.register(io.BufferedWriter)
