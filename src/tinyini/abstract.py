# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/18 14:02:11

"""Storage seam of the package.

Engines never touch the file system themselves. They get the whole document
as text from a `FileHandler[str]` and give the whole new document back,
so they can be fed from memory as well.
"""

from abc import ABCMeta, abstractmethod
from io import StringIO
from locale import getpreferredencoding
from os import PathLike, fspath
from os.path import exists
from typing import Generic, TypeVar

import chardet

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str | PathLike[str]) -> None:
        self._fn = fspath(filename)

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn


# whole text in, whole text out.
TextStorage = FileHandler[str]


class FileStorage(FileHandler[str]):
    """Reads and overwrites a text file, once per call.

    No handle is kept open between calls, and nothing is locked.
    Two writers racing on the same file may lose an update.
    """

    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._detected: str | None = None

    @property
    def encoding(self) -> str:
        """Codec used by `write()`, given the `read()` just before it."""
        return (
            self._codec or self._detected
            # what `open()` would pick for `encoding=None`.
            or getpreferredencoding(False)
        )

    @staticmethod
    def _decode_file(filename: str) -> tuple[StringIO, str]:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if (codec is None or codec['encoding'] is None
                or codec['confidence'] < 0.8):
            codec = {'encoding': 'utf-8'}

        # fallbacks. chardet may also name a codec Python does not have.
        try:
            return StringIO(raw.decode(codec['encoding']), newline=''), \
                codec['encoding']
        except (UnicodeDecodeError, LookupError):
            return StringIO(raw.decode('gbk'), newline=''), 'gbk'

    def read(self) -> str:
        """Whole file content, or an empty string if there is no file yet.

        May raise `OSError` (e.g. permission denied, or a directory).
        """
        # only what this very load detected may drive the next write.
        self._detected = None
        if not exists(self._fn):
            return ''
        try:
            # `newline=''` keeps CRLF untouched, so the rewrite does as well.
            with open(self._fn, 'r', encoding=self._codec, newline='') as fp:
                return fp.read()
        except UnicodeDecodeError:
            buf, self._detected = self._decode_file(self._fn)
            return buf.getvalue()

    def write(self, instance: str) -> None:
        """Replace the whole file content. No atomic rename is done.

        Encoding happens before the file gets truncated, so an unencodable
        text leaves the old content in place.
        """
        data = instance.encode(self.encoding)
        with open(self._fn, 'wb') as fp:
            fp.write(data)

    def __str__(self) -> str:
        return super().__str__() + f' ({self._codec or "auto"})'


class MemoryStorage(FileHandler[str]):
    """In-memory document. Handy for tests and for text built elsewhere."""

    def __init__(self, text: str = '', name: str = '<memory>') -> None:
        super().__init__(name)
        self.text = text

    def read(self) -> str:
        return self.text

    def write(self, instance: str) -> None:
        self.text = instance
