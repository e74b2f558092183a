# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/18 16:18:45

"""Typed access to a single INI file.

Every call loads the file again and every write overwrites all of it,
so an `IniFile` holds configuration only, never content.
Nothing is locked either: keep one writer per file.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from os import PathLike

from ..abstract import FileHandler, FileStorage, TextStorage
from . import codec
from .engine import find_field, upsert_field
from .model import (
    DEFAULT_COMMENT_PREFIXES,
    DEFAULT_SEPARATOR,
    FieldNotFound,
    IniOptions,
    MalformedDocument,
    UnparsableValue
)


class IniFile:
    def __init__(
        self, file: str | PathLike[str] | TextStorage,
        encoding: str | None = None, *,
        separator: str = DEFAULT_SEPARATOR,
        comment_prefixes: Iterable[str] = DEFAULT_COMMENT_PREFIXES
    ) -> None:
        """No I/O happens here.

        `file` may also be any `FileHandler[str]`, e.g. a `MemoryStorage`,
        in which case `encoding` is ignored.
        """
        self._storage: TextStorage = (
            file if isinstance(file, FileHandler)
            else FileStorage(file, encoding)
        )
        self._options = IniOptions(separator, tuple(comment_prefixes))

    @property
    def storage(self) -> TextStorage:
        return self._storage

    @property
    def options(self) -> IniOptions:
        return self._options

    def set_field_separator(self, separator: str) -> 'IniFile':
        """Default is `=`. Must be a single character."""
        self._options = replace(self._options, separator=separator)
        return self

    def set_comment_prefixes(self, prefixes: Iterable[str]) -> 'IniFile':
        """Default is `#` and `;`. Matched at the start of a trimmed line."""
        self._options = replace(
            self._options, comment_prefixes=tuple(prefixes))
        return self

    def _read(
        self, section: str, field: str,
        default: object, value_codec: codec.ValueCodec
    ):
        try:
            raw = find_field(
                self._storage.read(), section, field, self._options)
            return value_codec.parse(raw)
        except (FieldNotFound, UnparsableValue) as e:
            logging.debug(f'{self._storage}: {e}, using default {default!r}')
        except MalformedDocument as e:
            logging.warning(f'{self._storage}: {e}')
        except (OSError, UnicodeError, LookupError) as e:
            logging.warning(f'Unable to read {self._storage}:\n  {e}')
        return default

    def _write(self, section: str, field: str, value: str) -> bool:
        try:
            text = upsert_field(
                self._storage.read(), section, field, value, self._options)
            self._storage.write(text)
        except MalformedDocument as e:
            logging.warning(f'{self._storage} left untouched: {e}')
            return False
        except (OSError, UnicodeError, LookupError) as e:
            logging.warning(f'Unable to write {self._storage}:\n  {e}')
            return False
        return True

    def read_bool(self, section: str, field: str, default: bool) -> bool:
        """`true`/`1` or `false`/`0`, in any letter case."""
        return self._read(section, field, default, codec.BOOL)

    def read_int(self, section: str, field: str, default: int) -> int:
        """Decimal integer.

        Note: hex or octal looking values pass the check
        but only their leading decimal digits are read (`0x10` is 0).
        """
        return self._read(section, field, default, codec.INT)

    def read_float(self, section: str, field: str, default: float) -> float:
        return self._read(section, field, default, codec.FLOAT)

    read_double = read_float

    def read_str(self, section: str, field: str, default: str) -> str:
        """Trimmed text. An empty value counts as missing."""
        return self._read(section, field, default, codec.STR)

    def write_bool(self, section: str, field: str, value: bool) -> bool:
        return self._write(section, field, codec.BOOL.format(value))

    def write_int(self, section: str, field: str, value: int) -> bool:
        return self._write(section, field, codec.INT.format(value))

    def write_float(self, section: str, field: str, value: float) -> bool:
        return self._write(section, field, codec.FLOAT.format(value))

    write_double = write_float

    def write_str(self, section: str, field: str, value: str) -> bool:
        """Upsert `field` into `section`, rewriting the whole file.

        Returns `False` if the current document is malformed
        (file untouched) or if it cannot be written.
        """
        return self._write(section, field, codec.STR.format(value))

    def __str__(self) -> str:
        return "INI file: " + str(self._storage)
