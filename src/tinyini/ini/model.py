# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/18 14:10:37

"""
Line-level INI structures. There is no document tree:
a document is only ever seen as a stream of `IniLine`s.

    ```ini
    ; comment, or blank line   -> PASSTHROUGH
    [section]                  -> SECTION
    key = value                -> FIELD
    what is this               -> MALFORMED
    ```
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple
from warnings import warn

DEFAULT_SEPARATOR = '='
DEFAULT_COMMENT_PREFIXES = ('#', ';')


class LineKind(Enum):
    PASSTHROUGH = 'passthrough'
    SECTION = 'section'
    FIELD = 'field'
    MALFORMED = 'malformed'


class IniLine(NamedTuple):
    kind: LineKind
    raw: str      # as in the file, without the '\n'.
    number: int   # 1-based
    name: str = ''
    value: str = ''


class MatchMode(Enum):
    """Progress of a rewrite through the document."""
    NO_MATCH = 0
    SECTION_MATCHED = 1
    BOTH_MATCHED = 2


@dataclass(frozen=True)
class IniOptions:
    separator: str = DEFAULT_SEPARATOR
    comment_prefixes: tuple[str, ...] = DEFAULT_COMMENT_PREFIXES

    def __post_init__(self) -> None:
        if not isinstance(self.separator, str) or len(self.separator) != 1:
            raise ValueError(
                f'field separator must be a single character, '
                f'got {self.separator!r}')
        # accept any iterable of str, store a tuple for `str.startswith()`.
        object.__setattr__(
            self, 'comment_prefixes', tuple(self.comment_prefixes))
        if '' in self.comment_prefixes:
            warn('An empty comment prefix makes every line a comment.')


class IniError(Exception):
    """Base of what the engines raise. Never leaves `IniFile`."""
    pass


class FieldNotFound(IniError):
    def __init__(self, section: str, field: str) -> None:
        super().__init__(f'[{section}] {field} not found or empty')
        self.section = section
        self.field = field


class MalformedDocument(IniError):
    def __init__(self, line: IniLine) -> None:
        super().__init__(f'line {line.number} is malformed: {line.raw!r}')
        self.line = line


class UnparsableValue(IniError, ValueError):
    def __init__(self, raw: str, type_: type) -> None:
        super().__init__(f'{raw!r} is not a valid {type_.__name__}')
        self.raw = raw
