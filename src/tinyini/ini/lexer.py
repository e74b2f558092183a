# -*- encoding: utf-8 -*-
# @File   : lexer.py
# @Time   : 2026/10/18 14:25:50

from typing import Iterator

from .model import IniLine, IniOptions, LineKind

# ASCII only, `str.strip()` would also eat unicode spaces.
WHITESPACES = ' \t\n\r\f\v'


def trim(text: str) -> str:
    return text.strip(WHITESPACES)


def classify(
    raw: str, options: IniOptions,
    in_section: bool = True, number: int = 0
) -> IniLine:
    """Decide what a single line (without its '\\n') is.

    A field line is only valid after a section header,
    so the caller tells whether one has been seen with `in_section`.
    """
    line = trim(raw)
    if not line or line.startswith(options.comment_prefixes):
        return IniLine(LineKind.PASSTHROUGH, raw, number)

    if line[0] == '[':
        pos = line.find(']')
        # no closing bracket, or `[]`
        if pos == -1 or pos == 1:
            return IniLine(LineKind.MALFORMED, raw, number)
        # anything after the first `]` is ignored.
        return IniLine(LineKind.SECTION, raw, number, line[1:pos])

    pos = line.find(options.separator)
    if pos == -1 or not in_section:
        return IniLine(LineKind.MALFORMED, raw, number)
    return IniLine(
        LineKind.FIELD, raw, number,
        trim(line[:pos]), trim(line[pos + 1:]))


def iter_lines(text: str, options: IniOptions) -> Iterator[IniLine]:
    """Lazily classify every line of a whole document.

    Lines are split on '\\n' only. An empty text has no line at all,
    while a text ending with '\\n' has an empty last line.
    """
    if not text:
        return
    in_section = False
    for number, raw in enumerate(text.split('\n'), 1):
        line = classify(raw, options, in_section, number)
        if line.kind is LineKind.SECTION:
            in_section = True
        yield line
