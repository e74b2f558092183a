# -*- encoding: utf-8 -*-
# @File   : engine.py
# @Time   : 2026/10/18 15:40:12

"""Single forward scans over a document text.

Both scans are strict: the first malformed line aborts them,
even when the wanted field comes later in the file.
"""

from .lexer import iter_lines
from .model import (
    FieldNotFound,
    IniOptions,
    LineKind,
    MalformedDocument,
    MatchMode
)


def find_field(
    text: str, section: str, field: str, options: IniOptions
) -> str:
    """Raw value of the first `field` inside the first matching `section`.

    Raises `FieldNotFound` if there is none, or if that value is empty,
    and `MalformedDocument` on the first bad line met before it.
    """
    current: str | None = None
    for line in iter_lines(text, options):
        match line.kind:
            case LineKind.PASSTHROUGH:
                continue
            case LineKind.SECTION:
                current = line.name
            case LineKind.FIELD:
                if current == section and line.name == field:
                    # first match wins, empty or not.
                    if not line.value:
                        break
                    return line.value
            case LineKind.MALFORMED:
                raise MalformedDocument(line)
    raise FieldNotFound(section, field)


def upsert_field(
    text: str, section: str, field: str, value: str, options: IniOptions
) -> str:
    """Rebuild `text` with `field` of `section` set to `value`.

    - an existing field is replaced in place (first one only);
    - a missing field goes to the end of the first matching section;
    - a missing section is appended with the field to the end of document.

    Every other line is kept as is. Raises `MalformedDocument`
    before anything gets produced if the document is broken.
    """
    assignment = f'{field}{options.separator}{value}'
    mode = MatchMode.NO_MATCH
    current: str | None = None
    out: list[str] = []

    for line in iter_lines(text, options):
        match line.kind:
            case LineKind.PASSTHROUGH:
                pass
            case LineKind.SECTION:
                if (mode is MatchMode.SECTION_MATCHED
                        and line.name != section):
                    # close the matched section before the next one starts.
                    out.append(assignment)
                    mode = MatchMode.BOTH_MATCHED
                current = line.name
                if current == section and mode is not MatchMode.BOTH_MATCHED:
                    mode = MatchMode.SECTION_MATCHED
            case LineKind.FIELD:
                if (current == section and line.name == field
                        and mode is not MatchMode.BOTH_MATCHED):
                    out.append(assignment)
                    mode = MatchMode.BOTH_MATCHED
                    continue
            case LineKind.MALFORMED:
                raise MalformedDocument(line)
        out.append(line.raw)

    match mode:
        case MatchMode.NO_MATCH:
            out.append(f'[{section}]')
            out.append(assignment)
        case MatchMode.SECTION_MATCHED:
            out.append(assignment)

    # one terminator per line, minus the very last one.
    return '\n'.join(out)
