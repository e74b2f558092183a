# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/18 16:40:02

from .model import (
    IniLine,
    IniOptions,
    LineKind,
    MatchMode,
    IniError,
    FieldNotFound,
    MalformedDocument,
    UnparsableValue
)
from .lexer import classify, iter_lines, trim
from .engine import find_field, upsert_field
from .parser import IniFile
