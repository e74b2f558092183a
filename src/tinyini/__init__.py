# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/18 16:41:30

from .abstract import FileHandler, FileStorage, MemoryStorage
from .ini import (
    IniFile,
    IniOptions,
    IniError,
    FieldNotFound,
    MalformedDocument,
    UnparsableValue
)

__all__ = [
    'IniFile', 'IniOptions',
    'FileHandler', 'FileStorage', 'MemoryStorage',
    'IniError', 'FieldNotFound', 'MalformedDocument', 'UnparsableValue'
]
