"""Tests for typed reads and writes through `IniFile`."""

import codecs
import logging
from locale import getpreferredencoding
from pathlib import Path

import chardet
import pytest

from tinyini import FileStorage, IniFile, MemoryStorage


@pytest.fixture
def ini_path(tmp_path: Path) -> Path:
    return tmp_path / 'conf.ini'


@pytest.fixture
def ini(ini_path: Path) -> IniFile:
    return IniFile(ini_path)


def test_construct_does_no_io(tmp_path: Path):
    path = tmp_path / 'nested' / 'conf.ini'
    IniFile(path)
    assert not path.parent.exists()


class TestRoundTrip:
    def test_bool(self, ini):
        assert ini.write_bool('A', 'flag', True)
        assert ini.read_bool('A', 'flag', False) is True
        assert ini.write_bool('A', 'flag', False)
        assert ini.read_bool('A', 'flag', True) is False

    def test_int(self, ini):
        assert ini.write_int('A', 'n', -42)
        assert ini.read_int('A', 'n', 0) == -42

    @pytest.mark.parametrize('value', [0.1, -2.5e-8, 1e100, 3.0])
    def test_float(self, ini, value):
        assert ini.write_float('A', 'x', value)
        assert ini.read_float('A', 'x', 0.0) == value

    def test_double_aliases(self, ini):
        assert ini.write_double('A', 'x', 1.25)
        assert ini.read_double('A', 'x', 0.0) == 1.25

    def test_str(self, ini):
        assert ini.write_str('A', 's', 'hello world')
        assert ini.read_str('A', 's', '') == 'hello world'


def test_file_layout(ini, ini_path):
    assert ini.write_str('A', 'X', '1')
    assert ini_path.read_text() == '[A]\nX=1'
    assert ini.write_int('A', 'Y', 2)
    assert ini.write_bool('B', 'Z', False)
    assert ini_path.read_text() == '[A]\nX=1\nY=2\n[B]\nZ=false'


def test_insertion_placement(ini, ini_path):
    ini_path.write_text('[A]\nX=1\n[B]\nY=2')
    assert ini.write_str('A', 'Z', 'q')
    assert ini_path.read_text() == '[A]\nX=1\nZ=q\n[B]\nY=2'


def test_idempotent(ini, ini_path):
    ini_path.write_text('; settings\n[A]\nX=1\n')
    assert ini.write_float('A', 'ratio', 0.5)
    first = ini_path.read_bytes()
    assert ini.write_float('A', 'ratio', 0.5)
    assert ini_path.read_bytes() == first


def test_crlf_kept(ini, ini_path):
    ini_path.write_bytes(b'[A]\r\nX = 1\r\n')
    assert ini.write_str('A', 'Y', '2')
    assert ini_path.read_bytes() == b'[A]\r\nX = 1\r\n\nY=2'
    assert ini.read_int('A', 'X', 0) == 1


class TestDefaults:
    def test_missing_file(self, ini):
        assert ini.read_str('A', 'K', 'dflt') == 'dflt'
        assert ini.read_int('A', 'K', 7) == 7

    def test_missing_section(self, ini, ini_path):
        ini_path.write_text('[B]\nK=1')
        assert ini.read_int('A', 'K', 7) == 7

    def test_missing_field(self, ini, ini_path):
        ini_path.write_text('[A]\nX=1')
        assert ini.read_int('A', 'K', 7) == 7

    def test_empty_value(self, ini, ini_path):
        ini_path.write_text('[A]\nK =   ')
        assert ini.read_str('A', 'K', 'dflt') == 'dflt'

    def test_unparsable(self, ini, ini_path):
        ini_path.write_text('[A]\nK=abc')
        assert ini.read_int('A', 'K', 7) == 7
        assert ini.read_float('A', 'K', 1.5) == 1.5
        assert ini.read_bool('A', 'K', True) is True
        assert ini.read_str('A', 'K', '') == 'abc'

    def test_unreadable(self, tmp_path):
        # a directory exists but cannot be opened as a file
        assert IniFile(tmp_path).read_str('A', 'K', 'dflt') == 'dflt'


@pytest.mark.parametrize('raw, expected', [
    ('true', True), ('TRUE', True), ('TruE', True), ('1', True),
    ('false', False), ('FALSE', False), ('0', False),
])
def test_read_bool_case_insensitive(ini, ini_path, raw, expected):
    ini_path.write_text(f'[A]\nK={raw}')
    assert ini.read_bool('A', 'K', not expected) is expected


def test_first_match_wins(ini, ini_path):
    ini_path.write_text('[A]\nK=1\n[A]\nK=2\n')
    assert ini.read_int('A', 'K', 0) == 1


def test_int_hex_quirk(ini, ini_path):
    ini_path.write_text('[A]\nK=0x10')
    assert ini.read_int('A', 'K', 99) == 0


class TestMalformedGuard:
    CONTENT = b'Z=1\n[A]\nK=v\n'

    def test_read(self, ini, ini_path, caplog):
        ini_path.write_bytes(self.CONTENT)
        with caplog.at_level(logging.WARNING):
            assert ini.read_str('A', 'K', 'dflt') == 'dflt'
        assert 'line 1' in caplog.text

    @pytest.mark.parametrize('call, value', [
        ('write_bool', True),
        ('write_int', 1),
        ('write_float', 1.0),
        ('write_str', 'x'),
    ])
    def test_write(self, ini, ini_path, call, value):
        ini_path.write_bytes(self.CONTENT)
        assert getattr(ini, call)('A', 'K', value) is False
        assert ini_path.read_bytes() == self.CONTENT


def test_write_target_unavailable(tmp_path):
    ini = IniFile(tmp_path / 'missing' / 'conf.ini')
    assert ini.write_str('A', 'K', 'v') is False
    assert IniFile(tmp_path).write_str('A', 'K', 'v') is False


def test_fluent_configuration(ini, ini_path):
    ini_path.write_text('// note\n[A]\nkey: value')
    assert ini.set_field_separator(':').set_comment_prefixes(['//']) is ini
    assert ini.read_str('A', 'key', '') == 'value'
    assert ini.write_str('A', 'other', 'x')
    assert ini_path.read_text() == '// note\n[A]\nkey: value\nother:x'


def test_constructor_configuration(ini_path):
    ini_path.write_text('[A]\n-- k: v\nk: 3')
    ini = IniFile(ini_path, separator=':', comment_prefixes=('--',))
    assert ini.read_int('A', 'k', 0) == 3


@pytest.mark.parametrize('separator', ['', '=='])
def test_bad_separator(ini, separator):
    with pytest.raises(ValueError):
        ini.set_field_separator(separator)


def test_empty_comment_prefix_warns(ini):
    with pytest.warns(UserWarning):
        ini.set_comment_prefixes([''])


def test_encoding(ini_path):
    ini = IniFile(ini_path, encoding='gbk')
    assert ini.write_str('配置', '名称', '值')
    assert ini_path.read_bytes() == '[配置]\n名称=值'.encode('gbk')
    assert ini.read_str('配置', '名称', '') == '值'


def test_unencodable_value_keeps_file(ini_path):
    ini_path.write_bytes(b'[A]\nK=1')
    ini = IniFile(ini_path, encoding='ascii')
    assert ini.write_str('A', 'K', 'こんにちは') is False
    assert ini_path.read_bytes() == b'[A]\nK=1'


def test_memory_storage():
    storage = MemoryStorage('[A]\nX=1')
    ini = IniFile(storage)
    assert ini.read_int('A', 'X', 0) == 1
    assert ini.write_int('A', 'X', 2)
    assert storage.text == '[A]\nX=2'
    assert ini.storage is storage


def test_str(ini_path):
    assert str(ini_path) in str(IniFile(ini_path))
    assert isinstance(IniFile(ini_path).storage, FileStorage)


@pytest.mark.skipif(
    codecs.lookup(getpreferredencoding(False)).name != 'utf-8',
    reason='needs a UTF-8 default encoding')
def test_write_uses_encoding_of_its_own_read(ini, ini_path, monkeypatch):
    monkeypatch.setattr(
        chardet, 'detect',
        lambda raw: {'encoding': 'latin-1', 'confidence': 0.99})
    ini_path.write_bytes('[A]\nname=café'.encode('latin-1'))
    assert ini.read_str('A', 'name', '') == 'café'

    # replaced by someone else in between
    ini_path.write_bytes('[A]\nname=café'.encode('utf-8'))
    assert ini.write_str('A', 'name', 'こんにちは') is True
    assert ini_path.read_bytes() == '[A]\nname=こんにちは'.encode('utf-8')


def test_unknown_codec(ini_path):
    ini_path.write_bytes(b'[A]\nK=1')
    ini = IniFile(ini_path, encoding='no-such-codec')
    assert ini.read_int('A', 'K', 7) == 7
    assert ini.write_int('A', 'K', 2) is False
    assert ini_path.read_bytes() == b'[A]\nK=1'


def test_unknown_detected_codec(ini_path, monkeypatch):
    monkeypatch.setattr(
        chardet, 'detect',
        lambda raw: {'encoding': 'EUC-TW', 'confidence': 0.99})
    ini_path.write_bytes('[A]\nK=中文'.encode('gbk'))
    ini = IniFile(ini_path, encoding='ascii')
    assert ini.read_str('A', 'K', '') == '中文'
