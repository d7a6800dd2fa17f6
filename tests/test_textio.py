import os

import pytest

from corelib.errors import ArgumentError, EndOfStreamError
from corelib.streams import FileAccess, FileMode, FileShare, FileStream
from corelib.textio import (
    ANSI,
    UNICODE,
    AnsiEncoding,
    StreamReader,
    StreamWriter,
    UnicodeEncoding,
)


def _write_raw(path, data):
    with FileStream(path, FileMode.CREATE, FileAccess.WRITE, FileShare.NONE) as writer:
        assert writer.write(data) == len(data)


def _reader(path, encoding=ANSI):
    return StreamReader(FileStream(path, FileMode.OPEN, FileAccess.READ), encoding)


def test_read_chars_rejects_negative_length(tmp_path):
    path = tmp_path / "abc.tmp"
    _write_raw(path, b"abc")
    with _reader(path) as reader:
        with pytest.raises(ArgumentError):
            reader.read_chars(-1)


def test_read_chars_keeps_newlines(tmp_path):
    path = tmp_path / "buffered.tmp"
    _write_raw(path, b"A\nB")
    with _reader(path) as reader:
        assert reader.read_chars(3) == "A\nB"


def test_explicit_unicode_encoding_is_honoured(tmp_path):
    path = tmp_path / "explicit.tmp"
    _write_raw(path, bytes([0x60, 0x4F]))
    with _reader(path, UNICODE) as reader:
        assert reader.read() == "\u4f60"


def test_bom_is_skipped_and_peek_does_not_consume(tmp_path):
    path = tmp_path / "bom.tmp"
    _write_raw(path, bytes([0xFF, 0xFE, 0x41, 0x00]))
    with StreamReader(path) as reader:
        assert reader.peek() == "A"
        assert reader.read() == "A"
        with pytest.raises(EndOfStreamError):
            reader.read()


def test_writer_with_none_encoding_falls_back_to_unicode(tmp_path):
    path = tmp_path / "default.tmp"
    writer = StreamWriter(path, None)
    writer.write("AB")
    writer.close()
    assert path.read_bytes() == b"\xff\xfeA\x00B\x00"
    with StreamReader(path) as reader:
        assert reader.read() == "A"
        assert reader.read() == "B"


def test_path_writer_round_trips_non_ascii(tmp_path):
    path = tmp_path / "roundtrip.tmp"
    with StreamWriter(path) as writer:
        writer.write("\u4f60")
    with StreamReader(path) as reader:
        assert reader.read() == "\u4f60"


def test_surrogate_pairs_are_merged(tmp_path):
    path = tmp_path / "emoji.tmp"
    with StreamWriter(path) as writer:
        writer.write("x\U0001F600y")
    with StreamReader(path) as reader:
        assert reader.read_to_end() == "x\U0001F600y"


def test_stream_writer_on_stream_writes_no_bom(tmp_path):
    path = tmp_path / "nobom.tmp"
    with StreamWriter(FileStream(path, FileMode.CREATE), UNICODE) as writer:
        writer.write("A")
        writer.write(b"hi")
    assert path.read_bytes() == b"A\x00h\x00i\x00"


def test_writer_formats_numbers_and_lines(tmp_path):
    path = tmp_path / "numbers.tmp"
    with StreamWriter(FileStream(path, FileMode.CREATE), ANSI) as writer:
        writer.write(42)
        writer.write(1.5)
        writer.write(b"!")
        writer.write_line("x")
    assert path.read_bytes() == b"421.500000e+00!x" + os.linesep.encode()


def test_read_line_handles_all_line_ends(tmp_path):
    path = tmp_path / "lines.tmp"
    _write_raw(path, b"one\r\ntwo\nthree\rfour")
    with _reader(path) as reader:
        assert reader.read_line() == "one"
        assert reader.read_line() == "two"
        assert reader.read_line() == "three"
        assert reader.read_line() == "four"
        assert reader.read_line() == ""


def test_read_to_end_normalises_carriage_returns(tmp_path):
    path = tmp_path / "end.tmp"
    _write_raw(path, b"a\r\nb\rc\n")
    with _reader(path) as reader:
        assert reader.read_to_end() == "a\nb\nc\n"


def test_zero_bytes_at_odd_offsets_select_unicode(tmp_path):
    path = tmp_path / "heuristic.tmp"
    _write_raw(path, b"A\x00B\x00")
    with _reader(path) as reader:
        assert reader.read_to_end() == "AB"


def test_empty_file_reads_raise_end_of_stream(tmp_path):
    path = tmp_path / "empty.tmp"
    _write_raw(path, b"")
    with _reader(path) as reader:
        assert reader.read_line() == ""
        with pytest.raises(EndOfStreamError):
            reader.read()


def test_unicode_encoding_round_trip_and_bom():
    encoding = UnicodeEncoding()
    assert encoding.get_bytes("AB") == b"A\x00B\x00"
    assert encoding.get_string(b"\xff\xfeA\x00B\x00") == "AB"
    assert encoding.get_string(b"") == ""
    assert encoding.get_string(None) == ""


def test_unicode_encoding_rejects_odd_length():
    with pytest.raises(ArgumentError):
        UnicodeEncoding().get_string(b"A\x00B")


def test_ansi_encoding_ascii_and_nul_truncation():
    encoding = AnsiEncoding()
    assert encoding.get_bytes("abc") == b"abc"
    assert encoding.get_string(b"abc\x00def") == "abc"
    assert encoding.get_string(None) == ""