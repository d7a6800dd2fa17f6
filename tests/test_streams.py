import pytest

from corelib.errors import (
    ArgumentError,
    CoreIOError,
    EndOfStreamError,
    NotSupportedError,
)
from corelib.streams import (
    BinaryReader,
    BinaryWriter,
    FileAccess,
    FileMode,
    FileShare,
    FileStream,
    SeekOrigin,
)

INT_MAX = (1 << 31) - 1


def _write_file(path, data):
    path.write_bytes(data)
    return path


def test_write_returns_byte_count_and_write_only_read_fails(tmp_path):
    path = tmp_path / "selftest.tmp"
    with FileStream(path, FileMode.CREATE, FileAccess.WRITE, FileShare.NONE) as writer:
        assert writer.write(b"abc") == 3
        with pytest.raises(CoreIOError):
            writer.read(3)
    assert path.read_bytes() == b"abc"


def test_read_only_write_fails(tmp_path):
    path = _write_file(tmp_path / "r.tmp", b"abc")
    with FileStream(path, FileMode.OPEN, FileAccess.READ, FileShare.NONE) as reader:
        with pytest.raises(CoreIOError):
            reader.write(b"z")
        assert reader.read(3) == b"abc"


def test_binary_writer_array_round_trip(tmp_path):
    path = tmp_path / "binary.tmp"
    writer = BinaryWriter(FileStream(path, FileMode.CREATE, FileAccess.WRITE))
    writer.write_array("H", [0x1234, 0x5678])
    writer.close()
    assert path.read_bytes() == b"\x34\x12\x78\x56"
    stream = FileStream(path, FileMode.OPEN, FileAccess.READ)
    reader = BinaryReader(stream)
    assert reader.read_array("H", 2) == [0x1234, 0x5678]
    stream.close()


def test_short_read_int32_raises(tmp_path):
    path = _write_file(tmp_path / "short.tmp", b"\x7f")
    with FileStream(path, FileMode.OPEN, FileAccess.READ) as stream:
        with pytest.raises(EndOfStreamError):
            BinaryReader(stream).read_int32()


def test_oversized_string_length_rejected(tmp_path):
    path = tmp_path / "oversized.tmp"
    writer = BinaryWriter(FileStream(path, FileMode.CREATE, FileAccess.WRITE))
    writer.write_int32(INT_MAX)
    writer.close()
    with FileStream(path, FileMode.OPEN, FileAccess.READ) as stream:
        with pytest.raises(CoreIOError):
            BinaryReader(stream).read_string()


def test_negative_string_length_rejected(tmp_path):
    path = _write_file(tmp_path / "neg.tmp", b"\xff\xff\xff\xff")
    with FileStream(path) as stream:
        with pytest.raises(CoreIOError, match="Invalid string length"):
            BinaryReader(stream).read_string()


def test_scalar_round_trip(tmp_path):
    path = tmp_path / "scalars.tmp"
    writer = BinaryWriter(FileStream(path, FileMode.CREATE))
    writer.write_int32(-5)
    writer.write_int16(300)
    writer.write_int64(1 << 40)
    writer.write_float(1.5)
    writer.write_double(-2.25)
    writer.write_char(b"Q")
    writer.write_string("h\u00e9llo \u4f60")
    writer.write_string("")
    writer.close()
    with FileStream(path) as stream:
        reader = BinaryReader(stream)
        assert reader.read_int32() == -5
        assert reader.read_int16() == 300
        assert reader.read_int64() == 1 << 40
        assert reader.read_float() == 1.5
        assert reader.read_double() == -2.25
        assert reader.read_char() == b"Q"
        assert reader.read_string() == "h\u00e9llo \u4f60"
        assert reader.read_string() == ""


def test_int32_layout_is_little_endian(tmp_path):
    path = tmp_path / "int.tmp"
    writer = BinaryWriter(FileStream(path, FileMode.CREATE))
    writer.write_int32(1)
    writer.close()
    assert path.read_bytes() == b"\x01\x00\x00\x00"


def test_string_layout_and_nul_truncation(tmp_path):
    path = tmp_path / "str.tmp"
    writer = BinaryWriter(FileStream(path, FileMode.CREATE))
    writer.write_string("A\0B")
    writer.close()
    assert path.read_bytes() == b"\x03\x00\x00\x00A\x00\x00\x00B\x00"
    with FileStream(path) as stream:
        assert BinaryReader(stream).read_string() == "A"


def test_write_int16_out_of_range(tmp_path):
    with FileStream(tmp_path / "x.tmp", FileMode.CREATE) as stream:
        with pytest.raises(ArgumentError):
            BinaryWriter(stream).write_int16(1 << 20)


def test_read_bytes_negative_count(tmp_path):
    path = _write_file(tmp_path / "b.tmp", b"abcd")
    with FileStream(path) as stream:
        reader = BinaryReader(stream)
        with pytest.raises(ArgumentError):
            reader.read_bytes(-1)
        assert reader.read_bytes(0) == b""
        assert reader.read_bytes(4) == b"abcd"


def test_default_access_follows_mode(tmp_path):
    path = tmp_path / "d.tmp"
    with FileStream(path, FileMode.CREATE) as created:
        assert created.can_write() and not created.can_read()
    with FileStream(path) as opened:
        assert opened.can_read() and not opened.can_write()


def test_create_with_read_access_rejected(tmp_path):
    with pytest.raises(ArgumentError):
        FileStream(tmp_path / "c.tmp", FileMode.CREATE, FileAccess.READ)


def test_append_with_read_access_rejected(tmp_path):
    with pytest.raises(ArgumentError):
        FileStream(tmp_path / "a.tmp", FileMode.APPEND, FileAccess.READ)


def test_create_new_existing_file(tmp_path):
    path = _write_file(tmp_path / "exists.tmp", b"x")
    with pytest.raises(CoreIOError, match="already exists"):
        FileStream(path, FileMode.CREATE_NEW, FileAccess.WRITE)


def test_create_new_fresh_file(tmp_path):
    path = tmp_path / "fresh.tmp"
    with FileStream(path, FileMode.CREATE_NEW, FileAccess.READ_WRITE) as stream:
        assert stream.write(b"hi") == 2
        stream.seek(SeekOrigin.START, 0)
        assert stream.read(2) == b"hi"


def test_share_mode_not_supported(tmp_path):
    with pytest.raises(NotSupportedError):
        FileStream(tmp_path / "s.tmp", FileMode.CREATE, FileAccess.WRITE, FileShare.READ_ONLY)


def test_empty_path_rejected():
    with pytest.raises(CoreIOError):
        FileStream("")


def test_open_missing_file(tmp_path):
    with pytest.raises(CoreIOError, match="Cannot open file"):
        FileStream(tmp_path / "missing.tmp")


def test_append_mode_adds_to_end(tmp_path):
    path = _write_file(tmp_path / "app.tmp", b"ab")
    with FileStream(path, FileMode.APPEND) as stream:
        stream.write(b"cd")
    assert path.read_bytes() == b"abcd"


def test_seek_and_position(tmp_path):
    path = _write_file(tmp_path / "seek.tmp", b"0123456789")
    with FileStream(path) as stream:
        assert stream.position() == 0
        stream.seek(SeekOrigin.START, 4)
        assert stream.position() == 4
        assert stream.read(2) == b"45"
        stream.seek(SeekOrigin.CURRENT, 1)
        assert stream.read(1) == b"7"
        stream.seek(SeekOrigin.END, -1)
        assert stream.read(5) == b"9"
        with pytest.raises(CoreIOError):
            stream.seek(SeekOrigin.START, -3)


def test_read_at_end_raises(tmp_path):
    path = _write_file(tmp_path / "e.tmp", b"z")
    with FileStream(path) as stream:
        assert stream.read(10) == b"z"
        with pytest.raises(EndOfStreamError):
            stream.read(1)
        with pytest.raises(ArgumentError):
            stream.read(-1)
        assert stream.read(0) == b""


def test_closed_stream_operations_fail(tmp_path):
    path = _write_file(tmp_path / "closed.tmp", b"abc")
    stream = FileStream(path)
    stream.close()
    stream.close()
    with pytest.raises(CoreIOError, match="closed"):
        stream.read(1)
    with pytest.raises(CoreIOError, match="closed"):
        stream.position()
    with pytest.raises(CoreIOError, match="closed"):
        stream.seek(SeekOrigin.START, 0)


def test_write_empty_returns_zero(tmp_path):
    path = tmp_path / "empty.tmp"
    with FileStream(path, FileMode.CREATE) as stream:
        assert stream.write(b"") == 0
    assert path.read_bytes() == b""