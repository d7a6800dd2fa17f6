# corelib

A library of small building blocks for compiler and tooling code: bitmap
integer sets, a linked list with node handles, open-addressing hash tables,
string helpers, file streams with binary readers and writers, and text
readers and writers with UTF-16 detection. It has no dependencies outside
the standard library.

## Modules

- `corelib.intset`
  - `IntSet`: non-negative integers stored in 32-bit words. `add` grows the
    set as needed, `remove` ignores values it does not hold, and
    `union_with` / `intersect_with` work in place. The static methods
    `IntSet.union`, `IntSet.intersect`, `IntSet.subtract` and
    `IntSet.has_intersection` return new results. Equality compares both
    the members and the number of words held.
  - `BitIntSet`: non-negative integers stored in 64-bit words. `len()` is
    the member count, `values()` and iteration give members in ascending
    order, and `union_with` also accepts an `IntSet`. `make_union`,
    `make_intersection` and `make_subtraction` return new sets. Equality
    compares members only. Negative values and a negative universe size
    raise `InvalidOperationError`.
- `corelib.linked`
  - `LinkedList`: a doubly linked list with `add_first`, `add_last`,
    `get_node`, `find`, `first_node`, `last_node`, `first`, `last`,
    `delete(node, count)`, `clear`, `to_list` and `copy`. `first` and `last`
    on an empty list raise `IndexOutOfRangeError`.
  - `LinkedNode`: a node handle with `value`, `previous()`, `next()`,
    `insert_after`, `insert_before` and `delete`.
- `corelib.dictionary`
  - `Dictionary`: a hash map with quadratic probing. It starts at 16 buckets
    and doubles when the load factor reaches 0.7; iteration follows the
    bucket layout. `add` raises `KeyExistsError` for a present key,
    `add_if_not_exists` reports whether it inserted, `d[key]` raises
    `KeyNotFoundError` for a missing key, `d[key] = value` inserts or
    replaces, and `try_get(key, default)` never raises. `items()` yields
    `KeyValuePair(key, value)` tuples.
  - `HashSet`: a set built on `Dictionary`; `add` returns whether the item
    was new.
  - `get_hash_code(key)`: the 32-bit signed hash used for placement.
    Integers are truncated to 32 bits, floats hash by their
    single-precision bit pattern, strings use `string_hash`, and objects may
    supply their own `get_hash_code()` method.
- `corelib.text`
  - `format_int(value, radix)` (radix 2 to 36, lower-case digits),
    `format_float(value, fmt)` with printf-like `%e`, `%.2f`, `%g` specs,
    `float_as_int`, `string_hash`, `string_to_int`, `string_to_double`,
    `substring`, `index_of`, `char_at` and `clamp`. Out-of-range arguments
    give `""`, `-1` or `"\0"` instead of raising.
  - `StringBuilder`: `append` (strings, or integers in a given radix),
    `remove(index, length)`, `clear`, `produce_string` (returns the text
    and resets), `capacity`, `ensure_capacity`, `len()` and `str()`.
- `corelib.streams`
  - `Stream`: the abstract byte stream (`position`, `seek`, `read`, `write`,
    `can_read`, `can_write`, `close`), usable in a `with` block.
  - `FileStream(path, mode, access, share)` with `FileMode` (`CREATE`,
    `OPEN`, `CREATE_NEW`, `APPEND`), `FileAccess` (`READ`, `WRITE`,
    `READ_WRITE`) and `SeekOrigin` (`START`, `END`, `CURRENT`). Without an
    explicit access, `OPEN` reads and every other mode writes. Only
    `FileShare.NONE` is supported; other `FileShare` values raise
    `NotSupportedError`. Reading at the end raises `EndOfStreamError`.
  - `BinaryReader` / `BinaryWriter`: little-endian `int16`, `int32`,
    `int64`, `float`, `double`, single bytes, raw bytes, `array` typecodes,
    and strings stored as a UTF-16 code-unit count followed by UTF-16LE
    text. Short reads raise `EndOfStreamError`.
- `corelib.textio`
  - `UnicodeEncoding` (UTF-16LE, a leading byte-order mark is skipped on
    decode) and `AnsiEncoding` (the locale's preferred encoding), with
    ready instances `UNICODE` and `ANSI`.
  - `StreamWriter(target, encoding)`: writes to a `Stream`, or creates a
    file from a path. A file created from a path with the UTF-16 encoding
    starts with a byte-order mark. Numbers are written in their text form,
    and `write_line` appends the platform line ending.
  - `StreamReader(source, encoding)`: reads from a `Stream` or a path. It
    picks UTF-16 when the first block starts with a byte-order mark or has
    zero bytes at odd offsets, and otherwise uses `encoding` (default
    `ANSI`). It offers `read`, `peek`, `read_chars`, `read_line` and
    `read_to_end`; the last turns `\r\n` and `\r` into `\n`.
- `corelib.paths`: `file_exists`, `read_all_text`, `truncate_ext`,
  `replace_ext`, `get_file_name`, `get_file_ext`, `get_directory_name` and
  `combine` (joins with the platform separator and skips empty parts).
- `corelib.errors`: `CoreLibError` and its subclasses `IndexOutOfRangeError`,
  `InvalidOperationError`, `ArgumentError`, `KeyNotFoundError`,
  `KeyExistsError`, `NotSupportedError`, `CoreIOError` and
  `EndOfStreamError`. They also derive from the matching built-in errors,
  such as `IndexError`, `ValueError`, `KeyError`, `OSError` and `EOFError`.

## Installation

```
pip install .
```

## Examples

```python
from corelib.intset import BitIntSet
from corelib.dictionary import Dictionary

live = BitIntSet(128)
live.add(3)
live.add(70)
print(list(live))            # [3, 70]

table = Dictionary()
table.add(3, 30)
table[4] = 40
print(table[3], len(table))  # 30 2
```

Writing and reading UTF-16 text:

```python
from corelib.textio import StreamWriter, StreamReader

with StreamWriter("out.txt") as writer:
    writer.write("AB")

with StreamReader("out.txt") as reader:
    print(reader.read_to_end())   # AB
```

Binary data:

```python
from corelib.streams import FileStream, FileMode, FileAccess, FileShare, BinaryWriter, BinaryReader

writer = BinaryWriter(FileStream("data.bin", FileMode.CREATE, FileAccess.WRITE, FileShare.NONE))
writer.write_int32(42)
writer.write_string("hello")
writer.close()

reader = BinaryReader(FileStream("data.bin", FileMode.OPEN, FileAccess.READ, FileShare.NONE))
print(reader.read_int32(), reader.read_string())   # 42 hello
reader.stream.close()
```

## What it does not do

This is a library only. It has no command-line tool, and it contains no
lexer, parser or compiler of its own. Files cannot be shared while open,
because only `FileShare.NONE` is supported.

## Running the tests

```
pip install .[test]
pytest
```