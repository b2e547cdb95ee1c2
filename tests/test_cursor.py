import pytest

from clickteam.cursor import ByteCursor
from clickteam.errors import OutOfBounds


def test_little_endian_reads_advance():
    cursor = ByteCursor(b'\x01\x02\x03\x04\x05\x06\x07')
    assert cursor.read_u8() == 0x01
    assert cursor.read_u16() == 0x0302
    assert cursor.read_u32() == 0x07060504
    assert cursor.position == 7
    assert cursor.remaining == 0


def test_seek_and_skip_return_previous_position():
    cursor = ByteCursor(bytes(range(16)))
    assert cursor.skip(4) == 0
    assert cursor.position == 4
    anchor = cursor.skip(6)
    assert anchor == 4
    assert cursor.seek(anchor + 2) == 10
    assert cursor.read_bytes(2) == b'\x06\x07'


def test_seek_past_end_fails_on_next_read():
    cursor = ByteCursor(b'abc')
    cursor.seek(100)
    with pytest.raises(OutOfBounds):
        cursor.read_bytes(1)


@pytest.mark.parametrize("data, reader", [
    (b'', 'read_u8'),
    (b'\x01', 'read_u16'),
    (b'\x01\x02\x03', 'read_u32'),
    (b'\x01\x02\x03', 'read_color_rgb_padded'),
])
def test_short_reads_raise(data, reader):
    cursor = ByteCursor(data)
    with pytest.raises(OutOfBounds):
        getattr(cursor, reader)()


def test_short_read_does_not_move_cursor():
    cursor = ByteCursor(b'abcd')
    cursor.skip(2)
    with pytest.raises(OutOfBounds):
        cursor.read_bytes(3)
    assert cursor.position == 2
    assert cursor.read_bytes(2) == b'cd'


def test_negative_read_raises():
    with pytest.raises(OutOfBounds):
        ByteCursor(b'abcd').read_bytes(-1)


def test_read_cstring():
    cursor = ByteCursor(b'.text\0\xe9t\xe9\0rest')
    assert cursor.read_cstring() == '.text'
    assert cursor.read_cstring() == '\xe9t\xe9'
    assert cursor.read_bytes(4) == b'rest'


def test_read_cstring_without_terminator():
    with pytest.raises(OutOfBounds):
        ByteCursor(b'no terminator').read_cstring()


def test_read_color_rgb_padded():
    cursor = ByteCursor(b'\x10\x20\x30\xff\x40')
    assert cursor.read_color_rgb_padded() == (0x10, 0x20, 0x30)
    assert cursor.position == 4


def test_sub_cursor_is_scoped():
    cursor = ByteCursor(b'\x01\x02\x03\x04\x05\x06')
    cursor.skip(1)
    sub = cursor.sub_cursor(2)
    assert cursor.position == 3
    assert len(sub) == 2
    assert sub.read_u16() == 0x0302
    with pytest.raises(OutOfBounds):
        sub.read_u8()


def test_reads_are_copies_of_the_buffer():
    data = bytearray(b'abcdef')
    cursor = ByteCursor(data)
    head = cursor.read_bytes(3)
    sub = cursor.sub_cursor(3)
    data[:] = b'xxxxxx'
    assert head == b'abc'
    assert sub.read_bytes(3) == b'def'
