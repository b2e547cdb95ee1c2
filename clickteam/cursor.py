import struct

from clickteam.errors import OutOfBounds

UINT8 = struct.Struct('<B')
UINT16LE = struct.Struct('<H')
UINT32LE = struct.Struct('<I')


class ByteCursor:
    """Bounds checked reader over an in-memory buffer.

    The buffer is borrowed, not copied, but every read returns a copy of
    the bytes it covers. `seek` and `skip` do not validate the new position;
    the next read does.
    """

    def __init__(self, data: bytes, position: int = 0) -> None:
        self._data = data
        self.position = position

    def __len__(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return max(len(self._data) - self.position, 0)

    def seek(self, position: int) -> int:
        previous = self.position
        self.position = position
        return previous

    def skip(self, amount: int) -> int:
        previous = self.position
        self.position += amount
        return previous

    def read_bytes(self, amount: int) -> bytes:
        start = self.position
        end = start + amount
        if amount < 0 or start < 0 or end > len(self._data):
            raise OutOfBounds(
                f'read of {amount} bytes at {start:#x} exceeds buffer of {len(self._data):#x} bytes'
            )
        self.position = end
        return bytes(self._data[start:end])

    def read_u8(self) -> int:
        return UINT8.unpack(self.read_bytes(UINT8.size))[0]

    def read_u16(self) -> int:
        return UINT16LE.unpack(self.read_bytes(UINT16LE.size))[0]

    def read_u32(self) -> int:
        return UINT32LE.unpack(self.read_bytes(UINT32LE.size))[0]

    def read_cstring(self) -> str:
        chars = []
        while (char := self.read_bytes(1)) != b'\0':
            chars.append(char)
        return b''.join(chars).decode('latin-1')

    def read_color_rgb_padded(self) -> tuple[int, int, int]:
        r, g, b, _pad = self.read_bytes(4)
        return r, g, b

    def sub_cursor(self, amount: int) -> 'ByteCursor':
        return ByteCursor(self.read_bytes(amount))
