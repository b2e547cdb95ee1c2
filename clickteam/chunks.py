from collections.abc import Callable, Iterable, Iterator
from typing import Any, NamedTuple

from clickteam.cursor import ByteCursor

LAST_CHUNK = 0x7F7F
IMAGE_BANK = 0x6666

MODE_RAW = 0
MODE_COMPRESSED = 1

CHUNK_NAMES = {
    0x1122: 'Preview',
    0x2223: 'AppHeader',
    0x2224: 'AppName',
    0x2225: 'AppAuthor',
    0x2226: 'AppMenu',
    0x2227: 'ExtPath',
    0x2229: 'FrameItems',
    0x222A: 'GlobalEvents',
    0x222B: 'FrameHandles',
    0x222C: 'ExtData',
    0x222E: 'EditorFilename',
    0x222F: 'TargetFilename',
    0x2230: 'AppDoc',
    0x2232: 'GlobalValues',
    0x2233: 'GlobalStrings',
    0x2234: 'Extensions',
    0x2235: 'AppIcon',
    0x2238: 'BinaryFiles',
    0x223B: 'Copyright',
    0x2245: 'ExtendedHeader',
    0x3333: 'Frame',
    0x3334: 'FrameHeader',
    0x3335: 'FrameName',
    0x3337: 'FramePalette',
    0x3338: 'FrameItemInstances',
    0x333D: 'FrameEvents',
    0x3341: 'FrameLayers',
    0x3342: 'FrameVirtualRect',
    0x4444: 'ObjectHeader',
    0x4445: 'ObjectName',
    0x4446: 'ObjectProperties',
    0x5555: 'ImageOffsets',
    0x5556: 'FontOffsets',
    0x5557: 'SoundOffsets',
    0x5558: 'MusicOffsets',
    IMAGE_BANK: 'ImageBank',
    0x6667: 'FontBank',
    0x6668: 'SoundBank',
    0x6669: 'MusicBank',
    LAST_CHUNK: 'Last',
}

ChunkHandler = Callable[[ByteCursor], Iterable[Any]]


class Chunk(NamedTuple):
    id: int
    mode: int
    size: int

    @property
    def name(self) -> str:
        return CHUNK_NAMES.get(self.id, f'{self.id:#06x}')


def read_chunk_header(cursor: ByteCursor) -> Chunk | None:
    chunk_id = cursor.read_u16()
    if chunk_id == LAST_CHUNK:
        return None
    return Chunk(chunk_id, cursor.read_u16(), cursor.read_u32())


def read_chunks(cursor: ByteCursor, handlers: dict[int, ChunkHandler]) -> Iterator[Any]:
    """Walk the chunk stream up to the terminating chunk.

    Raw chunks with a handler are passed a cursor scoped to the chunk body and
    whatever the handler yields is yielded back. Everything else is skipped.
    Running out of data before the terminator raises `OutOfBounds`.
    """
    while chunk := read_chunk_header(cursor):
        handler = handlers.get(chunk.id)
        if chunk.mode == MODE_RAW and handler:
            yield from handler(cursor.sub_cursor(chunk.size))
        elif chunk.mode == MODE_COMPRESSED:
            cursor.skip(4)  # decompressed size
            compressed_size = cursor.read_u32()
            print('SKIP', chunk.name, 'compressed', compressed_size)
            cursor.skip(compressed_size)
        else:
            print('SKIP', chunk.name, 'mode', chunk.mode, chunk.size)
            cursor.skip(chunk.size)
