from collections.abc import Iterator
from dataclasses import dataclass, field
import struct
from typing import NamedTuple
import zlib

import numpy as np

from clickteam.cursor import ByteCursor
from clickteam.errors import CompressionSizeMismatch, CorruptCompressedData, OutOfBounds

ALPHA_FLAG = 0x10

IMAGE_HEADER = struct.Struct('<3I2H2BH4H')


class ImageItem(NamedTuple):
    handle: int
    decompressed_size: int
    compressed_size: int


@dataclass
class ImageRecord:
    checksum: int
    references: int
    data_size: int
    width: int
    height: int
    graphic_mode: int
    flags: int
    hotspot: tuple[int, int]
    action_point: tuple[int, int]
    color_key: tuple[int, int, int]
    data: bytes = field(repr=False)

    @classmethod
    def parse(cls, cursor: ByteCursor) -> 'ImageRecord':
        (
            checksum,
            references,
            data_size,
            width,
            height,
            graphic_mode,
            flags,
            _reserved,
            hotspot_x,
            hotspot_y,
            action_x,
            action_y,
        ) = IMAGE_HEADER.unpack(cursor.read_bytes(IMAGE_HEADER.size))
        color_key = cursor.read_color_rgb_padded()
        return cls(
            checksum,
            references,
            data_size,
            width,
            height,
            graphic_mode,
            flags,
            (hotspot_x, hotspot_y),
            (action_x, action_y),
            color_key,
            cursor.read_bytes(data_size),
        )

    @property
    def has_alpha(self) -> bool:
        return bool(self.flags & ALPHA_FLAG)

    @property
    def row_width(self) -> int:
        # rows are always stored even, odd widths carry an extra transparent column
        return self.width + self.width % 2


def alpha_stride(row_width: int, height: int, data_size: int, has_alpha: bool) -> int:
    """Row stride of the alpha region.

    Some images store alpha rows 2 bytes wider than the color rows. There is
    no field for it, such images are recognized by an alpha region that is
    not exactly one byte per pixel.
    """
    color_size = row_width * height * 3
    if has_alpha and data_size - color_size != color_size // 3:
        return row_width + 2
    return row_width


def decode_pixels(record: ImageRecord) -> np.ndarray:
    width, height = record.row_width, record.height
    color_size = width * height * 3
    if len(record.data) < color_size:
        raise OutOfBounds(f'color region needs {color_size} bytes, image has {len(record.data)}')

    raster = np.empty((height, width, 4), dtype=np.uint8)
    bgr = np.frombuffer(record.data[:color_size], dtype=np.uint8).reshape((height, width, 3))
    raster[..., :3] = bgr[..., ::-1]

    if not record.has_alpha:
        raster[..., 3] = 0xFF
        return raster

    stride = alpha_stride(width, height, record.data_size, record.has_alpha)
    alpha = record.data[color_size:]
    needed = (height - 1) * stride + width if height else 0
    if len(alpha) < needed:
        raise OutOfBounds(f'alpha region needs {needed} bytes, image has {len(alpha)}')
    rows = alpha[:needed] + bytes(height * stride - needed)
    raster[..., 3] = np.frombuffer(rows, dtype=np.uint8).reshape((height, stride))[:, :width]
    return raster


def read_image_item(cursor: ByteCursor) -> tuple[ImageItem, bytes]:
    item = ImageItem(cursor.read_u32(), cursor.read_u32(), cursor.read_u32())
    compressed = cursor.read_bytes(item.compressed_size)
    decompressor = zlib.decompressobj()
    try:
        # never inflate more than one byte past the declared size
        data = decompressor.decompress(compressed, item.decompressed_size + 1)
    except zlib.error as exc:
        raise CorruptCompressedData(f'image {item.handle}: {exc}') from exc
    if len(data) != item.decompressed_size or decompressor.unconsumed_tail or not decompressor.eof:
        raise CompressionSizeMismatch(
            f'image {item.handle}: declared {item.decompressed_size} bytes, decompressed {len(data)}'
        )
    return item, data


def read_image_bank(cursor: ByteCursor) -> Iterator[tuple[int, np.ndarray]]:
    count = cursor.read_u32()
    print('IMAGES', count)
    for idx in range(count):
        _item, data = read_image_item(cursor)
        record = ImageRecord.parse(ByteCursor(data))
        yield idx, decode_pixels(record)
