from collections.abc import Iterator
from typing import NamedTuple

from clickteam.cursor import ByteCursor
from clickteam.errors import NotTheExpectedFormat

PACK_MAGIC = bytes([0x77, 0x77, 0x77, 0x77, 0x49, 0x87, 0x47, 0x12])


class PackHeader(NamedTuple):
    version: int
    entry_count: int


class PackEntry(NamedTuple):
    name_length: int
    handle: int
    offset: int
    size: int


class ProductHeader(NamedTuple):
    tag: bytes
    runtime_version: int
    runtime_subversion: int
    product_version: int
    product_build: int


def read_pack_header(cursor: ByteCursor, offset: int) -> PackHeader:
    cursor.seek(offset)
    magic = cursor.read_bytes(len(PACK_MAGIC))
    if magic != PACK_MAGIC:
        raise NotTheExpectedFormat(f'no game pack at {offset:#x}, found {magic.hex(" ")}')
    cursor.skip(8)  # header size, data size
    version = cursor.read_u32()
    cursor.skip(8)
    entry_count = cursor.read_u32()
    return PackHeader(version, entry_count)


def read_pack_entries(cursor: ByteCursor, count: int) -> Iterator[PackEntry]:
    # names are utf-16 and never decoded, only their length matters
    for _ in range(count):
        name_length = cursor.read_u16()
        cursor.skip(name_length * 2)
        handle = cursor.read_u32()
        size = cursor.read_u32()
        yield PackEntry(name_length, handle, cursor.skip(size), size)


def read_product_header(cursor: ByteCursor) -> ProductHeader:
    return ProductHeader(
        tag=cursor.read_bytes(4),
        runtime_version=cursor.read_u16(),
        runtime_subversion=cursor.read_u16(),
        product_version=cursor.read_u32(),
        product_build=cursor.read_u32(),
    )


def skip_pack(cursor: ByteCursor, offset: int) -> ProductHeader:
    header = read_pack_header(cursor, offset)
    for _entry in read_pack_entries(cursor, header.entry_count):
        pass
    return read_product_header(cursor)
