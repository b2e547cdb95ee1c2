from collections.abc import Iterator
from typing import NamedTuple

from clickteam.cursor import ByteCursor
from clickteam.errors import ArchiveNotFound, InvalidExecutableSignature, InvalidHeaderSignature

# https://learn.microsoft.com/en-us/windows/win32/debug/pe-format

DOS_SIGNATURE = b'MZ'
PE_SIGNATURE = b'PE\0\0'
PE_OFFSET_LOCATION = 60

FILE_HEADER_REST = 16  # timestamp, symbol table, symbol count, optional header size, characteristics
OPTIONAL_HEADER_SIZE = 96 + 16 * 8  # PE32 fields + data directories
SECTION_RECORD_SIZE = 40
SECTION_NAME_LENGTH = 8

PACK_SECTION_NAME = '.extra'


class SectionRecord(NamedTuple):
    name: str
    raw_size: int
    raw_address: int


def read_headers(cursor: ByteCursor) -> int:
    cursor.seek(0)
    signature = cursor.read_bytes(min(len(DOS_SIGNATURE), cursor.remaining))
    if signature != DOS_SIGNATURE:
        raise InvalidExecutableSignature(f'expected {DOS_SIGNATURE!r} signature, found {signature!r}')

    cursor.seek(PE_OFFSET_LOCATION)
    cursor.seek(cursor.read_u32())
    signature = cursor.read_bytes(len(PE_SIGNATURE))
    if signature != PE_SIGNATURE:
        raise InvalidHeaderSignature(f'expected {PE_SIGNATURE!r} signature, found {signature!r}')

    cursor.skip(2)  # machine
    section_count = cursor.read_u16()
    cursor.skip(FILE_HEADER_REST + OPTIONAL_HEADER_SIZE)
    return section_count


def read_sections(cursor: ByteCursor, count: int) -> Iterator[SectionRecord]:
    for _ in range(count):
        record_start = cursor.position
        # names that fill all 8 bytes have no terminator
        name = ByteCursor(cursor.read_bytes(SECTION_NAME_LENGTH) + b'\0').read_cstring()
        cursor.seek(record_start + 16)
        raw_size = cursor.read_u32()
        raw_address = cursor.read_u32()
        yield SectionRecord(name, raw_size, raw_address)
        cursor.seek(record_start + SECTION_RECORD_SIZE)


def find_pack_offset(cursor: ByteCursor) -> int:
    section_count = read_headers(cursor)

    for idx, section in enumerate(read_sections(cursor, section_count)):
        if section.name == PACK_SECTION_NAME:
            return section.raw_address
        if idx == section_count - 1:
            # pack follows the last mapped section
            return section.raw_size + section.raw_address

    raise ArchiveNotFound('executable has no sections to locate the pack from')
