from collections.abc import Callable
import os
import pathlib
import sys

from PIL import Image

from clickteam.chunks import IMAGE_BANK, read_chunks
from clickteam.cursor import ByteCursor
from clickteam.errors import ExtractionError, IoFailure, RasterEncodingFailure
from clickteam.exe import find_pack_offset
from clickteam.images import read_image_bank
from clickteam.pack import skip_pack

ImageSink = Callable[[int, Image.Image], None]


def extract_images(data: bytes, sink: ImageSink) -> int:
    cursor = ByteCursor(data)
    offset = find_pack_offset(cursor)
    product = skip_pack(cursor, offset)
    print(product)

    count = 0
    for idx, raster in read_chunks(cursor, {IMAGE_BANK: read_image_bank}):
        sink(idx, Image.fromarray(raster))
        count += 1
    return count


def extract_file(path: str | os.PathLike[str], sink: ImageSink) -> int:
    path = pathlib.Path(path)
    try:
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise IoFailure(f'unable to read executable: {exc.strerror or exc}') from exc
        return extract_images(data, sink)
    except ExtractionError as exc:
        exc.filename = path.name
        raise


def png_writer(output_dir: str | os.PathLike[str]) -> ImageSink:
    output_dir = pathlib.Path(output_dir)

    def save(idx: int, im: Image.Image) -> None:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            im.save(output_dir / f'{idx}.png')
        except (OSError, ValueError) as exc:
            raise RasterEncodingFailure(f'unable to save image {idx}: {exc}') from exc

    return save


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Extract the images of a Clickteam Fusion game executable')
    parser.add_argument('fname', help='Path to the game executable')
    parser.add_argument('-o', '--output', default='images', help='Directory to write the images to')
    args = parser.parse_args()

    try:
        count = extract_file(args.fname, png_writer(args.output))
    except ExtractionError as exc:
        print(f'ERROR: {exc}', file=sys.stderr)
        sys.exit(1)
    print(f'extracted {count} images to {args.output}')
