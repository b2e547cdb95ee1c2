class ExtractionError(ValueError):
    filename: str | None = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.filename:
            return f'{self.filename}: {message}'
        return message


class IoFailure(ExtractionError):
    pass


class InvalidExecutableSignature(ExtractionError):
    pass


class InvalidHeaderSignature(ExtractionError):
    pass


class ArchiveNotFound(ExtractionError):
    pass


class NotTheExpectedFormat(ExtractionError):
    pass


class OutOfBounds(ExtractionError):
    pass


class CompressionSizeMismatch(ExtractionError):
    pass


class CorruptCompressedData(ExtractionError):
    pass


class RasterEncodingFailure(ExtractionError):
    pass
