"""Exceptions raised by quad-reader."""


class QuadReaderError(Exception):
    """Base exception for all quad-reader errors."""


class InvalidQuadsError(QuadReaderError, TypeError):
    """Raised when a reader is built from something that is not a quad iterable."""


class InvalidOptionError(QuadReaderError, ValueError):
    """Raised when pojo() receives an option it does not recognize."""


class LiteralDecodeError(QuadReaderError, ValueError):
    """Raised when a literal's datatype or payload cannot be decoded."""

    def __init__(self, datatype: str, message: str | None = None) -> None:
        self.datatype = datatype
        super().__init__(message or f"cannot read {datatype} literal")


class SourceError(QuadReaderError):
    """Raised when an RDF document cannot be retrieved or parsed."""
