"""Exception hierarchy for indexing, reading and exporting"""

from pathlib import Path


class RoampubError(Exception):
    """Base class for all errors raised by roampub."""


class SourceReadError(RoampubError):
    """A source document could not be read or decoded."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        super().__init__(f"couldn't read {path}: {cause}")


class IndexingError(RoampubError):
    """Pass 1 failed; no document may be rendered."""


class InvalidIdentifierError(IndexingError):
    def __init__(self, identifier: str, path: Path, where: str):
        self.identifier = identifier
        self.path = path
        super().__init__(f"invalid identifier {identifier!r} for {where} in {path}")


class DuplicateIdentifierError(IndexingError):
    def __init__(self, identifier: str, first: str, second: str):
        self.identifier = identifier
        super().__init__(f"duplicate identifier {identifier!r}: {first} and {second}")


class SlugCollisionError(IndexingError):
    def __init__(self, filename: str, locations: list[str]):
        self.filename = filename
        super().__init__(f"output filename {filename!r} produced by {', '.join(locations)}")


class ExportError(RoampubError):
    """A document failed during Pass 2."""
