"""Data models and errors for AVIF Publisher."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List


class AvifPublisherError(Exception):
    """Base class for every error raised by AVIF Publisher."""


class MissingInputError(AvifPublisherError):
    """A referenced input path does not exist."""


class UnsupportedFormatError(AvifPublisherError):
    """The input extension is not in the supported allow-list."""


class ReadError(AvifPublisherError):
    """Reading a file failed."""


class WriteError(AvifPublisherError):
    """Writing a file failed."""


class EncodeError(AvifPublisherError):
    """The external encoder exited non-zero or could not be launched."""


class RenameError(AvifPublisherError):
    """Moving a finished artifact to its canonical name failed."""


class PreconditionError(AvifPublisherError):
    """Document mode found zero or several candidate documents."""


class ConfigError(AvifPublisherError):
    """The configuration file is invalid."""


@dataclass(frozen=True)
class Artifact:
    """Encoded image bytes waiting to be named."""
    data: bytes
    extension: str = ".avif"


@dataclass
class ConversionResult:
    """Outcome of converting a single image.

    ``transcoded`` is False when the source was already AVIF and was copied
    to its canonical name instead of being re-encoded.
    """
    source: Path
    output: Path
    transcoded: bool

    @property
    def canonical_name(self) -> str:
        return self.output.name


@dataclass
class ConversionFailure:
    """An image that could not be converted."""
    path: Path
    error: str


@dataclass
class BatchResult:
    """Result of converting a batch of images."""
    conversions: List[ConversionResult] = field(default_factory=list)
    failures: List[ConversionFailure] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)

    @property
    def mapping(self) -> Dict[str, str]:
        """Original base file name -> canonical name, for every success."""
        return {c.source.name: c.canonical_name for c in self.conversions}


@dataclass
class PostResult:
    """Result of preparing a Markdown post."""
    path: Path
    mapping: Dict[str, str] = field(default_factory=dict)
    failures: List[ConversionFailure] = field(default_factory=list)
    rewritten_references: int = 0
