"""Image conversion to canonically named AVIF files."""

import logging
import shutil
from pathlib import Path
from typing import Iterable, Optional

from avif_publisher.core.encoder import DEFAULT_CRF, EncodeRequest, Encoder, select_template
from avif_publisher.core.models import (
    Artifact,
    AvifPublisherError,
    BatchResult,
    ConversionFailure,
    ConversionResult,
    MissingInputError,
    ReadError,
    RenameError,
    UnsupportedFormatError,
    WriteError,
)
from avif_publisher.core.naming import TARGET_EXTENSION, artifact_name

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".avif"}
TEMP_PREFIX = "temp_"


def is_supported(path: Path) -> bool:
    """Check whether a file has a supported image extension."""
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def temp_path_for(source: Path) -> Path:
    """Transient encoder output path next to ``source``."""
    return source.with_name(f"{TEMP_PREFIX}{source.name}{TARGET_EXTENSION}")


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise ReadError(f"Failed to read {path}: {e}") from e


class ImageConverter:
    """Converts images to AVIF files named after their content.

    Non-AVIF sources go through the encoder and the result is renamed to its
    canonical name. AVIF sources skip the encoder and are copied to their
    canonical name, leaving the original in place.
    """

    def __init__(
        self,
        encoder: Encoder,
        max_width: Optional[int] = None,
        crf: int = DEFAULT_CRF,
        remove_source: bool = True,
    ):
        """Initialize ImageConverter.

        Args:
            encoder: Callable that performs one EncodeRequest
            max_width: Optional width cap passed to the encoder
            crf: Constant rate factor passed to the encoder
            remove_source: Delete transcoded originals after a successful rename
        """
        self.encoder = encoder
        self.max_width = max_width
        self.crf = crf
        self.remove_source = remove_source

    def convert(self, source: Path) -> ConversionResult:
        """Convert a single image.

        Args:
            source: Image to convert

        Returns:
            ConversionResult describing the canonical output

        Raises:
            MissingInputError: If the source does not exist
            UnsupportedFormatError: If the extension is not supported
            ReadError, WriteError, EncodeError, RenameError: On I/O or encoder failure
        """
        source = Path(source)
        if not source.exists():
            raise MissingInputError(f"File not found: {source}")
        if not is_supported(source):
            raise UnsupportedFormatError(f"Unsupported image format: {source}")

        if source.suffix.lower() == TARGET_EXTENSION:
            return self._copy_existing(source)
        return self._transcode(source)

    def _copy_existing(self, source: Path) -> ConversionResult:
        artifact = Artifact(data=_read_bytes(source))
        output = source.with_name(artifact_name(artifact))

        if output == source:
            logger.debug("%s already has its canonical name", source)
            return ConversionResult(source=source, output=output, transcoded=False)

        logger.info("Already AVIF, copying %s -> %s", source, output)
        try:
            shutil.copyfile(source, output)
        except OSError as e:
            raise WriteError(f"Failed to copy {source} to {output}: {e}") from e

        return ConversionResult(source=source, output=output, transcoded=False)

    def _transcode(self, source: Path) -> ConversionResult:
        temp_path = temp_path_for(source)
        logger.info("Converting %s -> %s", source, temp_path)

        # A failed encode leaves temp_path behind
        self.encoder(EncodeRequest(
            source=source,
            destination=temp_path,
            template=select_template(source.suffix),
            max_width=self.max_width,
            crf=self.crf,
        ))

        artifact = Artifact(data=_read_bytes(temp_path))
        output = source.with_name(artifact_name(artifact))

        if temp_path != output:
            try:
                temp_path.replace(output)
            except OSError as e:
                raise RenameError(f"Failed to rename {temp_path} to {output}: {e}") from e

        if self.remove_source:
            logger.debug("Removing original %s", source)
            try:
                source.unlink()
            except OSError as e:
                raise WriteError(f"Failed to remove original {source}: {e}") from e

        return ConversionResult(source=source, output=output, transcoded=True)

    def convert_all(self, sources: Iterable[Path]) -> BatchResult:
        """Convert images one after another, continuing past failures.

        Args:
            sources: Images to convert, processed in the given order

        Returns:
            BatchResult with every success and failure
        """
        result = BatchResult()
        for source in sources:
            try:
                result.conversions.append(self.convert(Path(source)))
            except UnsupportedFormatError:
                logger.warning("Skipping unsupported file: %s", source)
                result.skipped.append(Path(source))
            except AvifPublisherError as e:
                logger.error("Failed to process %s: %s", source, e)
                result.failures.append(ConversionFailure(path=Path(source), error=str(e)))
        return result
