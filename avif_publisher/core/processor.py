"""Post processor preparing a Markdown document for publishing."""

import datetime
import logging
from pathlib import Path
from typing import Optional

from avif_publisher.core.converter import ImageConverter, is_supported
from avif_publisher.core.discovery import collect_images
from avif_publisher.core.models import PostResult, ReadError, WriteError
from avif_publisher.transforms.frontmatter import prepare_document
from avif_publisher.transforms.links import rewrite_image_references

logger = logging.getLogger(__name__)


class PostProcessor:
    """Prepares a Markdown post and converts its images to AVIF.

    Handles:
    - Front matter generation (title heading removed)
    - Conversion of images under the images directory
    - Rewriting image references to the canonical names
    """

    def __init__(self, converter: ImageConverter, images_dir: str = "images"):
        """Initialize PostProcessor.

        Args:
            converter: Converter used for every image
            images_dir: Images directory, relative to the document
        """
        self.converter = converter
        self.images_dir = images_dir

    def process(self, path: Path, now: Optional[datetime.datetime] = None) -> PostResult:
        """Prepare a post in place.

        Image failures are logged and collected; the document is still
        written with the references that could be rewritten.

        Args:
            path: Markdown document to prepare
            now: Timestamp for the front matter date (default: now)

        Returns:
            PostResult with the name mapping and any image failures

        Raises:
            ReadError: If the document cannot be read
            WriteError: If the document cannot be written back
        """
        path = Path(path)
        result = PostResult(path=path)

        # newline="" keeps CRLF line endings intact
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                raw_content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(f"Failed to read {path}: {e}") from e

        content = prepare_document(raw_content, path.name, now)
        if not content.endswith(raw_content):
            logger.info("Removed title heading from %s", path.name)

        images = [p for p in collect_images(path.parent / self.images_dir) if self._accept(p)]
        batch = self.converter.convert_all(images)
        result.mapping = batch.mapping
        result.failures = batch.failures

        content, result.rewritten_references = rewrite_image_references(
            content, result.mapping, self.images_dir
        )
        logger.info("Updated %d image references", result.rewritten_references)

        try:
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
        except OSError as e:
            raise WriteError(f"Failed to write {path}: {e}") from e

        return result

    def _accept(self, image: Path) -> bool:
        if is_supported(image):
            return True
        logger.warning("Skipping unsupported file: %s", image)
        return False
