"""Discovery of the post document and its images."""

import logging
from pathlib import Path
from typing import List

from avif_publisher.core.models import PreconditionError

logger = logging.getLogger(__name__)


def find_document(directory: Path) -> Path:
    """Find the single Markdown document in a directory.

    Args:
        directory: Directory to search (not recursive)

    Returns:
        Path to the only ``*.md`` file

    Raises:
        PreconditionError: If there are no Markdown files or more than one
    """
    directory = Path(directory)
    documents = [p for p in directory.glob("*.md") if p.is_file()]

    if not documents:
        raise PreconditionError(f"No Markdown file found in {directory}")

    if len(documents) > 1:
        names = ', '.join(sorted(p.name for p in documents))
        raise PreconditionError(
            f"Multiple Markdown files found in {directory}, keep only one: {names}"
        )

    logger.info("Found document: %s", documents[0])
    return documents[0]


def collect_images(images_dir: Path) -> List[Path]:
    """List the files in the images directory.

    Order follows the file system listing. Extension filtering is left to
    the caller so unsupported files can be reported.

    Args:
        images_dir: Directory holding the post's images

    Returns:
        List of file paths, empty if the directory does not exist
    """
    images_dir = Path(images_dir)
    if not images_dir.is_dir():
        logger.info("No %s directory, skipping image processing", images_dir)
        return []

    files = [p for p in images_dir.iterdir() if p.is_file()]
    if not files:
        logger.info("No image files in %s", images_dir)
    else:
        logger.info("Found %d image files", len(files))
    return files
