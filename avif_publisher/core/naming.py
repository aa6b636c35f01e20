"""Content-addressed naming for encoded images."""

import hashlib

from avif_publisher.core.models import Artifact

TARGET_EXTENSION = ".avif"


def content_digest(data: bytes) -> str:
    """Return the 32 character lowercase hex MD5 digest of ``data``."""
    return hashlib.md5(data).hexdigest()


def canonical_name(data: bytes) -> str:
    """Derive the canonical file name for encoded bytes.

    The name depends only on the content, so identical bytes always map to
    the same file name. Empty input is valid.

    Args:
        data: Encoded image bytes

    Returns:
        ``<digest>.avif``
    """
    return content_digest(data) + TARGET_EXTENSION


def artifact_name(artifact: Artifact) -> str:
    """Canonical name for an Artifact, keeping its declared extension."""
    return content_digest(artifact.data) + artifact.extension
