"""Shared fixtures for AVIF Publisher tests."""

from pathlib import Path
from typing import List, Optional, Set

import pytest

from avif_publisher.core.encoder import EncodeRequest
from avif_publisher.core.models import EncodeError


class FakeEncoder:
    """Encoder stand-in that writes deterministic bytes instead of running ffmpeg.

    Output is ``b"AVIF:" + source bytes``, so identical sources produce
    identical artifacts. Sources whose names are in ``fail_on`` raise
    EncodeError after writing a partial output.
    """

    def __init__(self, fail_on: Optional[Set[str]] = None):
        self.fail_on = fail_on or set()
        self.requests: List[EncodeRequest] = []

    def __call__(self, request: EncodeRequest) -> None:
        self.requests.append(request)
        if request.source.name in self.fail_on:
            request.destination.write_bytes(b"partial")
            raise EncodeError(f"Encoding failed for {request.source}: simulated")
        request.destination.write_bytes(self.output_for(request.source))

    @staticmethod
    def output_for(source: Path) -> bytes:
        return b"AVIF:" + source.read_bytes()


@pytest.fixture
def fake_encoder():
    return FakeEncoder()
