import pytest

from splitscan.receipt.base import RawImage
from splitscan.receipt.progress import Stage

# Smallest valid PNG header; the bytes are never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class FakeExtractor:
    """Stands in for the inference service."""

    def __init__(self, reply: str | None = None, error: Exception | None = None, on_call=None):
        self.reply = reply
        self.error = error
        self.on_call = on_call
        self.calls: list[tuple[RawImage, str]] = []

    async def extract(self, image, prompt, progress=None):
        self.calls.append((image, prompt))
        if progress is not None:
            progress.report(Stage.IMAGE_ENCODED)
        if self.on_call is not None:
            self.on_call()
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def png_image() -> RawImage:
    return RawImage(data=PNG_BYTES, content_type="image/png", origin="camera", filename="receipt.png")
