import logging
import mimetypes

from splitscan.receipt.base import ImageOrigin, RawImage
from splitscan.receipt.errors import InputError

logger = logging.getLogger("splitscan")

ORIGINS = ("camera", "file")


def _resolve_content_type(content_type: str | None, filename: str | None) -> str | None:
    declared = (content_type or "").split(";", 1)[0].strip().lower()
    if declared and declared != "application/octet-stream":
        return declared
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        return guessed
    return None


def acquire(
    origin: ImageOrigin,
    data: bytes | None,
    content_type: str | None,
    filename: str | None = None,
) -> RawImage:
    """Wrap a camera capture or a picked file as a RawImage.

    Only the declared (or filename-guessed) type is checked; the bytes are
    not decoded and no size limit is applied.
    """
    if origin not in ORIGINS:
        raise InputError(f"Unknown image origin: {origin!r}")
    if not data:
        raise InputError("No image supplied")

    mime = _resolve_content_type(content_type, filename)
    if not mime or not mime.startswith("image/"):
        raise InputError(f"Not an image: {content_type!r} ({filename!r})")

    logger.info(
        "Receipt image acquired",
        extra={"extra_data": {"origin": origin, "content_type": mime, "size": len(data)}},
    )
    return RawImage(data=data, content_type=mime, origin=origin, filename=filename)
