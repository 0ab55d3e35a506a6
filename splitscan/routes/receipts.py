import logging

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile

from splitscan.config import get_settings
from splitscan.deps import get_ctk
from splitscan.ratelimit import limiter
from splitscan.receipt.base import RawImage
from splitscan.receipt.errors import InputError, ParseError, ReceiptScanError, SchemaError, ServiceError
from splitscan.receipt.factory import get_receipt_extractor
from splitscan.receipt.image_source import acquire
from splitscan.receipt.pipeline import ReceiptScanPipeline
from splitscan.receipt.sessions import scan_sessions
from splitscan.serializers import serialize_outcome, serialize_preview

logger = logging.getLogger("splitscan")
router = APIRouter()

ERROR_STATUS = {
    InputError: 400,
    ParseError: 422,
    SchemaError: 422,
    ServiceError: 502,
}


def _error_status(error: ReceiptScanError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status
    return 500


async def _read_image(file: UploadFile | None, origin: str) -> RawImage:
    data = await file.read() if file is not None else None
    try:
        return acquire(
            origin,
            data,
            file.content_type if file is not None else None,
            filename=file.filename if file is not None else None,
        )
    except InputError as e:
        logger.info(f"Receipt image rejected: {e}")
        raise HTTPException(status_code=400, detail=e.user_message)


@router.post("/receipts/preview")
async def preview_receipt(
    file: UploadFile | None = File(None),
    origin: str = Form("file"),
):
    image = await _read_image(file, origin)
    return serialize_preview(image)


@router.post("/receipts/scan")
@limiter.limit(lambda: get_settings().receipt_scan_rate_limit)
async def scan_receipt(
    request: Request,
    file: UploadFile | None = File(None),
    origin: str = Form("file"),
):
    image = await _read_image(file, origin)
    settings = get_settings()

    try:
        extractor = get_receipt_extractor(settings)
    except ValueError as e:
        logger.error(f"Receipt extraction config error: {e}")
        raise HTTPException(status_code=503, detail="Receipt scanning is not available")

    run = scan_sessions.begin(get_ctk(request))
    pipeline = ReceiptScanPipeline(extractor, progress=run.progress, strict=settings.receipt_strict_numbers)
    error: ReceiptScanError | None = None
    try:
        try:
            outcome = await pipeline.run(image)
        except ReceiptScanError as e:
            error = e
        if not scan_sessions.is_current(run):
            raise HTTPException(status_code=409, detail="A newer scan replaced this one")
    finally:
        scan_sessions.finish(run)

    if error is not None:
        status = _error_status(error)
        logger.error(
            f"Receipt extraction failed: {error}",
            exc_info=error if status >= 500 else None,
            extra={"extra_data": {"status": status, "run_id": run.run_id, "origin": image.origin}},
        )
        raise HTTPException(status_code=status, detail=error.user_message)

    return serialize_outcome(outcome)


@router.get("/receipts/progress")
async def scan_progress(request: Request):
    return {"progress": scan_sessions.progress(get_ctk(request))}
