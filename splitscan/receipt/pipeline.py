import logging
import time

from splitscan.receipt.base import EmptyExtraction, ExtractionRequest, RawImage, ReceiptExtractor, ScanOutcome
from splitscan.receipt.normalizer import normalize
from splitscan.receipt.parser import parse_response
from splitscan.receipt.progress import ProgressReporter, Stage
from splitscan.receipt.prompt import PROMPT_VERSION, build_prompt

logger = logging.getLogger("splitscan")


class ReceiptScanPipeline:
    """Image -> prompt + inference call -> parse -> normalize.

    Errors from any stage propagate unchanged. Progress is reset to 0 when a
    run starts and again when it ends, whatever the outcome.
    """

    def __init__(
        self,
        extractor: ReceiptExtractor,
        progress: ProgressReporter | None = None,
        strict: bool = False,
    ):
        self.extractor = extractor
        self.progress = progress or ProgressReporter()
        self.strict = strict

    async def run(self, image: RawImage) -> ScanOutcome:
        self.progress.reset()
        start = time.time()
        try:
            request = ExtractionRequest(prompt=build_prompt(), image=image)
            self.progress.report(Stage.REQUEST_BUILT)

            raw = await self.extractor.extract(request.image, request.prompt, progress=self.progress)
            self.progress.report(Stage.RESPONSE_RECEIVED)

            parsed = parse_response(raw)
            self.progress.report(Stage.RESPONSE_PARSED)

            outcome = normalize(parsed, strict=self.strict)
            self.progress.report(Stage.COMPLETE)
        finally:
            self.progress.reset()

        receipt = outcome.receipt if isinstance(outcome, EmptyExtraction) else outcome
        logger.info(
            "Receipt scanned",
            extra={"extra_data": {
                "items_count": len(receipt.items),
                "empty": isinstance(outcome, EmptyExtraction),
                "prompt_version": PROMPT_VERSION,
                "duration_ms": round((time.time() - start) * 1000),
            }},
        )
        return outcome
