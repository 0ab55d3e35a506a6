from splitscan.config import Settings, get_settings
from splitscan.receipt.base import ReceiptExtractor
from splitscan.receipt.openai_provider import OpenAIReceiptExtractor


def get_receipt_extractor(settings: Settings | None = None) -> ReceiptExtractor:
    """Return the configured receipt extraction provider."""
    settings = settings or get_settings()
    provider = settings.receipt_provider
    if provider == "openai":
        return OpenAIReceiptExtractor(
            api_key=settings.openai_api_key,
            model=settings.receipt_model,
            timeout=settings.receipt_timeout_seconds,
        )
    raise ValueError(f"Unknown receipt provider: {provider}")
