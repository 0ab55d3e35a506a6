import base64
import uuid
from typing import Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field

from splitscan.receipt.progress import ProgressReporter

ImageOrigin = Literal["camera", "file"]

UNNAMED_ITEM = "Unnamed item"


class RawImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: bytes
    content_type: str  # e.g. "image/jpeg"
    origin: ImageOrigin = "file"
    filename: str | None = None

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")

    def data_uri(self) -> str:
        """Previewable (and transportable) form of the image."""
        return f"data:{self.content_type};base64,{self.to_base64()}"


class ExtractionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str
    image: RawImage


def new_item_id() -> str:
    return str(uuid.uuid4())


class ReceiptItem(BaseModel):
    id: str = Field(default_factory=new_item_id)
    name: str = Field(min_length=1)
    price: float = Field(ge=0)  # display units (e.g. 12.50 for $12.50)


class NormalizedReceipt(BaseModel):
    items: list[ReceiptItem]
    tax: float = Field(default=0.0, ge=0)
    tip: float = Field(default=0.0, ge=0)


class EmptyExtraction(BaseModel):
    """The service answered with a well-formed but empty item list.

    Not an error: the caller decides whether to continue with zero items
    (manual entry) or to retake the photo.
    """

    receipt: NormalizedReceipt


ScanOutcome = NormalizedReceipt | EmptyExtraction


class ReceiptExtractor(Protocol):
    async def extract(
        self,
        image: RawImage,
        prompt: str,
        progress: ProgressReporter | None = None,
    ) -> str: ...
