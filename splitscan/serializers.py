from splitscan.receipt.base import EmptyExtraction, RawImage, ReceiptItem, ScanOutcome

# Where the host UI continues after a successful scan
ITEMS_PAGE = "/items"


def serialize_item(item: ReceiptItem) -> dict:
    return {
        "id": item.id,
        "name": item.name,
        "price": item.price,
    }


def serialize_outcome(outcome: ScanOutcome) -> dict:
    empty = isinstance(outcome, EmptyExtraction)
    receipt = outcome.receipt if empty else outcome
    return {
        "status": "empty" if empty else "ok",
        "items": [serialize_item(i) for i in receipt.items],
        "tax": receipt.tax,
        "tip": receipt.tip,
        "next": ITEMS_PAGE,
    }


def serialize_preview(image: RawImage) -> dict:
    return {
        "dataUri": image.data_uri(),
        "contentType": image.content_type,
        "origin": image.origin,
    }
