"""Turn the decoded model output into a NormalizedReceipt.

Everything after the ``items`` check is total: bad names and amounts are
replaced with defaults instead of failing the scan, unless ``strict`` is set.
Keep in step with splitscan.receipt.prompt.
"""

import logging
import math
import re
from collections.abc import Mapping
from typing import Any

from splitscan.receipt.base import (
    UNNAMED_ITEM,
    EmptyExtraction,
    NormalizedReceipt,
    ReceiptItem,
    ScanOutcome,
    new_item_id,
)
from splitscan.receipt.errors import SchemaError

logger = logging.getLogger("splitscan")

_LEADING_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def coerce_amount(
    value: Any, field: str = "amount", strict: bool = False, required: bool = True
) -> float:
    """Best-effort conversion of a model-supplied amount to a float >= 0.

    Numbers pass through; strings contribute their leading number
    ("3.50" -> 3.5, "4.50 USD" -> 4.5). Anything else becomes 0, as do
    negative and non-finite results. In strict mode those raise SchemaError,
    except for a missing value when ``required`` is False.
    """
    if value is None and not required:
        return 0.0
    number: float | None = None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = None
    elif isinstance(value, str):
        match = _LEADING_NUMBER_RE.match(value.strip())
        if match:
            number = float(match.group(0))

    if number is None or not math.isfinite(number) or number < 0:
        if strict:
            raise SchemaError(f"Invalid {field}: {value!r}")
        return 0.0
    return number


def coerce_name(value: Any, strict: bool = False) -> str:
    if isinstance(value, str):
        name = value.strip()
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        name = str(value)
    else:
        name = ""
    if not name:
        if strict:
            raise SchemaError(f"Invalid item name: {value!r}")
        return UNNAMED_ITEM
    return name


def _normalize_item(raw: Any, strict: bool) -> ReceiptItem:
    if not isinstance(raw, Mapping):
        if strict:
            raise SchemaError(f"Invalid item: {raw!r}")
        raw = {}
    # Source ids are ignored: the model's output can't be trusted to be unique
    return ReceiptItem(
        id=new_item_id(),
        name=coerce_name(raw.get("name"), strict=strict),
        price=coerce_amount(raw.get("price"), field="price", strict=strict),
    )


def normalize(parsed: Any, strict: bool = False) -> ScanOutcome:
    if not isinstance(parsed, Mapping) or not isinstance(parsed.get("items"), list):
        raise SchemaError("missing items")

    receipt = NormalizedReceipt(
        items=[_normalize_item(raw, strict) for raw in parsed["items"]],
        tax=coerce_amount(parsed.get("tax"), field="tax", strict=strict, required=False),
        tip=coerce_amount(parsed.get("tip"), field="tip", strict=strict, required=False),
    )

    if not receipt.items:
        logger.info("Receipt extraction returned no items")
        return EmptyExtraction(receipt=receipt)
    return receipt
