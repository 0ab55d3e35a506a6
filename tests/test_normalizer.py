import pytest

from splitscan.receipt.base import EmptyExtraction, NormalizedReceipt
from splitscan.receipt.errors import SchemaError
from splitscan.receipt.normalizer import coerce_amount, coerce_name, normalize


@pytest.mark.parametrize(
    "value, expected",
    [("3.50", 3.5), (3.5, 3.5), (None, 0.0), ("abc", 0.0), (3, 3.0), (" 4.50 USD", 4.5)],
)
def test_coerce_amount(value, expected):
    assert coerce_amount(value) == expected


def test_tax_coercion_matches_documented_examples():
    values = ["3.50", 3.5, None, "abc"]
    taxes = [normalize({"items": [{"name": "x", "price": 1}], "tax": v}).tax for v in values]
    taxes.append(normalize({"items": [{"name": "x", "price": 1}]}).tax)  # absent
    assert taxes == [3.5, 3.5, 0.0, 0.0, 0.0]


@pytest.mark.parametrize("value", [True, False, [], {}, float("nan"), float("inf"), -2, "-1.5", 10**400])
def test_coerce_amount_neutralizes_bad_values(value):
    assert coerce_amount(value) == 0.0


def test_mixed_prices_never_raise():
    parsed = {
        "items": [
            {"name": "Coffee", "price": "4.50"},
            {"name": "Bagel", "price": "free"},
            {"name": "Tea"},
            {"name": "Juice", "price": None},
            {"name": "Cake", "price": -3},
            {"name": "Water", "price": [1]},
            "garbage",
        ]
    }
    receipt = normalize(parsed)
    assert isinstance(receipt, NormalizedReceipt)
    assert len(receipt.items) == 7
    assert all(isinstance(i.price, float) and i.price >= 0 for i in receipt.items)
    assert receipt.items[0].price == 4.5
    assert receipt.items[6].name == "Unnamed item"


@pytest.mark.parametrize("name", [None, "", "   ", {}, False])
def test_missing_name_gets_placeholder(name):
    receipt = normalize({"items": [{"name": name, "price": 1}]})
    assert receipt.items[0].name == "Unnamed item"


def test_names_are_trimmed():
    assert coerce_name("  Latte ") == "Latte"
    assert coerce_name(42) == "42"


@pytest.mark.parametrize("parsed", [{}, {"items": None}, {"items": "Coffee"}, {"items": {}}, [], "text", None])
def test_missing_items_is_schema_error(parsed):
    with pytest.raises(SchemaError, match="missing items"):
        normalize(parsed)


def test_empty_items_signals_empty_extraction():
    outcome = normalize({"items": [], "tax": "1.20", "tip": None})
    assert isinstance(outcome, EmptyExtraction)
    assert outcome.receipt.items == []
    assert outcome.receipt.tax == 1.2
    assert outcome.receipt.tip == 0.0


def test_ids_are_unique_and_ignore_source_ids():
    parsed = {"items": [{"id": "1", "name": "A", "price": 1}, {"id": "1", "name": "B", "price": 2}, {"name": "C"}]}
    receipt = normalize(parsed)
    ids = [i.id for i in receipt.items]
    assert len(set(ids)) == 3
    assert "1" not in ids


def test_total_is_dropped():
    receipt = normalize({"items": [{"name": "A", "price": 1}], "total": 99})
    assert "total" not in receipt.model_dump()


def test_strict_mode_rejects_bad_values():
    with pytest.raises(SchemaError):
        normalize({"items": [{"name": "A", "price": "abc"}]}, strict=True)
    with pytest.raises(SchemaError):
        normalize({"items": [{"price": 1}]}, strict=True)
    with pytest.raises(SchemaError):
        normalize({"items": [{"name": "A", "price": 1}], "tax": "n/a"}, strict=True)


def test_strict_mode_still_defaults_absent_tax_and_tip():
    receipt = normalize({"items": [{"name": "A", "price": "2.00"}]}, strict=True)
    assert (receipt.tax, receipt.tip) == (0.0, 0.0)
