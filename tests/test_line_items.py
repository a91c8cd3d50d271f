import pytest

from storefront.domain.line_items import (
    build_line_item,
    normalize_money,
    normalize_quantity,
    to_minor_units,
)


def test_zero_quantity_is_raised_to_one_without_price():
    assert build_line_item({"id": "abc", "qty": 0}) == {
        "catalog_object_id": "abc",
        "quantity": "1",
    }


def test_price_is_rounded_to_cents_and_currency_upper_cased():
    assert build_line_item(
        {"variationId": "v1", "qty": 2, "price": 4.995, "currency": "usd"}
    ) == {
        "catalog_object_id": "v1",
        "quantity": "2",
        "base_price_money": {"amount": 500, "currency": "USD"},
    }


def test_line_without_identifier_is_dropped():
    assert build_line_item({"qty": 1}) is None
    assert build_line_item({"id": "", "variationId": "", "qty": 1}) is None


def test_variation_id_wins_over_id():
    line = build_line_item({"variationId": "v1", "id": "p1:v1", "qty": 1})

    assert line["catalog_object_id"] == "v1"


def test_note_only_included_when_non_empty():
    assert "note" not in build_line_item({"id": "a", "qty": 1, "note": ""})
    assert build_line_item({"id": "a", "qty": 1, "note": "No nuts"})["note"] == "No nuts"


@pytest.mark.parametrize(
    "price",
    [None, "abc", "", "nan", "inf", float("nan"), float("inf"), -1, "-0.5", True, [], {}],
)
def test_unusable_price_omits_money(price):
    line = build_line_item({"id": "a", "qty": 1, "price": price})

    assert "base_price_money" not in line


def test_string_price_and_blank_currency():
    line = build_line_item({"id": "a", "qty": 1, "price": "12.5", "currency": "  "})

    assert line["base_price_money"] == {"amount": 1250, "currency": "USD"}


def test_zero_price_is_sent():
    line = build_line_item({"id": "a", "qty": 1, "price": 0, "currency": " cad "})

    assert line["base_price_money"] == {"amount": 0, "currency": "CAD"}


@pytest.mark.parametrize(
    "qty, expected",
    [(3, "3"), ("4", "4"), (2.7, "2"), (0.5, "1"), (-3, "1"), (None, "1"), ("x", "1"), (float("nan"), "1")],
)
def test_quantity_is_integer_at_least_one(qty, expected):
    assert normalize_quantity(qty) == expected


def test_normalize_money():
    assert normalize_money(3) == 3
    assert normalize_money(" 2.25 ") == 2.25
    assert normalize_money(False) is None


def test_to_minor_units_rounds_half_up():
    assert to_minor_units(0.015) == 2
    assert to_minor_units(19.99) == 1999


def test_non_mapping_is_dropped():
    assert build_line_item("abc") is None
    assert build_line_item(None) is None


def test_price_beyond_provider_range_omits_money():
    line = build_line_item({"id": "a", "qty": 1, "price": 1e308})

    assert "base_price_money" not in line
    assert to_minor_units(1e16) == 10 ** 18
    assert to_minor_units(1e17) is None
