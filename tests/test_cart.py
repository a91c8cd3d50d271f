from storefront.domain.cart import Cart, count_quantities


def _line(line_id="prod1:var1", **extra):
    return {"id": line_id, "name": "Sourdough", "price": 8.5, "currency": "USD", **extra}


def test_add_new_line_defaults_quantity_to_one():
    cart = Cart()
    cart.add(_line())

    assert cart.items == [{**_line(), "qty": 1}]
    assert cart.count == 1


def test_add_existing_line_applies_delta_and_keeps_fields():
    cart = Cart()
    cart.add(_line(qty=2))
    cart.add({"id": "prod1:var1", "name": "Renamed", "price": 99, "qty": 3})

    assert len(cart.items) == 1
    assert cart.items[0]["qty"] == 5
    assert cart.items[0]["name"] == "Sourdough"
    assert cart.items[0]["price"] == 8.5
    assert cart.count == 5


def test_decrement_to_zero_removes_line():
    cart = Cart()
    cart.add(_line(qty=1))
    cart.add(_line("prod2:var2", qty=2))
    cart.add({"id": "prod1:var1", "qty": -1})

    assert [line["id"] for line in cart.items] == ["prod2:var2"]
    assert cart.count == 2


def test_decrement_below_zero_removes_line():
    cart = Cart()
    cart.add(_line(qty=2))
    cart.add({"id": "prod1:var1", "qty": -5})

    assert cart.items == []
    assert cart.count == 0


def test_new_line_with_non_positive_quantity_is_not_stored():
    cart = Cart()
    cart.add(_line(qty=-1))
    cart.add(_line("prod2:var2", qty=0))

    assert cart.items == []
    assert cart.count == 0


def test_remove_unknown_id_is_noop():
    cart = Cart()
    cart.add(_line(qty=3))
    cart.remove("missing")

    assert len(cart.items) == 1
    assert cart.count == 3


def test_clear_resets_items_and_count():
    cart = Cart()
    cart.add(_line(qty=3))
    cart.clear()

    assert cart.items == []
    assert cart.count == 0


def test_count_tracks_sum_of_quantities_across_mutations():
    cart = Cart()
    operations = [
        ("add", {"id": "a", "qty": 2}),
        ("add", {"id": "b"}),
        ("add", {"id": "a", "qty": -1}),
        ("add", {"id": "c", "qty": 4}),
        ("remove", "b"),
        ("add", {"id": "c", "qty": -4}),
        ("add", {"id": "a", "qty": 5}),
    ]
    for op, arg in operations:
        getattr(cart, op)(arg)
        assert cart.count == sum(line["qty"] for line in cart.items)
        assert all(line["qty"] > 0 for line in cart.items)

    assert cart.count == 6


def test_insertion_order_is_preserved():
    cart = Cart()
    for line_id in ["c", "a", "b"]:
        cart.add({"id": line_id})
    cart.add({"id": "a", "qty": 1})

    assert [line["id"] for line in cart.items] == ["c", "a", "b"]


def test_subtotal_and_currency():
    cart = Cart()
    cart.add(_line(qty=2, currency="CAD"))
    cart.add(_line("prod2:var2", price=3.25, qty=1))

    assert cart.subtotal() == 20.25
    assert cart.currency() == "CAD"
    assert Cart().currency() == "USD"


def test_from_state_ignores_unusable_state():
    assert Cart.from_state(None).items == []
    assert Cart.from_state({"items": "nope"}).count == 0

    cart = Cart.from_state({"items": [{"id": "a", "qty": 2}], "count": 99})
    assert cart.count == 2


def test_count_quantities_skips_malformed_entries():
    assert count_quantities(["junk", None, {"qty": "3"}, {"qty": "x"}, {"id": "a"}]) == 3
