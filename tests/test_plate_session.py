"""Tests for plate sessions."""

import pytest

from plate_nutrition.domain.foods import FoodItem
from plate_nutrition.services.plates import PlateSession
from plate_nutrition.services.servings import InvalidServingError
from tests.conftest import make_food


def _plate(*items: FoodItem) -> PlateSession:
    session = PlateSession()
    for item in items:
        session.add_item(item)
    return session


def test_state_is_created_lazily_from_baseline(yogurt: FoodItem) -> None:
    session = _plate(yogurt)

    state = session.state_for("yogurt")

    assert state.serving_amount == 1.0
    assert state.raw_input_text == "1"
    assert state.selected_measure_id == "cup"
    assert state.baseline_measure_id == "cup"
    assert session.state_for("yogurt") is state


def test_unknown_item_raises_key_error() -> None:
    session = PlateSession()

    with pytest.raises(KeyError):
        session.state_for("missing")
    with pytest.raises(KeyError):
        session.delete_item("missing")


def test_plate_totals_scale_and_sum(yogurt: FoodItem, chicken: FoodItem) -> None:
    session = _plate(yogurt, chicken)

    assert session.set_serving_text("yogurt", "2") is True
    totals = session.totals()

    assert session.scale_of("yogurt") == 2
    assert totals["sugars, total"].value == pytest.approx(20)
    assert totals["sugars, total"].unit == "g"
    assert totals["protein"].value == pytest.approx(18)
    assert totals["energy"].value == pytest.approx(360)


def test_invalid_text_keeps_previous_amount(yogurt: FoodItem) -> None:
    session = _plate(yogurt)
    session.set_serving_text("yogurt", "1 1/2")

    assert session.set_serving_text("yogurt", "abc") is False

    state = session.state_for("yogurt")
    assert state.raw_input_text == "abc"
    assert state.serving_amount == 1.5
    assert session.scale_of("yogurt") == 1.5


def test_selecting_a_smaller_measure_rescales(yogurt: FoodItem) -> None:
    session = _plate(yogurt)

    session.select_measure("yogurt", "tbsp")

    assert session.scale_of("yogurt") == pytest.approx(0.0625)
    assert session.totals()["protein"].value == pytest.approx(0.3125)


def test_select_measure_rejects_unknown_measure(yogurt: FoodItem) -> None:
    session = _plate(yogurt)

    with pytest.raises(ValueError, match="no measure"):
        session.select_measure("yogurt", "pint")


def test_set_serving_amount_validates_and_updates_text(yogurt: FoodItem) -> None:
    session = _plate(yogurt)

    session.set_serving_amount("yogurt", 0.25)

    assert session.state_for("yogurt").raw_input_text == "0.25"
    with pytest.raises(InvalidServingError):
        session.set_serving_amount("yogurt", 0)
    with pytest.raises(InvalidServingError):
        session.set_serving_amount("yogurt", float("nan"))
    assert session.state_for("yogurt").serving_amount == 0.25


def test_delete_and_restore_keep_totals_identical(
    yogurt: FoodItem, chicken: FoodItem
) -> None:
    session = _plate(yogurt, chicken)
    session.set_serving_text("yogurt", "1/3")
    before = session.totals()

    session.delete_item("yogurt")
    without = session.totals()
    session.restore_item("yogurt")

    assert "sugars, total" not in without
    assert without["protein"].value == 8
    assert session.totals() == before
    assert session.state_for("yogurt").raw_input_text == "1/3"


def test_deleted_items_stay_in_entries(yogurt: FoodItem, chicken: FoodItem) -> None:
    session = _plate(yogurt, chicken)

    session.delete_item("yogurt")

    assert [entry.item.id for entry in session.entries()] == ["yogurt", "chicken"]
    assert [entry.item.id for entry in session.active_entries()] == ["chicken"]
    assert session.is_active("yogurt") is False


def test_replacing_an_item_resets_its_state(yogurt: FoodItem) -> None:
    session = _plate(yogurt)
    session.set_serving_text("yogurt", "3")

    session.add_item(yogurt)

    assert session.state_for("yogurt").serving_amount == 1.0
    assert len(list(session.entries())) == 1


def test_non_positive_baseline_is_rejected_on_add(chicken: FoodItem) -> None:
    session = _plate(chicken)
    broken = make_food("broth", [("sodium, na", 400, "mg")], baseline_serving=0)

    with pytest.raises(InvalidServingError):
        session.add_item(broken)

    with pytest.raises(KeyError):
        session.item("broth")
    assert [entry.item.id for entry in session.entries()] == ["chicken"]
    assert session.totals()["protein"].value == 8


def test_invalid_replacement_keeps_previous_item(yogurt: FoodItem) -> None:
    session = _plate(yogurt)
    session.set_serving_text("yogurt", "2")
    broken = make_food("yogurt", [("protein", 1, "g")], baseline_serving=-1)

    with pytest.raises(InvalidServingError):
        session.add_item(broken)

    assert session.item("yogurt") is yogurt
    assert session.state_for("yogurt").serving_amount == 2


def test_totals_do_not_touch_deleted_items(
    yogurt: FoodItem, chicken: FoodItem
) -> None:
    session = _plate(yogurt, chicken)
    session.delete_item("yogurt")

    totals = session.totals()

    assert "sugars, total" not in totals
    assert totals["protein"].value == 8
    assert set(session._states) == {"chicken"}


def test_missing_baseline_defaults_to_one_serving() -> None:
    rice = make_food("rice", [("protein", 4, "g")], baseline_serving=None)
    session = _plate(rice)

    session.set_serving_text("rice", "3")

    assert session.totals()["protein"].value == 12
