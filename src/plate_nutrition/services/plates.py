"""Plate editing session: items, lazy edit states and deletion flags."""

import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from plate_nutrition.domain.foods import FoodItem, PlateEntry, ServingEditState
from plate_nutrition.services.aggregation import NutrientTotals, aggregate
from plate_nutrition.services.servings import (
    InvalidServingError,
    format_serving,
    new_edit_state,
    parse_serving,
    scaling_factor,
    validate_baseline,
)


@dataclass
class PlateSession:
    """Items being composed into one plate.

    Items are stored by id and never renumbered; deleting an item only
    clears its active flag so edit states keyed by id stay valid. A session
    is not thread-safe and expects edits from a single serialized stream.
    """

    strict_units: bool = False
    _items: dict[str, FoodItem] = field(default_factory=dict, repr=False)
    _order: list[str] = field(default_factory=list, repr=False)
    _states: dict[str, ServingEditState] = field(default_factory=dict, repr=False)
    _active: set[str] = field(default_factory=set, repr=False)

    def add_item(self, item: FoodItem) -> None:
        """Add an item to the plate, or replace one with the same id.

        Items with an invalid baseline serving are rejected before anything
        is stored.
        """
        validate_baseline(item)
        if item.id not in self._items:
            self._order.append(item.id)
        self._items[item.id] = item
        self._states.pop(item.id, None)
        self._active.add(item.id)

    def item(self, item_id: str) -> FoodItem:
        """Return an item by id."""
        try:
            return self._items[item_id]
        except KeyError:
            msg = f"Unknown plate item: {item_id}"
            raise KeyError(msg) from None

    def state_for(self, item_id: str) -> ServingEditState:
        """Return the edit state for an item, creating it on first access."""
        item = self.item(item_id)
        state = self._states.get(item_id)
        if state is None:
            state = new_edit_state(item)
            self._states[item_id] = state
        return state

    def set_serving_text(self, item_id: str, text: str) -> bool:
        """Apply typed serving text; invalid text keeps the previous amount."""
        state = self.state_for(item_id)
        state.raw_input_text = text
        amount = parse_serving(text)
        if amount is None:
            return False
        state.serving_amount = amount
        return True

    def set_serving_amount(self, item_id: str, amount: float) -> None:
        """Set a serving amount directly, e.g. from a stepper."""
        if not math.isfinite(amount) or amount <= 0:
            msg = f"Serving amount must be positive, got {amount!r}"
            raise InvalidServingError(msg)
        state = self.state_for(item_id)
        state.serving_amount = amount
        state.raw_input_text = format_serving(amount)

    def select_measure(self, item_id: str, measure_id: str) -> None:
        """Switch the measure an item's serving amount is expressed in."""
        item = self.item(item_id)
        if item.measure(measure_id) is None:
            msg = f"Item {item_id} has no measure {measure_id}"
            raise ValueError(msg)
        self.state_for(item_id).selected_measure_id = measure_id

    def delete_item(self, item_id: str) -> None:
        """Mark an item as deleted; its edit state is kept."""
        self.item(item_id)
        self._active.discard(item_id)

    def restore_item(self, item_id: str) -> None:
        """Bring a deleted item back with its previous edits."""
        self.item(item_id)
        self._active.add(item_id)

    def is_active(self, item_id: str) -> bool:
        """Return whether an item currently counts toward totals."""
        return item_id in self._active

    def entries(self) -> Iterator[PlateEntry]:
        """Yield every item in insertion order, deleted ones included."""
        for item_id in self._order:
            yield PlateEntry(
                item=self._items[item_id],
                state=self.state_for(item_id),
                active=item_id in self._active,
            )

    def active_entries(self) -> list[PlateEntry]:
        """Return entries that count toward totals."""
        return [
            PlateEntry(item=self._items[item_id], state=self.state_for(item_id))
            for item_id in self._order
            if item_id in self._active
        ]

    def scale_of(self, item_id: str) -> float:
        """Return the current scaling factor for an item."""
        return scaling_factor(self.state_for(item_id), self.item(item_id).measures)

    def totals(self) -> NutrientTotals:
        """Aggregate the active items into per-nutrient totals."""
        return aggregate(self.active_entries(), strict_units=self.strict_units)
