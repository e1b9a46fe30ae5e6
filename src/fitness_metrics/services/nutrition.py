"""Macro totals and category distributions for meals."""

from collections.abc import Iterable

from fitness_metrics.domain.errors import InvalidQuantity
from fitness_metrics.domain.nutrition import (
    CategoryCount,
    CategoryShare,
    FoodItem,
    MacroTotals,
)
from fitness_metrics.services.progress import percent_of

MEAL_TYPE_LABELS = {
    "upon_wakeup": "Upon Wakeup",
    "pre_workout": "Pre-Workout",
    "breakfast": "Breakfast",
    "lunch": "Lunch",
    "snacks": "Snacks",
    "dinner": "Dinner",
    "other": "Other",
}

_MACRO_FIELDS = ("calories", "protein", "carbs", "fats")


def aggregate_macros(items: Iterable[FoodItem]) -> MacroTotals:
    """Sum macros across food items; negative values fail the call."""
    totals = dict.fromkeys(_MACRO_FIELDS, 0)
    for item in items:
        for name in _MACRO_FIELDS:
            value = getattr(item, name)
            if value < 0:
                raise InvalidQuantity(name, value)
            totals[name] += value
    return MacroTotals(
        protein=totals["protein"],
        carbs=totals["carbs"],
        fats=totals["fats"],
        calories=totals["calories"],
    )


def sum_macro_totals(totals: Iterable[MacroTotals]) -> MacroTotals:
    """Combine per-meal totals into one."""
    combined = MacroTotals(protein=0, carbs=0, fats=0, calories=0)
    for total in totals:
        combined = MacroTotals(
            protein=combined.protein + total.protein,
            carbs=combined.carbs + total.carbs,
            fats=combined.fats + total.fats,
            calories=combined.calories + total.calories,
        )
    return combined


def category_shares(items: Iterable[CategoryCount]) -> list[CategoryShare]:
    """Return each category's share of the total count.

    Repeated categories are merged in first-seen order and zero counts are
    dropped. An all-zero input yields an empty list.
    """
    counts: dict[str, int] = {}
    for item in items:
        if item.count < 0:
            raise InvalidQuantity(item.category, item.count)
        counts[item.category] = counts.get(item.category, 0) + item.count

    total = sum(counts.values())
    if total == 0:
        return []
    return [
        CategoryShare(category=category, percent=percent_of(count, total))
        for category, count in counts.items()
        if count > 0
    ]


def macro_shares(totals: MacroTotals) -> list[CategoryShare]:
    """Return protein, carbs and fats as shares of their combined grams."""
    return category_shares(
        [
            CategoryCount(category="protein", count=totals.protein),
            CategoryCount(category="carbs", count=totals.carbs),
            CategoryCount(category="fats", count=totals.fats),
        ]
    )


def meal_type_label(meal_type: str) -> str:
    """Return the display label for a meal type."""
    return MEAL_TYPE_LABELS.get(meal_type, meal_type)
