"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoodItem:
    """One food within a logged meal."""

    name: str
    quantity: str
    calories: int
    protein: int
    carbs: int
    fats: int


@dataclass(frozen=True)
class MacroTotals:
    """Summed macronutrients for a set of food items."""

    protein: int
    carbs: int
    fats: int
    calories: int


@dataclass(frozen=True)
class CategoryCount:
    """Count of items in a category."""

    category: str
    count: int


@dataclass(frozen=True)
class CategoryShare:
    """Percentage share of a category."""

    category: str
    percent: int
