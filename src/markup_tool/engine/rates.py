"""
Rate Table - markup fractions used by the pipeline stages.

In a production system the table could be loaded from a database; here the
defaults are static and the table never changes once built.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .models import Category
from .money import parse_decimal


Rate = Union[Decimal, str, int]

DEFAULT_FLAT_MARKUP = Decimal("0.05")
DEFAULT_PER_PERSON_MARKUP = Decimal("0.012")
DEFAULT_CATEGORY_MARKUPS = {
    Category.FOOD: Decimal("0.13"),
    Category.PHARMA: Decimal("0.075"),
    Category.ELECTRONICS: Decimal("0.02"),
    Category.OTHER: Decimal("0.0"),
}


def to_rate(value: Rate) -> Decimal:
    """Convert a configured rate to Decimal, refusing floats and negatives."""
    if isinstance(value, str):
        rate = parse_decimal(value)
    elif isinstance(value, (Decimal, int)) and not isinstance(value, bool):
        rate = Decimal(value)
    else:
        raise TypeError(f"Rates must be Decimal, int or str, got {type(value).__name__}")
    if rate < 0:
        raise ValueError(f"Markup rates cannot be negative: {value}")
    return rate


@dataclass(frozen=True)
class RateTable:
    """Flat, per-person and per-category markup fractions."""
    flat_markup: Rate = DEFAULT_FLAT_MARKUP
    per_person_markup: Rate = DEFAULT_PER_PERSON_MARKUP
    category_markups: Mapping[Category, Rate] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_MARKUPS)
    )

    def __post_init__(self):
        object.__setattr__(self, 'flat_markup', to_rate(self.flat_markup))
        object.__setattr__(self, 'per_person_markup', to_rate(self.per_person_markup))

        markups = {Category.OTHER: Decimal("0.0")}
        markups.update({Category(c): to_rate(r) for c, r in self.category_markups.items()})
        object.__setattr__(self, 'category_markups', MappingProxyType(markups))

    def flat_rate(self) -> Decimal:
        return self.flat_markup

    def per_person_rate(self) -> Decimal:
        return self.per_person_markup

    def rate_for(self, category: Optional[Category]) -> Decimal:
        """Markup for a category; anything unmapped gets the OTHER rate."""
        if category is None:
            return self.category_markups[Category.OTHER]
        return self.category_markups.get(category, self.category_markups[Category.OTHER])

    def as_dict(self) -> dict:
        """Rates as strings, keyed the way the API exposes them."""
        return {
            "flat": str(self.flat_markup),
            "per_person": str(self.per_person_markup),
            "categories": {c.value: str(r) for c, r in self.category_markups.items()},
        }
