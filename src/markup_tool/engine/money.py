"""
Money - exact decimal amounts for the markup pipeline.

All arithmetic runs in an unbounded decimal context so nothing is rounded
until a stage explicitly calls round_to().
"""
import re
from dataclasses import dataclass
from decimal import (
    Context,
    Decimal,
    InvalidOperation,
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_EVEN,
)
from typing import Union

from .errors import ParseError


EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

CURRENCY_SCALE = 2

_DECIMAL_LITERAL = re.compile(r'[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?')

# Widest magnitude and finest fraction a price or rate may carry
MAX_ADJUSTED_EXPONENT = 18
MAX_FRACTION_DIGITS = 18

Factor = Union[Decimal, int]


def parse_decimal(text: str) -> Decimal:
    """Parse a plain decimal literal such as '1299.99' or '0.075'."""
    if not isinstance(text, str) or not _DECIMAL_LITERAL.fullmatch(text):
        raise ParseError(f"Not a decimal literal: {text!r}")
    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise ParseError(f"Not a decimal literal: {text!r}") from e
    if value.adjusted() > MAX_ADJUSTED_EXPONENT or value.as_tuple().exponent < -MAX_FRACTION_DIGITS:
        raise ParseError(f"Decimal out of range: {text!r}")
    return value


def _as_factor(value: Factor) -> Decimal:
    # bool is an int subclass but never a sensible factor
    if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
        raise TypeError(f"Expected Decimal or int, got {type(value).__name__}")
    return Decimal(value)


@dataclass(frozen=True, order=True)
class Money:
    """An exact decimal amount."""
    amount: Decimal

    @classmethod
    def parse(cls, text: str) -> 'Money':
        return cls(parse_decimal(text))

    @classmethod
    def zero(cls) -> 'Money':
        return cls(Decimal(0))

    def add(self, other: 'Money') -> 'Money':
        return Money(EXACT.add(self.amount, other.amount))

    def __add__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def multiply(self, factor: Factor) -> 'Money':
        """Multiply by a rate or a count without any intermediate rounding."""
        return Money(EXACT.multiply(self.amount, _as_factor(factor)))

    def round_to(self, scale: int = CURRENCY_SCALE, rounding: str = ROUND_HALF_EVEN) -> 'Money':
        """
        Round to `scale` fractional digits.

        Defaults to banker's rounding so midpoint values do not bias totals
        upward.
        """
        quantum = Decimal(1).scaleb(-scale)
        return Money(self.amount.quantize(quantum, rounding=rounding, context=EXACT))

    def to_decimal_string(self) -> str:
        """Fixed-point text, never scientific notation."""
        return format(self.amount, 'f')

    def __str__(self) -> str:
        return self.to_decimal_string()
