"""
Data models for the markup pipeline.

Uses dataclasses for structured, type-safe data representation.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TYPE_CHECKING

from .errors import ParseError
from .money import Money

if TYPE_CHECKING:
    from .rates import RateTable


class Category(str, Enum):
    """Types of jobs."""
    PHARMA = "PHARMA"
    ELECTRONICS = "ELECTRONICS"
    FOOD = "FOOD"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: str) -> 'Category':
        """Resolve a category by name, ignoring case and surrounding spaces."""
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            raise ParseError(f"Unknown category: {value!r}") from e


@dataclass
class TraceStep:
    """A single step in the markup trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class Job:
    """A product/quantity to be marked up."""
    original_price: Money
    category: Category = Category.OTHER
    headcount: int = 0

    # Original price + flat markup, the base for every later percentage
    base_price: Optional[Money] = None
    # Marked up price at one moment
    running_price: Money = field(default_factory=Money.zero)

    trace: list[TraceStep] = field(default_factory=list)

    def __post_init__(self):
        if self.original_price.amount < 0:
            raise ParseError(f"Price cannot be negative: {self.original_price}")
        if self.base_price is None:
            self.base_price = self.original_price

    @classmethod
    def create(cls, price: str, headcount: int = 0, category: Category = Category.OTHER) -> 'Job':
        """Build a job from a decimal price string."""
        return cls(original_price=Money.parse(price), category=category, headcount=headcount)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this job."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)

    def __str__(self) -> str:
        category = self.category.value if isinstance(self.category, Category) else self.category
        return (
            f"Job{{Category: {category}, Price: {self.original_price}, "
            f"People: {self.headcount}, MarkedUpPrice: {self.running_price}}}"
        )


@dataclass
class Invocation:
    """State shared by the stages of a single pipeline run."""
    job: Optional[Job]
    rates: Optional['RateTable']
