"""
Pipeline Stages - one pricing adjustment per stage.

Every stage receives the Invocation, applies its adjustment to the job and
forwards to its delegate. Stages hold only construction-time configuration,
never per-job data, so a wired chain can be reused for any number of jobs.
"""
import logging
from abc import ABC, abstractmethod
from decimal import ROUND_HALF_EVEN
from types import MappingProxyType
from typing import Mapping, Optional

from .errors import InvalidQuantityError, MissingStateError
from .models import Category, Invocation
from .money import CURRENCY_SCALE
from .rates import RateTable

logger = logging.getLogger(__name__)


class Stage(ABC):
    """An execution unit that reads its parameters from the invocation."""

    @abstractmethod
    def execute(self, invocation: Invocation) -> None:
        ...


class NullStage(Stage):
    """Terminal stage that does nothing."""

    def execute(self, invocation: Invocation) -> None:
        pass


class ProxyStage(Stage):
    """
    Base for stages that adjust the job and then call their delegate.

    Subclasses implement apply(); forwarding happens here.
    """

    def __init__(self, delegate: Stage):
        self.delegate = delegate

    def apply(self, invocation: Invocation) -> None:
        pass

    def execute(self, invocation: Invocation) -> None:
        self.apply(invocation)
        self.delegate.execute(invocation)


class ValidateContextStage(ProxyStage):
    """
    Checks the invocation for a job and a rate table.

    Sitting at the top of the chain, it lets every later stage use both
    without checking for None.
    """

    def apply(self, invocation: Invocation) -> None:
        if invocation.job is None:
            raise MissingStateError("job")
        if invocation.rates is None:
            raise MissingStateError("rates")


class FlatMarkupStage(ProxyStage):
    """Applies the flat markup to the original price and seeds the running price."""

    def apply(self, invocation: Invocation) -> None:
        job = invocation.job
        flat = invocation.rates.flat_rate()

        job.base_price = job.original_price + job.original_price.multiply(flat)
        job.running_price = job.base_price

        job.add_trace("Flat Markup", f"{flat} on {job.original_price}", str(job.running_price))
        logger.debug("Flat markup %s: base price %s", flat, job.base_price)


class PerPersonMarkupStage(ProxyStage):
    """Applies the markup for people working on the job."""

    def apply(self, invocation: Invocation) -> None:
        job = invocation.job
        if job.headcount < 0:
            raise InvalidQuantityError(job.headcount)

        rate = invocation.rates.per_person_rate()
        job.running_price = job.running_price + job.base_price.multiply(rate).multiply(job.headcount)

        job.add_trace("Per Person Markup", f"{rate} × {job.headcount} people", str(job.running_price))
        logger.debug("Per person markup %s x %d: running price %s", rate, job.headcount, job.running_price)


class CategoryMarkupStage(ProxyStage):
    """
    Applies the markup for one category.

    The rate is looked up once when the stage is built, so the same class
    serves every category with a different captured rate.
    """

    def __init__(self, category: Category, rates: RateTable, delegate: Stage):
        super().__init__(delegate)
        self.category = category
        self.rate = rates.rate_for(category)

    def apply(self, invocation: Invocation) -> None:
        job = invocation.job
        job.running_price = job.running_price + job.base_price.multiply(self.rate)

        job.add_trace("Category Markup", f"{self.rate} for {self.category.value}", str(job.running_price))
        logger.debug("Category markup %s (%s): running price %s", self.rate, self.category.value, job.running_price)


class CategoryDispatchStage(Stage):
    """Forwards the job to the branch registered for its category."""

    def __init__(self, branches: Mapping[Category, Stage]):
        self.branches = MappingProxyType(dict(branches))

    def get(self, category: Category) -> Optional[Stage]:
        return self.branches.get(category)

    def execute(self, invocation: Invocation) -> None:
        job = invocation.job
        branch = self.get(job.category)
        if branch is None:
            # Not reachable for Category members; the assembler registers all of them
            logger.warning("No markup branch for category %r, job passed through unchanged", job.category)
            job.add_trace("Category Dispatch", f"No branch for {job.category!r}")
            return
        branch.execute(invocation)


class RoundCurrencyStage(ProxyStage):
    """Rounds the running price to currency precision with banker's rounding."""

    def __init__(self, delegate: Stage, scale: int = CURRENCY_SCALE, rounding: str = ROUND_HALF_EVEN):
        super().__init__(delegate)
        self.scale = scale
        self.rounding = rounding

    def apply(self, invocation: Invocation) -> None:
        job = invocation.job
        job.running_price = job.running_price.round_to(self.scale, self.rounding)

        job.add_trace("Currency Rounding", f"{self.scale} places, {self.rounding}", str(job.running_price))
