"""
Markup Pipeline - wires the stages into their fixed order.

Resolution order:
1. Validate the invocation (job and rates present)
2. Flat markup on the original price, establishing the base price
3. Per person markup on the base price
4. Category markup on the base price, dispatched by category
5. Round to currency precision (banker's rounding)
6. Hand the finished job to the sink

The wiring is built once and never changes; it holds no per-job data, so
one pipeline can price any number of jobs as long as each job is its own.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .models import Category, Invocation, Job
from .rates import RateTable
from .stages import (
    CategoryDispatchStage,
    CategoryMarkupStage,
    FlatMarkupStage,
    NullStage,
    PerPersonMarkupStage,
    ProxyStage,
    RoundCurrencyStage,
    Stage,
    ValidateContextStage,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkupPipeline:
    """An assembled stage chain and the rate table it was built from."""
    rates: RateTable
    entry: Stage
    dispatch: CategoryDispatchStage

    def invoke(self, invocation: Invocation) -> None:
        """Run an explicit invocation through the chain."""
        self.entry.execute(invocation)

    def run(self, job: Job) -> Job:
        """Price a job with this pipeline's rates and return it."""
        self.invoke(Invocation(job=job, rates=self.rates))
        logger.debug("Priced %s", job)
        return job

    def describe(self) -> dict[str, list[str]]:
        """
        Stage class names along every path of the chain.

        Returns {"entry": [...up to dispatch], "FOOD": [...branch], ...}.
        """
        wiring = {"entry": _walk(self.entry)}
        for category, branch in self.dispatch.branches.items():
            wiring[category.value] = _walk(branch)
        return wiring


def _walk(stage: Stage) -> list[str]:
    names = []
    while stage is not None:
        names.append(type(stage).__name__)
        stage = stage.delegate if isinstance(stage, ProxyStage) else None
    return names


def build_pipeline(rates: Optional[RateTable] = None, sink: Optional[Stage] = None) -> MarkupPipeline:
    """
    Build the markup chain.

    Args:
        rates: Rate table; defaults to the standard rates
        sink: Terminal stage receiving finished jobs; defaults to a no-op

    Returns:
        MarkupPipeline ready to run jobs
    """
    rates = rates if rates is not None else RateTable()
    output = RoundCurrencyStage(sink if sink is not None else NullStage())

    dispatch = CategoryDispatchStage({
        category: CategoryMarkupStage(category, rates, output)
        for category in Category
    })

    entry = ValidateContextStage(FlatMarkupStage(PerPersonMarkupStage(dispatch)))
    return MarkupPipeline(rates=rates, entry=entry, dispatch=dispatch)


def run_pipeline(job: Optional[Job], rates: Optional[RateTable], sink: Optional[Stage] = None) -> Job:
    """
    Price a single job.

    Raises:
        MissingStateError: job or rates is None; nothing has been touched
        InvalidQuantityError: negative headcount; the job is partially
            priced and must be discarded
    """
    pipeline = build_pipeline(rates, sink)
    # Validation sees the caller's rates, not the ones the chain was built with
    pipeline.invoke(Invocation(job=job, rates=rates))
    return job
