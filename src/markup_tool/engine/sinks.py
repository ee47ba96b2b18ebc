"""
Sinks - terminal stages that receive the finished job.

The pipeline does not care what a sink does with the job; it only requires
that the sink ends the chain.
"""
from abc import abstractmethod

import pandas as pd

from .models import Invocation, Job
from .stages import Stage


class Sink(Stage):
    """Final stage in the pipeline."""

    @abstractmethod
    def consume(self, job: Job) -> None:
        ...

    def execute(self, invocation: Invocation) -> None:
        self.consume(invocation.job)


class PrintSink(Sink):
    """Prints the job on stdout. A production system would save the quote instead."""

    def consume(self, job: Job) -> None:
        print(job)


class RecordingSink(Sink):
    """Keeps every finished job in memory."""

    COLUMNS = ['price', 'headcount', 'category', 'base_price', 'marked_up_price']

    def __init__(self):
        self.jobs: list[Job] = []

    def consume(self, job: Job) -> None:
        self.jobs.append(job)

    def to_frame(self) -> pd.DataFrame:
        """Finished jobs as a DataFrame; prices stay as decimal strings."""
        rows = [
            {
                'price': str(job.original_price),
                'headcount': job.headcount,
                'category': job.category.value,
                'base_price': str(job.base_price),
                'marked_up_price': str(job.running_price),
            }
            for job in self.jobs
        ]
        return pd.DataFrame(rows, columns=self.COLUMNS)
