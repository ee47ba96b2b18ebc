#!/usr/bin/env python
"""
Push the sample jobs through the markup pipeline and print each result.

Usage:
    python scripts/run_demo.py
"""
import logging
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from markup_tool.config.log_setup import setup_logging
from markup_tool.engine import Category, Job, MarkupError, PrintSink, build_pipeline

SAMPLE_JOBS = [
    ("1299.99", 3, Category.FOOD),
    ("5432.00", 1, Category.PHARMA),
    ("12456.95", 4, Category.OTHER),
]


def main():
    setup_logging()
    logger = logging.getLogger(__name__)

    pipeline = build_pipeline(sink=PrintSink())

    for price, people, category in SAMPLE_JOBS:
        try:
            job = pipeline.run(Job.create(price, people, category))
            print(job.get_trace_text())
            print()
        except MarkupError:
            logger.exception("Failed to price %s/%s/%s", price, people, category.value)


if __name__ == "__main__":
    main()
