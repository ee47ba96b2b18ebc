#!/usr/bin/env python
"""
Batch pricing - prices the jobs CSV and writes results plus a report.

Usage:
    python scripts/run_batch.py
    MARKUP_JOBS_CSV=path/to/jobs.csv python scripts/run_batch.py
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from markup_tool.config.log_setup import setup_logging
from markup_tool.data.batch import run_batch


def main():
    setup_logging()

    print("=" * 60)
    print("MARKUP TOOL BATCH PRICING")
    print("=" * 60)
    print()

    report = run_batch(verbose=True)

    if report["status"] != "success":
        print("\n❌ BATCH FAILED")
        for error in report["errors"]:
            print(f"  ERROR: {error}")
        sys.exit(1)

    print()
    print("=" * 60)
    print("✅ BATCH COMPLETE")
    print("=" * 60)
    print()
    print("Summary:")
    print(f"  Jobs: {report['metrics']['job_count']}")
    print(f"  Priced: {report['metrics']['priced_count']}")
    print(f"  Failed: {report['metrics']['failed_count']}")
    for warning in report["warnings"]:
        print(f"  WARNING: {warning}")


if __name__ == "__main__":
    main()
