"""
Batch Pricing - pushes a CSV of jobs through the markup pipeline.

Each row is priced independently with its own Job; a row that fails is
reported and its partially priced job discarded. Prices are read and written
as strings so no value ever passes through a float.
"""
import pandas as pd
import json
import hashlib
import logging
from datetime import datetime
from typing import Optional
from pathlib import Path

from ..config.settings import get_settings, Settings
from ..engine.errors import InvalidQuantityError, ParseError
from ..engine.models import Category, Job
from ..engine.pipeline import MarkupPipeline, build_pipeline

logger = logging.getLogger(__name__)

INPUT_COLUMNS = ['price', 'headcount', 'category']
OUTPUT_COLUMNS = INPUT_COLUMNS + ['base_price', 'marked_up_price', 'status', 'error']


def get_file_hash(path: Path) -> str:
    """Get SHA256 hash of a file."""
    if not path.exists():
        return ""
    with open(path, 'rb') as f:
        return hashlib.sha256(f.read()).hexdigest()[:12]


def parse_headcount(value: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise ParseError(f"Headcount is not an integer: {value!r}") from e


def price_jobs(frame: pd.DataFrame, pipeline: Optional[MarkupPipeline] = None) -> pd.DataFrame:
    """
    Price every row of a jobs frame.

    Args:
        frame: DataFrame with price, headcount and category columns (strings)
        pipeline: Optional pipeline override; defaults to the standard rates

    Returns:
        DataFrame with one row per input row and OUTPUT_COLUMNS
    """
    missing = [c for c in INPUT_COLUMNS if c not in frame.columns]
    if missing:
        raise KeyError(f"Jobs frame is missing columns: {', '.join(missing)}")

    pipeline = pipeline or build_pipeline()
    rows = []

    for record in frame[INPUT_COLUMNS].fillna('').astype(str).to_dict(orient='records'):
        row = {**record, 'base_price': None, 'marked_up_price': None, 'status': 'priced', 'error': None}
        try:
            job = Job.create(
                price=record['price'].strip(),
                headcount=parse_headcount(record['headcount']),
                category=Category.parse(record['category']),
            )
            pipeline.run(job)
            row['base_price'] = str(job.base_price)
            row['marked_up_price'] = str(job.running_price)
        except (ParseError, InvalidQuantityError) as e:
            logger.warning("Skipping job %s: %s", record, e)
            row['status'] = 'error'
            row['error'] = str(e)
        rows.append(row)

    # object dtype keeps None for discarded prices instead of NaN
    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS, dtype=object)


def run_batch(settings: Optional[Settings] = None, verbose: bool = True) -> dict:
    """
    Price the jobs CSV and write results plus a batch report.

    Args:
        settings: Optional settings override
        verbose: Print progress messages

    Returns:
        Batch report dictionary
    """
    settings = settings or get_settings()

    report = {
        "timestamp": datetime.now().isoformat(),
        "status": "pending",
        "input_files": {},
        "metrics": {},
        "warnings": [],
        "errors": []
    }

    jobs_file = settings.jobs_csv

    if not jobs_file.exists():
        msg = f"CRITICAL ERROR: {jobs_file} not found."
        report["errors"].append(msg)
        report["status"] = "failed"
        logger.error(msg)
        if verbose:
            print(msg)
        return report

    report["input_files"]["jobs"] = {
        "path": str(jobs_file),
        "hash": get_file_hash(jobs_file)
    }

    try:
        jobs = pd.read_csv(jobs_file, dtype=str)
        jobs.columns = [c.strip().lower() for c in jobs.columns]
        results = price_jobs(jobs)
    except (KeyError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        msg = f"ERROR: Failed to process {jobs_file}. {e}"
        report["errors"].append(msg)
        report["status"] = "failed"
        logger.error(msg)
        if verbose:
            print(msg)
        return report

    failed = results[results['status'] == 'error']
    for _, row in failed.iterrows():
        report["warnings"].append(
            f"Job {row['price']}/{row['headcount']}/{row['category']} not priced: {row['error']}"
        )

    report["metrics"] = {
        "job_count": int(len(results)),
        "priced_count": int(len(results) - len(failed)),
        "failed_count": int(len(failed)),
    }

    settings.results_csv.parent.mkdir(parents=True, exist_ok=True)
    results.to_csv(settings.results_csv, index=False)
    report["status"] = "success"

    settings.batch_report.parent.mkdir(parents=True, exist_ok=True)
    with open(settings.batch_report, 'w', encoding='utf-8') as f:
        json.dump(report, f, indent=2)

    if verbose:
        print(f"Priced {report['metrics']['priced_count']} of {report['metrics']['job_count']} jobs")
        print(f"Results: {settings.results_csv}")

    return report
