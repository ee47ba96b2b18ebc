"""
Centralized settings and path configuration for the markup tool.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Batch input
    jobs_csv: Path

    # Batch outputs
    results_csv: Path
    batch_report: Path

    log_level: str = "INFO"

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()
        data_dir = root / 'src' / 'markup_tool' / 'data'

        return cls(
            project_root=root,
            jobs_csv=Path(os.environ.get('MARKUP_JOBS_CSV', data_dir / 'sample_jobs.csv')),
            results_csv=data_dir / 'outputs' / 'priced_jobs.csv',
            batch_report=data_dir / 'outputs' / 'batch_report.json',
            log_level=os.environ.get('MARKUP_LOG_LEVEL', 'INFO').upper(),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
