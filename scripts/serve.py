#!/usr/bin/env python
"""
Start one of the interactive front ends.

Usage:
    python scripts/serve.py api [--port 8000]   # FastAPI via uvicorn
    python scripts/serve.py ui                  # Streamlit calculator
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(description="Run the markup tool front ends")
    parser.add_argument("target", choices=["api", "ui"])
    parser.add_argument("--port", type=int, default=8000, help="API port")
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    src_path = project_root / "src"

    # Make the package importable without an install
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(src_path), env.get("PYTHONPATH")]))

    if args.target == "api":
        cmd = [
            sys.executable, "-m", "uvicorn",
            "markup_tool.api.main:app",
            "--host", "0.0.0.0",
            "--port", str(args.port),
            "--reload",
        ]
    else:
        ui_path = src_path / "markup_tool" / "ui" / "app_streamlit.py"
        cmd = [sys.executable, "-m", "streamlit", "run", str(ui_path)]

    print(f"Starting {args.target}: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, cwd=str(project_root), env=env)
    except KeyboardInterrupt:
        print("\nStopped.")


if __name__ == "__main__":
    main()
