#!/usr/bin/env python3
"""Direct launcher for the Budget Buddy Streamlit dashboard."""

import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()

if __name__ == "__main__":
    subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        str(project_root / "budget_buddy" / "dashboard.py"),
    ])
