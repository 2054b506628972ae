#!/usr/bin/env python3
"""Check that a Budget Buddy backup file can be restored."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budget_buddy.models import AppData
from budget_buddy.storage import merge_with_defaults, validate_backup_payload


def validate_backup(path: Path) -> List[str]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        return [f"cannot read file: {exc}"]
    problems = validate_backup_payload(payload)
    if not problems:
        try:
            AppData.from_dict(merge_with_defaults(payload))
        except (TypeError, ValueError, OverflowError) as exc:
            problems.append(f"cannot convert record: {exc}")
    return problems


def main(paths: List[Path]) -> int:
    failed = False
    for path in paths:
        problems = validate_backup(path)
        if problems:
            failed = True
            print(f"{path}: invalid backup")
            for message in problems:
                print(f"  - {message}")
            continue
        with path.open("r", encoding="utf-8") as handle:
            data = AppData.from_dict(merge_with_defaults(json.load(handle)))
        expense_count = sum(len(entries) for entries in data.all_expenses.values())
        print(f"{path}: OK ({expense_count} expenses, {len(data.archived_months)} archived months)")
    return 1 if failed else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Validate Budget Buddy backup files.")
    parser.add_argument("paths", nargs="+", type=Path, help="Backup JSON files to check")
    args = parser.parse_args()
    raise SystemExit(main(args.paths))
