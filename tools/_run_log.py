from __future__ import annotations

import csv
from datetime import datetime, timezone
from pathlib import Path
import platform
import subprocess

REPO_ROOT = Path(__file__).resolve().parents[1]
RESULTS_DIR = REPO_ROOT / "tools" / "results"
FIELDS = ["run_id", "timestamp_utc", "tool", "command", "commit", "platform", "notes"]


def git_commit(repo_root: Path = REPO_ROOT) -> str:
    try:
        return subprocess.check_output(
            ["git", "rev-parse", "HEAD"], cwd=repo_root, text=True, stderr=subprocess.DEVNULL
        ).strip()
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


def log_run(tool: str, command: str, notes: str = "", results_dir: Path = RESULTS_DIR) -> Path:
    """Append one row to ``runs.csv`` under ``results_dir`` and return the file path."""
    results_dir.mkdir(parents=True, exist_ok=True)
    log_path = results_dir / "runs.csv"
    new_file = not log_path.exists()
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    row = {
        "run_id": f"{tool}-{timestamp}",
        "timestamp_utc": timestamp,
        "tool": tool,
        "command": command,
        "commit": git_commit(results_dir),
        "platform": platform.platform(),
        "notes": notes,
    }
    with log_path.open("a", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDS)
        if new_file:
            writer.writeheader()
        writer.writerow(row)
    return log_path


__all__ = ["FIELDS", "git_commit", "log_run"]
