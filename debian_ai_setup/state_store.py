from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

# Older runs are dropped once the report holds this many.
MAX_RUNS = 20


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    if _detect_format(p) in {"yaml", "yml"}:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(p.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")

    return data


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) in {"yaml", "yml"}:
        p.write_text(yaml.safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding existing values)."""

    state.setdefault("version", 1)
    runs = state.setdefault("runs", [])
    if not isinstance(runs, list):
        raise ValueError("state.runs must be a list")
    return state


def start_run(state: Dict[str, Any], *, dry_run: bool) -> Dict[str, Any]:
    """Append and return a fresh run record."""

    run: Dict[str, Any] = {
        "started_at": _now(),
        "finished_at": None,
        "status": "running",
        "exit_code": None,
        "dry_run": dry_run,
        "execution": {"current_step": None},
        "ran_steps": [],
        "skipped_steps": [],
        "decisions": {},
        "warnings": [],
        "errors": [],
    }
    runs = state.setdefault("runs", [])
    runs.append(run)
    del runs[:-MAX_RUNS]
    return run


def finish_run(run: Dict[str, Any], *, status: str, exit_code: int) -> None:
    run["status"] = status
    run["exit_code"] = exit_code
    run["finished_at"] = _now()


def record_error(run: Dict[str, Any], error: BaseException) -> None:
    run.setdefault("errors", []).append(
        {
            "step": (run.get("execution") or {}).get("current_step"),
            "type": type(error).__name__,
            "error": str(error),
        }
    )
