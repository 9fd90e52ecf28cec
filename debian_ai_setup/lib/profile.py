from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Set

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppendResult:
    path: str
    appended: List[str]
    created: bool


def _existing_lines(p: Path) -> Optional[Set[str]]:
    """Stripped lines of p; None when it is absent or cannot be read."""
    try:
        return {ln.strip() for ln in p.read_text(encoding="utf-8").splitlines()}
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Cannot read %s: %s", str(p), e)
        return None


def missing_lines(path: str, lines: Sequence[str]) -> List[str]:
    existing = _existing_lines(Path(path)) or set()
    return [ln for ln in lines if ln.strip() not in existing]


def ensure_lines(path: str, lines: Sequence[str], *, dry_run: bool = False) -> AppendResult:
    """Append each line to a shell profile unless an identical line is already there."""

    p = Path(path)
    todo = missing_lines(path, lines)
    try:
        created = not p.exists()
    except OSError:
        created = False

    if not todo:
        return AppendResult(path=str(p), appended=[], created=False)

    if dry_run:
        for ln in todo:
            logger.info("Would append to %s: %s", str(p), ln)
        return AppendResult(path=str(p), appended=todo, created=created)

    p.parent.mkdir(parents=True, exist_ok=True)
    prefix = ""
    if not created:
        current = p.read_text(encoding="utf-8")
        if current and not current.endswith("\n"):
            prefix = "\n"
    with p.open("a", encoding="utf-8") as f:
        f.write(prefix + "".join(ln + "\n" for ln in todo))

    logger.info("Appended %d line(s) to %s", len(todo), str(p))
    return AppendResult(path=str(p), appended=todo, created=created)
