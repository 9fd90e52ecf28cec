from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import Iterable, List, Tuple

logger = logging.getLogger(__name__)

# One-line format: "deb <uri> <suite> ... main" (the line must end in the main component).
_ONE_LINE_RE = re.compile(r"^deb .* main$")
# deb822 format: "Components: main contrib"
_COMPONENTS_RE = re.compile(r"^(Components:)(.*)$", re.IGNORECASE)

BACKUP_SUFFIX = ".backup"


def _rewrite_line(line: str, component: str, *, deb822: bool) -> str:
    body = line.rstrip("\r\n")
    ending = line[len(body):]

    if deb822:
        m = _COMPONENTS_RE.match(body)
        if not m:
            return line
        tokens = m.group(2).split()
        if "main" not in tokens or component in tokens:
            return line
        return f"{body.rstrip()} {component}{ending}"

    if not _ONE_LINE_RE.match(body):
        return line
    if component in body.split():
        return line
    return f"{body} {component}{ending}"


def rewrite_sources(text: str, component: str, *, deb822: bool = False) -> Tuple[str, int]:
    """Return (new_text, changed_lines) with component added to qualifying entries."""

    out: List[str] = []
    changed = 0
    for line in text.splitlines(keepends=True):
        new = _rewrite_line(line, component, deb822=deb822)
        if new != line:
            changed += 1
        out.append(new)
    return "".join(out), changed


def is_deb822(path: str) -> bool:
    return path.endswith(".sources")


def source_files(sources_list: str, sources_dir: str | None) -> List[str]:
    """The one-line list plus any deb822 files, existing files only."""

    files: List[str] = []
    if Path(sources_list).is_file():
        files.append(sources_list)
    if sources_dir and Path(sources_dir).is_dir():
        files.extend(str(p) for p in sorted(Path(sources_dir).glob("*.sources")))
    return files


def pending_files(files: Iterable[str], component: str) -> List[str]:
    """Files that still have entries lacking the component."""

    pending: List[str] = []
    for f in files:
        _, changed = rewrite_sources(Path(f).read_text(encoding="utf-8"), component, deb822=is_deb822(f))
        if changed:
            pending.append(f)
    return pending


def backup_once(path: str, *, dry_run: bool = False) -> str:
    """Copy path to path.backup unless a backup already exists.

    Keeping the first backup preserves the pristine file across re-runs.
    """

    backup = path + BACKUP_SUFFIX
    if Path(backup).exists():
        logger.info("Backup already present: %s", backup)
        return backup
    if dry_run:
        logger.info("Would back up %s -> %s", path, backup)
        return backup
    shutil.copy2(path, backup)
    logger.info("Backed up %s -> %s", path, backup)
    return backup


def enable_component(files: Iterable[str], component: str, *, dry_run: bool = False) -> List[str]:
    """Back up each file, then add component to every qualifying entry in it."""

    touched: List[str] = []
    for f in files:
        p = Path(f)
        new_text, changed = rewrite_sources(p.read_text(encoding="utf-8"), component, deb822=is_deb822(f))
        if not changed:
            continue
        backup_once(f, dry_run=dry_run)
        if dry_run:
            logger.info("Would add %s to %d entr(y/ies) in %s", component, changed, f)
        else:
            p.write_text(new_text, encoding="utf-8")
            logger.info("Added %s to %d entr(y/ies) in %s", component, changed, f)
        touched.append(f)
    return touched
