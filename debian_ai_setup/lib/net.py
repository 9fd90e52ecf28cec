from __future__ import annotations

import logging
import shlex

from .command import Runner

logger = logging.getLogger(__name__)


def download(run: Runner, url: str, dest: str) -> None:
    """Fetch url to dest with curl, following redirects and failing on HTTP errors."""

    run(["curl", "-fL", "-o", dest, url])


def pipe_installer_cmd(url: str) -> str:
    """Shell snippet that fetches an installer script and runs it with sh."""

    return f"curl -LsSf {shlex.quote(url)} | sh"
