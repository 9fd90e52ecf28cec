from __future__ import annotations

import logging
import re

from .command import Runner

logger = logging.getLogger(__name__)

# Debian's adduser default NAME_REGEX: lowercase, no spaces.
USERNAME_RE = re.compile(r"^[a-z_][a-z0-9_-]*\$?$")


def is_valid_username(username: str) -> bool:
    return bool(USERNAME_RE.match(username)) and len(username) <= 32


def add_user_to_group(run: Runner, username: str, group: str) -> None:
    run(["gpasswd", "-a", username, group])
    logger.info("Added %s to group %s", username, group)


def chown_to_user(run: Runner, path: str, username: str) -> None:
    # "user:" assigns the user's login group.
    run(["chown", f"{username}:", path])


def run_as_user(run: Runner, username: str, shell_cmd: str) -> None:
    run(["su", "-", username, "-c", shell_cmd])
