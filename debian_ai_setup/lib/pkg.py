from __future__ import annotations

import logging
from typing import Sequence

from .command import Runner

logger = logging.getLogger(__name__)

APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def apt_update(run: Runner) -> None:
    run(["apt-get", "update"], env=APT_ENV)


def apt_upgrade(run: Runner) -> None:
    run(["apt-get", "upgrade", "-y"], env=APT_ENV)


def apt_install(run: Runner, packages: Sequence[str]) -> None:
    if not packages:
        return
    run(["apt-get", "install", "-y", *packages], env=APT_ENV)


def dpkg_install(run: Runner, deb_path: str) -> None:
    run(["dpkg", "-i", deb_path], env=APT_ENV)


def apt_autoremove(run: Runner) -> None:
    run(["apt-get", "autoremove", "-y"], env=APT_ENV)


def apt_autoclean(run: Runner) -> None:
    run(["apt-get", "autoclean"], env=APT_ENV)
