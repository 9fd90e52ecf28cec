from __future__ import annotations

import grp
import logging
import os
import platform
import pwd
import shutil
from pathlib import Path
from typing import Iterable, Optional, Set

from .command import Runner, run_cmd
from .hwdetect import detect_nvidia_gpu, normalize_arch

logger = logging.getLogger(__name__)


class SystemProbe:
    """Read-only view of the host's state.

    Steps decide whether to act only through this object, so the whole
    sequence can run against a fake in tests. Nothing here mutates the system.
    """

    def __init__(self, run: Runner = run_cmd) -> None:
        self.run = run

    # Process / host

    def is_root(self) -> bool:
        return os.geteuid() == 0

    def running_kernel(self) -> str:
        return platform.release()

    def arch(self) -> str:
        return normalize_arch(platform.machine())

    def nvidia_gpu_present(self) -> bool:
        return detect_nvidia_gpu()

    # Packages / commands

    def is_package_installed(self, package: str) -> bool:
        r = self.run(["dpkg-query", "-W", "-f=${Status}", package], check=False)
        return r.returncode == 0 and "install ok installed" in r.stdout

    def package_available(self, package: str) -> bool:
        """Return True if apt knows about a package name."""
        r = self.run(["apt-cache", "show", package], check=False)
        return r.returncode == 0

    def command_on_path(self, name: str, extra_dirs: Iterable[str] = ()) -> Optional[str]:
        """Return the resolved path of an executable, or None.

        extra_dirs covers tools installed outside root's PATH (e.g. /usr/local/cuda-X/bin).
        """
        found = shutil.which(name)
        if found:
            return found
        for d in extra_dirs:
            candidate = Path(d) / name
            try:
                if candidate.is_file() and os.access(candidate, os.X_OK):
                    return str(candidate)
            except OSError as e:
                # e.g. another user's 0700 home during an unprivileged dry run
                logger.warning("Cannot inspect %s: %s", candidate, e)
        return None

    # Files

    def file_contains_line(self, path: str, line: str) -> bool:
        """Unreadable files count as not containing the line."""
        wanted = line.strip()
        try:
            text = Path(path).read_text(encoding="utf-8")
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            return False
        return any(ln.strip() == wanted for ln in text.splitlines())

    def is_symlink(self, path: str) -> bool:
        try:
            return Path(path).is_symlink()
        except OSError as e:
            logger.warning("Cannot inspect %s: %s", path, e)
            return False

    # Users / groups

    def user_exists(self, username: str) -> bool:
        try:
            pwd.getpwnam(username)
        except KeyError:
            return False
        return True

    def user_home(self, username: str) -> str:
        return pwd.getpwnam(username).pw_dir

    def group_exists(self, group: str) -> bool:
        try:
            grp.getgrnam(group)
        except KeyError:
            return False
        return True

    def user_groups(self, username: str) -> Set[str]:
        r = self.run(["id", "-nG", username], check=False)
        if r.returncode != 0:
            return set()
        return set(r.stdout.split())
