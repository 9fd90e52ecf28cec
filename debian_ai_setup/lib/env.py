from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    sources_list: str = "/etc/apt/sources.list"
    sources_dir: str = "/etc/apt/sources.list.d"
    system_profile: str = "/etc/bash.bashrc"
    cuda_prefix: str = "/usr/local"
    state_default: str = "/var/lib/debian-ai-setup/state.json"
    log_default: str = "/var/log/debian-ai-setup.log"


PATHS = Paths()
