from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

import pytest

from debian_ai_setup.context import SetupCtx
from debian_ai_setup.errors import CommandError
from debian_ai_setup.lib.command import CmdResult
from debian_ai_setup.lib.probe import SystemProbe
from debian_ai_setup.lib.prompt import Prompter
from debian_ai_setup.setup_config import SetupConfig

# Package -> command it puts on PATH.
PKG_COMMANDS = {
    "sudo": "sudo",
    "curl": "curl",
    "zip": "zip",
    "unzip": "unzip",
    "cuda-compiler-12-6": "nvcc",
}

SOURCES_LIST = (
    "deb http://deb.debian.org/debian trixie main\n"
    "deb-src http://deb.debian.org/debian trixie main\n"
    "# deb http://example.invalid/debian trixie main\n"
    "deb http://security.debian.org/debian-security trixie-security main\n"
)


class FakeProbe(SystemProbe):
    """Host model for tests; file queries still hit the (tmp_path) filesystem."""

    def __init__(self, *, users: Dict[str, str]) -> None:
        super().__init__(run=None)  # type: ignore[arg-type]
        self.root = True
        self.kernel = "6.12.9-amd64"
        self.machine_arch = "amd64"
        self.gpu = True
        self.installed: Set[str] = set()
        self.unavailable: Set[str] = set()
        self.commands: Set[str] = set()
        self.users = dict(users)
        self.groups: Dict[str, Set[str]] = {u: {u} for u in users}
        self.existing_groups: Set[str] = {"sudo", "video"}

    def is_root(self) -> bool:
        return self.root

    def running_kernel(self) -> str:
        return self.kernel

    def arch(self) -> str:
        return self.machine_arch

    def nvidia_gpu_present(self) -> bool:
        return self.gpu

    def is_package_installed(self, package: str) -> bool:
        return package in self.installed

    def package_available(self, package: str) -> bool:
        return package not in self.unavailable

    def command_on_path(self, name: str, extra_dirs: Sequence[str] = ()) -> Optional[str]:
        return f"/usr/bin/{name}" if name in self.commands else None

    def user_exists(self, username: str) -> bool:
        return username in self.users

    def user_home(self, username: str) -> str:
        return self.users[username]

    def group_exists(self, group: str) -> bool:
        return group in self.existing_groups

    def user_groups(self, username: str) -> Set[str]:
        return set(self.groups.get(username, set()))


class FakeRunner:
    """Records argv and applies the effect each command would have on FakeProbe."""

    def __init__(self, probe: FakeProbe) -> None:
        self.probe = probe
        self.calls: List[List[str]] = []
        self.fail_on: List[Tuple[str, ...]] = []

    def __call__(self, argv, *, check=True, env=None, cwd=None, input_text=None, dry_run=False) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        if dry_run:
            return CmdResult(argv=argv, returncode=0, stdout="", stderr="")

        if any(tuple(argv[: len(prefix)]) == prefix for prefix in self.fail_on):
            if check:
                raise CommandError(argv, 100, "simulated failure")
            return CmdResult(argv=argv, returncode=100, stdout="", stderr="simulated failure")

        if argv[:3] == ["apt-get", "install", "-y"]:
            for pkg in argv[3:]:
                self.probe.installed.add(pkg)
                if pkg in PKG_COMMANDS:
                    self.probe.commands.add(PKG_COMMANDS[pkg])
        elif argv[:2] == ["dpkg", "-i"]:
            self.probe.installed.add(Path(argv[2]).name.split("_")[0])
        elif argv[:2] == ["gpasswd", "-a"]:
            self.probe.groups.setdefault(argv[2], set()).add(argv[3])
        elif argv[:2] == ["su", "-"] and "uv" in argv[-1]:
            self.probe.commands.add("uv")

        return CmdResult(argv=argv, returncode=0, stdout="", stderr="")

    def install_calls(self) -> List[List[str]]:
        return [c for c in self.calls if c[:2] in (["apt-get", "install"], ["dpkg", "-i"])]

    def matching(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


class ScriptedInput:
    def __init__(self, answers: Sequence[str]) -> None:
        self.answers = list(answers)
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@dataclass
class Host:
    root: Path
    probe: FakeProbe
    runner: FakeRunner
    raw_cfg: Dict = field(default_factory=dict)

    @property
    def sources_list(self) -> Path:
        return self.root / "etc/apt/sources.list"

    @property
    def system_profile(self) -> Path:
        return self.root / "etc/bash.bashrc"

    @property
    def user_profile(self) -> Path:
        return self.root / "home/alice/.bashrc"

    @property
    def cuda_link(self) -> Path:
        return self.root / "usr/local/cuda"

    @property
    def state_path(self) -> Path:
        return self.root / "var/lib/debian-ai-setup/state.json"

    def config(self, **overrides) -> SetupConfig:
        return SetupConfig(raw=dict(self.raw_cfg)).with_overrides(**overrides)

    def ctx(self, answers: Sequence[str] = (), *, username: Optional[str] = "alice", dry_run: bool = False, **overrides) -> SetupCtx:
        return SetupCtx(
            cfg=self.config(**overrides),
            probe=self.probe,
            prompter=Prompter(input_fn=ScriptedInput(answers)),
            runner=self.runner,
            dry_run=dry_run,
            username=username,
            state={},
        )


@pytest.fixture
def host(tmp_path: Path) -> Host:
    (tmp_path / "etc/apt").mkdir(parents=True)
    (tmp_path / "etc/apt/sources.list").write_text(SOURCES_LIST, encoding="utf-8")
    (tmp_path / "etc/bash.bashrc").write_text("# system-wide .bashrc\n", encoding="utf-8")
    (tmp_path / "home/alice").mkdir(parents=True)
    (tmp_path / "home/alice/.bashrc").write_text("# ~/.bashrc\n", encoding="utf-8")
    (tmp_path / "usr/local").mkdir(parents=True)

    probe = FakeProbe(users={"alice": str(tmp_path / "home/alice")})
    raw_cfg = {
        "apt": {"sources_list": str(tmp_path / "etc/apt/sources.list"), "sources_dir": None},
        "cuda": {"install_prefix": str(tmp_path / "usr/local")},
        "profile": {"system": str(tmp_path / "etc/bash.bashrc")},
    }
    return Host(root=tmp_path, probe=probe, runner=FakeRunner(probe), raw_cfg=raw_cfg)


@pytest.fixture
def scripted():
    """Factory for a Prompter fed with canned answers."""

    def make(*answers: str) -> Prompter:
        return Prompter(input_fn=ScriptedInput(answers))

    return make
