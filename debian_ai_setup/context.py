from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .lib.command import CmdResult, Runner, run_cmd
from .lib.probe import SystemProbe
from .lib.prompt import Prompter
from .setup_config import SetupConfig

logger = logging.getLogger(__name__)


@dataclass
class SetupCtx:
    """Everything a step needs: config, host probe, command runner, prompts, run record."""

    cfg: SetupConfig
    probe: SystemProbe
    prompter: Prompter
    runner: Runner = run_cmd
    dry_run: bool = False
    username: Optional[str] = None
    state: Dict[str, Any] = field(default_factory=dict)

    def run(self, argv: Sequence[str], **kwargs: Any) -> CmdResult:
        """Run a mutating command, honoring dry_run."""
        return self.runner(argv, dry_run=self.dry_run, **kwargs)

    def require_username(self) -> str:
        if not self.username:
            raise RuntimeError("target username not selected; run 45_select_user first")
        return self.username

    def user_profile(self) -> str:
        user = self.require_username()
        return str(Path(self.probe.user_home(user)) / self.cfg.user_profile_file)

    def cuda_env_lines(self) -> List[str]:
        home = self.cfg.cuda_home
        return [
            f"export PATH={home}/bin:$PATH",
            f"export LD_LIBRARY_PATH={home}/lib64:$LD_LIBRARY_PATH",
        ]

    def uv_path_line(self) -> str:
        return 'export PATH="$HOME/.local/bin:$PATH"'

    def user_bin_dirs(self) -> List[str]:
        home = Path(self.probe.user_home(self.require_username()))
        return [str(home / d) for d in self.cfg.uv_bin_dirs]

    # Run record helpers

    def decide(self, key: str, value: Any) -> None:
        self.state.setdefault("decisions", {})[key] = value

    def warn(self, step_id: str, message: str) -> None:
        logger.warning("[%s] %s", step_id, message)
        self.state.setdefault("warnings", []).append({"step": step_id, "warning": message})
