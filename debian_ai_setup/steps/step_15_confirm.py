from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import ConfirmationDeclined

logger = logging.getLogger(__name__)


def render_plan(ctx: SetupCtx) -> str:
    return "\n".join(
        [
            "=== Debian AI Setup ===",
            "This will:",
            f"1. Enable the {ctx.cfg.apt_component} apt component and upgrade the system",
            "2. Install NVIDIA drivers and kernel headers",
            f"3. Configure a {ctx.cfg.admin_group} user",
            f"4. Install CUDA {ctx.cfg.cuda_version} toolkit",
            "5. Install uv (Python package manager)",
            "",
        ]
    )


class ConfirmStep:
    step_id = "15_confirm"
    title = "Confirm"
    verify = False

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        if ctx.cfg.assume_yes:
            logger.info("Confirmation skipped (assume_yes)")
            return True
        return False

    def apply(self, ctx: SetupCtx) -> None:
        print(render_plan(ctx))
        if not ctx.prompter.confirm("Continue?"):
            raise ConfirmationDeclined("Setup cancelled by operator")
        ctx.decide("confirmed", True)
