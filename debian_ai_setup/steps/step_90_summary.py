from __future__ import annotations

import logging

from ..context import SetupCtx

logger = logging.getLogger(__name__)


def render_summary(ctx: SetupCtx) -> str:
    username = ctx.username or "(not configured)"
    lines = [
        "=== Installation Complete! ===",
        "",
        "Installed components:",
        f"- System updated ({ctx.cfg.apt_component} enabled)",
        "- NVIDIA driver",
        f"- CUDA Toolkit {ctx.cfg.cuda_version} ({ctx.cfg.cuda_link} -> {ctx.cfg.cuda_home})",
        "- uv (Python package manager)",
        "- Development tools",
        f"- Default user: {username} ({ctx.cfg.admin_group})",
        "",
        "IMPORTANT: You must restart for driver and group changes to take effect!",
        "",
        "Next steps:",
        "1. Restart: reboot",
        f"2. Log in as {username} and test the installation:",
        "   - nvcc --version",
        "   - nvidia-smi",
        "   - uv --version",
    ]
    warnings = ctx.state.get("warnings") or []
    if warnings:
        lines += ["", "Warnings:"]
        lines += [f"- [{w['step']}] {w['warning']}" for w in warnings]
    return "\n".join(lines) + "\n"


class SummaryStep:
    step_id = "90_summary"
    title = "Summary"
    verify = False

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        return False

    def apply(self, ctx: SetupCtx) -> None:
        print(render_summary(ctx))
        logger.info("Setup complete; reboot required")
