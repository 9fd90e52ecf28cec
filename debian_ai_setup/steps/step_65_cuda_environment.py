from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ..context import SetupCtx
from ..lib.profile import ensure_lines
from ..lib.users import chown_to_user

logger = logging.getLogger(__name__)


class CudaEnvironmentStep:
    step_id = "65_cuda_environment"
    title = "CUDA environment"
    verify = True

    def _profiles(self, ctx: SetupCtx) -> List[str]:
        return [ctx.user_profile(), ctx.cfg.system_profile]

    def _link_done(self, ctx: SetupCtx) -> bool:
        link = ctx.cfg.cuda_link
        # A real directory at the link path is left alone (warned about in apply).
        return ctx.probe.is_symlink(link) or Path(link).exists()

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        lines = ctx.cuda_env_lines()
        profiles_done = all(ctx.probe.file_contains_line(p, ln) for p in self._profiles(ctx) for ln in lines)
        return profiles_done and self._link_done(ctx)

    def apply(self, ctx: SetupCtx) -> None:
        username = ctx.require_username()
        lines = ctx.cuda_env_lines()

        logger.info("Configuring CUDA environment for user %s", username)
        user_res = ensure_lines(ctx.user_profile(), lines, dry_run=ctx.dry_run)
        if user_res.created:
            chown_to_user(ctx.run, user_res.path, username)
        sys_res = ensure_lines(ctx.cfg.system_profile, lines, dry_run=ctx.dry_run)
        ctx.decide("cuda_env_profiles", [r.path for r in (user_res, sys_res) if r.appended])

        link = Path(ctx.cfg.cuda_link)
        if ctx.probe.is_symlink(str(link)):
            return
        if link.exists():
            ctx.warn(self.step_id, f"{link} exists and is not a symlink; leaving it in place")
            return
        if ctx.dry_run:
            logger.info("Would link %s -> %s", str(link), ctx.cfg.cuda_home)
            return
        link.symlink_to(ctx.cfg.cuda_home)
        logger.info("Linked %s -> %s", str(link), ctx.cfg.cuda_home)
