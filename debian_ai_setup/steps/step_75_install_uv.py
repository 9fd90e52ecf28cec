from __future__ import annotations

import logging
from typing import Optional

from ..context import SetupCtx
from ..lib.net import pipe_installer_cmd
from ..lib.profile import ensure_lines
from ..lib.users import chown_to_user, run_as_user

logger = logging.getLogger(__name__)


class InstallUvStep:
    step_id = "75_install_uv"
    title = "uv (Python package manager)"
    verify = True

    def _uv(self, ctx: SetupCtx) -> Optional[str]:
        return ctx.probe.command_on_path("uv", extra_dirs=ctx.user_bin_dirs())

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        uv = self._uv(ctx)
        if uv is None:
            return False
        if not ctx.probe.file_contains_line(ctx.user_profile(), ctx.uv_path_line()):
            return False
        logger.info("uv already installed: %s", uv)
        return True

    def apply(self, ctx: SetupCtx) -> None:
        username = ctx.require_username()

        if self._uv(ctx) is None:
            logger.info("Installing uv for user %s", username)
            run_as_user(ctx.run, username, pipe_installer_cmd(ctx.cfg.uv_installer_url))

        res = ensure_lines(ctx.user_profile(), [ctx.uv_path_line()], dry_run=ctx.dry_run)
        if res.created:
            chown_to_user(ctx.run, res.path, username)

        # Reachability is re-checked by the pipeline; a miss there is only a warning.
        uv = self._uv(ctx)
        ctx.decide("uv", uv)
        if uv:
            logger.info("uv available at %s", uv)
