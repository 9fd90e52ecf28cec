from __future__ import annotations

import logging

from ..context import SetupCtx
from ..lib.pkg import apt_autoclean, apt_autoremove

logger = logging.getLogger(__name__)


class CleanupStep:
    step_id = "80_cleanup"
    title = "Final cleanup"
    verify = False

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        return False

    def apply(self, ctx: SetupCtx) -> None:
        apt_autoremove(ctx.run)
        apt_autoclean(ctx.run)
