from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import PrivilegeError

logger = logging.getLogger(__name__)


class CheckPrivilegesStep:
    step_id = "10_check_privileges"
    title = "Check privileges"
    verify = False

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        if ctx.probe.is_root():
            return True
        if ctx.dry_run:
            # Previewing the plan needs no privileges; nothing will be mutated.
            ctx.warn(self.step_id, "not running as root; continuing because this is a dry run")
            return True
        return False

    def apply(self, ctx: SetupCtx) -> None:
        raise PrivilegeError("Please run as root (e.g. sudo debian-ai-setup)")
