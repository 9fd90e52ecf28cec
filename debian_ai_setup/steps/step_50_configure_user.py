from __future__ import annotations

import logging
from typing import List

from ..context import SetupCtx
from ..lib.users import add_user_to_group

logger = logging.getLogger(__name__)


class ConfigureUserStep:
    step_id = "50_configure_user"
    title = "User groups"
    verify = True

    def _wanted_groups(self, ctx: SetupCtx) -> List[str]:
        # The admin group is mandatory; GPU access groups only when the host defines them.
        groups = [ctx.cfg.admin_group]
        groups += [g for g in ctx.cfg.gpu_groups if g not in groups and ctx.probe.group_exists(g)]
        return groups

    def _missing(self, ctx: SetupCtx) -> List[str]:
        current = ctx.probe.user_groups(ctx.require_username())
        return [g for g in self._wanted_groups(ctx) if g not in current]

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        if self._missing(ctx):
            return False
        logger.info("User %s already has %s access", ctx.username, ctx.cfg.admin_group)
        return True

    def apply(self, ctx: SetupCtx) -> None:
        username = ctx.require_username()
        missing = self._missing(ctx)
        for group in missing:
            add_user_to_group(ctx.run, username, group)
        ctx.decide("groups_added", missing)
        logger.info("Group changes take effect after %s logs out and back in", username)
