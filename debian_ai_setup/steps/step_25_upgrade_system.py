from __future__ import annotations

import logging

from ..context import SetupCtx
from ..lib.pkg import apt_update, apt_upgrade

logger = logging.getLogger(__name__)


class UpgradeSystemStep:
    step_id = "25_upgrade_system"
    title = "System update"
    verify = False

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        return False

    def apply(self, ctx: SetupCtx) -> None:
        apt_update(ctx.run)
        apt_upgrade(ctx.run)
