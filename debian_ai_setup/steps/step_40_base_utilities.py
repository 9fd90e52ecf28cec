from __future__ import annotations

import logging
from typing import List

from ..context import SetupCtx
from ..lib.pkg import apt_install

logger = logging.getLogger(__name__)


class BaseUtilitiesStep:
    step_id = "40_base_utilities"
    title = "Base utilities"
    verify = True

    def _missing(self, ctx: SetupCtx) -> List[str]:
        missing: List[str] = []
        for command, package in ctx.cfg.utilities.items():
            if ctx.probe.command_on_path(command) is None and package not in missing:
                missing.append(package)
        return missing

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        return not self._missing(ctx)

    def apply(self, ctx: SetupCtx) -> None:
        missing = self._missing(ctx)
        logger.info("Installing %s", ", ".join(missing))
        apt_install(ctx.run, missing)
        ctx.decide("base_utilities", missing)
