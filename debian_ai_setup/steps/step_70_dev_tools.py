from __future__ import annotations

import logging
from typing import List

from ..context import SetupCtx
from ..lib.pkg import apt_install

logger = logging.getLogger(__name__)


class DevToolsStep:
    step_id = "70_dev_tools"
    title = "Additional development tools"
    verify = True

    def _missing(self, ctx: SetupCtx) -> List[str]:
        return [p for p in ctx.cfg.dev_packages if not ctx.probe.is_package_installed(p)]

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        return not self._missing(ctx)

    def apply(self, ctx: SetupCtx) -> None:
        missing = self._missing(ctx)
        apt_install(ctx.run, missing)
        ctx.decide("dev_packages", missing)
