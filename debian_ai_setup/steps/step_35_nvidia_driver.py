from __future__ import annotations

import logging

from ..context import SetupCtx
from ..lib.pkg import apt_install

logger = logging.getLogger(__name__)


class NvidiaDriverStep:
    step_id = "35_nvidia_driver"
    title = "NVIDIA driver"
    verify = True

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        # The first configured package is the driver itself; the rest is firmware.
        return ctx.probe.is_package_installed(ctx.cfg.driver_packages[0])

    def apply(self, ctx: SetupCtx) -> None:
        if not ctx.probe.nvidia_gpu_present():
            ctx.warn(self.step_id, "no NVIDIA GPU detected; installing the driver anyway")

        apt_install(ctx.run, ctx.cfg.driver_packages)
        ctx.decide("nvidia_driver", ctx.cfg.driver_packages)
        logger.info("NVIDIA driver installed")
