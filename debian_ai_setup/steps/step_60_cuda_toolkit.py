from __future__ import annotations

import logging

from ..context import SetupCtx
from ..lib.pkg import apt_install

logger = logging.getLogger(__name__)


class CudaToolkitStep:
    step_id = "60_cuda_toolkit"
    title = "CUDA toolkit"
    verify = True

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        nvcc = ctx.probe.command_on_path("nvcc", extra_dirs=[f"{ctx.cfg.cuda_home}/bin"])
        if nvcc:
            logger.info("CUDA toolkit already installed: %s", nvcc)
            return True
        return False

    def apply(self, ctx: SetupCtx) -> None:
        packages = ctx.cfg.cuda_packages
        logger.info("Installing CUDA toolkit %s", ctx.cfg.cuda_version)
        apt_install(ctx.run, packages)
        ctx.decide("cuda_packages", packages)
