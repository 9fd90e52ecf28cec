from __future__ import annotations

import logging

from ..context import SetupCtx
from ..lib.pkg import apt_install

logger = logging.getLogger(__name__)


class KernelHeadersStep:
    step_id = "30_kernel_headers"
    title = "Kernel headers"
    verify = True

    def _headers_pkg(self, ctx: SetupCtx) -> str:
        return f"linux-headers-{ctx.probe.running_kernel()}"

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        pkg = self._headers_pkg(ctx)
        if ctx.probe.is_package_installed(pkg):
            logger.info("Linux headers already installed (%s)", pkg)
            return True
        if not ctx.probe.package_available(pkg):
            # Custom kernels (WSL2, cloud images) have no matching Debian headers package.
            ctx.warn(self.step_id, f"{pkg} is not available from apt; skipping kernel headers")
            return True
        return False

    def apply(self, ctx: SetupCtx) -> None:
        packages = [self._headers_pkg(ctx)]
        # Flavour meta package; only some architectures ship one named after the arch (not armhf).
        meta = f"linux-headers-{ctx.probe.arch()}"
        if ctx.probe.package_available(meta):
            packages.append(meta)
        else:
            logger.info("No %s meta package; installing headers for the running kernel only", meta)
        logger.info("Installing Linux headers for kernel %s", ctx.probe.running_kernel())
        apt_install(ctx.run, packages)
        ctx.decide("kernel_headers", packages)
