from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from urllib.parse import urlparse

from ..context import SetupCtx
from ..lib.net import download
from ..lib.pkg import apt_update, dpkg_install

logger = logging.getLogger(__name__)


class CudaKeyringStep:
    step_id = "55_cuda_keyring"
    title = "CUDA repository keyring"
    verify = True

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        return ctx.probe.is_package_installed(ctx.cfg.keyring_package)

    def apply(self, ctx: SetupCtx) -> None:
        url = ctx.cfg.keyring_url
        filename = Path(urlparse(url).path).name or f"{ctx.cfg.keyring_package}.deb"

        # The downloaded .deb only lives as long as the temporary directory.
        with tempfile.TemporaryDirectory(prefix="debian-ai-setup-") as tmp:
            deb = str(Path(tmp) / filename)
            logger.info("Installing CUDA keyring from %s", url)
            download(ctx.run, url, deb)
            dpkg_install(ctx.run, deb)

        apt_update(ctx.run)
        ctx.decide("cuda_keyring", url)
