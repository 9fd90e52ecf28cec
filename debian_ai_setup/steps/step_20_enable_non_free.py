from __future__ import annotations

import logging
from typing import List

from ..context import SetupCtx
from ..lib.apt_sources import enable_component, pending_files, source_files

logger = logging.getLogger(__name__)


class EnableNonFreeStep:
    step_id = "20_enable_non_free"
    title = "Enable non-free apt component"
    verify = True

    def _files(self, ctx: SetupCtx) -> List[str]:
        return source_files(ctx.cfg.sources_list, ctx.cfg.sources_dir)

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        files = self._files(ctx)
        if not files:
            ctx.warn(self.step_id, f"no apt source list found at {ctx.cfg.sources_list}; leaving sources untouched")
            return True
        return not pending_files(files, ctx.cfg.apt_component)

    def apply(self, ctx: SetupCtx) -> None:
        component = ctx.cfg.apt_component
        touched = enable_component(pending_files(self._files(ctx), component), component, dry_run=ctx.dry_run)
        ctx.decide("apt_sources_updated", touched)
