from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .context import SetupCtx

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent step.

    is_satisfied() inspects live system state; apply() runs only when it is False.
    With verify=True the guard is re-checked after apply() and a miss is a warning.
    """

    step_id: str
    title: str
    verify: bool

    def is_satisfied(self, ctx: SetupCtx) -> bool:
        ...

    def apply(self, ctx: SetupCtx) -> None:
        ...


@dataclass
class PipelineResult:
    ran_steps: List[str] = field(default_factory=list)
    skipped_steps: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def select_steps(
    steps: Sequence[Step],
    *,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    always_run: Sequence[str] = (),
) -> List[Step]:
    """Slice the sequence to [start_at, stop_after]; steps in always_run are kept regardless."""

    ids = [s.step_id for s in steps]
    for name, value in (("start_at", start_at), ("stop_after", stop_after)):
        if value is not None and value not in ids:
            raise ValueError(f"Unknown step for {name}: {value} (known: {', '.join(ids)})")

    selected: List[Step] = []
    started = start_at is None
    for step in steps:
        if not started and step.step_id == start_at:
            started = True
        if started or step.step_id in always_run:
            selected.append(step)
        if stop_after is not None and step.step_id == stop_after:
            break
    return selected


def run_pipeline(*, ctx: SetupCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order; the first exception from apply() aborts the sequence."""

    result = PipelineResult()
    exe = ctx.state.setdefault("execution", {})

    for step in steps:
        exe["current_step"] = step.step_id

        if step.is_satisfied(ctx):
            logger.info("Skipping step %s (already satisfied)", step.step_id)
            result.skipped_steps.append(step.step_id)
            ctx.state.setdefault("skipped_steps", []).append(step.step_id)
            continue

        logger.info("=== %s: %s ===", step.step_id, step.title)
        step.apply(ctx)
        result.ran_steps.append(step.step_id)
        ctx.state.setdefault("ran_steps", []).append(step.step_id)

        if step.verify and not ctx.dry_run and not step.is_satisfied(ctx):
            msg = f"postcondition not met after {step.step_id}"
            ctx.warn(step.step_id, msg)
            result.warnings.append(msg)

    exe["current_step"] = None
    return result
