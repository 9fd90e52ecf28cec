from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

import yaml

from .context import SetupCtx
from .errors import SetupError
from .lib.command import Runner, run_cmd
from .lib.env import PATHS
from .lib.probe import SystemProbe
from .lib.prompt import Prompter
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline, select_steps
from .setup_config import SetupConfig, load_setup_config
from .state_store import ensure_defaults, finish_run, load_state, record_error, save_state, start_run
from .steps import (
    BaseUtilitiesStep,
    CheckPrivilegesStep,
    CleanupStep,
    ConfigureUserStep,
    ConfirmStep,
    CudaEnvironmentStep,
    CudaKeyringStep,
    CudaToolkitStep,
    DevToolsStep,
    EnableNonFreeStep,
    InstallUvStep,
    KernelHeadersStep,
    NvidiaDriverStep,
    SelectUserStep,
    SummaryStep,
    UpgradeSystemStep,
)

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = PATHS.state_default

# Kept even when the run is sliced with --start-at: the guard rails and the user later steps need.
ALWAYS_RUN = ("10_check_privileges", "15_confirm", "45_select_user")

EXIT_INTERRUPTED = 130


def build_steps():
    return [
        CheckPrivilegesStep(),
        ConfirmStep(),
        EnableNonFreeStep(),
        UpgradeSystemStep(),
        KernelHeadersStep(),
        NvidiaDriverStep(),
        BaseUtilitiesStep(),
        SelectUserStep(),
        ConfigureUserStep(),
        CudaKeyringStep(),
        CudaToolkitStep(),
        CudaEnvironmentStep(),
        DevToolsStep(),
        InstallUvStep(),
        CleanupStep(),
        SummaryStep(),
    ]


def _load_report(state_path: str) -> Dict[str, Any]:
    try:
        return ensure_defaults(load_state(state_path))
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable run report %s: %s", state_path, e)
        return ensure_defaults({})


def run(
    *,
    cfg: SetupConfig,
    state_path: str = DEFAULT_STATE_PATH,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    dry_run: bool = False,
    probe: Optional[SystemProbe] = None,
    runner: Runner = run_cmd,
    prompter: Optional[Prompter] = None,
    log_path: Optional[str] = None,
) -> Dict[str, Any]:
    """Run the setup sequence and append a record of it to the run report."""

    state = _load_report(state_path)
    record = start_run(state, dry_run=dry_run)
    record["execution"]["log_path"] = log_path

    ctx = SetupCtx(
        cfg=cfg,
        probe=probe or SystemProbe(),
        prompter=prompter or Prompter(),
        runner=runner,
        dry_run=dry_run,
        username=cfg.username,
        state=record,
    )
    steps = select_steps(build_steps(), start_at=start_at, stop_after=stop_after, always_run=ALWAYS_RUN)

    try:
        run_pipeline(ctx=ctx, steps=steps)
        finish_run(record, status="completed", exit_code=0)
        return record
    except SetupError as e:
        record_error(record, e)
        finish_run(record, status="aborted", exit_code=e.exit_code)
        raise
    except KeyboardInterrupt as e:
        record_error(record, e)
        finish_run(record, status="interrupted", exit_code=EXIT_INTERRUPTED)
        raise
    except Exception as e:
        logger.exception("Setup failed")
        record_error(record, e)
        finish_run(record, status="failed", exit_code=1)
        raise
    finally:
        try:
            save_state(state_path, state)
        except OSError as e:
            logger.warning("Could not write run report %s: %s", state_path, e)


def main(
    argv: Optional[list[str]] = None,
    *,
    probe: Optional[SystemProbe] = None,
    runner: Runner = run_cmd,
    prompter: Optional[Prompter] = None,
) -> int:
    step_ids = [s.step_id for s in build_steps()]

    p = argparse.ArgumentParser(
        prog="debian-ai-setup",
        description="Provision Debian for GPU-accelerated AI development (NVIDIA driver, CUDA, uv).",
    )
    p.add_argument("--config", default=None, help="Path to a YAML setup config")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to the run report (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the setup log")
    p.add_argument("--username", default=None, help="Target user (skips the username prompt)")
    p.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    p.add_argument("--dry-run", action="store_true", help="Log commands and file edits without applying them")
    p.add_argument("--start-at", default=None, choices=step_ids, metavar="STEP", help="Start at step_id")
    p.add_argument("--stop-after", default=None, choices=step_ids, metavar="STEP", help="Stop after step_id")
    p.add_argument("--list-steps", action="store_true", help="Print the step sequence and exit")

    args = p.parse_args(argv)

    if args.list_steps:
        for step in build_steps():
            print(f"{step.step_id}\t{step.title}")
        return 0

    actual_log_path = configure_logging(log_path=args.log)

    try:
        cfg = load_setup_config(args.config).with_overrides(
            username=args.username,
            assume_yes=True if args.yes else None,
        )
        run(
            cfg=cfg,
            state_path=args.state,
            start_at=args.start_at,
            stop_after=args.stop_after,
            dry_run=bool(args.dry_run),
            probe=probe,
            runner=runner,
            prompter=prompter,
            log_path=actual_log_path,
        )
    except SetupError as e:
        logger.error("%s", e)
        return e.exit_code
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return EXIT_INTERRUPTED
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
