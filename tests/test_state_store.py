"""Tests for the run report."""
import json

import pytest

from debian_ai_setup.state_store import (
    MAX_RUNS,
    ensure_defaults,
    finish_run,
    load_state,
    record_error,
    save_state,
    start_run,
)


def test_missing_file_is_empty(tmp_path):
    assert load_state(str(tmp_path / "state.json")) == {}


@pytest.mark.parametrize("name", ["state.json", "state.yaml"])
def test_save_and_load(tmp_path, name):
    path = str(tmp_path / "sub" / name)
    state = ensure_defaults({})
    run = start_run(state, dry_run=False)
    finish_run(run, status="completed", exit_code=0)
    save_state(path, state)
    loaded = load_state(path)
    assert loaded["runs"][0]["status"] == "completed"
    assert loaded["runs"][0]["finished_at"]


def test_history_is_bounded():
    state = ensure_defaults({})
    for _ in range(MAX_RUNS + 5):
        start_run(state, dry_run=True)
    assert len(state["runs"]) == MAX_RUNS


def test_record_error_names_current_step():
    run = start_run(ensure_defaults({}), dry_run=False)
    run["execution"]["current_step"] = "55_cuda_keyring"
    record_error(run, RuntimeError("boom"))
    assert run["errors"] == [{"step": "55_cuda_keyring", "type": "RuntimeError", "error": "boom"}]


def test_non_mapping_rejected(tmp_path):
    p = tmp_path / "state.json"
    p.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_state(str(p))
