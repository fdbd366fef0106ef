from __future__ import annotations

from pathlib import Path

import pytest

from umbrel_dev.util import CmdError, dir_is_empty, exit_status, shell_join
from umbrel_dev.util import run_cmd as _run_cmd


def test_shell_join_quotes() -> None:
    cmd = ["echo", "a b", "c'd"]
    s = shell_join(cmd)
    assert "'a b'" in s
    assert s.startswith("echo ")


def test_run_cmd_success_and_failure() -> None:
    ok = _run_cmd(["bash", "-c", "printf ok"], check=True, capture=True)
    assert ok.code == 0
    assert ok.stdout == "ok"
    bad = _run_cmd(["bash", "-c", "exit 7"], check=False, capture=True)
    assert bad.code == 7
    with pytest.raises(CmdError) as info:
        _run_cmd(["bash", "-c", "exit 9"], check=True, capture=True)
    assert info.value.result.code == 9


def test_run_cmd_passes_cwd(monkeypatch, tmp_path: Path) -> None:
    seen = {}

    class P:
        returncode = 0
        stdout = ""
        stderr = ""

    def fake_run(cmd, **kwargs):
        seen.update(kwargs)
        return P()

    monkeypatch.setattr("umbrel_dev.util.subprocess.run", fake_run)
    _run_cmd(["vagrant", "halt"], cwd=tmp_path)
    assert seen["cwd"] == str(tmp_path)


def test_dir_is_empty_counts_hidden_files(tmp_path: Path) -> None:
    assert dir_is_empty(tmp_path)
    (tmp_path / ".hidden").write_text("")
    assert not dir_is_empty(tmp_path)


def test_exit_status_maps_signals() -> None:
    assert exit_status(0) == 0
    assert exit_status(3) == 3
    assert exit_status(-15) == 143
    assert exit_status(-2) == 130
