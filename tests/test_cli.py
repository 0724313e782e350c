from pathlib import Path

import pytest

from taskline import cli
from taskline.config import default_store_path


def _run(path: Path, *args: str) -> int:
    return cli.main(["--file", str(path), *args])


def test_add_list_done(tmp_path: Path, capsys):
    path = tmp_path / "sub" / "tasks.txt"

    assert _run(path, "add", "2023-10-22.23:10", "M", "Hello.") == 0
    assert _run(path, "add", "2023-10-23.9:00", "VH", "call", "the", "bank") == 0
    assert path.read_text(encoding="utf-8") == (
        "2023-10-22.23:10 M Td Hello.\n2023-10-23.09:00 VH Td call the bank\n"
    )

    assert _run(path, "done", "2") == 0
    assert path.read_text(encoding="utf-8").splitlines()[1] == "2023-10-23.09:00 VH Fn call the bank"

    capsys.readouterr()
    assert _run(path, "list", "--status", "Fn") == 0
    out = capsys.readouterr().out
    assert "call the bank" in out
    assert "Hello." not in out


def test_delete_hides_task_from_default_list(tmp_path: Path, capsys):
    path = tmp_path / "tasks.txt"
    path.write_text("2023-01-01.10:30 VH Td hi\n2023-02-02.11:11 L In bye\n", encoding="utf-8")

    assert _run(path, "delete", "1") == 0
    assert path.read_text(encoding="utf-8").startswith("2023-01-01.10:30 VH Dl hi\n")

    capsys.readouterr()
    _run(path, "list")
    out = capsys.readouterr().out
    assert "bye" in out and " hi" not in out

    _run(path, "list", "--all")
    assert " hi" in capsys.readouterr().out


def test_start_unknown_index(tmp_path: Path, capsys):
    path = tmp_path / "tasks.txt"
    path.write_text("2023-01-01.10:30 VH Td hi\n", encoding="utf-8")

    assert _run(path, "start", "5") == 1
    assert "Task #5 not found." in capsys.readouterr().err
    assert _run(path, "start", "1") == 0
    assert "VH In hi" in path.read_text(encoding="utf-8")


def test_list_without_file(tmp_path: Path, capsys):
    assert _run(tmp_path / "tasks.txt", "list") == 0
    assert "No tasks found." in capsys.readouterr().out


def test_check_reports_corrupt_line(tmp_path: Path, capsys):
    path = tmp_path / "tasks.txt"
    path.write_text("2023-01-01.10:30 VH Td hi\ngarbage\n", encoding="utf-8")

    assert _run(path, "check") == 1
    assert "Line 2" in capsys.readouterr().err

    path.write_text("2023-01-01.10:30 VH Td hi\n", encoding="utf-8")
    assert _run(path, "check") == 0
    assert "1 valid tasks" in capsys.readouterr().out


def test_add_rejects_bad_datetime(tmp_path: Path):
    with pytest.raises(SystemExit):
        _run(tmp_path / "tasks.txt", "add", "2023-02-30.10:00", "M", "x")


def test_default_path_from_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TASKLINE_FILE", str(tmp_path / "env.txt"))
    assert default_store_path() == (tmp_path / "env.txt").resolve()

    monkeypatch.delenv("TASKLINE_FILE")
    assert default_store_path().name == "tasks.txt"


def test_file_from_env_is_used_by_cli(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TASKLINE_FILE", str(tmp_path / "env.txt"))
    assert cli.main(["add", "now", "L", "later"]) == 0
    assert (tmp_path / "env.txt").read_text(encoding="utf-8").endswith(" L Td later\n")


@pytest.mark.parametrize("raw,expected", [(None, "WARNING"), ("debug", "DEBUG"), ("verbose", "WARNING")])
def test_log_level_from_env(monkeypatch, raw, expected):
    from taskline.config import default_log_level

    if raw is None:
        monkeypatch.delenv("TASKLINE_LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("TASKLINE_LOG_LEVEL", raw)
    assert default_log_level() == expected


def test_bad_log_level_does_not_break_cli(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setenv("TASKLINE_LOG_LEVEL", "verbose")
    assert _run(tmp_path / "tasks.txt", "list") == 0
    assert "No tasks found." in capsys.readouterr().out
