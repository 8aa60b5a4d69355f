import io
import os

import pytest

from minishell.shell import PROMPT, Shell, main


def _reader(lines):
    stream = iter(lines)
    prompts = []

    def read(prompt):
        prompts.append(prompt)
        return next(stream, None)

    return read, prompts


def test_environ_mapping_is_loaded_in_order():
    shell = Shell({"A": "1", "B": "2"})
    assert list(shell.env) == ["A=1", "B=2"]


def test_environ_entries_are_accepted():
    shell = Shell(["X=y", "Z=w"])
    assert shell.env.lookup("Z") == "w"


def test_export_persists_across_lines():
    shell = Shell({"A": "1"})
    assert shell.run_line("export FOO=bar") == 0
    assert shell.env.lookup("FOO") == "bar"
    shell.run_line("export FOO=baz")
    assert shell.env.lookup("FOO") == "baz"


def test_unset_removes_variable():
    shell = Shell({"A": "1", "FOO": "bar"})
    shell.run_line("unset FOO")
    assert shell.env.lookup("FOO") is None
    assert shell.env.lookup("A") == "1"


def test_blank_line_leaves_state_unchanged():
    shell = Shell({"A": "1"})
    before = shell.env.copy()
    assert shell.run_line("   \t ") == 0
    assert shell.env == before
    assert shell.exit_code is None


def test_exit_with_argument_sets_exit_code():
    shell = Shell({"A": "1"})
    assert shell.run_line("exit 3") == 3
    assert shell.exit_code == 3


def test_exit_without_argument_is_zero():
    shell = Shell({"A": "1"})
    shell.run_line("exit")
    assert shell.exit_code == 0


def test_echo_writes_to_stdout(capsys):
    shell = Shell({"A": "1"})
    shell.run_line("echo hello")
    assert capsys.readouterr().out == "hello \n"


def test_cd_updates_pwd(tmp_path, monkeypatch):
    monkeypatch.chdir(os.getcwd())
    start = os.getcwd()
    shell = Shell({"A": "1", "PWD": start, "OLDPWD": start})
    shell.run_line(f"cd {tmp_path}")
    assert shell.env.lookup("PWD") == os.getcwd()
    assert shell.env.lookup("OLDPWD") == start


def test_loop_stops_at_exit_and_returns_code():
    read, prompts = _reader(["export K=v", "exit 7", "export NEVER=1"])
    shell = Shell({"A": "1"})
    assert shell.loop(read) == 7
    assert shell.env.lookup("K") == "v"
    assert shell.env.lookup("NEVER") is None
    assert prompts == [PROMPT, PROMPT]


def test_loop_end_of_input_prints_exit(capsys):
    read, _ = _reader([])
    shell = Shell({"A": "1"})
    assert shell.loop(read) == 0
    assert capsys.readouterr().out == "exit\n"


def test_loop_recovers_from_interrupt(capsys):
    calls = {"n": 0}

    def read(prompt):
        calls["n"] += 1
        if calls["n"] == 1:
            raise KeyboardInterrupt
        return "exit 2"

    shell = Shell({"A": "1"})
    assert shell.loop(read) == 2
    assert capsys.readouterr().out == "\n"


def test_main_reads_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("exit 5\n"))
    assert main([]) == 5


def test_main_end_of_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main() == 0
    assert capsys.readouterr().out.endswith("exit\n")


@pytest.mark.parametrize("line", ["", "   "])
def test_empty_lines_in_loop_are_ignored(line):
    read, prompts = _reader([line, "exit 4"])
    shell = Shell({"A": "1"})
    assert shell.loop(read) == 4
    assert len(prompts) == 2