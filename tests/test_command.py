import pytest

from minishell.command import Command, join_path, parse_line
from minishell.environment import Environment
from minishell.lexer import RedirKind, Redirection


@pytest.fixture
def env():
    return Environment(["HOME=/home/user", "PATH=/bin"])


def test_from_segment_plain(env):
    cmd = Command.from_segment("ls -l /tmp", env)
    assert cmd.name == "ls"
    assert cmd.args == ["ls", "-l", "/tmp"]
    assert cmd.redirections == []
    assert cmd.has_heredoc is False


def test_from_segment_with_redirections(env):
    cmd = Command.from_segment("echo hi > out <in", env)
    assert cmd.args == ["echo", "hi"]
    assert cmd.redirections == [
        Redirection(RedirKind.OUTPUT, "out"),
        Redirection(RedirKind.INPUT, "in"),
    ]


def test_from_segment_heredoc_flag(env):
    cmd = Command.from_segment("cat << stop", env)
    assert cmd.has_heredoc is True
    assert cmd.redirections == [Redirection(RedirKind.HEREDOC, "stop")]


def test_from_segment_quotes_removed(env):
    cmd = Command.from_segment('echo "ab"', env)
    assert cmd.args == ["echo", "ab"]


def test_from_segment_empty_has_no_name(env):
    cmd = Command.from_segment("> out", env)
    assert cmd.name is None
    assert cmd.args == []


def test_command_env_is_a_copy(env):
    cmd = Command.from_segment("ls", env)
    assert cmd.env == env
    cmd.env.export(["X=1"])
    assert env.lookup("X") is None


def test_parse_line_blank_gives_nothing(env):
    assert parse_line(" \t ", env) == []


def test_parse_line_pipeline(env):
    commands = parse_line("ls -l | wc -l", env)
    assert [c.name for c in commands] == ["ls", "wc"]
    assert commands[1].args == ["wc", "-l"]


def test_parse_line_pipe_inside_quotes(env):
    commands = parse_line("echo 'a|b'", env)
    assert len(commands) == 1
    assert commands[0].args == ["echo", "a|b"]


def test_parse_line_envs_are_separate(env):
    first, second = parse_line("a | b", env)
    first.env.export(["Y=2"])
    assert second.env.lookup("Y") is None
    assert list(second.env) == list(env)


def test_join_path():
    assert join_path("/bin", "ls") == "/bin/ls"
    assert join_path("/usr/bin", "env").startswith("/usr/bin/")