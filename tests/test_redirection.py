import pytest

from pyshell.errors import RedirectionSyntaxError, RedirectionWriteError
from pyshell.redirection import (
    CommandLine, Mode, RedirectionSpec, Stream, detect_redirection, write_redirected,
)


class TestDetectRedirection:

    def test_no_operator(self):
        cmd = detect_redirection(["echo", "hi"])
        assert cmd == CommandLine(("echo", "hi"))
        assert cmd.redirection is None

    @pytest.mark.parametrize("operator,stream,mode", [
        (">", Stream.STDOUT, Mode.OVERWRITE),
        ("1>", Stream.STDOUT, Mode.OVERWRITE),
        (">>", Stream.STDOUT, Mode.APPEND),
        ("1>>", Stream.STDOUT, Mode.APPEND),
        ("2>", Stream.STDERR, Mode.OVERWRITE),
        ("2>>", Stream.STDERR, Mode.APPEND),
    ])
    def test_operators(self, operator, stream, mode):
        cmd = detect_redirection(["ls", "-l", operator, "out.txt"])
        assert cmd.argv == ("ls", "-l")
        assert cmd.redirection == RedirectionSpec(stream, mode, "out.txt")

    def test_operator_must_be_whole_token(self):
        cmd = detect_redirection(["echo", "a>b", "2>x"])
        assert cmd.argv == ("echo", "a>b", "2>x")
        assert cmd.redirection is None

    def test_command_is_the_words_before_the_operator(self):
        cmd = detect_redirection(["echo", "a", ">", "f", "b"])
        assert cmd.argv == ("echo", "a")
        assert cmd.redirection.target == "f"

    def test_leading_operator_leaves_no_command(self):
        cmd = detect_redirection([">", "f", "echo", "hi"])
        assert cmd.argv == ()
        assert cmd.redirection.target == "f"

    def test_trailing_operator_is_an_error(self):
        with pytest.raises(RedirectionSyntaxError) as info:
            detect_redirection(["echo", "hi", ">>"])
        assert info.value.operator == ">>"
        assert info.value.unexpected == "newline"

    def test_operator_as_target_is_an_error(self):
        with pytest.raises(RedirectionSyntaxError) as info:
            detect_redirection(["echo", "hi", ">", ">"])
        assert info.value.unexpected == ">"
        assert info.value.message == "syntax error near unexpected token `>' after >"

    def test_last_operator_wins(self):
        cmd = detect_redirection(["echo", "hi", ">", "first", "2>>", "second"])
        assert cmd.argv == ("echo", "hi")
        assert cmd.redirection == RedirectionSpec(Stream.STDERR, Mode.APPEND, "second")

    def test_redirection_without_command(self):
        cmd = detect_redirection([">", "f"])
        assert cmd.argv == ()
        assert cmd.name == ""


class TestWriteRedirected:

    def test_overwrite_truncates(self, tmp_path):
        target = tmp_path / "f"
        target.write_text("old contents\n")
        write_redirected("echo", RedirectionSpec(Stream.STDOUT, Mode.OVERWRITE, str(target)), b"new\n")
        assert target.read_text() == "new\n"

    def test_append_keeps_existing(self, tmp_path):
        target = tmp_path / "f"
        target.write_text("one\n")
        write_redirected("echo", RedirectionSpec(Stream.STDOUT, Mode.APPEND, str(target)), b"two\n")
        assert target.read_text() == "one\ntwo\n"

    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "f"
        write_redirected("echo", RedirectionSpec(Stream.STDOUT, Mode.OVERWRITE, str(target)), b"x")
        assert target.read_bytes() == b"x"

    def test_empty_data_still_creates_file(self, tmp_path):
        target = tmp_path / "f"
        write_redirected("ls", RedirectionSpec(Stream.STDERR, Mode.OVERWRITE, str(target)), b"")
        assert target.exists()
        assert target.read_bytes() == b""

    def test_failure_is_reported_with_command_and_target(self, tmp_path):
        spec = RedirectionSpec(Stream.STDOUT, Mode.OVERWRITE, str(tmp_path))
        with pytest.raises(RedirectionWriteError) as info:
            write_redirected("echo", spec, b"x")
        assert info.value.message == f"echo: {tmp_path}: Is a directory"
