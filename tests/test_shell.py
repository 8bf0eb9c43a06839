"""Tests for shell passthroughs."""

import sys
from unittest.mock import MagicMock, patch

import pytest

from huaci import shell
from huaci.errors import ShellError, UnsupportedPlatform


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX path separators")
@pytest.mark.parametrize(
    "platform, expected",
    [
        ("linux", ["xdg-open", "/home/alice"]),
        ("darwin", ["open", "-R", "/home/alice/config.toml"]),
    ],
)
def test_show_in_explorer(platform: str, expected: list[str]) -> None:
    """Test file manager command on POSIX platforms."""

    with (
        patch("sys.platform", platform),
        patch("subprocess.run") as run,
    ):
        shell.show_in_explorer("/home/alice/config.toml")

    assert run.call_args.args[0] == expected


@pytest.mark.parametrize(
    "platform, program", [("linux", "xdg-open"), ("darwin", "open")]
)
def test_open_in_browser(platform: str, program: str) -> None:
    """Test that URL is passed to the platform opener."""

    with (
        patch("sys.platform", platform),
        patch("subprocess.run") as run,
    ):
        shell.open_in_browser("https://example.com/?q=run")

    assert run.call_args.args[0] == [program, "https://example.com/?q=run"]


def test_windows_command() -> None:
    """Test Windows command construction."""

    with patch("sys.platform", "win32"):
        assert shell.get_platform_command("open_filepath", "C:\\a.txt") == [
            "cmd",
            "/C",
            "start",
            "",
            "C:\\a.txt",
        ]


def test_unsupported_platform() -> None:
    """Test that unknown platform is reported."""

    with (
        patch("sys.platform", "sunos5"),
        patch("subprocess.run") as run,
    ):
        with pytest.raises(UnsupportedPlatform):
            shell.open_filepath("/tmp/a.txt")
        with pytest.raises(UnsupportedPlatform):
            shell.show_in_explorer("/tmp/a.txt")

    run.assert_not_called()


def test_missing_program() -> None:
    """Test that launch failure is reported."""

    with (
        patch("sys.platform", "linux"),
        patch("subprocess.run", MagicMock(side_effect=FileNotFoundError())),
    ):
        with pytest.raises(ShellError):
            shell.open_filepath("/tmp/a.txt")


def test_sanitize_filename() -> None:
    """Test that reserved characters are removed."""

    assert shell.sanitize_filename('run: "to move"?.mp3') == "run to move.mp3"
    assert shell.sanitize_filename("book") == "book"
