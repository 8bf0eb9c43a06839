"""Passthroughs to the platform shell: file manager, default applications."""

import logging
import os
import subprocess
import sys
from pathlib import Path

from pathvalidate import sanitize_filename as sanitize

from huaci.errors import ShellError, UnsupportedPlatform

CREATE_NO_WINDOW: int = 0x08000000
"""Windows process creation flag: do not show a console window."""


def normalize_path(path: str) -> str:
    """Replace both kinds of slashes with the platform separator."""
    return path.replace("/", os.sep).replace("\\", os.sep)


def run(command: list[str]) -> None:
    """Run a shell command and wait for it to finish.

    :param command: program and its arguments
    """
    logging.debug("Running `%s`...", " ".join(command))
    flags: int = CREATE_NO_WINDOW if sys.platform == "win32" else 0
    try:
        subprocess.run(command, check=False, creationflags=flags)
    except OSError as error:
        raise ShellError(f"failed to run {command[0]}: {error}") from error


def get_platform_command(action: str, target: str) -> list[str]:
    """Get command that opens the target with the default application.

    :param action: name of the action for error messages
    :param target: path or URL to open
    """
    if sys.platform == "win32":
        return ["cmd", "/C", "start", "", target]
    if sys.platform == "darwin":
        return ["open", target]
    if sys.platform.startswith("linux"):
        return ["xdg-open", target]

    raise UnsupportedPlatform(
        f"{action} is not implemented on this platform: {sys.platform}"
    )


def show_in_explorer(path: str) -> None:
    """Show the file in the system file manager.

    On Linux there is no common way to select a file, so the directory
    containing the file is opened instead.
    """
    path = normalize_path(path)

    if sys.platform == "win32":
        command: list[str] = ["cmd", "/C", "explorer", "/select,", path]
    elif sys.platform == "darwin":
        command = ["open", "-R", path]
    elif sys.platform.startswith("linux"):
        command = ["xdg-open", str(Path(path).parent)]
    else:
        raise UnsupportedPlatform(
            "show_in_explorer is not implemented on this platform: "
            f"{sys.platform}"
        )
    run(command)


def open_filepath(path: str) -> None:
    """Open the file with its default application."""
    run(get_platform_command("open_filepath", normalize_path(path)))


def open_in_browser(url: str) -> None:
    """Open the URL in the default browser."""
    run(get_platform_command("open_in_browser", url))


def sanitize_filename(file_name: str) -> str:
    """Make the file name valid on every supported platform.

    Reserved characters are removed, reserved names (e.g. `CON`) get a
    trailing underscore.
    """
    return sanitize(file_name, platform="universal", replacement_text="")
