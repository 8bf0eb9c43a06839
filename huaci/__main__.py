"""Huaci entry point."""

import logging
import queue
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path

import coloredlogs

from huaci.application import Application, Notification
from huaci.config import Config, PartialConfig
from huaci.errors import HuaciError
from huaci.ui import Colorized, Interface, Table, get_interface


def parse_arguments(arguments: list[str]) -> Namespace:
    """Parse command-line arguments."""

    parser: ArgumentParser = ArgumentParser("huaci")
    parser.add_argument(
        "--executable-directory",
        help="directory of the application, used to detect portable mode",
    )
    parser.add_argument("--dictionary", help="path to dictionary database")
    parser.add_argument("--config", help="path to configuration file")
    parser.add_argument(
        "--interface",
        help="interface type",
        choices=["terminal", "rich"],
        default="rich",
    )
    parser.add_argument(
        "--verbose", help="print debug messages", action="store_true"
    )

    subparser = parser.add_subparsers(dest="command", required=True)

    for command, help_ in [
        ("collins", "search the Collins dictionary"),
        ("oxford", "search the Oxford dictionary"),
        ("base", "get base form of the word"),
    ]:
        subparser.add_parser(command, help=help_).add_argument("word")

    lookup_parser: ArgumentParser = subparser.add_parser(
        "lookup", help="search both dictionaries for the word and its base"
    )
    lookup_parser.add_argument("word")
    lookup_parser.add_argument(
        "--no-convert",
        help="do not search for the base form",
        action="store_true",
    )

    # Command `config`.
    config_parser: ArgumentParser = subparser.add_parser(
        "config", help="read or update configuration"
    )
    config_subparser = config_parser.add_subparsers(
        dest="config_command", required=True
    )
    config_subparser.add_parser("show", help="print configuration")
    config_subparser.add_parser("path", help="print configuration file path")
    config_subparser.add_parser(
        "portable", help="print whether Huaci runs in portable mode"
    )
    set_parser: ArgumentParser = config_subparser.add_parser(
        "set", help="update configuration fields"
    )
    set_parser.add_argument("--anki-connect-url")
    set_parser.add_argument("--deck-name")
    set_parser.add_argument("--model-name")

    subparser.add_parser(
        "watch", help="print notifications about configuration changes"
    )
    subparser.add_parser(
        "reveal", help="show file in the file manager"
    ).add_argument("path")
    subparser.add_parser(
        "open", help="open file with the default application"
    ).add_argument("path")
    subparser.add_parser(
        "browse", help="open URL in the default browser"
    ).add_argument("url")
    subparser.add_parser(
        "sanitize", help="make file name valid on all platforms"
    ).add_argument("name")

    return parser.parse_args(arguments)


def print_config(interface: Interface, config: Config) -> None:
    """Print configuration as a table of TOML keys and values."""
    interface.print(
        Table(
            ["Key", "Value"],
            [
                ["anki-connect-url", config.anki_connect_url],
                ["deck-name", config.deck_name],
                ["model-name", config.model_name],
            ],
        )
    )


def watch(application: Application) -> None:
    """Start the watcher and print notifications until interrupted."""

    if not application.start_config_watcher():
        logging.warning("Watcher is already running.")

    logging.info(
        "Watching `%s`, press Ctrl+C to stop.", application.config_path()
    )
    while True:
        try:
            notification: Notification = application.notifications.get(
                timeout=1.0
            )
        except queue.Empty:
            continue
        print(notification.value, flush=True)


def run_command(
    application: Application, interface: Interface, arguments: Namespace
) -> None:
    """Run one command."""

    match arguments.command:
        case "collins":
            interface.print_entries(
                "Collins", application.search_collins(arguments.word)
            )
        case "oxford":
            interface.print_entries(
                "Oxford", application.search_oxford(arguments.word)
            )
        case "base":
            base: str | None = application.get_word_base(arguments.word)
            if base is None:
                interface.print(Colorized("No base form.", "#AAAAAA"))
            else:
                interface.print(base)
        case "lookup":
            interface.print_lookup(
                application.lookup(
                    arguments.word, auto_convert=not arguments.no_convert
                )
            )
        case "config":
            match arguments.config_command:
                case "show":
                    print_config(interface, application.read_config())
                case "path":
                    interface.print(application.config_path())
                case "portable":
                    interface.print(str(application.is_portable()).lower())
                case "set":
                    application.commit_config(
                        PartialConfig(
                            anki_connect_url=arguments.anki_connect_url,
                            deck_name=arguments.deck_name,
                            model_name=arguments.model_name,
                        )
                    )
        case "watch":
            watch(application)
        case "reveal":
            application.show_in_explorer(arguments.path)
        case "open":
            application.open_filepath(arguments.path)
        case "browse":
            application.open_in_browser(arguments.url)
        case "sanitize":
            interface.print(application.sanitize_filename(arguments.name))


def main() -> None:
    """Huaci entry point."""

    arguments: Namespace = parse_arguments(sys.argv[1:])
    coloredlogs.install(
        level=logging.DEBUG if arguments.verbose else logging.INFO,
        fmt="%(levelname)s %(message)s",
    )

    interface: Interface = get_interface(arguments.interface)

    try:
        application: Application = Application.from_directory(
            executable_directory=(
                Path(arguments.executable_directory)
                if arguments.executable_directory
                else None
            ),
            dictionary_path=(
                Path(arguments.dictionary) if arguments.dictionary else None
            ),
            config_path=Path(arguments.config) if arguments.config else None,
        )
        try:
            run_command(application, interface, arguments)
        finally:
            application.close()
    except HuaciError as error:
        logging.error(error)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
