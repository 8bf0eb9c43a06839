"""Huaci console user interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import override

from rich import box
from rich.console import Console
from rich.padding import Padding as RichElementPadding
from rich.panel import Panel as RichElementPanel
from rich.table import Table as RichElementTable
from rich.text import Text as RichElementText

from huaci.dictionary.core import CollinsEntry, LookupResult, OxfordEntry

RichCompatible = (
    RichElementText | RichElementPanel | RichElementTable | RichElementPadding
)


def table(columns: list[str], rows: list[list[str]]) -> str:
    """Draw table with simple text."""

    lengths: list[int] = [len(x) for x in columns]
    for row in rows:
        for index in range(len(columns)):
            lengths[index] = max(lengths[index], len(row[index]))

    lines: list[str] = [
        " ".join(columns[i].ljust(lengths[i]) for i in range(len(columns)))
    ]
    for row in rows:
        lines.append(
            " ".join(row[i].ljust(lengths[i]) for i in range(len(columns)))
        )
    return "\n".join(line.rstrip() for line in lines)


class Element:
    """Interface element."""


class Text(Element):
    """Text element: concatenation of strings and inline elements."""

    def __init__(self, text: "str | Element | None" = None) -> None:
        self.elements: list[Element | str] = [] if text is None else [text]

    def add(self, element: Element | str) -> "Text":
        """Chainable method to add element to the text."""
        self.elements.append(element)
        return self


@dataclass
class Colorized(Element):
    """Colorized text element."""

    text: Element | str
    color: str


@dataclass
class Block(Element):
    """Block of text."""

    text: Element | str
    padding: tuple[int, int, int, int]


@dataclass
class Header(Element):
    """Header of a block."""

    text: Element | str


@dataclass
class Table(Element):
    """Table of text."""

    columns: list[str]
    rows: list[list[str]]


class Interface(ABC):
    """User output interface."""

    @abstractmethod
    def print(self, text: Element | str) -> None:
        """Simply print text message."""
        raise NotImplementedError()

    def print_entries(
        self, title: str, entries: list[CollinsEntry] | list[OxfordEntry]
    ) -> None:
        """Print dictionary entries under a header."""

        self.print(Header(title))
        if not entries:
            self.print(Block(Colorized("No entries.", "#AAAAAA"), (0, 0, 0, 2)))
            return
        for entry in entries:
            for element in construct_entry(entry):
                self.print(element)

    def print_lookup(self, result: LookupResult) -> None:
        """Print entries found for the word and its base form."""

        if result.base is not None:
            self.print(
                Text()
                .add(result.word)
                .add(Colorized(" -> ", "#AAAAAA"))
                .add(result.base)
            )
        self.print_entries("Collins", result.collins)
        self.print_entries("Oxford", result.oxford)


def construct_entry(entry: CollinsEntry | OxfordEntry) -> list[Element]:
    """Get human-readable representation of the dictionary entry."""

    result: list[Element] = []

    description: Text = Text(entry.word)
    if entry.phonetic:
        description.add(Colorized(f" /{entry.phonetic}/", "#AAAAAA"))
    if entry.sense:
        description.add(Colorized(f" {entry.sense}", "#AAAAAA"))
    result.append(Block(description, (0, 0, 0, 2)))

    if isinstance(entry, OxfordEntry):
        if entry.phrase:
            result.append(Block(entry.phrase, (0, 0, 0, 4)))
        if entry.extension:
            result.append(
                Block(Colorized(entry.extension, "#AAAAAA"), (0, 0, 0, 4))
            )

    for definition in entry.english_definition, entry.chinese_definition:
        if definition:
            result.append(Block(definition, (0, 0, 0, 4)))

    return result


class TerminalInterface(Interface):
    """Simple terminal interface without colors."""

    @override
    def print(self, text: Element | str) -> None:
        print(self.construct(text))

    def construct(self, element: Element | str) -> str:
        """Construct string from element."""

        if isinstance(element, str):
            return element

        if isinstance(element, Text):
            return "".join(self.construct(x) for x in element.elements)

        # Ignore block margins in terminal interface.
        if isinstance(element, Block):
            return self.construct(element.text)

        # Ignore colors and formatting in terminal interface.
        if isinstance(element, (Colorized, Header)):
            return self.construct(element.text)

        if isinstance(element, Table):
            return table(element.columns, element.rows)

        raise ValueError(
            f"Unsupported text type in terminal interface `{type(element)}`."
        )


class RichInterface(TerminalInterface):
    """Terminal interface with colors and frames."""

    def __init__(self) -> None:
        self.console: Console = Console(highlight=False)

    @override
    def print(self, text: Element | str) -> None:
        self.console.print(self.construct_rich(text))

    def construct_rich(self, element: Element | str) -> RichCompatible | str:
        """Construct rich element from text."""

        if isinstance(element, str):
            return element

        if isinstance(element, Text):
            result: RichElementText = RichElementText()
            for sub_element in element.elements:
                sub_result = self.construct_rich(sub_element)
                if isinstance(sub_result, (RichElementText, str)):
                    result.append(sub_result)
                else:
                    result.append(self.construct(sub_element))
            return result

        if isinstance(element, Header):
            return RichElementPanel(self.construct(element.text))

        if isinstance(element, Colorized):
            rich_element: RichElementText = RichElementText(
                self.construct(element.text)
            )
            rich_element.stylize(element.color)
            return rich_element

        if isinstance(element, Block):
            return RichElementPadding(
                self.construct_rich(element.text), element.padding
            )

        if isinstance(element, Table):
            rich_table: RichElementTable = RichElementTable(box=box.ROUNDED)
            for column in element.columns:
                rich_table.add_column(column)
            for row in element.rows:
                rich_table.add_row(*row)
            return rich_table

        assert False, element


def get_interface(interface: str) -> Interface:
    """Get interface by its identifier."""

    match interface:
        case "terminal":
            return TerminalInterface()
        case "rich":
            return RichInterface()
        case _:
            raise ValueError(f"Unsupported interface: `{interface}`.")
