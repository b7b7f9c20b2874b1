"""Small shared types: element kinds, text selections and live regions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Tuple, Union


class ElementType(Enum):
    """Kinds of element that can be navigated to."""

    Heading = "Heading"
    HeadingLevel1 = "HeadingLevel1"
    HeadingLevel2 = "HeadingLevel2"
    HeadingLevel3 = "HeadingLevel3"
    HeadingLevel4 = "HeadingLevel4"
    HeadingLevel5 = "HeadingLevel5"
    HeadingLevel6 = "HeadingLevel6"
    Button = "Button"
    Text = "Text"
    Table = "Table"
    TableCell = "TableCell"
    List = "List"
    ListItem = "ListItem"
    Video = "Video"
    Audio = "Audio"
    Link = "Link"
    Tab = "Tab"  # tabs inside a dialog


class Granularity(IntEnum):
    """Unit of text used for granular selections."""

    Char = 0
    Word = 1
    Sentence = 2
    Line = 3
    Paragraph = 4


Accessible = Tuple[str, str]
AriaAtomic = bool


@dataclass(frozen=True)
class IndexesSelection:
    """A text selection between two character offsets."""

    start: int
    end: int


@dataclass(frozen=True)
class GranularSelection:
    """A text selection of one unit around an offset."""

    index: int
    granularity: Granularity


TextSelectionArea = Union[IndexesSelection, GranularSelection]


class AriaLive(Enum):
    """Politeness of a live region."""

    Off = "off"
    Assertive = "assertive"
    Polite = "polite"


def parse_aria_live(value: str) -> Union[AriaLive, str]:
    """Return the matching :class:`AriaLive`, or the value itself if unknown."""
    if not isinstance(value, str):
        raise TypeError(f"aria-live value must be a string, got {value!r}")
    try:
        return AriaLive(value)
    except ValueError:
        return value