"""Screen reader modes."""

from enum import Enum


class ScreenReaderMode(Enum):
    """The mode the screen reader is operating in."""

    Focus = 1
    Browse = 2