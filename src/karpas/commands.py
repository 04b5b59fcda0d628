"""Player commands consumed once per tick."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Union


class Command(str, Enum):
    """Discrete player input for one tick."""

    NONE = "none"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    HOLD = "hold"


CommandInput = Union[None, Command, str, Iterable[Union[Command, str]]]


def normalize_commands(commands: CommandInput) -> Command:
    """Collapse the queued input for a tick into a single command.

    ``None`` means idle.  When several commands are queued the last one that
    is not :attr:`Command.NONE` wins.

    Raises:
        ValueError: For strings that do not name a command.
    """

    if commands is None:
        return Command.NONE
    if isinstance(commands, (Command, str)):
        return Command(commands)
    chosen = Command.NONE
    for command in commands:
        command = Command(command)
        if command is not Command.NONE:
            chosen = command
    return chosen
