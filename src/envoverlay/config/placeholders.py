"""
Environment placeholder recognition.

A placeholder is a string value that is, in its entirety, one of:

    <<ENV:NAME>>     required - the variable must be set
    <<ENV?:NAME>>    optional - the field is dropped when the variable is unset

NAME is one or more of [A-Za-z0-9_]. Placeholders embedded in a longer
string are ordinary literals.
"""

import re
from dataclasses import dataclass
from typing import Any

REQUIRED_PATTERN = re.compile(r"<<ENV:([A-Za-z0-9_]+)>>")
OPTIONAL_PATTERN = re.compile(r"<<ENV\?:([A-Za-z0-9_]+)>>")


@dataclass(frozen=True)
class Placeholder:
    """A recognized placeholder: the variable name and whether it must be set."""

    name: str
    required: bool

    @property
    def mode(self) -> str:
        return "required" if self.required else "optional"

    def __str__(self) -> str:
        marker = "ENV" if self.required else "ENV?"
        return f"<<{marker}:{self.name}>>"


def classify(value: Any) -> Placeholder | None:
    """
    Classify a value as a placeholder.

    Args:
        value: Any leaf value from a configuration tree

    Returns:
        Placeholder if the whole value is a placeholder, None otherwise
    """
    if not isinstance(value, str):
        return None
    match = REQUIRED_PATTERN.fullmatch(value)
    if match:
        return Placeholder(match.group(1), required=True)
    match = OPTIONAL_PATTERN.fullmatch(value)
    if match:
        return Placeholder(match.group(1), required=False)
    return None
