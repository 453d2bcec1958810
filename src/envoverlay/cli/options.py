"""
Options shared by several commands.
"""

from enum import Enum

import typer


class InputFormat(str, Enum):
    toml = "toml"
    yaml = "yaml"
    json = "json"


class OutputFormat(str, Enum):
    yaml = "yaml"
    json = "json"


def config_path_argument():
    return typer.Argument(None, help="Configuration file (default: Config.toml in the current directory)")


def input_format_option():
    return typer.Option(None, "--input-format", "-i", help="Document format (default: from the file suffix)")
