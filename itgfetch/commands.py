"""
Slash command registry.
Host-side adapter: holds command metadata, parses `key=value` arguments from a chat line
and runs the matching callback.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

CommandCallback = Callable[[Dict[str, str], str], Awaitable[Any]]

_KEY = re.compile(r"([A-Za-z_][\w-]*)=")
_BARE = re.compile(r"\S*")


class ArgumentType(str, Enum):
    STRING = "string"


@dataclass
class SlashCommandArgument:
    description: str
    type_list: List[ArgumentType] = field(default_factory=lambda: [ArgumentType.STRING])
    is_required: bool = False


@dataclass
class SlashCommandNamedArgument:
    name: str
    description: str
    type_list: List[ArgumentType] = field(default_factory=lambda: [ArgumentType.STRING])
    default_value: Optional[str] = None
    is_required: bool = False


@dataclass
class SlashCommand:
    name: str
    callback: CommandCallback
    aliases: List[str] = field(default_factory=list)
    named_arguments: List[SlashCommandNamedArgument] = field(default_factory=list)
    unnamed_arguments: List[SlashCommandArgument] = field(default_factory=list)
    returns: str = ""
    help_string: str = ""

    def with_defaults(self, named_args: Dict[str, str]) -> Dict[str, str]:
        merged = dict(named_args)
        for arg in self.named_arguments:
            if arg.default_value is not None and arg.name not in merged:
                merged[arg.name] = arg.default_value
        return merged

    def missing_arguments(self, named_args: Dict[str, str], unnamed: str) -> List[str]:
        missing = [arg.name for arg in self.named_arguments if arg.is_required and not named_args.get(arg.name)]
        if not unnamed and any(arg.is_required for arg in self.unnamed_arguments):
            missing.append("<text>")
        return missing

    async def invoke(self, named_args: Dict[str, str], unnamed: str = "") -> str:
        named_args = self.with_defaults(named_args)
        missing = self.missing_arguments(named_args, unnamed)
        if missing:
            return f"Error: /{self.name} requires " + ", ".join(missing)
        result = await self.callback(named_args, unnamed)
        return "" if result is None else str(result)

    def describe(self) -> dict:
        return {
            "name": self.name,
            "aliases": list(self.aliases),
            "returns": self.returns,
            "help": self.help_string,
            "arguments": [
                {
                    "name": arg.name,
                    "description": arg.description,
                    "types": [t.value for t in arg.type_list],
                    "default": arg.default_value,
                    "required": arg.is_required,
                }
                for arg in self.named_arguments
            ],
        }


def _scan_value(text: str, start: int) -> Tuple[str, int]:
    """Value beginning at text[start] and the index just past it."""
    if start >= len(text):
        return "", start

    opener = text[start]
    if opener in "\"'":
        end = text.find(opener, start + 1)
        if end == -1:
            return text[start + 1:], len(text)
        return text[start + 1:end], end + 1

    if opener in "{[":
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            c = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif c == "\\":
                    escaped = True
                elif c == '"':
                    in_string = False
                continue
            if c == '"':
                in_string = True
            elif c in "{[":
                depth += 1
            elif c in "}]":
                depth -= 1
                if depth == 0:
                    return text[start:i + 1], i + 1
        # unbalanced, let the JSON parser report it
        return text[start:], len(text)

    match = _BARE.match(text, start)
    return match.group(0), match.end()


def parse_named_args(text: str) -> Tuple[Dict[str, str], str]:
    """
    Split leading `key=value` tokens off a command line.

    JSON values (`{...}` or `[...]`) may contain spaces, as may quoted values.
    Everything from the first token that is not `key=value` is returned as the
    unnamed remainder.
    """
    named: Dict[str, str] = {}
    pos = 0
    while True:
        while pos < len(text) and text[pos].isspace():
            pos += 1
        match = _KEY.match(text, pos)
        if not match:
            break
        value, pos = _scan_value(text, match.end())
        named[match.group(1)] = value
    return named, text[pos:].strip()


class CommandParser:
    """Commands by name and alias, looked up case-insensitively."""

    def __init__(self):
        self._commands: Dict[str, SlashCommand] = {}
        self._lookup: Dict[str, str] = {}

    def add_command_object(self, command: SlashCommand):
        self._commands[command.name] = command
        for alias in [command.name, *command.aliases]:
            self._lookup[alias.lower()] = command.name
        logger.info("Slash command /%s registered.", command.name)

    def get(self, name: str) -> Optional[SlashCommand]:
        key = self._lookup.get(name.lstrip("/").lower())
        return self._commands.get(key) if key else None

    def commands(self) -> List[SlashCommand]:
        return list(self._commands.values())

    async def execute(self, text: str) -> str:
        parts = text.strip().split(maxsplit=1)
        if not parts:
            return "Error: Empty command"
        name = parts[0].lstrip("/")
        rest = parts[1] if len(parts) > 1 else ""

        command = self.get(name)
        if command is None:
            return f"Unknown command: /{name}"

        named, unnamed = parse_named_args(rest)
        return await command.invoke(named, unnamed)
