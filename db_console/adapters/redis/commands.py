"""
Key-value command table.

Maps console command names to redis-py calls. Token 0 of the command line,
upper-cased, selects the entry; the remaining tokens are positional
arguments.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List

from redis.asyncio import Redis

from db_console.core.errors import QueryExecutionError


@dataclass(frozen=True)
class CommandLine:
    name: str
    args: List[str]


@dataclass(frozen=True)
class CommandSpec:
    min_args: int
    call: Callable[[Redis, List[str]], Awaitable[Any]]


async def _set(client: Redis, args: List[str]) -> Any:
    result = await client.set(args[0], " ".join(args[1:]))
    return "OK" if result is True else result


COMMANDS: Dict[str, CommandSpec] = {
    "GET": CommandSpec(1, lambda c, a: c.get(a[0])),
    "SET": CommandSpec(1, _set),
    "DEL": CommandSpec(1, lambda c, a: c.delete(*a)),
    "KEYS": CommandSpec(0, lambda c, a: c.keys(a[0] if a else "*")),
    "HGETALL": CommandSpec(1, lambda c, a: c.hgetall(a[0])),
    "HGET": CommandSpec(2, lambda c, a: c.hget(a[0], a[1])),
    "HSET": CommandSpec(3, lambda c, a: c.hset(a[0], a[1], a[2])),
}


def parse_command(text: str) -> CommandLine:
    """
    Tokenize a command line on runs of whitespace.

    Raises:
        QueryExecutionError: If the line is blank
    """
    parts = text.split()
    if not parts:
        raise QueryExecutionError("empty Redis command")
    return CommandLine(name=parts[0].upper(), args=parts[1:])


def resolve_command(command: CommandLine) -> CommandSpec:
    """
    Look up the command table entry for a parsed command line.

    Raises:
        QueryExecutionError: If the command is not supported or lacks arguments
    """
    spec = COMMANDS.get(command.name)
    if spec is None:
        raise QueryExecutionError(f"unsupported Redis command: {command.name}")
    if len(command.args) < spec.min_args:
        raise QueryExecutionError(f"wrong number of arguments for '{command.name}' command")
    return spec
