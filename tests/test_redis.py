"""Tests for the Redis executor."""

import pytest

from db_console.adapters.redis.commands import parse_command
from db_console.adapters.redis.executor import RedisQueryExecutor, normalize_reply
from db_console.core.errors import QueryExecutionError
from db_console.core.models import DatabaseType


@pytest.fixture
def connection(connection_for):
    return connection_for(DatabaseType.REDIS)


@pytest.fixture
def executor():
    return RedisQueryExecutor()


def test_parse_command_splits_on_whitespace_runs():
    command = parse_command("  hset   user:1  name\tAda ")

    assert command.name == "HSET"
    assert command.args == ["user:1", "name", "Ada"]


def test_normalize_scalar():
    payload = normalize_reply(3)
    assert payload.data == [{"value": 3}]
    assert payload.columns == ["value"]
    assert payload.row_count == 1


def test_normalize_list():
    payload = normalize_reply(["a", "b"])
    assert payload.data == [{"value": "a"}, {"value": "b"}]
    assert payload.columns == ["value"]
    assert payload.row_count == 2


def test_normalize_mapping():
    payload = normalize_reply({"name": "Ada", "lang": "en"})
    assert payload.data == [{"name": "Ada", "lang": "en"}]
    assert payload.columns == ["name", "lang"]
    assert payload.row_count == 1


@pytest.mark.anyio
async def test_set_rejoins_value_tokens(redis_server, executor, connection) -> None:
    payload = await executor.run(connection, "SET k v1 v2")

    assert redis_server.strings["k"] == "v1 v2"
    assert payload.data == [{"value": "OK"}]


@pytest.mark.anyio
async def test_get_missing_key(redis_server, executor, connection) -> None:
    payload = await executor.run(connection, "GET missing")

    assert payload.data == [{"value": None}]
    assert payload.columns == ["value"]
    assert payload.row_count == 1


@pytest.mark.anyio
async def test_command_name_is_case_insensitive(redis_server, executor, connection) -> None:
    redis_server.strings["greeting"] = "hello"

    payload = await executor.run(connection, "get greeting")

    assert payload.data == [{"value": "hello"}]


@pytest.mark.anyio
async def test_del_is_variadic(redis_server, executor, connection) -> None:
    redis_server.strings.update({"a": "1", "b": "2", "c": "3"})

    payload = await executor.run(connection, "DEL a b")

    assert payload.data == [{"value": 2}]
    assert set(redis_server.strings) == {"c"}


@pytest.mark.anyio
async def test_keys_defaults_to_all(redis_server, executor, connection) -> None:
    redis_server.strings.update({"user:1": "a", "user:2": "b", "order:1": "c"})

    everything = await executor.run(connection, "KEYS")
    users = await executor.run(connection, "KEYS user:*")

    assert everything.row_count == 3
    assert users.data == [{"value": "user:1"}, {"value": "user:2"}]


@pytest.mark.anyio
async def test_hash_commands(redis_server, executor, connection) -> None:
    await executor.run(connection, "HSET user:1 name Ada")
    await executor.run(connection, "HSET user:1 lang en")

    whole = await executor.run(connection, "HGETALL user:1")
    single = await executor.run(connection, "HGET user:1 name")

    assert whole.data == [{"name": "Ada", "lang": "en"}]
    assert whole.columns == ["name", "lang"]
    assert single.data == [{"value": "Ada"}]


@pytest.mark.anyio
async def test_hgetall_missing_key_is_one_empty_record(redis_server, executor, connection) -> None:
    payload = await executor.run(connection, "HGETALL nothing")

    assert payload.data == [{}]
    assert payload.columns == []
    assert payload.row_count == 1


@pytest.mark.anyio
async def test_unsupported_command_names_it(redis_server, executor, connection) -> None:
    with pytest.raises(QueryExecutionError, match="FOO"):
        await executor.run(connection, "FOO bar")


@pytest.mark.anyio
async def test_missing_arguments(redis_server, executor, connection) -> None:
    with pytest.raises(QueryExecutionError, match="HGET"):
        await executor.run(connection, "HGET only-key")


@pytest.mark.anyio
@pytest.mark.parametrize("query", ["GET k", "FOO bar", "HSET k"])
async def test_client_released_once(redis_server, executor, connection, query) -> None:
    try:
        await executor.run(connection, query)
    except QueryExecutionError:
        pass

    assert len(redis_server.clients) == 1
    assert redis_server.clients[0].closed == 1


@pytest.mark.anyio
async def test_client_options(redis_server, executor, connection) -> None:
    await executor.check(connection)

    options = redis_server.clients[0].options
    assert options["host"] == "localhost"
    assert options["port"] == 6379
    assert options["password"] == "secret"
    assert options["decode_responses"] is True
    assert redis_server.clients[0].closed == 1
