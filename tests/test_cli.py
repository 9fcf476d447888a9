"""
Tests for the command line

Run with: python -m pytest tests/test_cli.py -v
"""

import pytest

from redis.exceptions import ConnectionError as RedisConnectionError

from kv_helpers import cli
from kv_helpers.cache.store import RedisStore


@pytest.fixture
def patched_store(monkeypatch, store_config, client_factory):
    """Make the CLI build its store on top of the mock client."""
    monkeypatch.setattr(
        cli, "RedisStore", lambda: RedisStore(config=store_config, client_factory=client_factory)
    )


class TestParseArgs:
    """Test parse_args()."""

    def test_get(self):
        args = cli.parse_args(["get", "visits"])
        assert args.command == "get"
        assert args.key == "visits"

    def test_set_with_ttl(self):
        args = cli.parse_args(["--prefix", "app_", "set", "visits", "10", "--ttl", "60"])
        assert (args.key, args.value, args.ttl) == ("visits", "10", 60)
        assert args.prefix == "app_"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.parse_args([])


class TestMain:
    """Test main() end to end against the mock client."""

    def test_get(self, patched_store, redis_client, capsys):
        redis_client.get.return_value = "10"

        assert cli.main(["get", "visits"]) == 0
        assert "10" in capsys.readouterr().out.splitlines()
        redis_client.get.assert_awaited_once_with("lb_visits")

    def test_set_with_ttl(self, patched_store, redis_client, capsys):
        redis_client.set.return_value = True

        assert cli.main(["set", "visits", "10", "--ttl", "60"]) == 0
        assert "OK" in capsys.readouterr().out.splitlines()
        redis_client.set.assert_awaited_once_with("lb_visits", "10", nx=True, ex=60)

    def test_keys_are_cleaned(self, patched_store, redis_client, capsys):
        redis_client.keys.return_value = ["lb_a", "lb_b"]

        assert cli.main(["keys", "*"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert "a" in lines and "b" in lines

    def test_prefix_option(self, patched_store, redis_client):
        redis_client.delete.return_value = 1
        redis_client.keys.return_value = ["app_a"]

        assert cli.main(["--prefix", "app_", "clean", "a*"]) == 0
        redis_client.keys.assert_awaited_once_with("app_a*")

    def test_info(self, patched_store, redis_client, capsys):
        redis_client.info.return_value = {"redis_version": "7.2.4"}

        assert cli.main(["info"]) == 0
        assert "redis_version: 7.2.4" in capsys.readouterr().out.splitlines()

    def test_malformed_url_exits_with_one(self, monkeypatch, store_config):
        def factory(config):
            raise ValueError("Redis URL must specify one of the following schemes")

        monkeypatch.setattr(
            cli, "RedisStore", lambda: RedisStore(config=store_config, client_factory=factory)
        )

        assert cli.main(["--url", "nonsense://host", "info"]) == 1

    def test_connection_failure_exits_with_one(self, patched_store, redis_client):
        redis_client.ping.side_effect = RedisConnectionError("refused")

        assert cli.main(["info"]) == 1
        redis_client.aclose.assert_awaited()
