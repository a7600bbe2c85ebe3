"""Tests for the mangadex CLI."""

import json
from unittest.mock import patch

import pytest

from mangadex import cli
from mangadex.clients.base import APIError, RateLimitError
from mangadex.extension import MangaDexExtension


@pytest.fixture
def run_cli(routed_gateway, capsys):
    """Run the CLI against a routed gateway and return (exit_code, stdout, stderr)."""

    def run(argv, routes=None):
        gateway = routed_gateway(routes)
        with (
            patch.object(cli, "get_extension", return_value=MangaDexExtension(gateway)),
            patch.object(cli, "setup_logging"),
        ):
            code = cli.main(argv)
        captured = capsys.readouterr()
        return code, captured.out, captured.err, gateway

    return run


class TestCli:
    """Test suite for the CLI commands."""

    def test_no_command_prints_help(self, run_cli):
        code, out, _, _ = run_cli([])

        assert code == 1
        assert "usage: mangadex" in out

    def test_search(self, run_cli, manga_factory):
        """Test search output and options."""
        code, out, _, gateway = run_cli(
            ["search", "frieren", "--limit", "2", "--safe", "--order", "followedCount:asc"],
            {"/manga": {"data": [manga_factory("m1")]}},
        )

        assert code == 0
        assert [m["id"] for m in json.loads(out)] == ["m1"]
        _, params, _ = gateway.calls[0]
        assert params["title"] == "frieren"
        assert params["limit"] == 2
        assert params["contentRating"] == ["safe", "suggestive"]
        assert params["order"] == {"followedCount": "asc"}

    def test_search_without_results_warns(self, run_cli):
        code, out, err, _ = run_cli(["search", "zzz"], {"/manga": {"data": []}})

        assert code == 0
        assert json.loads(out) == []
        assert "No manga found" in err

    def test_order_defaults_to_desc(self):
        assert cli._parse_order("year") == {"year": "desc"}

    @pytest.mark.parametrize("value", [":desc", "year:up"])
    def test_invalid_order_rejected(self, value, run_cli):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(["search", "x", "--order", value])

        assert exc_info.value.code == 2

    def test_explore(self, run_cli, manga_factory):
        code, out, _, _ = run_cli(["explore", "--limit", "1"], {"/manga": {"data": [manga_factory("m1")]}})

        assert code == 0
        result = json.loads(out)
        assert set(result) == {"Latest Manga", "Most Followed Manga"}

    def test_info_not_found(self, run_cli):
        code, out, err, _ = run_cli(["info", "m1"], {"/manga/m1": {"result": "ok"}})

        assert code == 0
        assert json.loads(out) is None
        assert "not found" in err

    def test_chapters(self, run_cli):
        code, out, _, gateway = run_cli(
            ["chapters", "m1", "--language", "es", "--page", "2", "--limit", "5"],
            {"/manga/m1/feed": {"data": [{"id": "ch6"}]}},
        )

        assert code == 0
        assert json.loads(out) == [{"id": "ch6"}]
        _, params, _ = gateway.calls[0]
        assert params["offset"] == 5
        assert params["translatedLanguage"] == ["es"]

    def test_reader(self, run_cli):
        code, out, _, _ = run_cli(
            ["reader", "ch1", "--data-saver"],
            {"/at-home/server/ch1": {"baseUrl": "https://x", "chapter": {"hash": "h", "dataSaver": ["1.jpg"]}}},
        )

        assert code == 0
        assert json.loads(out) == ["https://x/data-saver/h/1.jpg"]

    @pytest.mark.parametrize("failure, message", [(APIError(503), "API Error: 503"), (RateLimitError(), "RATE_LIMITED")])
    def test_api_failures_exit_nonzero(self, failure, message, run_cli):
        code, _, err, gateway = run_cli(["info", "m1"], {"/manga/m1": failure})

        assert code == 1
        assert message in err
        assert gateway.closed is True
