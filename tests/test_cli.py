"""Tests for CLI entry point."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest
import pytest_httpx
from click.testing import CliRunner

from pandemia import cache
from pandemia.cli import main
from pandemia.models import DATA_URL, DEFAULT_COUNTRIES, Settings, parse_dataset

from conftest import make_payload

DAYS = [("2021-03-01", 1.0), ("2021-03-02", 2.0), ("2021-03-03", 3.0)]


def _all_countries_payload() -> dict:
    return make_payload({c.code: DAYS for c in DEFAULT_COUNTRIES})


@pytest.fixture
def runner(tmp_path, monkeypatch) -> CliRunner:  # type: ignore[no-untyped-def]
    # Default settings use paths relative to the working directory
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def _write_cache(payload: dict) -> None:
    cache.write_dataset(Path("pkg/data/owid-covid-data.json"), parse_dataset(payload))


class TestCliRun:
    def test_uses_fresh_cache(self, runner, httpx_mock: pytest_httpx.HTTPXMock) -> None:  # type: ignore[no-untyped-def]
        _write_cache(_all_countries_payload())

        result = runner.invoke(main, [])

        assert result.exit_code == 0, result.output
        assert httpx_mock.get_requests() == []
        assert Path("pkg/charts/deaths.html").exists()
        assert "rendering daily deaths per million chart" in result.output
        assert "Danemarca" in result.output

    def test_downloads_when_missing(self, runner, httpx_mock: pytest_httpx.HTTPXMock) -> None:  # type: ignore[no-untyped-def]
        payload = _all_countries_payload()
        payload["FRA"] = {"data": []}
        httpx_mock.add_response(url=DATA_URL, json=payload)

        result = runner.invoke(main, ["--quiet"])

        assert result.exit_code == 0, result.output
        assert "cache missing" in result.output
        assert set(cache.read_dataset(Path("pkg/data/owid-covid-data.json"))) == {
            c.code for c in DEFAULT_COUNTRIES
        }
        assert "Daily deaths per million" not in result.output

    def test_missing_country_exits_nonzero(self, runner, httpx_mock: pytest_httpx.HTTPXMock) -> None:  # type: ignore[no-untyped-def]
        payload = _all_countries_payload()
        del payload["ITA"]
        httpx_mock.add_response(url=DATA_URL, json=payload)

        result = runner.invoke(main, [])

        assert result.exit_code == 1
        assert "missing: [ITA]" in result.output
        assert not Path("pkg/charts/deaths.html").exists()

    def test_server_error_exits_nonzero(self, runner, httpx_mock: pytest_httpx.HTTPXMock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=DATA_URL, status_code=500, text="boom")

        result = runner.invoke(main, [])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "boom" in result.output

    def test_only_last(self, runner, httpx_mock: pytest_httpx.HTTPXMock) -> None:  # type: ignore[no-untyped-def]
        _write_cache(_all_countries_payload())

        result = runner.invoke(main, ["--only-last", "2"])

        assert result.exit_code == 0, result.output
        assert "2021-03-02 → 2021-03-03 (2 days)" in result.output

    def test_negative_only_last_rejected(self, runner) -> None:  # type: ignore[no-untyped-def]
        result = runner.invoke(main, ["--only-last", "-1"])
        assert result.exit_code != 0


class TestCliCacheCommands:
    def test_cache_status(self, runner) -> None:  # type: ignore[no-untyped-def]
        _write_cache(_all_countries_payload())

        result = runner.invoke(main, ["--cache-status"])

        assert result.exit_code == 0
        assert "Cache files:" in result.output
        assert "fresh" in result.output
        assert "missing" in result.output  # no chart rendered yet

    def test_clear_cache(self, runner) -> None:  # type: ignore[no-untyped-def]
        _write_cache(_all_countries_payload())

        result = runner.invoke(main, ["--clear-cache"])

        assert result.exit_code == 0
        assert "Removed" in result.output
        assert not Path("pkg/data/owid-covid-data.json").exists()

    def test_clear_cache_nothing_to_do(self, runner) -> None:  # type: ignore[no-untyped-def]
        result = runner.invoke(main, ["--clear-cache"])
        assert result.exit_code == 0
        assert "No cache file found." in result.output

    def test_clear_cache_error_exits_nonzero(self, runner) -> None:  # type: ignore[no-untyped-def]
        Path("pkg/data/owid-covid-data.json").mkdir(parents=True)

        result = runner.invoke(main, ["--clear-cache"])

        assert result.exit_code == 1
        assert "Error: error removing data file" in result.output


class TestCliHttpClient:
    def test_default_timeout(self) -> None:
        assert Settings().timeout == 15.0

    def test_client_uses_timeout(self, runner, monkeypatch, httpx_mock: pytest_httpx.HTTPXMock) -> None:  # type: ignore[no-untyped-def]
        _write_cache(_all_countries_payload())
        real_client = httpx.Client
        seen: list[object] = []

        def recording_client(*args, **kwargs):  # type: ignore[no-untyped-def]
            seen.append(kwargs.get("timeout"))
            return real_client(*args, **kwargs)

        monkeypatch.setattr("pandemia.cli.httpx.Client", recording_client)

        result = runner.invoke(main, ["--quiet"])

        assert result.exit_code == 0, result.output
        assert seen == [15.0]

    def test_download_note_precedes_render(self, runner, httpx_mock: pytest_httpx.HTTPXMock) -> None:  # type: ignore[no-untyped-def]
        httpx_mock.add_response(url=DATA_URL, json=_all_countries_payload())

        result = runner.invoke(main, ["--quiet"])

        assert result.exit_code == 0, result.output
        assert result.output.index("Downloaded data from URL") < result.output.index(
            "rendering daily deaths per million chart"
        )
