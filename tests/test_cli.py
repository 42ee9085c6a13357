from __future__ import annotations

import json

import pytest

from suntimes import cli, compute
from suntimes.compute import UnknownCityError
from suntimes.models import ObserverContext, QueryInput

LONDON = ObserverContext(
    lat=51.5074, lng=-0.1278, tz_name="Europe/London", display_name="London"
)


@pytest.fixture
def queries(monkeypatch: pytest.MonkeyPatch) -> list[QueryInput]:
    """Isolate the CLI from .env files and the geocoder; record resolved queries."""
    seen: list[QueryInput] = []

    def fake_resolve(query: QueryInput, user_agent: str) -> ObserverContext:
        seen.append(query)
        return LONDON

    for name in ("SUNTIME_LAT", "SUNTIME_LONG", "SUNTIME_CITY", "SUNTIME_WIDTH", "SUNTIME_HEIGHT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    monkeypatch.setattr(cli, "resolve_observer", fake_resolve)
    return seen


def test_human_is_the_default(queries, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--lat", "51.5", "--long", "-0.1"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    assert "🌅" in lines[0] and "🌇" in lines[0]
    assert queries == [QueryInput(lat=51.5, lng=-0.1)]


def test_csv_next_days(queries, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--city", "London", "--format", "csv", "next", "3"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert all(len(line.split(",")) == 5 for line in lines)
    assert queries == [QueryInput(city="London")]


def test_json_week(queries, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["-c", "London", "-f", "json", "week"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert len(payload) == 7
    assert set(payload[0]) == {"sunrise", "noon", "sunset"}


def test_plot_prints_sunsets_then_sunrises(queries, capsys: pytest.CaptureFixture[str]) -> None:
    argv = ["-c", "London", "-f", "plot", "--width", "20", "--height", "4", "last", "10"]
    assert cli.main(argv) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 10
    assert all(len(line) == 10 + 1 + 20 for line in lines)
    assert lines[2].strip().startswith("Sunsets")
    assert lines[7].strip().startswith("Sunrises")


def test_plot_labels_follow_language(queries, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["-c", "Busan", "-f", "plot", "--lang", "ko", "--height", "4", "next", "5"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 10
    assert len(lines[0]) == 10 + 1 + 120
    assert lines[2].strip().startswith("일몰")
    assert lines[7].strip().startswith("일출")


def test_plot_of_one_day_is_an_error(queries, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["-c", "London", "-f", "plot", "today"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "at least two days" in captured.err


def test_environment_location_fallback(
    queries, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("SUNTIME_LAT", "35.17")
    monkeypatch.setenv("SUNTIME_LONG", "129.07")
    assert cli.main([]) == 0
    assert queries == [QueryInput(lat=35.17, lng=129.07)]


def test_location_errors_exit_nonzero(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fail(query, user_agent):
        raise UnknownCityError("Unknown city Atlantis")

    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    monkeypatch.setattr(cli, "resolve_observer", fail)
    assert cli.main(["-c", "Atlantis"]) == 1
    assert "Unknown city Atlantis" in capsys.readouterr().err


def test_missing_location(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    for name in ("SUNTIME_LAT", "SUNTIME_LONG", "SUNTIME_CITY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    assert cli.main([]) == 1
    assert "No location" in capsys.readouterr().err


def test_rejects_non_positive_sizes(queries, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        cli.main(["--width", "0", "week"])
    assert "positive" in capsys.readouterr().err

def test_next_zero_is_today_only(queries, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["-c", "London", "-f", "csv", "next", "0"]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 1


@pytest.mark.parametrize("argv", [["next", "-1"], ["last", "0"]])
def test_rejects_out_of_range_day_counts(
    queries, argv: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit):
        cli.main(["-c", "London", *argv])
    assert queries == []


def test_ambiguous_city_exits_nonzero_with_candidates(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    candidates = [
        {"lat": "51.5073", "lon": "-0.1276", "display_name": "London, England"},
        {"lat": "42.9836", "lon": "-81.2497", "display_name": "London, Ontario"},
    ]

    class _Response:
        def raise_for_status(self) -> None:
            pass

        def json(self):
            return candidates

    for name in ("SUNTIME_LAT", "SUNTIME_LONG", "SUNTIME_CITY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    monkeypatch.setattr(compute.httpx, "get", lambda *a, **kw: _Response())
    assert cli.main(["--city", "London", "today"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Multiple cities matched 'London'" in captured.err
    assert "London, England" in captured.err
    assert "London, Ontario" in captured.err
