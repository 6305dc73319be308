"""Tests for the command-line interface."""

import json

import pytest

from vidscore import cli
from vidscore.cli import main, parse_manual_entry
from vidscore.config import reset_config
from vidscore.errors import ValidationError
from vidscore.history import HistoryStore

TRAILER = "Launch trailer,12000,300,40,2023"
TEASER = "Teaser, part 2,800,3,0,2025"


def test_parse_manual_entry_allows_commas_in_title():
    assert parse_manual_entry(TEASER) == ("Teaser, part 2", 800, 3, 0, 2025)


@pytest.mark.parametrize("entry", ["only,three,fields", "Title,1,2,3,soon"])
def test_parse_manual_entry_errors(entry):
    with pytest.raises(ValidationError):
        parse_manual_entry(entry)


def test_manual_analysis(capsys):
    assert main(["--manual", TRAILER, "--manual", TEASER]) == 0
    out = capsys.readouterr().out
    assert "Launch trailer" in out
    assert "Video #1 (" in out


def test_json_output(capsys):
    assert main(["--json", "--order", "asc", "-m", TRAILER, "-m", TEASER]) == 0
    data = json.loads(capsys.readouterr().out)
    scores = [d["normalizedScore"] for d in data]
    assert scores == sorted(scores)
    assert {d["policy"] for d in data} == {"feqt"}


def test_policy_and_no_recency(capsys):
    assert main(["-q", "--policy", "bayesian", "--no-recency", "-m", TRAILER]) == 0
    assert "Launch trailer | " in capsys.readouterr().out


def test_unknown_policy(capsys):
    assert main(["--policy", "nope", "-m", TRAILER]) == 1
    assert "Unknown scoring policy" in capsys.readouterr().err


def test_urls_use_default_fetcher(monkeypatch, capsys, fetcher):
    monkeypatch.setattr(cli, "get_default_fetcher", lambda: fetcher)
    code = main(
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=5s",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://www.youtube.com/shorts/aqz-KE-bpKQ",
        ]
    )
    captured = capsys.readouterr()

    assert code == 1
    assert "already in the catalog" in captured.err
    assert "Big Buck Bunny" in captured.out
    assert fetcher.calls == ["dQw4w9WgXcQ", "aqz-KE-bpKQ"]


def test_nothing_left_to_analyze(capsys):
    assert main(["--manual", "Bad,1,2"]) == 1
    err = capsys.readouterr().err
    assert "TITLE,VIEWS,LIKES,COMMENTS,YEAR" in err
    assert "No videos to analyze" in err


def test_no_input_is_a_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


def test_save_history_and_delete(tmp_path, capsys):
    history_file = tmp_path / "h.json"
    assert main(["--history-file", str(history_file), "--save", "Week 1", "-m", TRAILER]) == 0
    [snapshot] = HistoryStore(history_file).snapshots
    assert snapshot.name == "Week 1"
    capsys.readouterr()

    assert main(["--history-file", str(history_file), "--history"]) == 0
    assert snapshot.id in capsys.readouterr().out

    assert main(["--history-file", str(history_file), "--load", snapshot.id, "-q"]) == 0
    assert "Loaded: Week 1 (1 videos)" in capsys.readouterr().out

    assert main(["--history-file", str(history_file), "--delete", snapshot.id]) == 0
    assert len(HistoryStore(history_file)) == 0
    assert main(["--history-file", str(history_file), "--delete", snapshot.id]) == 1


def test_export_and_import(tmp_path, capsys):
    report = tmp_path / "report.json"
    assert main(["-o", str(report), "--name", "Weekly", "-m", TRAILER]) == 0
    data = json.loads(report.read_text())
    assert data["version"] == "1.0"
    assert data["analysis"]["name"] == "Weekly"
    assert data["analysis"]["showResults"] is True

    bad = tmp_path / "bad.json"
    bad.write_text("{}")
    capsys.readouterr()

    assert main(["--import", str(report), str(bad)]) == 1
    captured = capsys.readouterr()
    assert "Imported 1 analyses." in captured.out
    assert "Error processing bad.json" in captured.err
    assert [s.name for s in HistoryStore()] == ["Weekly"]


def test_export_all(tmp_path, capsys):
    assert main(["--export-all", str(tmp_path / "out")]) == 1
    assert "no saved analyses" in capsys.readouterr().err

    main(["--save", "A", "-m", TRAILER])
    main(["--save", "B", "-m", TEASER])
    assert main(["--export-all", str(tmp_path / "out")]) == 0
    assert len(list((tmp_path / "out").glob("*.json"))) == 2


def test_bare_output_name_goes_to_export_dir(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("VIDSCORE_EXPORT_DIR", str(tmp_path / "exports"))
    reset_config()

    assert main(["-o", "r.json", "-m", TRAILER]) == 0
    assert (tmp_path / "exports" / "r.json").exists()
    assert not (tmp_path / "r.json").exists()

    nested = tmp_path / "elsewhere" / "n.json"
    assert main(["-o", str(nested), "-m", TRAILER]) == 0
    assert nested.exists()


def test_export_all_defaults_to_export_dir(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("VIDSCORE_EXPORT_DIR", str(tmp_path / "exports"))
    reset_config()

    main(["--save", "A", "-m", TRAILER])
    assert main(["--export-all"]) == 0
    assert len(list((tmp_path / "exports").glob("A_*.json"))) == 1


def test_year_out_of_range(capsys):
    assert main(["-m", "Old clip,100,1,0,0"]) == 1
    assert "out of range" in capsys.readouterr().err

def test_policies(capsys):
    assert main(["--policies"]) == 0
    out = capsys.readouterr().out
    assert "feqt" in out
    assert "bayesian" in out
    assert "lower is better" in out


def test_status(capsys):
    assert main(["--status"]) == 0
    out = capsys.readouterr().out
    assert "youtube-api" in out
    assert "Policy:         feqt" in out
