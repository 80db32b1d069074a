import json
from pathlib import Path

import pytest

from tabnav import cli


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_env_flag_reads_truthy_values_and_defaults(monkeypatch):
    monkeypatch.delenv("TABNAV_TEST_FLAG", raising=False)
    assert cli._env_flag("TABNAV_TEST_FLAG", default=False) is False
    assert cli._env_flag("TABNAV_TEST_FLAG", default=True) is True

    monkeypatch.setenv("TABNAV_TEST_FLAG", "yes")
    assert cli._env_flag("TABNAV_TEST_FLAG", default=False) is True

    monkeypatch.setenv("TABNAV_TEST_FLAG", "0")
    assert cli._env_flag("TABNAV_TEST_FLAG", default=True) is False


def test_parse_args_collects_flags_and_words():
    opts = cli.parse_args(["tabnav", "classify", "--json", "--config=cfg.json", "gh", "tab", "--", "--not-a-flag"])

    assert opts["command"] == "classify"
    assert opts["json"] is True
    assert opts["config"] == "cfg.json"
    assert opts["words"] == ["gh", "tab", "--not-a-flag"]


def test_parse_args_rejects_unknown_command_and_options(capsys):
    for argv in (["tabnav", "launch"], ["tabnav", "classify", "--bogus"], ["tabnav", "place", "--policy"]):
        with pytest.raises(SystemExit) as exc:
            cli.parse_args(argv)
        assert exc.value.code == 2

    err = capsys.readouterr().err
    assert "unknown command: launch" in err
    assert "unknown option: --bogus" in err
    assert "--policy requires a value" in err
    assert "usage: tabnav" in err


def test_place_missing_or_bad_numbers_exit_with_usage_status(capsys):
    for argv in (
        ["tabnav", "place", "--index", "1"],
        ["tabnav", "place", "--policy", "next", "--index", "1", "--id", "4", "--count", "5"],
        ["tabnav", "place", "--policy", "next", "--index", "one", "--id", "4", "--count", "5", "--version", "60"],
    ):
        with pytest.raises(SystemExit) as exc:
            cli.main(argv)
        assert exc.value.code == 2

    err = capsys.readouterr().err
    assert "--policy is required" in err
    assert "--version is required" in err
    assert "--index must be an integer: one" in err


def test_classify_bare_domain_with_defaults(capsys):
    assert cli.main(["tabnav", "classify", "example.com"]) == 0

    assert capsys.readouterr().out == "url\thttp://example.com/\n"


def test_classify_default_search_uses_configured_engine(capsys):
    assert cli.main(["tabnav", "classify", "hello", "world"]) == 0

    assert capsys.readouterr().out == "searchurl\thttps://www.google.com/search?q=hello%20world\n"


def test_classify_json_with_config_file(tmp_path: Path, capsys):
    cfg = _write(tmp_path / "config.json", {"searchurls": {"gh": "https://github.com/search?q="}})

    assert cli.main(["tabnav", "classify", "--config", str(cfg), "--json", "gh", "x"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"kind": "searchurl", "alias": "gh", "href": "https://github.com/search?q=x"}


def test_classify_reads_config_path_from_env(tmp_path: Path, monkeypatch, capsys):
    cfg = _write(tmp_path / "config.json", {"searchengine": "", "newtab": ""})
    monkeypatch.setenv("TABNAV_CONFIG_PATH", str(cfg))

    assert cli.main(["tabnav", "classify", "hello"]) == 0

    assert capsys.readouterr().out == "default_search\thello\n"


def test_classify_with_engines_file(tmp_path: Path, capsys):
    engines = _write(tmp_path / "engines.json", [{"alias": "g", "name": "Google"}, {"name": ""}])

    assert cli.main(["tabnav", "classify", "--engines", str(engines), "g", "cats"]) == 0

    assert capsys.readouterr().out == "engine\tGoogle\tcats\n"


def test_missing_config_exits_with_usage_status(tmp_path: Path, capsys):
    assert cli.main(["tabnav", "classify", "--config", str(tmp_path / "nope.json"), "x"]) == 2

    assert "Config not found" in capsys.readouterr().err


def test_place_last_and_related_next(capsys):
    assert cli.main(["tabnav", "place", "--policy", "last", "--index", "1", "--id", "4", "--count", "5", "--version", "60"]) == 0
    assert capsys.readouterr().out == "index=5\n"

    argv = ["tabnav", "place", "--policy=next", "--related", "--index=1", "--id=4", "--count=5", "--version=57", "--json"]
    assert cli.main(argv) == 0
    assert json.loads(capsys.readouterr().out) == {"index": 2, "openerTabId": 4}


def test_place_rejects_bad_policy(capsys):
    argv = ["tabnav", "place", "--policy", "middle", "--index", "1", "--id", "4", "--count", "5", "--version", "60"]

    assert cli.main(argv) == 2
    assert "error:" in capsys.readouterr().err


def test_open_dry_run_prints_urls(capsys):
    assert cli.main(["tabnav", "open", "--dry-run", "example.com"]) == 0
    assert capsys.readouterr().out == "http://example.com/\n"

    assert cli.main(["tabnav", "open", "--dry-run", "--new-tab", "example.com"]) == 0
    assert capsys.readouterr().out == "http://example.com/\n"


def test_open_default_search_without_configured_engine(tmp_path: Path, capsys):
    cfg = _write(tmp_path / "config.json", {"searchengine": ""})

    assert cli.main(["tabnav", "open", "--dry-run", "--config", str(cfg), "hello", "world"]) == 0

    assert capsys.readouterr().out == "https://duckduckgo.com/?q=hello%20world\n"


def test_open_engine_without_url_uses_matching_searchurl(tmp_path: Path, capsys):
    engines = _write(tmp_path / "engines.json", [{"alias": "b", "name": "Bing"}, {"alias": "x", "name": "Nowhere"}])

    assert cli.main(["tabnav", "open", "--dry-run", "--engines", str(engines), "b", "cats"]) == 0
    assert capsys.readouterr().out == "https://www.bing.com/search?q=cats\n"

    assert cli.main(["tabnav", "open", "--dry-run", "--engines", str(engines), "x", "cats"]) == 2
    assert "error: no search URL for engine Nowhere" in capsys.readouterr().err


def test_verbose_logs_to_stderr(monkeypatch, capsys):
    monkeypatch.setattr(cli, "VERBOSE", False)

    assert cli.main(["tabnav", "--verbose", "classify", "example.com"]) == 0

    err = capsys.readouterr().err
    assert "[tabnav]" in err
    assert "classified as url" in err
