import json

import pytest

from clashview.cli import main as cli_main


@pytest.fixture
def run_cli(clean_env, monkeypatch):
    from rich.console import Console

    # Wide, colourless console so assertions see plain text
    console = Console(width=200, color_system=None, force_terminal=False)
    monkeypatch.setattr(cli_main, "console", console)

    def _run(*argv):
        cli = cli_main.ClashViewCLI()
        cli.formatter.console = console
        with console.capture() as captured:
            code = cli.run(list(argv))
        return code, captured.get()

    return _run


def test_show_renders_nodes(run_cli, subscription_path):
    code, out = run_cli("show", str(subscription_path))
    assert code == 0
    assert "HK 01" in out
    assert "chacha20-ietf-poly1305" in out
    assert "ClashView Extraction Report" in out


def test_show_verbose_lists_skipped(run_cli, subscription_path):
    code, out = run_cli("show", "--verbose", str(subscription_path))
    assert code == 0
    assert "Skipped line" in out
    assert "Broken" in out


def test_show_json(run_cli, subscription_path):
    code, out = run_cli("show", "--json", str(subscription_path))
    assert code == 0
    payload = json.loads(out)
    assert [n["name"] for n in payload[0]["nodes"]] == ["HK 01", "JP 01", "US 01"]
    assert payload[0]["skipped"][0]["missing"] == ["server"]


def test_show_empty_source_fails(run_cli, tmp_path):
    path = tmp_path / "plain.yaml"
    path.write_text("mode: rule\n", encoding="utf-8")
    code, out = run_cli("show", str(path))
    assert code == 1
    assert "No Clash nodes found" in out


def test_export_writes_yaml(run_cli, subscription_path, tmp_path):
    target = tmp_path / "nodes.yaml"
    code, _ = run_cli("export", str(subscription_path), "-o", str(target))
    assert code == 0
    assert target.read_text(encoding="utf-8").startswith("proxies:")


def test_flags_override_environment(run_cli, subscription_path):
    import os
    run_cli("--timeout", "4", "--insecure", "show", "--json", str(subscription_path))
    assert os.environ["CLASHVIEW_TIMEOUT"] == "4.0"
    assert os.environ["CLASHVIEW_VERIFY_SSL"] == "0"


def test_no_command_prints_help(run_cli):
    code, out = run_cli()
    assert code == 0


def test_malformed_timeout_is_reported(run_cli, clean_env, subscription_path):
    clean_env.setenv("CLASHVIEW_TIMEOUT", "abc")
    code, out = run_cli("show", str(subscription_path))
    assert code == 2
    assert "Configuration error" in out
    assert "CLASHVIEW_TIMEOUT" in out
