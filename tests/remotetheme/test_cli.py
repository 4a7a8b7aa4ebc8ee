"""
Tests for the remote-theme command line interface.
"""

import pytest

from remotetheme import cli

from conftest import FakeResponse, build_zip


def test_resolves_theme(fake_http, capsys):
    """Test that the CLI prints each theme with its resolved root."""
    fake_http(FakeResponse(body=build_zip({"site-theme-v2.0/index.html": "hi"})))

    exit_code = cli.main(["--builtin-extractor", "acme/site-theme@v2.0"])

    assert exit_code == 0
    name, root = capsys.readouterr().out.strip().split("\t")
    assert name == "acme/site-theme"
    assert root.endswith("site-theme-v2.0")


def test_download_failure_exit_code(fake_http, capsys):
    """Test that a failed download exits with status 1."""
    fake_http(FakeResponse(status_code=404, reason="Not Found"))

    exit_code = cli.main(["--builtin-extractor", "acme/site-theme"])

    assert exit_code == 1
    assert "404 Not Found" in capsys.readouterr().err


def test_invalid_theme(capsys):
    """Test that a malformed theme string is reported as an error."""
    assert cli.main(["nope"]) == 1
    assert "not a valid remote theme" in capsys.readouterr().err


def test_config_file_and_timeout(fake_http, tmp_path):
    """Test that --config and --timeout are both applied."""
    config_path = tmp_path / "remote_theme.toml"
    config_path.write_text('[remote_theme]\nextractor = "builtin"\nnetwork_timeout = 30\n')
    calls = fake_http(FakeResponse(body=build_zip({"site-theme-HEAD/index.html": "hi"})))

    assert cli.main(["--config", str(config_path), "--timeout", "3", "acme/site-theme"]) == 0
    assert calls[0]["timeout"] == 3.0


def test_missing_theme_argument():
    """Test that omitting the theme argument is a usage error."""
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2
