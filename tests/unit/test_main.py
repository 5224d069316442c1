import json
from unittest.mock import Mock, patch

import pytest
import requests

from vitehelper.main import build_parser, main

FIXTURES_URL = "https://example.com/wp-content/plugins/my-plugin/"


@pytest.fixture
def config_file(tmp_path, fixtures_path) -> str:
    path = tmp_path / "vitehelper.toml"
    path.write_text(
        f"""
[vite]
slug = "my-plugin"
base_url = "{FIXTURES_URL}"
base_path = "{fixtures_path}"
build_dir = ""
"""
    )
    return str(path)


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


@patch("vitehelper.probe.requests.get", side_effect=requests.ConnectionError("refused"))
def test_resolve_production(mock_get, config_file, capsys):
    assert main(["--config-file", config_file, "resolve", "src/front.js"]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output == {
        "mode": "manifest",
        "live": False,
        "script": FIXTURES_URL + "/assets/front-789abc.js",
        "styles": [
            FIXTURES_URL + "/assets/front-a.css",
            FIXTURES_URL + "/assets/front-b.css",
        ],
    }


@patch("vitehelper.probe.requests.get", return_value=Mock(status_code=200))
def test_resolve_dev_server(mock_get, config_file, capsys):
    assert main(["--config-file", config_file, "resolve", "/src/front.js"]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["live"] is True
    assert output["script"] == "http://localhost:5173/src/front.js"
    assert output["vite_client"] == "http://localhost:5173/@vite/client"
    assert output["styles"] == []


@patch("vitehelper.probe.requests.get", return_value=Mock(status_code=404))
def test_probe_down(mock_get, config_file, capsys):
    assert main(["--config-file", config_file, "probe"]) == 1
    assert capsys.readouterr().out.strip() == "down"


@patch("vitehelper.probe.requests.get", return_value=Mock(status_code=200))
def test_probe_live(mock_get, config_file, capsys):
    assert main(["--config-file", config_file, "probe"]) == 0
    assert capsys.readouterr().out.strip() == "live"


def test_check_valid_manifest(config_file, capsys):
    assert main(["--config-file", config_file, "check"]) == 0
    assert "4 entries" in capsys.readouterr().out


def test_check_malformed_manifest(config_file, fixtures_path, capsys):
    with open(fixtures_path + "manifest.json", "w") as f:
        f.write("{oops")

    assert main(["--config-file", config_file, "check"]) == 1
    assert "not valid JSON" in capsys.readouterr().err


def test_missing_config_file(tmp_path):
    assert main(["--config-file", str(tmp_path / "missing.toml"), "probe"]) == 2
