"""
Tests for the command-line entry point.
"""

import json

import pytest

from homevolt_scraper import run as run_mod
from homevolt_scraper.run import main, swap_labels
from homevolt_scraper import parse_html


@pytest.fixture
def page_url(tmp_path):
    page = tmp_path / "battery.html"
    page.write_text(
        "<html><body>Power: -300 W 01.00 kWh charged 0.50 kWh discharged</body></html>",
        encoding="utf-8",
    )
    return page.as_uri()


class TestMain:

    def test_text_output(self, clean_env, page_url, capsys):
        assert main(["--url", page_url]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["kWh charged: 1.000", "kWh discharged: 0.500", "power W: -300.0"]

    def test_json_output(self, clean_env, page_url, capsys):
        assert main(["--url", page_url, "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data == {"kWh_charged": 1.0, "kWh_discharged": 0.5, "power_w": -300.0, "source": page_url}

    def test_format_from_env(self, clean_env, page_url, capsys):
        clean_env.setenv("HOMEVOLT_FORMAT", "json")
        assert main(["--url", page_url]) == 0
        assert json.loads(capsys.readouterr().out)["kWh_charged"] == 1.0

    def test_swap_labels(self, clean_env, page_url, capsys):
        assert main(["--url", page_url, "--format", "json", "--swap-labels"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["kWh_charged"] == 0.5
        assert data["kWh_discharged"] == 1.0

    def test_appends_jsonl(self, clean_env, page_url, tmp_path, capsys):
        out_path = tmp_path / "out" / "readings.jsonl"
        assert main(["--url", page_url, "--output", str(out_path)]) == 0
        assert main(["--url", page_url, "--output", str(out_path)]) == 0
        lines = out_path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["power_w"] == -300.0

    def test_missing_fields_exit_code(self, clean_env, tmp_path, capsys):
        page = tmp_path / "empty.html"
        page.write_text("<p>State: Running</p>", encoding="utf-8")
        assert main(["--url", page.as_uri()]) == 1
        assert capsys.readouterr().out == ""

    def test_missing_file_exit_code(self, clean_env, tmp_path):
        assert main(["--url", (tmp_path / "nope.html").as_uri()]) == 1

    def test_bad_env_exit_code(self, clean_env):
        clean_env.setenv("HOMEVOLT_TIMEOUT", "soon")
        assert main([]) == 1

    def test_non_utf8_page(self, clean_env, tmp_path, capsys):
        page = tmp_path / "latin1.html"
        page.write_bytes("Z\xe4hler 1 kWh charged 2 kWh discharged".encode("latin-1"))
        assert main(["--url", page.as_uri(), "--format", "json"]) == 0
        assert json.loads(capsys.readouterr().out)["kWh_discharged"] == 2.0

    def test_render_flags_reach_fetcher(self, clean_env, monkeypatch, capsys):
        seen = {}

        class RecordingFetcher:
            def __init__(self, **kwargs):
                seen.update(kwargs)

            def fetch(self, url):
                return "1 kWh charged 2 kWh discharged"

        monkeypatch.setattr(run_mod, "PageFetcher", RecordingFetcher)
        assert main(["--url", "http://device/", "--wait-selector", "#charged", "--wait", "5"]) == 0
        assert seen["render"] is True
        assert seen["wait_selector"] == "#charged"
        assert seen["wait_s"] == 5.0

        assert main(["--url", "http://device/", "--no-render"]) == 0
        assert seen["render"] is False


class TestSwapLabels:

    def test_swaps_only_energy_counters(self):
        res = parse_html("Power: -300 W 01.00 kWh charged 0.50 kWh discharged", source="s")
        swapped = swap_labels(res)
        assert (swapped.charged_kwh, swapped.discharged_kwh) == (0.5, 1.0)
        assert swapped.power_w == -300.0
        assert swapped.source == "s"
