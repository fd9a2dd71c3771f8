"""
Shared fixtures for the extraction tests.
"""

import pytest

DASHBOARD_HTML = """<html><body>State: Running Setpoint: 300 W DischargePower: 290 W (290 VA)
Constraints: 6028 W discharge power available state: 3 alarms: 0
02.11 kWh charged 8.98 kWh discharged 229.2/231.3/230 V 49.975 Hz ID: INV0</body></html>"""

ENV_VARS = [
    "HOMEVOLT_URL",
    "HOMEVOLT_CHARGED_SELECTOR",
    "HOMEVOLT_DISCHARGED_SELECTOR",
    "HOMEVOLT_USER",
    "HOMEVOLT_PASS",
    "HOMEVOLT_TIMEOUT",
    "HOMEVOLT_MAX_RETRIES",
    "HOMEVOLT_WAIT",
    "HOMEVOLT_WAIT_SELECTOR",
    "HOMEVOLT_RENDER",
    "HOMEVOLT_FORMAT",
    "HOMEVOLT_OUTPUT",
    "HOMEVOLT_SWAP_LABELS",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every setting the package reads from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def dashboard_html():
    return DASHBOARD_HTML
