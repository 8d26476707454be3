"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from skycast.config.schema import SkycastConfig

FIXTURE_DIR = Path(__file__).parent / "fixtures"

LOCATION_URL = "https://test-weather.example.com/api/v1/p/redux-dal"
FORECAST_URL = "https://test-weather.example.com/weather/today/l"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def today_markup() -> str:
    return (FIXTURE_DIR / "today_page_gary.html").read_text(encoding="utf-8")


@pytest.fixture
def gary_search() -> dict:
    with open(FIXTURE_DIR / "location_search_gary.json") as f:
        return json.load(f)


@pytest.fixture
def springfield_search() -> dict:
    with open(FIXTURE_DIR / "location_search_springfield.json") as f:
        return json.load(f)


@pytest.fixture
def test_config() -> SkycastConfig:
    """Config pointing every endpoint at the mocked test host."""
    return SkycastConfig(
        endpoints={"location_url": LOCATION_URL, "forecast_url": FORECAST_URL},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "endpoints": {"location_url": LOCATION_URL, "forecast_url": FORECAST_URL},
        "extraction": {"outlook_horizon": 3},
        "display": {"max_choices": 2},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
