from __future__ import annotations

import pytest

from almanac.config import EngineConfig, get_config, load_config


def test_defaults_without_overrides():
    config = load_config({})
    assert config.max_depression_iterations == 32
    assert config.max_bisection_steps == 64
    assert config.max_new_moon_scan == 8
    assert config.max_phasis_scan_days == 90
    # Lahiri reference: about 336 degrees, i.e. 23.9 degrees behind the tropical zodiac.
    assert 335.0 < config.sidereal_start < 337.0


def test_environment_overrides():
    config = load_config({"ALMANAC_MAX_BISECTION_STEPS": "12", "ALMANAC_MAX_NEW_MOON_SCAN": "3"})
    assert config.max_bisection_steps == 12
    assert config.max_new_moon_scan == 3
    assert config.max_depression_iterations == 32


@pytest.mark.parametrize("raw", ["0", "-4", "abc", "2.5"])
def test_invalid_override_rejected(raw):
    with pytest.raises(ValueError):
        load_config({"ALMANAC_MAX_PHASIS_SCAN_DAYS": raw})


def test_get_config_is_loaded_once():
    first = get_config()
    assert isinstance(first, EngineConfig)
    assert get_config() is first


def test_config_is_frozen():
    config = load_config({})
    with pytest.raises(AttributeError):
        config.max_bisection_steps = 1  # type: ignore[misc]
