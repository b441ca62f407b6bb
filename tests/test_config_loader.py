"""
Tests for YAML config loader.

See zoo/hotel/config.py for implementation.
"""

import pytest
import tempfile
from pathlib import Path

from zoo.hotel.config import (
    AnimalSatisfactionConfig,
    HotelConfig,
    get_config,
    load_config_from_yaml,
    reset_config,
    set_config,
)

DEFAULTS_PATH = Path(__file__).parent.parent / "config" / "hotel_defaults.yaml"

VALID_YAML = """
animal:
  base: 10
  same_species_bonus: 1
  other_species_penalty: 1
influence:
  positive: 5
  neutral: 0
  negative: -5
vet:
  base: 30
caretaker:
  base: 200
  population_weight: 2
vaccine_damage:
  accident_max_distance: 2
initial_season: winter
"""


def write_temp_yaml(content: str) -> str:
    with tempfile.NamedTemporaryFile(
        mode='w', suffix='.yaml', delete=False, encoding='utf-8'
    ) as f:
        f.write(content)
        return f.name


def test_load_default_yaml():
    """Default YAML should load and match the built-in defaults."""
    config = load_config_from_yaml(DEFAULTS_PATH)

    assert isinstance(config, HotelConfig)
    assert config.animal.base == 20
    assert config.animal.same_species_bonus == 3
    assert config.animal.other_species_penalty == 2
    assert config.influence.positive == 20
    assert config.influence.negative == -20
    assert config.vet.base == 20
    assert config.caretaker.base == 300
    assert config.caretaker.population_weight == 3
    assert config.vaccine_damage.accident_max_distance == 4
    assert config.initial_season == "SPRING"
    assert config == get_config()


def test_load_custom_yaml():
    temp_path = write_temp_yaml(VALID_YAML)
    try:
        config = load_config_from_yaml(temp_path)
    finally:
        Path(temp_path).unlink()

    assert config.animal == AnimalSatisfactionConfig(10, 1, 1)
    assert config.caretaker.population_weight == 2
    assert config.initial_season == "WINTER"


def test_missing_file_raises():
    """Missing file should raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_config_from_yaml("nonexistent.yaml")


def test_invalid_yaml_raises():
    """Malformed YAML should raise ValueError."""
    temp_path = write_temp_yaml("{ invalid yaml syntax: [")
    try:
        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_config_from_yaml(temp_path)
    finally:
        Path(temp_path).unlink()


def test_missing_required_field():
    """Missing required field should name its full path."""
    temp_path = write_temp_yaml(VALID_YAML.replace("  population_weight: 2\n", ""))
    try:
        with pytest.raises(ValueError, match="Missing required field: caretaker.population_weight"):
            load_config_from_yaml(temp_path)
    finally:
        Path(temp_path).unlink()


def test_missing_section():
    temp_path = write_temp_yaml(VALID_YAML.replace("vet:\n  base: 30\n", ""))
    try:
        with pytest.raises(ValueError, match="Missing required field: vet"):
            load_config_from_yaml(temp_path)
    finally:
        Path(temp_path).unlink()


def test_non_integer_field():
    temp_path = write_temp_yaml(VALID_YAML.replace("base: 30", "base: thirty"))
    try:
        with pytest.raises(ValueError, match="vet.base must be an integer"):
            load_config_from_yaml(temp_path)
    finally:
        Path(temp_path).unlink()


def test_unknown_season():
    temp_path = write_temp_yaml(VALID_YAML.replace("initial_season: winter", "initial_season: monsoon"))
    try:
        with pytest.raises(ValueError, match="Unknown initial_season: MONSOON"):
            load_config_from_yaml(temp_path)
    finally:
        Path(temp_path).unlink()


def test_non_dict_root_raises():
    """YAML file with non-dict root should raise ValueError."""
    temp_path = write_temp_yaml("- just\n- a\n- list\n")
    try:
        with pytest.raises(ValueError, match="YAML root must be a dictionary"):
            load_config_from_yaml(temp_path)
    finally:
        Path(temp_path).unlink()


def test_set_and_reset_config():
    temp_path = write_temp_yaml(VALID_YAML)
    try:
        custom = load_config_from_yaml(temp_path)
    finally:
        Path(temp_path).unlink()

    set_config(custom)
    assert get_config().vet.base == 30

    reset_config()
    assert get_config().vet.base == 20
