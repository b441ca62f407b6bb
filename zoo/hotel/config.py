"""
Configuration for the zoo hotel.

Satisfaction and vaccination tunables live here, not in code.
The defaults reproduce the canonical formulas; swap them with set_config()
or load a YAML file with load_config_from_yaml().
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from zoo.hotel.seasons import Season


@dataclass
class AnimalSatisfactionConfig:
    """Weights of the animal satisfaction formula."""
    base: int
    same_species_bonus: int
    other_species_penalty: int


@dataclass
class InfluenceValues:
    """Satisfaction contribution of each habitat influence."""
    positive: int
    neutral: int
    negative: int


@dataclass
class VetSatisfactionConfig:
    """Weights of the vet satisfaction formula."""
    base: int


@dataclass
class CareTakerSatisfactionConfig:
    """Weights of the caretaker satisfaction formula."""
    base: int
    population_weight: int


@dataclass
class VaccineDamageConfig:
    """Distance thresholds for vaccine damage classification."""
    accident_max_distance: int


@dataclass
class HotelConfig:
    """Complete zoo hotel configuration."""
    animal: AnimalSatisfactionConfig
    influence: InfluenceValues
    vet: VetSatisfactionConfig
    caretaker: CareTakerSatisfactionConfig
    vaccine_damage: VaccineDamageConfig
    initial_season: str


_DEFAULT_CONFIG = HotelConfig(
    animal=AnimalSatisfactionConfig(
        base=20,
        same_species_bonus=3,
        other_species_penalty=2,
    ),
    influence=InfluenceValues(
        positive=20,
        neutral=0,
        negative=-20,
    ),
    vet=VetSatisfactionConfig(base=20),
    caretaker=CareTakerSatisfactionConfig(
        base=300,
        population_weight=3,
    ),
    vaccine_damage=VaccineDamageConfig(accident_max_distance=4),
    initial_season="SPRING",
)

# Active configuration (can be replaced at runtime)
_active_config: HotelConfig = _DEFAULT_CONFIG


def get_config() -> HotelConfig:
    """Get the active hotel configuration."""
    return _active_config


def set_config(config: HotelConfig) -> None:
    """Set the active hotel configuration."""
    global _active_config
    _active_config = config


def reset_config() -> None:
    """Reset to default configuration."""
    global _active_config
    _active_config = _DEFAULT_CONFIG


# =============================================================================
# YAML LOADING
# =============================================================================

def _require(data: Dict[str, Any], key: str, section: str) -> Any:
    """Fetch a required key, naming the full path in the error."""
    if not isinstance(data, dict) or key not in data:
        path = f"{section}.{key}" if section else key
        raise ValueError(f"Missing required field: {path}")
    return data[key]


def _int_field(data: Dict[str, Any], key: str, section: str) -> int:
    value = _require(data, key, section)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Field {section}.{key} must be an integer, got {value!r}")
    return value


def load_config_from_yaml(path: Union[str, Path]) -> HotelConfig:
    """
    Load a HotelConfig from a YAML file.

    Every field is required; there is no merging with the defaults.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed HotelConfig

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML is malformed or a field is missing/invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a dictionary in {config_path}")

    animal = _require(data, "animal", "")
    influence = _require(data, "influence", "")
    vet = _require(data, "vet", "")
    caretaker = _require(data, "caretaker", "")
    damage = _require(data, "vaccine_damage", "")

    initial_season = str(_require(data, "initial_season", "")).upper()
    if initial_season not in Season.__members__:
        raise ValueError(f"Unknown initial_season: {initial_season}")

    return HotelConfig(
        animal=AnimalSatisfactionConfig(
            base=_int_field(animal, "base", "animal"),
            same_species_bonus=_int_field(animal, "same_species_bonus", "animal"),
            other_species_penalty=_int_field(animal, "other_species_penalty", "animal"),
        ),
        influence=InfluenceValues(
            positive=_int_field(influence, "positive", "influence"),
            neutral=_int_field(influence, "neutral", "influence"),
            negative=_int_field(influence, "negative", "influence"),
        ),
        vet=VetSatisfactionConfig(base=_int_field(vet, "base", "vet")),
        caretaker=CareTakerSatisfactionConfig(
            base=_int_field(caretaker, "base", "caretaker"),
            population_weight=_int_field(caretaker, "population_weight", "caretaker"),
        ),
        vaccine_damage=VaccineDamageConfig(
            accident_max_distance=_int_field(
                damage, "accident_max_distance", "vaccine_damage"
            ),
        ),
        initial_season=initial_season,
    )
