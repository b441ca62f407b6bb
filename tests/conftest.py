"""
Pytest configuration for zoo hotel tests.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from zoo.hotel.config import reset_config  # noqa: E402
from zoo.hotel.hotel import Hotel  # noqa: E402
from zoo.hotel.seasons import Season  # noqa: E402


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def default_config():
    """Every test starts and ends with the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def hotel():
    """An empty hotel in spring."""
    return Hotel(season=Season.SPRING)


@pytest.fixture
def stocked_hotel():
    """
    A small hotel used across test modules.

    Species: LEÃO (Leão), LOBO (Lobo), GATO (Gato)
    Habitats: SAVANA (area 100), FLORESTA (area 60)
    Animals: simba, nala (Leão, SAVANA); akela (Lobo, FLORESTA)
    Workers: VET1 (vet of LEÃO), TRT1 (caretaker of SAVANA)
    """
    hotel = Hotel(season=Season.SPRING)
    hotel.add_species("LEÃO", "Leão")
    hotel.add_species("LOBO", "Lobo")
    hotel.add_species("GATO", "Gato")
    hotel.add_habitat("SAVANA", "Savana", 100)
    hotel.add_habitat("FLORESTA", "Floresta", 60)
    hotel.add_animal("simba", "Simba", "LEÃO", "SAVANA")
    hotel.add_animal("nala", "Nala", "LEÃO", "SAVANA")
    hotel.add_animal("akela", "Akela", "LOBO", "FLORESTA")
    hotel.add_worker("VET1", "Dra. Ana", "VET")
    hotel.add_responsibility("VET1", "LEÃO")
    hotel.add_worker("TRT1", "Rui", "TRT")
    hotel.add_responsibility("TRT1", "SAVANA")
    return hotel
