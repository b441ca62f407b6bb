"""
Tests for satisfaction computation.

See zoo/hotel/satisfaction.py for implementation.
"""

import dataclasses

import pytest

from zoo.hotel.config import CareTakerSatisfactionConfig, InfluenceValues, get_config, set_config
from zoo.hotel.core import Animal, Habitat, Species, Vet
from zoo.hotel.exceptions import GraphIntegrityError
from zoo.hotel.hotel import Hotel
from zoo.hotel.satisfaction import (
    animal_satisfaction,
    default_vet_satisfaction,
    habitat_work,
    truncating_div,
    worker_satisfaction,
)
from zoo.hotel.seasons import Season


def create_test_hotel(season: Season = Season.SPRING) -> Hotel:
    """One species, one habitat of area 100, no animals yet."""
    hotel = Hotel(season=season)
    hotel.add_species("A", "Alfa")
    hotel.add_species("B", "Beta")
    hotel.add_habitat("H", "Habitat", 100)
    return hotel


# =============================================================================
# ANIMALS
# =============================================================================

def test_lone_animal():
    hotel = create_test_hotel()
    hotel.add_animal("a1", "Um", "A", "H")

    # 20 + 0 - 0 + 100 // 1 + 0
    assert hotel.animal_satisfaction("a1") == 120.0


def test_second_same_species_animal():
    hotel = create_test_hotel()
    hotel.add_animal("a1", "Um", "A", "H")
    hotel.add_animal("a2", "Dois", "A", "H")

    # 20 + 3 - 0 + 100 // 2 + 0
    assert hotel.animal_satisfaction("a1") == 73.0
    assert hotel.animal_satisfaction("a2") == 73.0


def test_other_species_penalty():
    hotel = create_test_hotel()
    hotel.add_animal("a1", "Um", "A", "H")
    hotel.add_animal("b1", "Outro", "B", "H")
    hotel.add_animal("b2", "Outro", "B", "H")

    # 20 + 0 - 2*2 + 100 // 3
    assert hotel.animal_satisfaction("a1") == 49.0
    # 20 + 3 - 2*1 + 100 // 3
    assert hotel.animal_satisfaction("b1") == 54.0


def test_suitability():
    hotel = create_test_hotel()
    hotel.add_animal("a1", "Um", "A", "H")

    hotel.change_habitat_suitability("H", "A", "POS")
    assert hotel.animal_satisfaction("a1") == 140.0

    hotel.change_habitat_suitability("H", "A", "NEG")
    assert hotel.animal_satisfaction("a1") == 100.0


def test_influence_values_come_from_config():
    set_config(dataclasses.replace(
        get_config(), influence=InfluenceValues(positive=5, neutral=1, negative=-5)
    ))
    hotel = create_test_hotel()
    hotel.add_animal("a1", "Um", "A", "H")

    assert hotel.animal_satisfaction("a1") == 121.0


def test_area_uses_integer_division():
    hotel = create_test_hotel()
    hotel.change_habitat_area("H", 10)
    for animal_id in ("a1", "a2", "a3"):
        hotel.add_animal(animal_id, animal_id, "A", "H")

    # 20 + 3*2 + 10 // 3
    assert hotel.animal_satisfaction("a1") == 29.0


def test_unlisted_animal_is_integrity_error():
    species = Species("A", "Alfa")
    habitat = Habitat("H", "Habitat", 10)
    animal = Animal("a1", "Um", species, habitat)

    with pytest.raises(GraphIntegrityError):
        animal_satisfaction(animal)


# =============================================================================
# VETS
# =============================================================================

def test_vet_satisfaction():
    hotel = create_test_hotel()
    hotel.add_animal("a1", "Um", "A", "H")
    hotel.add_animal("a2", "Dois", "A", "H")
    for animal_id in ("b1", "b2", "b3"):
        hotel.add_animal(animal_id, animal_id, "B", "H")
    hotel.add_worker("V1", "Vera", "VET")
    hotel.add_responsibility("V1", "A")

    assert hotel.worker_satisfaction("V1") == 18.0

    hotel.add_responsibility("V1", "B")
    assert hotel.worker_satisfaction("V1") == 15.0

    # A second vet halves the workload on A
    hotel.add_worker("V2", "Vasco", "VET")
    hotel.add_responsibility("V2", "A")
    assert hotel.worker_satisfaction("V1") == 16.0
    assert hotel.worker_satisfaction("V2") == 19.0


def test_vet_without_responsibilities():
    hotel = create_test_hotel()
    hotel.add_worker("V1", "Vera", "VET")

    assert hotel.worker_satisfaction("V1") == 20.0


def test_species_without_vets_is_integrity_error():
    vet = Vet("V1", "Vera")
    vet.responsibilities.put("A", Species("A", "Alfa"))

    with pytest.raises(GraphIntegrityError):
        default_vet_satisfaction(vet, Season.SPRING)


# =============================================================================
# CARETAKERS
# =============================================================================

def test_caretaker_satisfaction():
    hotel = create_test_hotel()
    hotel.add_animal("a1", "Um", "A", "H")
    hotel.add_animal("a2", "Dois", "A", "H")
    hotel.add_worker("C1", "Carla", "TRT")
    hotel.add_responsibility("C1", "H")

    # work = 100 + 3*2 = 106
    assert hotel.worker_satisfaction("C1") == 194.0

    hotel.add_worker("C2", "Caio", "TRT")
    hotel.add_responsibility("C2", "H")
    assert hotel.worker_satisfaction("C1") == 247.0


def test_caretaker_workload_depends_on_season():
    hotel = create_test_hotel(Season.FALL)
    hotel.add_tree_to_habitat("H", "T1", "Carvalho", 3, 2, "CADUCA")
    hotel.add_worker("C1", "Carla", "TRT")
    hotel.add_responsibility("C1", "H")
    habitat = hotel.get_habitat("H")

    # Fall: 2 * 5 * ln(4) = 13.86, truncated to 13
    assert habitat_work(habitat, Season.FALL) == 113
    assert hotel.worker_satisfaction("C1") == 187.0

    # Winter: deciduous trees need no cleaning
    hotel.progress_season()
    assert hotel.worker_satisfaction("C1") == 200.0


def test_truncating_div():
    assert truncating_div(7, 2) == 3
    assert truncating_div(-7, 2) == -3
    assert truncating_div(7, -2) == -3
    assert truncating_div(-6, 3) == -2


def test_negative_work_truncates_toward_zero():
    set_config(dataclasses.replace(
        get_config(),
        caretaker=CareTakerSatisfactionConfig(base=300, population_weight=-50),
    ))
    hotel = create_test_hotel()
    hotel.change_habitat_area("H", 10)
    hotel.add_animal("a1", "Um", "A", "H")
    for caretaker_id in ("C1", "C2", "C3"):
        hotel.add_worker(caretaker_id, "Tratador", "TRT")
        hotel.add_responsibility(caretaker_id, "H")

    # work = 10 - 50 = -40; -40 / 3 is -13, not -14
    assert habitat_work(hotel.get_habitat("H"), Season.SPRING) == -40
    assert hotel.worker_satisfaction("C1") == 313.0


def test_caretaker_without_responsibilities():
    hotel = create_test_hotel()
    hotel.add_worker("C1", "Carla", "TRT")

    assert hotel.worker_satisfaction("C1") == 300.0


# =============================================================================
# FORMULA INJECTION AND TOTALS
# =============================================================================

def test_injected_formula_replaces_default():
    hotel = create_test_hotel()
    vet = hotel.add_worker("V1", "Vera", "VET")
    seen = []

    def formula(worker, season):
        seen.append((worker, season))
        return 42.0

    vet.satisfaction_formula = formula

    assert hotel.worker_satisfaction("V1") == 42.0
    assert seen == [(vet, Season.SPRING)]


def test_injected_formula_is_not_shared():
    hotel = create_test_hotel()
    vet = hotel.add_worker("V1", "Vera", "VET")
    hotel.add_worker("V2", "Vasco", "VET")
    vet.satisfaction_formula = lambda worker, season: 0.0

    assert hotel.worker_satisfaction("V2") == 20.0


def test_plain_worker_has_no_formula():
    from zoo.hotel.core import Worker

    with pytest.raises(TypeError, match="Unsupported worker type"):
        worker_satisfaction(Worker("W", "w"), Season.SPRING)


def test_hotel_satisfaction(stocked_hotel):
    # Animals: 73 + 73 + 80; VET1: 20 - 2; TRT1: 300 - (100 + 3*2)
    assert stocked_hotel.satisfaction() == 438.0


def test_empty_hotel_satisfaction(hotel):
    assert hotel.satisfaction() == 0.0
