"""
Tests for entity display lines.

See zoo/hotel/formatting.py for implementation.
"""

from zoo.hotel.formatting import (
    format_animal,
    format_habitat,
    format_tree,
    format_vaccination,
    format_vaccine,
    format_worker,
)
from zoo.hotel.seasons import Season


def test_animal_without_vaccinations(stocked_hotel):
    simba = stocked_hotel.get_animal("simba")

    assert format_animal(simba) == "ANIMAL|simba|Simba|LEÃO|VOID|SAVANA"


def test_animal_health_history_in_order(stocked_hotel):
    stocked_hotel.add_vaccine("V1", "Juba", "LEÃO")
    stocked_hotel.add_vaccine("V2", "Uivo", "LOBO")
    stocked_hotel.vaccinate_animal("simba", "V2", "VET1")
    stocked_hotel.vaccinate_animal("simba", "V1", "VET1")

    line = format_animal(stocked_hotel.get_animal("simba"))

    assert line == "ANIMAL|simba|Simba|LEÃO|ACIDENTE,NORMAL|SAVANA"


def test_habitat_counts_trees(stocked_hotel):
    stocked_hotel.add_tree_to_habitat("SAVANA", "T1", "Acácia", 2, 1, "PERENE")

    assert format_habitat(stocked_hotel.get_habitat("SAVANA")) == "HABITAT|SAVANA|Savana|100|1"
    assert format_habitat(stocked_hotel.get_habitat("FLORESTA")) == "HABITAT|FLORESTA|Floresta|60|0"


def test_worker_responsibilities_sorted(stocked_hotel):
    stocked_hotel.add_responsibility("VET1", "GATO")

    assert format_worker(stocked_hotel.get_worker("VET1")) == "VET|VET1|Dra. Ana|GATO,LEÃO"
    assert format_worker(stocked_hotel.get_worker("TRT1")) == "TRT|TRT1|Rui|SAVANA"


def test_worker_without_responsibilities_omits_clause(hotel):
    hotel.add_worker("C1", "Carla", "TRT")

    assert format_worker(hotel.get_worker("C1")) == "TRT|C1|Carla"


def test_tree_leaf_state_follows_season(hotel):
    tree = hotel.add_tree("T1", "Carvalho", 3, 2, "CADUCA")

    assert format_tree(tree, Season.SPRING) == "ARVORE|T1|Carvalho|3|2|CADUCA|GERARFOLHAS"
    assert format_tree(tree, Season.WINTER) == "ARVORE|T1|Carvalho|3|2|CADUCA|SEMFOLHAS"


def test_vaccine_lines(stocked_hotel):
    with_species = stocked_hotel.add_vaccine("V1", "Raiva", "LOBO,LEÃO")
    placebo = stocked_hotel.add_vaccine("V2", "Placebo")
    stocked_hotel.vaccinate_animal("nala", "V1", "VET1")

    assert format_vaccine(with_species) == "VACINA|V1|Raiva|1|LEÃO,LOBO"
    assert format_vaccine(placebo) == "VACINA|V2|Placebo|0"


def test_vaccination_line(stocked_hotel):
    stocked_hotel.add_vaccine("V1", "Juba", "LEÃO")

    registry = stocked_hotel.vaccinate_animal("nala", "V1", "VET1")

    assert format_vaccination(registry) == "REGISTO-VACINA|V1|VET1|LEÃO"
