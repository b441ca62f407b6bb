"""
Display lines for hotel entities.

These pipe-delimited formats are read by the menus and by anyone diffing
output, so field order, the "VOID" sentinel and the labels are fixed.
"""

from typing import Iterable

from zoo.hotel.core import (
    Animal,
    Habitat,
    Tree,
    Vaccine,
    VaccineRegistry,
    Worker,
)
from zoo.hotel.seasons import Season

NO_VACCINATIONS = "VOID"


def _optional_ids(ids: Iterable[str]) -> str:
    """"|a,b,c" with ids sorted, or "" when there are none."""
    ordered = sorted(ids)
    return "|" + ",".join(ordered) if ordered else ""


def format_animal(animal: Animal) -> str:
    """ANIMAL|id|nome|idEspécie|historialSaúde|idHabitat"""
    if animal.vaccinations:
        health = ",".join(str(registry.damage) for registry in animal.vaccinations)
    else:
        health = NO_VACCINATIONS
    return (
        f"ANIMAL|{animal.animal_id}|{animal.name}|{animal.species.species_id}"
        f"|{health}|{animal.habitat.habitat_id}"
    )


def format_habitat(habitat: Habitat) -> str:
    """HABITAT|id|nome|área|numeroÁrvores"""
    return f"HABITAT|{habitat.habitat_id}|{habitat.name}|{habitat.area}|{len(habitat.trees)}"


def format_worker(worker: Worker) -> str:
    """VET|id|nome[|idEspécies] or TRT|id|nome[|idHabitats]"""
    return f"{worker.kind}|{worker.worker_id}|{worker.name}{_optional_ids(worker.responsibility_ids())}"


def format_tree(tree: Tree, season: Season) -> str:
    """ARVORE|id|nome|idade|dificuldadeLimpeza|{CADUCA|PERENE}|estadoFolhagem"""
    return (
        f"ARVORE|{tree.tree_id}|{tree.name}|{tree.age}|{tree.cleaning_difficulty}"
        f"|{tree.kind}|{tree.leaf_state(season)}"
    )


def format_vaccine(vaccine: Vaccine) -> str:
    """VACINA|id|nome|numeroAplicações[|idEspécies]"""
    species_ids = [species.species_id for species in vaccine.species]
    return (
        f"VACINA|{vaccine.vaccine_id}|{vaccine.name}|{vaccine.applications}"
        f"{_optional_ids(species_ids)}"
    )


def format_vaccination(registry: VaccineRegistry) -> str:
    """REGISTO-VACINA|idVacina|idVeterinário|idEspécieDoAnimal"""
    return (
        f"REGISTO-VACINA|{registry.vaccine.vaccine_id}|{registry.vet.worker_id}"
        f"|{registry.species.species_id}"
    )
