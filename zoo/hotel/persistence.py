"""
Persistence layer for the zoo hotel.

The whole entity graph is flattened to a JSON-compatible dict in which every
cross-reference is an id, and rebuilt from it with all back-references
restored. Listings are written in id order, so two hotels holding the same
state produce the same snapshot text: that is what dirty tracking compares.
"""

import json
import logging
import time
from pathlib import Path
from typing import Dict, Union

from zoo.hotel.core import (
    Animal,
    Habitat,
    Tree,
    Vaccine,
    VaccineDamage,
    VaccineRegistry,
    Worker,
)
from zoo.hotel.exceptions import HotelError
from zoo.hotel.hotel import Hotel
from zoo.hotel.seasons import Season

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


# =============================================================================
# ENCODING
# =============================================================================

def _encode_tree(tree: Tree) -> dict:
    return {
        "id": tree.tree_id,
        "name": tree.name,
        "age": tree.age,
        "cleaning_difficulty": tree.cleaning_difficulty,
        "kind": tree.kind,
        "birth_season": tree.birth_season.name,
    }


def _encode_habitat(habitat: Habitat) -> dict:
    """
    Habitat with its animals grouped per species.

    Bucket order and order inside buckets are kept as they are, since they
    are part of the habitat's state.
    """
    return {
        "id": habitat.habitat_id,
        "name": habitat.name,
        "area": habitat.area,
        "animals": [
            [species.species_id, [animal.animal_id for animal in bucket]]
            for species, bucket in habitat.animals_by_species.items()
        ],
        "suitability": {
            species.species_id: influence.value
            for species, influence in sorted(
                habitat.suitability.items(), key=lambda item: item[0].species_id.lower()
            )
        },
        "trees": sorted((tree.tree_id for tree in habitat.trees), key=str.lower),
    }


def _encode_animal(animal: Animal) -> dict:
    return {
        "id": animal.animal_id,
        "name": animal.name,
        "species": animal.species.species_id,
        "habitat": animal.habitat.habitat_id,
    }


def _encode_worker(worker: Worker) -> dict:
    return {
        "id": worker.worker_id,
        "name": worker.name,
        "kind": worker.kind,
        "responsibilities": sorted(worker.responsibility_ids(), key=str.lower),
    }


def _encode_vaccine(vaccine: Vaccine) -> dict:
    return {
        "id": vaccine.vaccine_id,
        "name": vaccine.name,
        "applications": vaccine.applications,
        "species": sorted(
            (species.species_id for species in vaccine.species), key=str.lower
        ),
    }


def _encode_vaccination(registry: VaccineRegistry) -> dict:
    return {
        "vaccine": registry.vaccine.vaccine_id,
        "vet": registry.vet.worker_id,
        "species": registry.species.species_id,
        "animal": registry.animal.animal_id,
        "damage": registry.damage.name,
    }


def serialize_hotel(hotel: Hotel) -> dict:
    """
    Serialize the full hotel state to a JSON-compatible dict.

    Injected satisfaction formulas are behavior, not state, and are not
    written.
    """
    return {
        "version": SNAPSHOT_VERSION,
        "season": hotel.season.name,
        "species": [
            {"id": species.species_id, "name": species.name}
            for species in hotel.species()
        ],
        "trees": [_encode_tree(tree) for tree in hotel.trees()],
        "habitats": [_encode_habitat(habitat) for habitat in hotel.habitats()],
        "animals": [_encode_animal(animal) for animal in hotel.animals()],
        "workers": [_encode_worker(worker) for worker in hotel.workers()],
        "vaccines": [_encode_vaccine(vaccine) for vaccine in hotel.vaccines()],
        "vaccinations": [_encode_vaccination(reg) for reg in hotel.vaccinations()],
    }


# =============================================================================
# DECODING
# =============================================================================

def deserialize_hotel(data: dict) -> Hotel:
    """
    Rebuild a Hotel from serialize_hotel() output.

    Raises:
        ValueError: If the data is malformed or references unknown entities
    """
    try:
        return _build_hotel(data)
    except (HotelError, KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed hotel data: {e!r}") from e


def _build_hotel(data: dict) -> Hotel:
    if data.get("version") != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported snapshot version: {data.get('version')}")

    hotel = Hotel(season=Season[data["season"]])

    for species_data in data["species"]:
        hotel.add_species(species_data["id"], species_data["name"])

    for tree_data in data["trees"]:
        tree = hotel.add_tree(
            tree_data["id"],
            tree_data["name"],
            tree_data["age"],
            tree_data["cleaning_difficulty"],
            tree_data["kind"],
        )
        tree.birth_season = Season[tree_data["birth_season"]]

    animals_by_id: Dict[str, dict] = {
        animal_data["id"]: animal_data for animal_data in data["animals"]
    }

    for habitat_data in data["habitats"]:
        habitat = hotel.add_habitat(habitat_data["id"], habitat_data["name"], habitat_data["area"])
        for tree_id in habitat_data["trees"]:
            hotel.attach_tree(habitat.habitat_id, tree_id)
        for species_id, influence in habitat_data["suitability"].items():
            hotel.change_habitat_suitability(habitat.habitat_id, species_id, influence)
        # Animals are registered bucket by bucket to restore bucket order
        for species_id, animal_ids in habitat_data["animals"]:
            for animal_id in animal_ids:
                animal_data = animals_by_id.pop(animal_id)
                hotel.add_animal(animal_id, animal_data["name"], species_id, habitat.habitat_id)

    if animals_by_id:
        raise ValueError(f"Animals not housed in any habitat: {sorted(animals_by_id)}")

    for worker_data in data["workers"]:
        worker = hotel.add_worker(worker_data["id"], worker_data["name"], worker_data["kind"])
        for responsibility_id in worker_data["responsibilities"]:
            hotel.add_responsibility(worker.worker_id, responsibility_id)

    for vaccine_data in data["vaccines"]:
        vaccine = hotel.add_vaccine(
            vaccine_data["id"], vaccine_data["name"], ",".join(vaccine_data["species"])
        )
        vaccine.applications = vaccine_data["applications"]

    for reg_data in data["vaccinations"]:
        hotel.restore_vaccination(
            reg_data["vaccine"],
            reg_data["vet"],
            reg_data["animal"],
            reg_data["species"],
            VaccineDamage[reg_data["damage"]],
        )

    return hotel


# =============================================================================
# SNAPSHOTS
# =============================================================================

def snapshot(hotel: Hotel) -> str:
    """Canonical text of the hotel's state."""
    return json.dumps(serialize_hotel(hotel), sort_keys=True, ensure_ascii=False)


def hotels_equal(first: Hotel, second: Hotel) -> bool:
    """Structural equality of two hotels."""
    return snapshot(first) == snapshot(second)


def copy_hotel(hotel: Hotel) -> Hotel:
    """Independent deep copy of a hotel, via its serialized form."""
    return deserialize_hotel(serialize_hotel(hotel))


# =============================================================================
# FILE I/O
# =============================================================================

def save_hotel(hotel: Hotel, path: Union[str, Path]) -> None:
    """
    Save the hotel to a JSON file.

    Creates the parent directory if needed and writes atomically (write to
    temp, then rename).
    """
    state_file = Path(path)
    state_file.parent.mkdir(parents=True, exist_ok=True)

    state_data = serialize_hotel(hotel)
    state_data["saved_at"] = time.time()  # Metadata for debugging

    temp_file = state_file.with_name(state_file.name + ".tmp")
    with open(temp_file, "w", encoding="utf-8") as f:
        json.dump(state_data, f, indent=2, ensure_ascii=False)

    temp_file.replace(state_file)
    logger.debug(f"Saved hotel to {state_file}")


def load_hotel(path: Union[str, Path]) -> Hotel:
    """
    Load a hotel saved by save_hotel().

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or not a hotel
    """
    state_file = Path(path)
    with open(state_file, "r", encoding="utf-8") as f:
        try:
            state_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupted hotel file {state_file}: {e}") from e

    if not isinstance(state_data, dict):
        raise ValueError(f"Hotel file root must be an object: {state_file}")

    hotel = deserialize_hotel(state_data)
    logger.debug(f"Loaded hotel from {state_file}")
    return hotel
