"""
Zoo Hotel - entity graph, satisfaction scoring and vaccination outcomes.

The Hotel aggregate owns species, habitats, animals, workers, trees and
vaccines; everything else computes over it on demand.

The package logs under "zoo.hotel.*" and prints nothing unless the host
application configures logging.
"""

import logging

from zoo.hotel.core import (
    Animal,
    CareTaker,
    Deciduous,
    Evergreen,
    Habitat,
    Influence,
    Species,
    Tree,
    Vaccine,
    VaccineDamage,
    VaccineRegistry,
    Vet,
    Worker,
)
from zoo.hotel.directory import IdentifierDirectory
from zoo.hotel.hotel import Hotel
from zoo.hotel.manager import HotelManager
from zoo.hotel.parser import HotelImporter, import_file
from zoo.hotel.persistence import (
    hotels_equal,
    load_hotel,
    save_hotel,
    snapshot,
)
from zoo.hotel.seasons import LeafState, Season
from zoo.hotel.vaccination import vaccine_damage

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core data structures
    "Animal",
    "CareTaker",
    "Deciduous",
    "Evergreen",
    "Habitat",
    "Influence",
    "Species",
    "Tree",
    "Vaccine",
    "VaccineDamage",
    "VaccineRegistry",
    "Vet",
    "Worker",
    "IdentifierDirectory",
    # Seasons
    "LeafState",
    "Season",
    # Aggregate and services
    "Hotel",
    "HotelManager",
    "HotelImporter",
    "import_file",
    "vaccine_damage",
    # Persistence
    "hotels_equal",
    "load_hotel",
    "save_hotel",
    "snapshot",
]
