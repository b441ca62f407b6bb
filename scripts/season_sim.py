#!/usr/bin/env python3
"""Season sim: import a hotel and watch a year go by.

A small driver around the zoo hotel modules that demonstrates:
- bulk import of an import file
- season progression (tree foliage, tree ageing)
- satisfaction of every animal and worker, and of the hotel
- vaccination outcomes

Run:
  source .venv/bin/activate
  python scripts/season_sim.py [import_file] [config.yaml] [seasons]

With no import file a built-in sample hotel is used.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure repo root is on sys.path when running as a script
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from zoo.hotel.config import load_config_from_yaml, reset_config, set_config
from zoo.hotel.formatting import (
    format_animal,
    format_habitat,
    format_tree,
    format_vaccination,
    format_vaccine,
    format_worker,
)
from zoo.hotel.hotel import Hotel
from zoo.hotel.parser import HotelImporter


SAMPLE_HOTEL = [
    "ESPÉCIE|LEÃO|Leão",
    "ESPÉCIE|LOBO|Lobo",
    "ESPÉCIE|GATO|Gato",
    "ÁRVORE|T1|Carvalho|5|3|CADUCA",
    "ÁRVORE|T2|Pinheiro|12|2|PERENE",
    "HABITAT|SAV|Savana|120|T1",
    "HABITAT|FLO|Floresta|80|T2",
    "ANIMAL|simba|Simba|LEÃO|SAV",
    "ANIMAL|nala|Nala|LEÃO|SAV",
    "ANIMAL|akela|Akela|LOBO|FLO",
    "ANIMAL|tom|Tom|GATO|FLO",
    "VETERINÁRIO|V1|Vera|LEÃO,LOBO",
    "VETERINÁRIO|V2|Vasco|GATO",
    "TRATADOR|C1|Carla|SAV,FLO",
    "TRATADOR|C2|Caio|FLO",
    "VACINA|VAC1|Raiva|LEÃO,LOBO",
    "VACINA|VAC2|Juba|LEÃO",
]

# (animal, vaccine, vet) applied once the hotel is loaded
SAMPLE_VACCINATIONS = [
    ("simba", "VAC2", "V1"),
    ("akela", "VAC2", "V1"),
    ("tom", "VAC1", "V2"),
]


def build_hotel(import_path: Optional[str]) -> Hotel:
    hotel = Hotel()
    importer = HotelImporter(hotel)
    if import_path:
        importer.import_file(import_path)
        return hotel

    importer.import_lines(SAMPLE_HOTEL)
    for animal_id, vaccine_id, vet_id in SAMPLE_VACCINATIONS:
        hotel.vaccinate_animal(animal_id, vaccine_id, vet_id)
    return hotel


def print_inventory(hotel: Hotel) -> None:
    for habitat in hotel.habitats():
        print(format_habitat(habitat))
    for animal in hotel.animals():
        print(format_animal(animal))
    for worker in hotel.workers():
        print(format_worker(worker))
    for vaccine in hotel.vaccines():
        print(format_vaccine(vaccine))
    for registry in hotel.vaccinations():
        print(format_vaccination(registry))


def print_season(hotel: Hotel) -> None:
    print(f"\n--- SEASON {hotel.season.name} ({hotel.season}) ---")
    for tree in hotel.trees():
        print(format_tree(tree, hotel.season))
    for animal in hotel.animals():
        print(f"  {animal.animal_id:<10} {hotel.animal_satisfaction(animal.animal_id):8.1f}")
    for worker in hotel.workers():
        print(f"  {worker.worker_id:<10} {hotel.worker_satisfaction(worker.worker_id):8.1f}")
    print(f"Hotel satisfaction: {hotel.satisfaction():.1f}")


def simulate(argv: List[str]) -> int:
    import_path = argv[0] if len(argv) > 0 else None
    config_path = argv[1] if len(argv) > 1 else None
    seasons = int(argv[2]) if len(argv) > 2 else 4

    if config_path:
        set_config(load_config_from_yaml(config_path))

    hotel = build_hotel(import_path)

    print("=" * 72)
    print("SEASON SIM")
    print(f"import={import_path or '<sample>'} config={config_path or '<defaults>'}")
    print("=" * 72)
    print_inventory(hotel)

    print_season(hotel)
    for _ in range(seasons):
        hotel.progress_season()
        print_season(hotel)

    wrong = hotel.wrong_vaccinations()
    if wrong:
        print(f"\nWrong vaccinations: {len(wrong)}")
        for registry in wrong:
            print(f"  {registry.animal.animal_id}: {registry.damage}")

    best = hotel.most_satisfied_animal()
    if best is not None:
        print(f"Most satisfied animal: {best.animal_id}")

    reset_config()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    raise SystemExit(simulate(sys.argv[1:]))
