"""
Core data structures for the zoo hotel.

Entities reference each other through back-references only; the Hotel
aggregate owns them all. Records compare by identity (eq=False) because the
graph is cyclic: an Animal points at its Habitat, which lists the Animal.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Dict, List, Optional

from zoo.hotel.directory import IdentifierDirectory
from zoo.hotel.seasons import (
    DECIDUOUS,
    EVERGREEN,
    LeafState,
    Season,
    leaf_state,
    seasonal_effort,
)


class Influence(Enum):
    """How a habitat suits a species."""
    POS = "POS"
    NEU = "NEU"
    NEG = "NEG"


class VaccineDamage(Enum):
    """Outcome of administering a vaccine, with its display label."""
    NORMAL = "NORMAL"
    CONFUSION = "CONFUSÃO"
    ACCIDENT = "ACIDENTE"
    ERROR = "ERRO"

    def __str__(self) -> str:
        return self.value


# Worker kind tags
VET = "VET"
CARETAKER = "TRT"


@dataclass(eq=False)
class Species:
    """
    A species of animal.

    Keeps back-references to its animals and to the vets responsible for it.
    """
    species_id: str
    name: str
    animals: IdentifierDirectory = field(default_factory=IdentifierDirectory, repr=False)
    vets: IdentifierDirectory = field(default_factory=IdentifierDirectory, repr=False)

    def animal_count(self) -> int:
        return len(self.animals)

    def vet_count(self) -> int:
        return len(self.vets)


@dataclass(eq=False)
class Tree:
    """
    A tree planted in the hotel.

    The birth season is fixed at creation from the hotel's season; the tree
    ages by one year every time the hotel re-enters that season.
    """
    tree_id: str
    name: str
    age: int
    cleaning_difficulty: int
    birth_season: Season

    kind: ClassVar[str] = ""

    def seasonal_effort(self, season: Season) -> int:
        return seasonal_effort(season, self.kind)

    def leaf_state(self, season: Season) -> LeafState:
        return leaf_state(season, self.kind)

    def total_cleaning_effort(self, season: Season) -> float:
        """cleaning_difficulty * seasonal_effort * ln(age + 1)"""
        return self.cleaning_difficulty * self.seasonal_effort(season) * math.log(self.age + 1)


@dataclass(eq=False)
class Deciduous(Tree):
    kind: ClassVar[str] = DECIDUOUS


@dataclass(eq=False)
class Evergreen(Tree):
    kind: ClassVar[str] = EVERGREEN


TREE_KINDS: Dict[str, type] = {
    DECIDUOUS: Deciduous,
    EVERGREEN: Evergreen,
}


@dataclass(eq=False)
class Habitat:
    """
    A place animals live in.

    Animals are bucketed per species; a bucket is dropped when it empties.
    Only non-neutral influences are stored.
    """
    habitat_id: str
    name: str
    area: int
    animals_by_species: Dict[Species, List["Animal"]] = field(default_factory=dict, repr=False)
    suitability: Dict[Species, Influence] = field(default_factory=dict, repr=False)
    caretakers: IdentifierDirectory = field(default_factory=IdentifierDirectory, repr=False)
    trees: IdentifierDirectory = field(default_factory=IdentifierDirectory, repr=False)

    def animals(self) -> List["Animal"]:
        return [animal for bucket in self.animals_by_species.values() for animal in bucket]

    def population(self) -> int:
        return sum(len(bucket) for bucket in self.animals_by_species.values())

    def same_species_count(self, species: Species) -> int:
        return len(self.animals_by_species.get(species, []))

    def influence(self, species: Species) -> Influence:
        return self.suitability.get(species, Influence.NEU)

    def add_animal(self, animal: "Animal") -> None:
        self.animals_by_species.setdefault(animal.species, []).append(animal)

    def remove_animal(self, animal: "Animal") -> None:
        bucket = self.animals_by_species.get(animal.species, [])
        if animal in bucket:
            bucket.remove(animal)
        if not bucket:
            self.animals_by_species.pop(animal.species, None)


@dataclass(eq=False)
class Animal:
    """An animal lodged in the hotel. Its species never changes."""
    animal_id: str
    name: str
    species: Species
    habitat: Habitat
    vaccinations: List["VaccineRegistry"] = field(default_factory=list, repr=False)

    def transfer_to(self, habitat: Habitat) -> None:
        self.habitat.remove_animal(self)
        habitat.add_animal(self)
        self.habitat = habitat


# Formula signature: (worker, current season) -> satisfaction
SatisfactionFormula = Callable[["Worker", Season], float]


@dataclass(eq=False)
class Worker:
    """
    Hotel staff. Satisfaction uses `satisfaction_formula` when set, the
    default formula for the worker's kind otherwise.
    """
    worker_id: str
    name: str
    satisfaction_formula: Optional[SatisfactionFormula] = field(
        default=None, repr=False
    )

    kind: ClassVar[str] = ""

    def responsibility_ids(self) -> List[str]:
        raise NotImplementedError

    def total_responsibilities(self) -> int:
        return len(self.responsibility_ids())


@dataclass(eq=False)
class Vet(Worker):
    """Vets care for species and keep the record of vaccines they applied."""
    responsibilities: IdentifierDirectory = field(default_factory=IdentifierDirectory, repr=False)
    vaccinations: List["VaccineRegistry"] = field(default_factory=list, repr=False)

    kind: ClassVar[str] = VET

    def responsibility_ids(self) -> List[str]:
        return [species.species_id for species in self.responsibilities]


@dataclass(eq=False)
class CareTaker(Worker):
    """Caretakers look after habitats."""
    responsibilities: IdentifierDirectory = field(default_factory=IdentifierDirectory, repr=False)

    kind: ClassVar[str] = CARETAKER

    def responsibility_ids(self) -> List[str]:
        return [habitat.habitat_id for habitat in self.responsibilities]


WORKER_KINDS: Dict[str, type] = {
    VET: Vet,
    CARETAKER: CareTaker,
}


@dataclass(eq=False)
class Vaccine:
    """A vaccine and the species it is formulated for (possibly none)."""
    vaccine_id: str
    name: str
    species: IdentifierDirectory = field(default_factory=IdentifierDirectory, repr=False)
    applications: int = 0

    def covers(self, species: Species) -> bool:
        return self.species.get(species.species_id) is species


@dataclass(frozen=True, eq=False)
class VaccineRegistry:
    """
    Immutable record of one vaccination event.

    `species` is the animal's species at the time of vaccination.
    """
    vaccine: Vaccine
    vet: Vet
    species: Species
    animal: Animal
    damage: VaccineDamage
