"""
The Hotel aggregate: owner of every entity and the only mutation entry point.

Every mutation validates all of its preconditions before changing anything,
so a failed call leaves the graph as it was. Identifiers are looked up
case-insensitively.
"""

from typing import Iterable, List, Optional, Union

from zoo.hotel.config import get_config
from zoo.hotel.core import (
    TREE_KINDS,
    WORKER_KINDS,
    Animal,
    CareTaker,
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
from zoo.hotel.directory import IdentifierDirectory, normalize_id
from zoo.hotel.exceptions import (
    AnimalNotFound,
    DuplicateAnimal,
    DuplicateHabitat,
    DuplicateSpecies,
    DuplicateTree,
    DuplicateVaccine,
    DuplicateWorker,
    HabitatNotFound,
    InvalidAttribute,
    ResponsibilityNotFound,
    SpeciesNotFound,
    TreeNotFound,
    UnrecognizedTreeKind,
    UnrecognizedWorkerKind,
    VaccineNotFound,
    WorkerNotAuthorized,
    WorkerNotFound,
)
from zoo.hotel.satisfaction import (
    animal_satisfaction,
    hotel_satisfaction,
    worker_satisfaction,
)
from zoo.hotel.seasons import Season, grow_trees, parse_season
from zoo.hotel.vaccination import vaccine_damage


def _sorted_by_id(entities: Iterable, attribute: str) -> List:
    return sorted(entities, key=lambda entity: normalize_id(getattr(entity, attribute)))


def split_ids(csv: str) -> List[str]:
    """Split a comma-separated id list, ignoring surrounding blanks."""
    if not csv or not csv.strip():
        return []
    return [part.strip() for part in csv.split(",")]


class Hotel:
    """
    A zoo hotel.

    Knows the current season and keeps every species, habitat, animal,
    worker, tree and vaccine, plus the hotel-wide vaccination registry.
    """

    def __init__(self, season: Optional[Season] = None):
        if season is None:
            season = parse_season(get_config().initial_season)
        self.season: Season = season
        self._species: IdentifierDirectory = IdentifierDirectory()
        self._habitats: IdentifierDirectory = IdentifierDirectory()
        self._animals: IdentifierDirectory = IdentifierDirectory()
        self._workers: IdentifierDirectory = IdentifierDirectory()
        self._trees: IdentifierDirectory = IdentifierDirectory()
        self._vaccines: IdentifierDirectory = IdentifierDirectory()
        self._vaccinations: List[VaccineRegistry] = []

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_species(self, species_id: str) -> Species:
        species = self._species.get(species_id)
        if species is None:
            raise SpeciesNotFound(species_id)
        return species

    def get_habitat(self, habitat_id: str) -> Habitat:
        habitat = self._habitats.get(habitat_id)
        if habitat is None:
            raise HabitatNotFound(habitat_id)
        return habitat

    def get_animal(self, animal_id: str) -> Animal:
        animal = self._animals.get(animal_id)
        if animal is None:
            raise AnimalNotFound(animal_id)
        return animal

    def get_worker(self, worker_id: str) -> Worker:
        worker = self._workers.get(worker_id)
        if worker is None:
            raise WorkerNotFound(worker_id)
        return worker

    def get_vet(self, vet_id: str) -> Vet:
        """A worker that must be a Vet; any other worker counts as unknown."""
        worker = self.get_worker(vet_id)
        if not isinstance(worker, Vet):
            raise WorkerNotFound(vet_id)
        return worker

    def get_tree(self, tree_id: str) -> Tree:
        tree = self._trees.get(tree_id)
        if tree is None:
            raise TreeNotFound(tree_id)
        return tree

    def get_vaccine(self, vaccine_id: str) -> Vaccine:
        vaccine = self._vaccines.get(vaccine_id)
        if vaccine is None:
            raise VaccineNotFound(vaccine_id)
        return vaccine

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    def species(self) -> List[Species]:
        return _sorted_by_id(self._species, "species_id")

    def habitats(self) -> List[Habitat]:
        return _sorted_by_id(self._habitats, "habitat_id")

    def animals(self) -> List[Animal]:
        return _sorted_by_id(self._animals, "animal_id")

    def workers(self) -> List[Worker]:
        return _sorted_by_id(self._workers, "worker_id")

    def trees(self) -> List[Tree]:
        return _sorted_by_id(self._trees, "tree_id")

    def vaccines(self) -> List[Vaccine]:
        return _sorted_by_id(self._vaccines, "vaccine_id")

    def vaccinations(self) -> List[VaccineRegistry]:
        """Every vaccination, in the order it happened."""
        return list(self._vaccinations)

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add_species(self, species_id: str, name: str) -> Species:
        """
        Register a species.

        Raises:
            DuplicateSpecies: If the id or the name (any casing) is taken
        """
        folded_name = name.lower()
        if species_id in self._species or any(
            existing.name.lower() == folded_name for existing in self._species
        ):
            raise DuplicateSpecies(species_id)

        species = Species(species_id=species_id, name=name)
        self._species.put(species_id, species)
        return species

    def add_habitat(self, habitat_id: str, name: str, area: int) -> Habitat:
        """
        Register a habitat.

        Raises:
            DuplicateHabitat: If the id is taken
            InvalidAttribute: If area is negative
        """
        if habitat_id in self._habitats:
            raise DuplicateHabitat(habitat_id)
        _check_non_negative(habitat_id, "area", area)

        habitat = Habitat(habitat_id=habitat_id, name=name, area=area)
        self._habitats.put(habitat_id, habitat)
        return habitat

    def add_animal(self, animal_id: str, name: str, species_id: str, habitat_id: str) -> Animal:
        """
        Register an animal and house it.

        Checks run in order: duplicate id, species, habitat.

        Raises:
            DuplicateAnimal, SpeciesNotFound, HabitatNotFound
        """
        if animal_id in self._animals:
            raise DuplicateAnimal(animal_id)
        species = self.get_species(species_id)
        habitat = self.get_habitat(habitat_id)

        animal = Animal(animal_id=animal_id, name=name, species=species, habitat=habitat)
        self._animals.put(animal_id, animal)
        species.animals.put(animal_id, animal)
        habitat.add_animal(animal)
        return animal

    def add_worker(self, worker_id: str, name: str, kind: str) -> Worker:
        """
        Register a worker of kind "VET" or "TRT".

        Raises:
            DuplicateWorker, UnrecognizedWorkerKind
        """
        if worker_id in self._workers:
            raise DuplicateWorker(worker_id)
        worker_class = WORKER_KINDS.get(kind)
        if worker_class is None:
            raise UnrecognizedWorkerKind(kind)

        worker = worker_class(worker_id=worker_id, name=name)
        self._workers.put(worker_id, worker)
        return worker

    def add_tree(
        self,
        tree_id: str,
        name: str,
        age: int,
        cleaning_difficulty: int,
        kind: str,
    ) -> Tree:
        """
        Register a tree of kind "CADUCA" (deciduous) or "PERENE" (evergreen).

        Its birth season is the hotel's current season.

        Raises:
            DuplicateTree, UnrecognizedTreeKind
            InvalidAttribute: If age or cleaning difficulty is negative
        """
        if tree_id in self._trees:
            raise DuplicateTree(tree_id)
        tree_class = TREE_KINDS.get(kind)
        if tree_class is None:
            raise UnrecognizedTreeKind(kind)
        _check_non_negative(tree_id, "age", age)
        _check_non_negative(tree_id, "cleaning difficulty", cleaning_difficulty)

        tree = tree_class(
            tree_id=tree_id,
            name=name,
            age=age,
            cleaning_difficulty=cleaning_difficulty,
            birth_season=self.season,
        )
        self._trees.put(tree_id, tree)
        return tree

    def add_tree_to_habitat(
        self,
        habitat_id: str,
        tree_id: str,
        name: str,
        age: int,
        cleaning_difficulty: int,
        kind: str,
    ) -> Tree:
        """
        Register a tree and plant it in a habitat.

        The habitat is checked first, so a failure registers nothing.

        Raises:
            HabitatNotFound, DuplicateTree, UnrecognizedTreeKind, InvalidAttribute
        """
        habitat = self.get_habitat(habitat_id)
        tree = self.add_tree(tree_id, name, age, cleaning_difficulty, kind)
        habitat.trees.put(tree.tree_id, tree)
        return tree

    def attach_tree(self, habitat_id: str, tree_id: str) -> Tree:
        """
        Plant an already registered tree in a habitat.

        Raises:
            HabitatNotFound, TreeNotFound
        """
        habitat = self.get_habitat(habitat_id)
        tree = self.get_tree(tree_id)
        habitat.trees.put(tree.tree_id, tree)
        return tree

    def add_vaccine(self, vaccine_id: str, name: str, species_ids: str = "") -> Vaccine:
        """
        Register a vaccine for a comma-separated list of species ids.

        An empty list is legal: the vaccine is then safe for no species.

        Raises:
            DuplicateVaccine, SpeciesNotFound
        """
        if vaccine_id in self._vaccines:
            raise DuplicateVaccine(vaccine_id)
        covered = [self.get_species(species_id) for species_id in split_ids(species_ids)]

        vaccine = Vaccine(vaccine_id=vaccine_id, name=name)
        for species in covered:
            vaccine.species.put(species.species_id, species)
        self._vaccines.put(vaccine_id, vaccine)
        return vaccine

    # -------------------------------------------------------------------------
    # Changes
    # -------------------------------------------------------------------------

    def transfer_animal(self, animal_id: str, habitat_id: str) -> Animal:
        """
        Move an animal to another habitat.

        Raises:
            AnimalNotFound, HabitatNotFound
        """
        animal = self.get_animal(animal_id)
        habitat = self.get_habitat(habitat_id)
        animal.transfer_to(habitat)
        return animal

    def change_habitat_area(self, habitat_id: str, area: int) -> Habitat:
        """
        Raises:
            HabitatNotFound
            InvalidAttribute: If area is negative
        """
        habitat = self.get_habitat(habitat_id)
        _check_non_negative(habitat_id, "area", area)
        habitat.area = area
        return habitat

    def change_habitat_suitability(
        self,
        habitat_id: str,
        species_id: str,
        influence: Union[Influence, str],
    ) -> Habitat:
        """
        Set how a habitat suits a species.

        Neutral is the default and is stored as the absence of an entry.

        Raises:
            HabitatNotFound, SpeciesNotFound
            ValueError: If influence is not POS, NEU or NEG
        """
        habitat = self.get_habitat(habitat_id)
        species = self.get_species(species_id)
        influence = Influence(influence)

        if influence is Influence.NEU:
            habitat.suitability.pop(species, None)
        else:
            habitat.suitability[species] = influence
        return habitat

    def add_responsibility(self, worker_id: str, responsibility_id: str) -> Worker:
        """
        Give a worker a species (vet) or habitat (caretaker) to look after.

        Raises:
            WorkerNotFound
            ResponsibilityNotFound: If the species/habitat does not exist
        """
        worker = self.get_worker(worker_id)
        try:
            if isinstance(worker, Vet):
                species = self.get_species(responsibility_id)
                worker.responsibilities.put(species.species_id, species)
                species.vets.put(worker.worker_id, worker)
            elif isinstance(worker, CareTaker):
                habitat = self.get_habitat(responsibility_id)
                worker.responsibilities.put(habitat.habitat_id, habitat)
                habitat.caretakers.put(worker.worker_id, worker)
        except (SpeciesNotFound, HabitatNotFound) as e:
            raise ResponsibilityNotFound(worker_id, responsibility_id) from e
        return worker

    def remove_responsibility(self, worker_id: str, responsibility_id: str) -> Worker:
        """
        Take a responsibility away from a worker.

        Raises:
            WorkerNotFound
            ResponsibilityNotFound: If it does not exist or is not held
        """
        worker = self.get_worker(worker_id)
        held = worker.responsibilities.get(responsibility_id)
        if held is None:
            raise ResponsibilityNotFound(worker_id, responsibility_id)

        worker.responsibilities.remove(responsibility_id)
        if isinstance(worker, Vet):
            held.vets.remove(worker.worker_id)
        else:
            held.caretakers.remove(worker.worker_id)
        return worker

    def vaccinate_animal(self, animal_id: str, vaccine_id: str, vet_id: str) -> VaccineRegistry:
        """
        Have a vet apply a vaccine to an animal and record the outcome.

        Raises:
            AnimalNotFound, VaccineNotFound
            WorkerNotFound: If the worker is unknown or is not a vet
            WorkerNotAuthorized: If the vet is not responsible for the species
        """
        animal = self.get_animal(animal_id)
        vaccine = self.get_vaccine(vaccine_id)
        vet = self.get_vet(vet_id)
        if vet.responsibilities.get(animal.species.species_id) is not animal.species:
            raise WorkerNotAuthorized(vet.worker_id, animal.species.species_id)

        registry = VaccineRegistry(
            vaccine=vaccine,
            vet=vet,
            species=animal.species,
            animal=animal,
            damage=vaccine_damage(animal, vaccine),
        )
        vaccine.applications += 1
        self._record_vaccination(registry)
        return registry

    def restore_vaccination(
        self,
        vaccine_id: str,
        vet_id: str,
        animal_id: str,
        species_id: str,
        damage: VaccineDamage,
    ) -> VaccineRegistry:
        """
        Re-record a past vaccination with its stored outcome.

        Used when rebuilding a hotel from saved state: the damage is not
        recomputed, the vet's current responsibilities are not checked and
        the vaccine's application count is left alone.

        Raises:
            VaccineNotFound, WorkerNotFound, AnimalNotFound, SpeciesNotFound
        """
        registry = VaccineRegistry(
            vaccine=self.get_vaccine(vaccine_id),
            vet=self.get_vet(vet_id),
            species=self.get_species(species_id),
            animal=self.get_animal(animal_id),
            damage=damage,
        )
        self._record_vaccination(registry)
        return registry

    def _record_vaccination(self, registry: VaccineRegistry) -> None:
        registry.animal.vaccinations.append(registry)
        registry.vet.vaccinations.append(registry)
        self._vaccinations.append(registry)

    def progress_season(self) -> Season:
        """Move to the next season and age the trees born in it."""
        self.season = self.season.next()
        grow_trees(self._trees, self.season)
        return self.season

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def habitat_animals(self, habitat_id: str) -> List[Animal]:
        return _sorted_by_id(self.get_habitat(habitat_id).animals(), "animal_id")

    def habitat_trees(self, habitat_id: str) -> List[Tree]:
        return _sorted_by_id(self.get_habitat(habitat_id).trees, "tree_id")

    def animal_vaccinations(self, animal_id: str) -> List[VaccineRegistry]:
        return list(self.get_animal(animal_id).vaccinations)

    def vet_vaccinations(self, vet_id: str) -> List[VaccineRegistry]:
        return list(self.get_vet(vet_id).vaccinations)

    def wrong_vaccinations(self) -> List[VaccineRegistry]:
        """Vaccinations whose outcome was anything but NORMAL."""
        return [
            registry for registry in self._vaccinations
            if registry.damage is not VaccineDamage.NORMAL
        ]

    def workers_over_responsibilities(self, count: int) -> List[Worker]:
        """Workers holding strictly more than `count` responsibilities."""
        return [worker for worker in self.workers() if worker.total_responsibilities() > count]

    def most_satisfied_animal(self) -> Optional[Animal]:
        """The happiest animal; ties go to the lowest id."""
        best = None
        best_score = None
        for animal in self.animals():
            score = animal_satisfaction(animal)
            if best_score is None or score > best_score:
                best, best_score = animal, score
        return best

    def animal_satisfaction(self, animal_id: str) -> float:
        return animal_satisfaction(self.get_animal(animal_id))

    def worker_satisfaction(self, worker_id: str) -> float:
        return worker_satisfaction(self.get_worker(worker_id), self.season)

    def satisfaction(self) -> float:
        """Sum of every animal's and every worker's satisfaction."""
        return hotel_satisfaction(self._animals, self._workers, self.season)


def _check_non_negative(entity_id: str, attribute: str, value: int) -> None:
    if value < 0:
        raise InvalidAttribute(entity_id, attribute, value)
