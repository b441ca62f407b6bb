"""
Satisfaction computation functions.

Pure functions over the entity graph, recomputed on every call. Divisions
are integer divisions, as in the scoring rules the hotel has always used:
    animal    = base + bonus*(same - 1) - penalty*(population - same)
                + area // population + influence
    vet       = base - sum(animals // vets) over responsible species
    caretaker = base - sum(work / caretakers, toward zero) over habitats
    work      = area + weight*population + sum(tree cleaning effort)
"""

from typing import Iterable

from zoo.hotel.config import get_config
from zoo.hotel.core import (
    Animal,
    CareTaker,
    Habitat,
    Influence,
    Species,
    Vet,
    Worker,
)
from zoo.hotel.exceptions import GraphIntegrityError
from zoo.hotel.seasons import Season


def truncating_div(dividend: int, divisor: int) -> int:
    """Integer division rounding toward zero (-7 / 2 == -3)."""
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend < 0) == (divisor < 0) else -quotient


def influence_value(influence: Influence) -> int:
    """Satisfaction contribution of a habitat influence."""
    values = get_config().influence
    if influence is Influence.POS:
        return values.positive
    elif influence is Influence.NEG:
        return values.negative
    return values.neutral


def animal_satisfaction(animal: Animal) -> float:
    """
    Satisfaction of an animal in its current habitat.

    The bonus counts the animal's companions of its own species, so a lone
    animal gets none; the penalty counts the animals of other species.

    Raises:
        GraphIntegrityError: If the habitat does not list the animal
    """
    weights = get_config().animal
    habitat = animal.habitat
    same_species = habitat.same_species_count(animal.species)
    population = habitat.population()

    if same_species == 0:
        raise GraphIntegrityError(
            f"Animal {animal.animal_id} is not listed in habitat {habitat.habitat_id}"
        )

    return float(
        weights.base
        + weights.same_species_bonus * (same_species - 1)
        - weights.other_species_penalty * (population - same_species)
        + habitat.area // population
        + influence_value(habitat.influence(animal.species))
    )


def species_workload(species: Species) -> int:
    """Animals per vet of a species (integer division)."""
    vets = species.vet_count()
    if vets == 0:
        raise GraphIntegrityError(
            f"Species {species.species_id} is held as a responsibility but has no vets"
        )
    return species.animal_count() // vets


def default_vet_satisfaction(vet: Vet, season: Season) -> float:
    """base - sum over responsible species of animals // vets"""
    base = get_config().vet.base
    return float(base - sum(species_workload(species) for species in vet.responsibilities))


def habitat_work(habitat: Habitat, season: Season) -> int:
    """
    Work a habitat demands in a season.

    Each tree's cleaning effort is truncated to an integer as it is added.
    """
    weight = get_config().caretaker.population_weight
    work = habitat.area + weight * habitat.population()
    for tree in habitat.trees:
        work += int(tree.total_cleaning_effort(season))
    return work


def default_caretaker_satisfaction(caretaker: CareTaker, season: Season) -> float:
    """base - sum over responsible habitats of work / caretakers (truncated)"""
    base = get_config().caretaker.base
    total = 0
    for habitat in caretaker.responsibilities:
        caretakers = len(habitat.caretakers)
        if caretakers == 0:
            raise GraphIntegrityError(
                f"Habitat {habitat.habitat_id} is held as a responsibility "
                f"but has no caretakers"
            )
        total += truncating_div(habitat_work(habitat, season), caretakers)
    return float(base - total)


DEFAULT_FORMULAS = {
    Vet: default_vet_satisfaction,
    CareTaker: default_caretaker_satisfaction,
}


def worker_satisfaction(worker: Worker, season: Season) -> float:
    """
    Satisfaction of any worker.

    Uses the worker's own formula when one is injected, the default for its
    kind otherwise.

    Args:
        worker: Vet or CareTaker
        season: Current hotel season (trees' workload depends on it)

    Returns:
        Satisfaction score
    """
    formula = worker.satisfaction_formula or DEFAULT_FORMULAS.get(type(worker))
    if formula is None:
        raise TypeError(f"Unsupported worker type: {type(worker).__name__}")
    return formula(worker, season)


def hotel_satisfaction(
    animals: Iterable[Animal],
    workers: Iterable[Worker],
    season: Season,
) -> float:
    """Sum of every animal's and every worker's satisfaction."""
    total = 0.0
    for animal in animals:
        total += animal_satisfaction(animal)
    for worker in workers:
        total += worker_satisfaction(worker, season)
    return total
