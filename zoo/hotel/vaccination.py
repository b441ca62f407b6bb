"""
Vaccine damage heuristic.

A vaccine applied to a species it covers is harmless. Otherwise the damage
is estimated from how different the animal's species name is from the
names of the species the vaccine was formulated for:

    distance = max(len(a), len(b)) - common_characters(a, b)

where common characters are counted as a multiset intersection. The largest
distance over all covered species picks the damage class.
"""

from collections import Counter
from typing import Optional

from zoo.hotel.config import get_config
from zoo.hotel.core import Animal, Vaccine, VaccineDamage


def common_char_count(first: str, second: str) -> int:
    """
    Number of characters two names share, each occurrence used at most once.

    Comparison is case-sensitive: "Lobo" and "lobo" share three characters.
    """
    return sum((Counter(first) & Counter(second)).values())


def name_distance(first: str, second: str) -> int:
    """max(len(first), len(second)) - common_char_count(first, second)"""
    return max(len(first), len(second)) - common_char_count(first, second)


def max_distance(animal: Animal, vaccine: Vaccine) -> Optional[int]:
    """
    Largest name distance between the animal's species and any covered species.

    Returns:
        The distance, or None if the vaccine covers no species at all
    """
    species_name = animal.species.name
    distances = [name_distance(species_name, covered.name) for covered in vaccine.species]
    if not distances:
        return None
    return max(distances)


def classify_distance(distance: Optional[int]) -> VaccineDamage:
    """
    Map a name distance to a damage class.

    0 -> CONFUSION, 1..accident_max_distance -> ACCIDENT, larger -> ERROR.
    A vaccine with no covered species (distance None) is always ERROR.
    """
    if distance is None:
        return VaccineDamage.ERROR
    if distance <= 0:
        return VaccineDamage.CONFUSION
    elif distance <= get_config().vaccine_damage.accident_max_distance:
        return VaccineDamage.ACCIDENT
    return VaccineDamage.ERROR


def vaccine_damage(animal: Animal, vaccine: Vaccine) -> VaccineDamage:
    """
    Classify the outcome of giving `vaccine` to `animal`.

    Args:
        animal: The animal being vaccinated
        vaccine: The vaccine applied

    Returns:
        NORMAL if the vaccine covers the animal's species, otherwise the
        class derived from the name distance
    """
    if vaccine.covers(animal.species):
        return VaccineDamage.NORMAL
    return classify_distance(max_distance(animal, vaccine))
