"""
Seasons: a four-state cycle driving tree workload and foliage.

Spring -> Summer -> Fall -> Winter -> Spring. Each season fixes, per tree
kind, how much cleaning effort a tree demands and what its leaves look like.
"""

from enum import Enum
from typing import Dict, Iterable, List, Tuple


class Season(Enum):
    SPRING = 0
    SUMMER = 1
    FALL = 2
    WINTER = 3

    def next(self) -> "Season":
        """The season that follows this one."""
        return _NEXT_SEASON[self]

    def __str__(self) -> str:
        return str(self.value)


_NEXT_SEASON: Dict[Season, Season] = {
    Season.SPRING: Season.SUMMER,
    Season.SUMMER: Season.FALL,
    Season.FALL: Season.WINTER,
    Season.WINTER: Season.SPRING,
}


class LeafState(Enum):
    """Foliage labels as they appear in display lines."""
    WITH_LEAVES = "COMFOLHAS"
    WITHOUT_LEAVES = "SEMFOLHAS"
    FALLING_LEAVES = "LARGARFOLHAS"
    GENERATING_LEAVES = "GERARFOLHAS"

    def __str__(self) -> str:
        return self.value


# Tree kind tags, as used in import files and display lines
DECIDUOUS = "CADUCA"
EVERGREEN = "PERENE"


# =============================================================================
# SEASONAL TABLE
# =============================================================================
# (season, tree kind) -> (seasonal effort, foliage)

SEASONAL_TABLE: Dict[Tuple[Season, str], Tuple[int, LeafState]] = {
    (Season.SPRING, DECIDUOUS): (1, LeafState.GENERATING_LEAVES),
    (Season.SPRING, EVERGREEN): (1, LeafState.GENERATING_LEAVES),
    (Season.SUMMER, DECIDUOUS): (2, LeafState.WITH_LEAVES),
    (Season.SUMMER, EVERGREEN): (1, LeafState.WITH_LEAVES),
    (Season.FALL, DECIDUOUS): (5, LeafState.FALLING_LEAVES),
    (Season.FALL, EVERGREEN): (1, LeafState.WITH_LEAVES),
    (Season.WINTER, DECIDUOUS): (0, LeafState.WITHOUT_LEAVES),
    (Season.WINTER, EVERGREEN): (2, LeafState.FALLING_LEAVES),
}


def seasonal_effort(season: Season, tree_kind: str) -> int:
    """
    Cleaning workload factor of a tree kind in a season.

    Raises:
        KeyError: If tree_kind is not DECIDUOUS or EVERGREEN
    """
    return SEASONAL_TABLE[(season, tree_kind)][0]


def leaf_state(season: Season, tree_kind: str) -> LeafState:
    """Foliage of a tree kind in a season."""
    return SEASONAL_TABLE[(season, tree_kind)][1]


def parse_season(name: str) -> Season:
    """Season from its name ("SPRING") or its numeric label ("0")."""
    key = name.strip().upper()
    if key in Season.__members__:
        return Season[key]
    try:
        return Season(int(key))
    except ValueError:
        raise ValueError(f"Unknown season: {name}") from None


# =============================================================================
# TREE AGEING
# =============================================================================

def grow_trees(trees: Iterable, season: Season) -> List:
    """
    Age every tree whose birth season is `season` by one year.

    Called after the hotel moves into `season`, so each tree ages once per
    full cycle, on its anniversary.

    Args:
        trees: Trees to consider (anything with birth_season and age)
        season: The season the hotel has just entered

    Returns:
        The trees that aged
    """
    grown = []
    for tree in trees:
        if tree.birth_season == season:
            tree.age += 1
            grown.append(tree)
    return grown
