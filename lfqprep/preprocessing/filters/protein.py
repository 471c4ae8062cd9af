"""
Protein-level preprocessing filters.
"""

from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Tuple

import pandas as pd

from lfqprep.core.constants import PROTEIN_GROUP_SPLIT, PROTEIN_NAME
from lfqprep.core.logger import get_logger
from lfqprep.preprocessing.filters.base import BaseFilter
from lfqprep.preprocessing.filters.enums import FilterLevel


logger = get_logger("lfqprep.preprocessing.filters.protein")


def protein_group_members(accession, split: str = PROTEIN_GROUP_SPLIT) -> FrozenSet[str]:
    """
    Decompose a protein group accession into its member identifiers.

    Parameters
    ----------
    accession
        Protein group, e.g. ``"P1/P2"``. Missing values form the group ``{"nan"}``.
    split : str, optional
        Separator between members.

    Returns
    -------
    frozenset of str
    """
    return frozenset(str(accession).split(split))


def smallest_unique_groups(accessions: Iterable, split: str = PROTEIN_GROUP_SPLIT) -> List:
    """
    Select the protein groups that do not contain a smaller observed group.

    A group is dropped when another observed group has strictly fewer members,
    all of which belong to it. Groups of equal size, or overlapping groups
    that are not nested, never remove each other.

    Parameters
    ----------
    accessions : iterable
        Accession value of every row; duplicates are collapsed.
    split : str, optional
        Separator between the members of a group.

    Returns
    -------
    list
        Distinct surviving accession values, in order of first appearance.
    """
    distinct = pd.unique(pd.Series(list(accessions), dtype=object))
    members: Dict = {acc: protein_group_members(acc, split) for acc in distinct}

    by_member: Dict[str, set] = defaultdict(set)
    for group in set(members.values()):
        for member in group:
            by_member[member].add(group)

    dominated = set()
    for group in set(members.values()):
        if len(group) < 2:
            continue
        for member in group:
            if any(len(other) < len(group) and other < group for other in by_member[member]):
                dominated.add(group)
                break

    kept = [acc for acc in distinct if members[acc] not in dominated]
    logger.debug(
        "Smallest unique groups: kept %d of %d protein groups", len(kept), len(distinct)
    )
    return kept


class SmallestUniqueGroupsFilter(BaseFilter):
    """Keep rows whose protein group does not contain a smaller observed group."""

    def __init__(self, protein_column: str = PROTEIN_NAME, split: str = PROTEIN_GROUP_SPLIT):
        """
        Initialize the filter.

        Parameters
        ----------
        protein_column : str, optional
            Column name containing protein group identifiers.
        split : str, optional
            Separator between the members of a protein group.
        """
        self.protein_column = protein_column
        self.split = split

    @property
    def name(self) -> str:
        return "SmallestUniqueGroupsFilter"

    @property
    def level(self) -> FilterLevel:
        return FilterLevel.PROTEIN

    def keep_mask(self, df: pd.DataFrame) -> Tuple[pd.Series, dict]:
        accessions = df[self.protein_column]
        kept = smallest_unique_groups(accessions, split=self.split)
        mask = accessions.isin(kept)
        details = {
            "groups_in": int(accessions.nunique(dropna=False)),
            "groups_kept": len(kept),
        }
        return mask, details

    def __repr__(self) -> str:
        return f"SmallestUniqueGroupsFilter(protein_column={self.protein_column!r}, split={self.split!r})"
