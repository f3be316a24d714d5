"""
models.py
=========

Data records for BiblioMetric-Analyzer output.

- ResearcherProfile: one researcher's indices and auxiliary counts
  (one output row, fixed column order)
- CohortTable: ordered, immutable sequence of profiles; carries the
  researchers skipped under on_error="skip" and whether it was ranked

Output Schema
-------------
[rank,] researcher, h_index, g_index, r_index, i10_index, hg_index,
m_quotient, total_papers, total_citations, avg_citations, years_active,
unique_journals, vip_publications

rank is present only on tables produced by ranking.rank_researchers().

Date: 11/2025
Version: 2.0
"""

from dataclasses import dataclass, fields, replace
from typing import Optional

import pandas as pd


@dataclass(frozen=True)
class ResearcherProfile:
    """Bibliometric profile of one researcher (one output row)."""
    researcher: str
    h_index: int = 0
    g_index: int = 0
    r_index: float = 0.0
    i10_index: int = 0
    hg_index: float = 0.0
    m_quotient: Optional[float] = None  # only when years_active > 0
    total_papers: int = 0
    total_citations: int = 0
    avg_citations: float = 0.0
    years_active: Optional[int] = None
    unique_journals: int = 0
    vip_publications: int = 0
    rank: Optional[int] = None  # set by ranking only

    def with_rank(self, rank):
        return replace(self, rank=rank)

    def to_dict(self):
        """Ordered output record; rank comes first once assigned."""
        record = {name: getattr(self, name) for name in PROFILE_FIELDS}
        if self.rank is not None:
            record = {"rank": self.rank, **record}
        return record


PROFILE_FIELDS = tuple(f.name for f in fields(ResearcherProfile) if f.name != "rank")


class CohortTable:
    """
    Immutable ordered sequence of researcher profiles.

    Parameters
    ----------
    profiles : iterable of ResearcherProfile
    skipped : iterable of (researcher, Exception)
        Only filled by analyze_all(on_error="skip")
    ranked : bool
        Set by rank_researchers(); adds the rank column to to_frame(),
        also when the table is empty
    """

    def __init__(self, profiles=(), skipped=(), ranked=False):
        self._profiles = tuple(profiles)
        self.skipped = tuple(skipped)
        self.ranked = ranked

    def __len__(self):
        return len(self._profiles)

    def __iter__(self):
        return iter(self._profiles)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return CohortTable(self._profiles[index], self.skipped, self.ranked)
        return self._profiles[index]

    def __repr__(self):
        return f"CohortTable({len(self)} researchers, {len(self.skipped)} skipped)"

    @property
    def profiles(self):
        return self._profiles

    def column(self, name):
        return [getattr(p, name) for p in self._profiles]

    def to_frame(self):
        """Cohort as a DataFrame in output-schema column order."""
        columns = list(PROFILE_FIELDS)
        if self.ranked:
            columns = ["rank"] + columns
        return pd.DataFrame([p.to_dict() for p in self._profiles], columns=columns)
