"""
ranking.py
==========

Ranking and summary statistics over a completed cohort.

- rank_researchers(): stable descending sort by any profile field,
  dense sequential ranks 1..N (ties broken by cohort order), optional top-N
- summarize_analysis(): cohort-level aggregates

Both functions only read the cohort; ranking returns a new CohortTable.

Date: 11/2025
Version: 2.0
"""

import logging

import numpy as np

from errors import UnknownMetricError
from models import PROFILE_FIELDS, CohortTable

logger = logging.getLogger(__name__)


def _sort_key(metric):
    # Missing values (e.g. m_quotient=None) sort after every real value
    def key(profile):
        value = getattr(profile, metric)
        return (value is not None, value)
    return key


def rank_researchers(analysis_result, by="h_index", top_n=None):
    """
    Rank researchers by a profile metric.

    Parameters
    ----------
    analysis_result : CohortTable
        Output of analyze_all()
    by : str, optional
        Profile field to rank by (default: "h_index")
    top_n : int, optional
        Keep only the first top_n rows (default: all)

    Returns
    -------
    CohortTable
        Profiles with rank populated, ordered by rank ascending.

    Raises
    ------
    UnknownMetricError
        `by` is not a ResearcherProfile field.
    ValueError
        `top_n` is not a positive integer.

    Notes
    -----
    Ranks are positional: equal values get distinct consecutive ranks in
    their original cohort order, never a shared rank.

    Examples
    --------
    >>> ranked = rank_researchers(cohort, by="h_index", top_n=2)
    >>> [(p.rank, p.h_index) for p in ranked]
    [(1, 12), (2, 9)]
    """
    if by not in PROFILE_FIELDS:
        raise UnknownMetricError(by, PROFILE_FIELDS)

    if top_n is not None and (isinstance(top_n, bool) or not isinstance(top_n, (int, np.integer)) or top_n < 1):
        raise ValueError(f"top_n must be a positive integer, got {top_n!r}")

    # sorted() is stable with reverse=True: ties keep cohort order
    ordered = sorted(analysis_result, key=_sort_key(by), reverse=True)
    ranked = [profile.with_rank(position) for position, profile in enumerate(ordered, start=1)]

    if top_n is not None and top_n < len(ranked):
        ranked = ranked[:top_n]

    logger.debug(f"Ranked {len(analysis_result)} researchers by {by}; returning {len(ranked)}")
    return CohortTable(ranked, analysis_result.skipped, ranked=True)


def summarize_analysis(analysis_result):
    """
    Summary statistics across all researchers.

    Parameters
    ----------
    analysis_result : CohortTable
        Output of analyze_all()

    Returns
    -------
    dict
        - total_researchers : int
        - avg_h_index : float
        - max_h_index : int
        - avg_total_papers : float
        - avg_citations_per_researcher : float
        - total_vip_publications : int

        All zeros for an empty cohort.
    """
    if len(analysis_result) == 0:
        return {
            "total_researchers": 0,
            "avg_h_index": 0.0,
            "max_h_index": 0,
            "avg_total_papers": 0.0,
            "avg_citations_per_researcher": 0.0,
            "total_vip_publications": 0,
        }

    h_values = np.array(analysis_result.column("h_index"))
    return {
        "total_researchers": len(analysis_result),
        "avg_h_index": float(h_values.mean()),
        "max_h_index": int(h_values.max()),
        "avg_total_papers": float(np.mean(analysis_result.column("total_papers"))),
        "avg_citations_per_researcher": float(np.mean(analysis_result.column("total_citations"))),
        "total_vip_publications": int(np.sum(analysis_result.column("vip_publications"))),
    }
