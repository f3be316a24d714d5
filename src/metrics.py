"""
metrics.py
==========

Module for calculating standard bibliometric metrics.

This module implements commonly used bibliometric indices for evaluating
author impact and productivity from a vector of per-article citations:
- h-index (Hirsch index)
- g-index (Egghe index)
- r-index (square root of the h-core citations)
- i10-index (papers with ≥10 citations)
- m-quotient (h-index per career year)
- hg-index (geometric mean of h and g)
- random h-index (experimental, order-sensitive)

All functions are pure and accept any iterable of non-negative integers
(list, numpy array, pandas Series). Apart from random_h_index the order
of the citations never matters. An empty vector yields zero values.

Date: 11/2025
Version: 2.0
"""

import math

import numpy as np


def _as_vector(citations):
    """Citation counts as a 1-D int64 array."""
    if not hasattr(citations, "__len__"):
        citations = list(citations)
    return np.asarray(citations, dtype=np.int64).ravel()


def _sorted_desc(citations):
    return np.sort(_as_vector(citations))[::-1]


def h_index(citations):
    """
    Calculate the h-index for an author.

    A researcher has index h if h of their papers have at least h
    citations each.

    Parameters
    ----------
    citations : iterable of int
        Citation counts for each publication (any order)

    Returns
    -------
    int
        The h-index value (0 for an empty vector)

    Notes
    -----
    Vectorized: after sorting descending, position p (1-indexed) is valid
    when sorted[p] ≥ p. The h-index is the largest valid position.

    Examples
    --------
    >>> h_index([10, 8, 5, 4, 3])
    4
    >>> h_index([100, 50, 20, 10, 5, 1, 0])
    5
    """
    sorted_cites = _sorted_desc(citations)
    if sorted_cites.size == 0:
        return 0

    positions = np.arange(1, sorted_cites.size + 1)
    valid = np.flatnonzero(sorted_cites >= positions)
    return int(valid[-1] + 1) if valid.size else 0


def g_index(citations):
    """
    Calculate the g-index for an author.

    The g-index is defined as the largest number g such that the top g
    publications have together at least g² citations.

    Parameters
    ----------
    citations : iterable of int
        Citation counts for each publication

    Returns
    -------
    int
        The g-index value

    Notes
    -----
    g is capped at the number of publications. When no position
    satisfies the condition (not even g=1) the pseudo g-index
    floor(sqrt(total citations)) is returned instead.

    Examples
    --------
    >>> g_index([10, 8, 5, 4, 3])
    5
    >>> # Top 5 papers have 30 citations ≥ 5² = 25 ✓
    """
    sorted_cites = _sorted_desc(citations)
    if sorted_cites.size == 0:
        return 0

    cumulative = np.cumsum(sorted_cites)
    positions = np.arange(1, sorted_cites.size + 1)
    valid = np.flatnonzero(cumulative >= positions ** 2)
    if valid.size:
        return int(valid[-1] + 1)

    # Pseudo g-index
    return math.isqrt(int(sorted_cites.sum()))


def r_index(citations):
    """
    Calculate the r-index: square root of the citations in the h-core.

    Parameters
    ----------
    citations : iterable of int
        Citation counts for each publication

    Returns
    -------
    float
        sqrt(sum of the h most cited papers), 0.0 when h = 0

    Examples
    --------
    >>> round(r_index([10, 8, 5, 4, 3]), 3)  # sqrt(10+8+5+4)
    5.196
    """
    sorted_cites = _sorted_desc(citations)
    h = h_index(sorted_cites)
    if h == 0:
        return 0.0
    return math.sqrt(int(sorted_cites[:h].sum()))


def i10_index(citations):
    """
    Calculate the i10-index (papers with at least 10 citations).

    Google Scholar's threshold count: how many articles in the vector
    reached ten citations. Unlike h and g it ignores everything above
    the threshold.

    Parameters
    ----------
    citations : iterable of int
        Citation counts for each publication

    Returns
    -------
    int
        Number of publications with ≥10 citations

    Examples
    --------
    >>> i10_index([100, 50, 20, 10, 5, 1])
    4
    """
    return int(np.count_nonzero(_as_vector(citations) >= 10))


def m_quotient(citations, years_active):
    """
    Calculate the m-quotient (h-index normalized by career length).

    Parameters
    ----------
    citations : iterable of int
        Citation counts for each publication
    years_active : int or float
        Years since first publication (inclusive)

    Returns
    -------
    float
        h / years_active, or 0 when years_active ≤ 0

    Notes
    -----
    years_active counts the first publication year itself, so a
    researcher who started this year has years_active = 1 and m = h.
    Comparable across career stages only roughly: h grows sub-linearly
    for most researchers, so m drifts down late in a career.

    Examples
    --------
    >>> m_quotient([10, 8, 5, 4, 3], 8)  # h=4 over 8 years
    0.5
    """
    if years_active is None or years_active <= 0:
        return 0.0
    return h_index(citations) / years_active


def hg_index(citations):
    """Geometric mean of the h-index and the g-index."""
    return math.sqrt(h_index(citations) * g_index(citations))


def all_indices(citations, years_active=None):
    """
    Calculate every index at once.

    Parameters
    ----------
    citations : iterable of int
        Citation counts for each publication
    years_active : int, optional
        Years since first publication. m_quotient and years_active are only
        included when this is given and positive.

    Returns
    -------
    dict
        Keys: h_index, g_index, r_index, i10_index, hg_index,
        total_citations, total_papers, avg_citations
        [, m_quotient, years_active]

    Examples
    --------
    >>> res = all_indices([100, 50, 20, 10, 5, 1], years_active=10)
    >>> res["h_index"], res["m_quotient"]
    (5, 0.5)
    """
    vector = _sorted_desc(citations)
    h = h_index(vector)
    g = g_index(vector)

    result = {
        "h_index": h,
        "g_index": g,
        "r_index": r_index(vector),
        "i10_index": i10_index(vector),
        "hg_index": math.sqrt(h * g),
        "total_citations": int(vector.sum()),
        "total_papers": int(vector.size),
        "avg_citations": float(vector.mean()) if vector.size else 0.0,
    }

    if years_active is not None and years_active > 0:
        result["m_quotient"] = h / years_active
        result["years_active"] = years_active

    return result


def positional_h(ordered_citations):
    """Count 1-indexed positions i where citations[i] ≥ i (no re-sorting)."""
    vector = _as_vector(ordered_citations)
    return int(np.count_nonzero(vector >= np.arange(1, vector.size + 1)))


def random_h_index(citations, n_iterations=None, seed=None, rng=None):
    """
    Calculate the random h-index (experimental).

    Shuffles the papers n times and computes a "positional h-index" on each
    permutation: the number of positions i where the paper at i has at
    least i citations. Explores how sensitive h-like counts are to the
    order in which papers are listed.

    Parameters
    ----------
    citations : iterable of int
        Citation counts for each publication
    n_iterations : int, optional
        Number of random permutations (default: number of papers)
    seed : int, optional
        Seed for a call-scoped numpy Generator (ignored when rng is given)
    rng : numpy.random.Generator, optional
        Explicit random source

    Returns
    -------
    dict
        {'maximum': int, 'minimum': int, 'average': int}
        average is the mean rounded to the nearest integer (half to even).
        All zeros for an empty vector or n_iterations ≤ 0.

    Examples
    --------
    >>> random_h_index([5, 5, 5, 5, 5], seed=42)
    {'maximum': 5, 'minimum': 5, 'average': 5}
    """
    vector = _as_vector(citations)
    if n_iterations is None:
        n_iterations = vector.size

    if vector.size == 0 or n_iterations <= 0:
        return {"maximum": 0, "minimum": 0, "average": 0}

    if rng is None:
        rng = np.random.default_rng(seed)

    values = np.array([positional_h(rng.permutation(vector)) for _ in range(n_iterations)])

    return {
        "maximum": int(values.max()),
        "minimum": int(values.min()),
        "average": int(round(float(values.mean()))),
    }
