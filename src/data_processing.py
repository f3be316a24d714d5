"""
data_processing.py
==================


Module for turning article tables into researcher profiles
for BiblioMetric-Analyzer.


This module provides standardized functions for:
- ✅ Validating article tables (columns resolved once, all gaps reported)
- 👤 Building one researcher's profile (analyze_researcher)
- 👥 Building a whole cohort, one profile per researcher (analyze_all)
- 💾 Loading article CSVs and exporting cohort tables


Dependencies
------------
- metrics: index engine (h, g, r, i10, hg, m)
- config: column mapping + VIP journal list
- pandas: article/cohort tables
- tqdm: optional progress bar over researchers


Article Table Schema
--------------------
researcher : str   → researcher identifier
tc         : int   → total citations of the article (≥ 0)
source     : str   → journal / source title
pyear      : int   → publication year

Physical column names come from config.ColumnMapping.


Date: 11/2025
Version: 2.0
"""


import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

import numpy as np
import pandas as pd
from tqdm import tqdm

from config import AnalysisConfig
from errors import EmptyTableError, InvalidCitationError, ValidationError
from metrics import all_indices
from models import CohortTable, ResearcherProfile

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = ("total_citations", "source", "year")
COHORT_COLUMNS = ("researcher",) + PROFILE_COLUMNS
ERROR_POLICIES = ("raise", "skip")


def validate_articles(data, columns, required=PROFILE_COLUMNS):
    """
    Validate an article table before any computation.

    Parameters
    ----------
    data : pd.DataFrame
        Article table
    columns : config.ColumnMapping
        Logical → physical column names
    required : iterable of str
        Logical column names that must be present

    Returns
    -------
    dict
        {logical_name: physical_name} resolved once for the caller

    Raises
    ------
    ValidationError
        Input is not a DataFrame
    EmptyTableError
        Table has no rows
    MissingColumnError
        One or more required columns are absent (all of them named)
    """
    if not isinstance(data, pd.DataFrame):
        raise ValidationError(f"Input must be a pandas DataFrame, got {type(data).__name__}")

    if data.empty:
        raise EmptyTableError("Article table is empty")

    return columns.resolve(data.columns, required)


def citation_vector(citations):
    """
    Citation column → non-negative int64 vector.

    Raises
    ------
    InvalidCitationError
        Missing, non-numeric, fractional or negative counts.
    """
    values = pd.to_numeric(pd.Series(citations), errors="coerce")

    bad = values.isna() | (values < 0) | (values % 1 != 0)
    if bad.any():
        offending = pd.Series(citations)[bad].tolist()[:5]
        raise InvalidCitationError(
            f"Citation counts must be non-negative integers; found {offending}"
        )

    return values.to_numpy(dtype=np.int64)


def years_active(years, current_year):
    """
    Years since first publication: current_year - min(year) + 1.

    Missing years are ignored. Returns None when no year is known.
    The result can be ≤ 0 (publications dated in the future); callers
    decide how to treat that.
    """
    known = pd.to_numeric(pd.Series(years), errors="coerce").dropna()
    if known.empty:
        return None
    return int(current_year - known.min() + 1)


def count_vip_publications(sources, vip_journals):
    """Count articles whose source exactly matches a VIP journal (case-sensitive)."""
    return int(pd.Series(sources).isin(vip_journals).sum())


def sort_by_citations(data, tc_col="tc"):
    """Article table sorted by citations, most cited first."""
    return data.sort_values(tc_col, ascending=False, kind="mergesort")


def analyze_researcher(data, config=None, researcher=None):
    """
    Analyze a single researcher's bibliometric profile.

    Parameters
    ----------
    data : pd.DataFrame
        The researcher's articles
    config : AnalysisConfig, optional
        Column mapping, VIP journals, reference year (default: AnalysisConfig())
    researcher : str, optional
        Researcher identifier. Default: first value of the researcher
        column when present, else "Unknown".

    Returns
    -------
    ResearcherProfile

    Raises
    ------
    ValidationError
        Empty/non-tabular table, missing columns or invalid citation counts.

    Notes
    -----
    When years active is ≤ 0 (or unknown) the profile carries
    m_quotient=None and years_active=None.

    Examples
    --------
    >>> df = pd.DataFrame({
    ...     "researcher": ["Smith J"] * 5,
    ...     "tc": [10, 8, 5, 4, 3],
    ...     "source": ["Nature", "Cell", "Cell", "PLOS ONE", "Nature"],
    ...     "pyear": [2016, 2018, 2019, 2021, 2024],
    ... })
    >>> p = analyze_researcher(df, AnalysisConfig(current_year=2025))
    >>> p.h_index, p.g_index, p.years_active, p.vip_publications
    (4, 5, 10, 4)
    """
    config = config or AnalysisConfig()
    cols = validate_articles(data, config.columns)

    citations = citation_vector(data[cols["total_citations"]])
    active = years_active(data[cols["year"]], config.resolve_year())
    if active is not None and active <= 0:
        logger.debug(f"Non-positive years active ({active}); m-quotient omitted")
        active = None

    indices = all_indices(citations, active)

    if researcher is None:
        researcher_col = config.columns.researcher
        researcher = str(data[researcher_col].iloc[0]) if researcher_col in data.columns else "Unknown"

    sources = data[cols["source"]]
    profile = ResearcherProfile(
        researcher=researcher,
        h_index=indices["h_index"],
        g_index=indices["g_index"],
        r_index=indices["r_index"],
        i10_index=indices["i10_index"],
        hg_index=indices["hg_index"],
        m_quotient=indices.get("m_quotient"),
        total_papers=indices["total_papers"],
        total_citations=indices["total_citations"],
        avg_citations=indices["avg_citations"],
        years_active=indices.get("years_active"),
        unique_journals=int(sources.nunique(dropna=True)),
        vip_publications=count_vip_publications(sources, config.vip_journals),
    )

    if config.round_output:
        profile = _rounded(profile)

    logger.debug(f"Profile {profile.researcher}: h={profile.h_index} g={profile.g_index} "
                 f"papers={profile.total_papers}")
    return profile


def _rounded(profile):
    """Display rounding: r/hg/avg to 2 decimals, m-quotient to 3."""
    return replace(
        profile,
        r_index=round(profile.r_index, 2),
        hg_index=round(profile.hg_index, 2),
        avg_citations=round(profile.avg_citations, 2),
        m_quotient=None if profile.m_quotient is None else round(profile.m_quotient, 3),
    )


def split_by_researcher(data, researcher_col="researcher"):
    """
    Split a multi-researcher table into one sub-table per researcher.

    Returns
    -------
    dict
        {researcher_id: pd.DataFrame} in order of first appearance, keyed
        by the raw id values (1 and "1" are different researchers).
        Rows with a missing researcher id are dropped with a warning.
    """
    missing = int(data[researcher_col].isna().sum())
    if missing:
        logger.warning(f"Dropping {missing} article(s) with no {researcher_col} value")

    return {key: group for key, group in data.groupby(researcher_col, sort=False, dropna=True)}


def _researcher_labels(researcher_ids):
    """
    Text label per raw researcher id.

    Raises
    ------
    ValidationError
        Two distinct ids share the same text (e.g. 1 and "1").
    """
    labels = {}
    seen = {}
    for key in researcher_ids:
        label = str(key)
        if label in seen:
            raise ValidationError(
                f"Researcher ids {seen[label]!r} and {key!r} are indistinguishable as text ({label!r})"
            )
        seen[label] = key
        labels[key] = label
    return labels


def analyze_all(data, config=None, on_error="raise", max_workers=None, show_progress=False):
    """
    Compute bibliometric profiles for every researcher in a dataset.

    Parameters
    ----------
    data : pd.DataFrame
        Articles from multiple researchers
    config : AnalysisConfig, optional
        Shared configuration (default: AnalysisConfig())
    on_error : {"raise", "skip"}
        "raise" (default): the first failing researcher aborts the analysis.
        "skip": failing researchers are logged, left out of the cohort and
        listed in CohortTable.skipped as (researcher, error) pairs.
    max_workers : int, optional
        > 1 builds profiles on a thread pool. Each task owns its own
        sub-table; results are merged in partition order afterwards.
    show_progress : bool
        Display a tqdm progress bar over researchers.

    Returns
    -------
    CohortTable
        One profile per distinct researcher.

    Raises
    ------
    ValidationError
        Table-level failures always; partition failures under on_error="raise".
    """
    if on_error not in ERROR_POLICIES:
        raise ValueError(f"on_error must be one of {ERROR_POLICIES}, got {on_error!r}")

    config = config or AnalysisConfig()
    cols = validate_articles(data, config.columns, required=COHORT_COLUMNS)
    groups = split_by_researcher(data, cols["researcher"])
    labels = _researcher_labels(groups)
    partitions = [(labels[key], frame) for key, frame in groups.items()]

    logger.info(f"Analyzing {len(partitions)} researchers ({len(data)} articles)")

    def analyze_partition(item):
        researcher, frame = item
        try:
            return researcher, analyze_researcher(frame, config, researcher=researcher), None
        except ValidationError as ex:
            if on_error == "raise":
                raise
            return researcher, None, ex

    progress = dict(total=len(partitions), desc="👥 Researchers", unit="researcher",
                    disable=not show_progress)

    if max_workers and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(tqdm(pool.map(analyze_partition, partitions), **progress))
    else:
        results = [analyze_partition(item) for item in tqdm(partitions, **progress)]

    profiles = []
    skipped = []
    for researcher, profile, error in results:
        if error is not None:
            logger.warning(f"Skipping researcher {researcher}: {error}")
            skipped.append((researcher, error))
        else:
            profiles.append(profile)

    logger.info(f"Cohort complete: {len(profiles)} profiles, {len(skipped)} skipped")
    return CohortTable(profiles, skipped)


def load_articles(path, **kwargs):
    """Read an article CSV into a DataFrame (extra kwargs → pd.read_csv)."""
    data = pd.read_csv(path, **kwargs)
    logger.info(f"Loaded {len(data)} articles from {path}")
    return data


def export_results(analysis_result, filename, **kwargs):
    """
    Export analysis results to a CSV file.

    Parameters
    ----------
    analysis_result : CohortTable or pd.DataFrame
        Output of analyze_all() / rank_researchers()
    filename : str
        Destination path
    **kwargs
        Passed to DataFrame.to_csv
    """
    frame = analysis_result.to_frame() if isinstance(analysis_result, CohortTable) else analysis_result
    frame.to_csv(filename, index=False, **kwargs)
    logger.info(f"Results exported to: {filename}")
    return filename
