"""
config.py
=========

Configuration record for BiblioMetric-Analyzer.

Holds the VIP journal list and the logical → physical column mapping used
to read article tables. The configuration is an explicit object passed to
every analysis call; nothing in the pipeline reads global state.

Optional Configuration (.env)
-----------------------------
BIBANL_VIP_JOURNALS=Nature;Science;Cell
BIBANL_COL_RESEARCHER=researcher
BIBANL_COL_TC=tc
BIBANL_COL_SOURCE=source
BIBANL_COL_YEAR=pyear
BIBANL_CURRENT_YEAR=2025

Every variable is optional; missing ones fall back to the defaults below.

Date: 11/2025
Version: 2.0
"""

import os
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from dotenv import load_dotenv

from errors import ConfigError, MissingColumnError


# ============================================================
# DEFAULTS
# ============================================================
VIP_JOURNALS = frozenset({
    "Nature",
    "Science",
    "Cell",
    "The Lancet",
    "New England Journal of Medicine",
    "Proceedings of the National Academy of Sciences",
    "JAMA",
    "Nature Medicine",
})

DEFAULT_COLS = {
    "researcher": "researcher",
    "total_citations": "tc",
    "source": "source",
    "year": "pyear",
}


@dataclass(frozen=True)
class ColumnMapping:
    """Logical column name → physical column name in the article table."""
    researcher: str = DEFAULT_COLS["researcher"]
    total_citations: str = DEFAULT_COLS["total_citations"]
    source: str = DEFAULT_COLS["source"]
    year: str = DEFAULT_COLS["year"]

    def physical(self, logical: str) -> str:
        """Physical column name for one logical name."""
        if logical not in DEFAULT_COLS:
            raise KeyError(f"Unknown logical column: {logical}")
        return getattr(self, logical)

    def resolve(self, columns: Iterable[str], required: Iterable[str]) -> Dict[str, str]:
        """
        Resolve logical names against the columns actually present.

        Parameters
        ----------
        columns : iterable of str
            Column names of the article table
        required : iterable of str
            Logical names that must resolve

        Returns
        -------
        dict
            {logical_name: physical_name} for every required name

        Raises
        ------
        MissingColumnError
            Naming every physical column that is absent, not just the first.
        """
        present = set(columns)
        resolved = {}
        missing = []
        for logical in required:
            physical = self.physical(logical)
            if physical in present:
                resolved[logical] = physical
            else:
                missing.append(physical)
        if missing:
            raise MissingColumnError(missing)
        return resolved


@dataclass(frozen=True)
class AnalysisConfig:
    """Everything a profile/cohort analysis needs besides the data."""
    columns: ColumnMapping = field(default_factory=ColumnMapping)
    vip_journals: FrozenSet[str] = VIP_JOURNALS
    current_year: Optional[int] = None  # None → datetime.now().year
    round_output: bool = True

    def __post_init__(self):
        # Accept any iterable of journal names
        object.__setattr__(self, "vip_journals", frozenset(self.vip_journals))

    def resolve_year(self) -> int:
        if self.current_year is not None:
            return self.current_year
        from datetime import datetime
        return datetime.now().year


def _split_journals(raw: str) -> Tuple[str, ...]:
    return tuple(j.strip() for j in raw.split(";") if j.strip())


def load_config(env_file: Optional[str] = None) -> AnalysisConfig:
    """
    Build an AnalysisConfig from environment variables (.env supported).

    Parameters
    ----------
    env_file : str, optional
        Path of a .env file; default lets python-dotenv search for one.
        Variables already set in the environment take precedence.

    Returns
    -------
    AnalysisConfig

    Raises
    ------
    ConfigError
        If BIBANL_CURRENT_YEAR is set but not an integer.
    """
    load_dotenv(env_file)

    columns = ColumnMapping(
        researcher=os.getenv("BIBANL_COL_RESEARCHER", DEFAULT_COLS["researcher"]).strip(),
        total_citations=os.getenv("BIBANL_COL_TC", DEFAULT_COLS["total_citations"]).strip(),
        source=os.getenv("BIBANL_COL_SOURCE", DEFAULT_COLS["source"]).strip(),
        year=os.getenv("BIBANL_COL_YEAR", DEFAULT_COLS["year"]).strip(),
    )

    raw_vip = os.getenv("BIBANL_VIP_JOURNALS")
    vip_journals = _split_journals(raw_vip) if raw_vip else VIP_JOURNALS

    raw_year = os.getenv("BIBANL_CURRENT_YEAR", "").strip()
    current_year = None
    if raw_year:
        try:
            current_year = int(raw_year)
        except ValueError:
            raise ConfigError(f"BIBANL_CURRENT_YEAR must be an integer, got {raw_year!r}") from None

    return AnalysisConfig(columns=columns, vip_journals=vip_journals, current_year=current_year)
