from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import pytest

from config import AnalysisConfig, ColumnMapping
from data_processing import (
    analyze_all,
    analyze_researcher,
    count_vip_publications,
    export_results,
    load_articles,
    sort_by_citations,
    split_by_researcher,
    validate_articles,
    years_active,
)
from errors import EmptyTableError, InvalidCitationError, MissingColumnError, ValidationError
from models import PROFILE_FIELDS, CohortTable

CONFIG = AnalysisConfig(current_year=2025)


def _articles(researcher: str, citations: list[int], years: list[int] | None = None,
              sources: list[str] | None = None) -> pd.DataFrame:
    n = len(citations)
    return pd.DataFrame({
        "researcher": [researcher] * n,
        "tc": citations,
        "source": sources or ["Journal of Testing"] * n,
        "pyear": years or [2020] * n,
    })


@pytest.fixture
def single() -> pd.DataFrame:
    return _articles(
        "Smith J",
        [10, 8, 5, 4, 3],
        years=[2016, 2018, 2019, 2021, 2024],
        sources=["Nature", "Cell", "Cell", "PLOS ONE", "Nature"],
    )


@pytest.fixture
def cohort_data() -> pd.DataFrame:
    return pd.concat([
        _articles("Alice", [245, 187, 156, 98, 76, 54, 43, 32, 21, 15, 8, 5, 3, 1, 0], years=[2010] * 15),
        _articles("Bob", [10, 8, 5, 4, 3], years=[2018] * 5),
        _articles("Carol", [0, 0, 1], years=[2024, 2025, 2025]),
    ], ignore_index=True)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def test_validate_articles_reports_every_missing_column() -> None:
    data = pd.DataFrame({"tc": [1, 2]})
    with pytest.raises(MissingColumnError) as excinfo:
        validate_articles(data, ColumnMapping())
    assert excinfo.value.missing == ("source", "pyear")
    assert "source" in str(excinfo.value) and "pyear" in str(excinfo.value)


def test_validate_articles_empty_table() -> None:
    with pytest.raises(EmptyTableError):
        validate_articles(pd.DataFrame(columns=["tc", "source", "pyear"]), ColumnMapping())


def test_validate_articles_rejects_non_tabular_input() -> None:
    with pytest.raises(ValidationError):
        validate_articles([{"tc": 1}], ColumnMapping())


def test_validate_articles_returns_physical_names() -> None:
    data = pd.DataFrame({"cites": [1], "journal": ["X"], "year": [2020]})
    mapping = ColumnMapping(total_citations="cites", source="journal", year="year")
    assert validate_articles(data, mapping) == {
        "total_citations": "cites", "source": "journal", "year": "year",
    }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_years_active_ignores_missing_years() -> None:
    assert years_active([2015, None, 2020], 2025) == 11


def test_years_active_unknown() -> None:
    assert years_active([None, None], 2025) is None


def test_count_vip_publications_is_exact_and_case_sensitive() -> None:
    sources = ["Nature", "nature", "Nature Communications", "Science"]
    assert count_vip_publications(sources, {"Nature", "Science"}) == 2


def test_sort_by_citations(single: pd.DataFrame) -> None:
    assert sort_by_citations(single)["tc"].tolist() == [10, 8, 5, 4, 3]


def test_split_by_researcher_preserves_first_appearance(cohort_data: pd.DataFrame) -> None:
    parts = split_by_researcher(cohort_data)
    assert list(parts) == ["Alice", "Bob", "Carol"]
    assert len(parts["Bob"]) == 5


# ---------------------------------------------------------------------------
# analyze_researcher
# ---------------------------------------------------------------------------

def test_analyze_researcher_profile(single: pd.DataFrame) -> None:
    profile = analyze_researcher(single, CONFIG)
    assert profile.researcher == "Smith J"
    assert profile.h_index == 4
    assert profile.g_index == 5
    assert profile.r_index == 5.2
    assert profile.i10_index == 1
    assert profile.hg_index == 4.47
    assert profile.total_papers == 5
    assert profile.total_citations == 30
    assert profile.avg_citations == 6.0
    assert profile.years_active == 10
    assert profile.m_quotient == 0.4
    assert profile.unique_journals == 3
    assert profile.vip_publications == 4
    assert profile.rank is None


def test_analyze_researcher_invariants(single: pd.DataFrame) -> None:
    profile = analyze_researcher(single, CONFIG)
    assert 0 <= profile.h_index <= profile.total_papers
    assert 0 <= profile.i10_index <= profile.total_papers
    assert profile.total_papers == len(single)


def test_analyze_researcher_without_rounding(single: pd.DataFrame) -> None:
    config = AnalysisConfig(current_year=2025, round_output=False)
    profile = analyze_researcher(single, config)
    assert profile.r_index == pytest.approx(27 ** 0.5)


def test_future_publications_omit_m_quotient() -> None:
    data = _articles("Futurist", [5, 5], years=[2030, 2031])
    profile = analyze_researcher(data, CONFIG)
    assert profile.m_quotient is None
    assert profile.years_active is None
    assert profile.h_index == 2


def test_first_year_equal_to_current_year_counts_one_year() -> None:
    profile = analyze_researcher(_articles("New", [3, 2], years=[2025, 2025]), CONFIG)
    assert profile.years_active == 1
    assert profile.m_quotient == 2.0


def test_missing_researcher_column_is_unknown(single: pd.DataFrame) -> None:
    profile = analyze_researcher(single.drop(columns=["researcher"]), CONFIG)
    assert profile.researcher == "Unknown"


def test_custom_column_mapping() -> None:
    data = pd.DataFrame({
        "Author": ["X", "X"],
        "Cited by": [12, 11],
        "Source title": ["Science", "Other"],
        "Year": [2020, 2021],
    })
    config = AnalysisConfig(
        columns=ColumnMapping(researcher="Author", total_citations="Cited by",
                              source="Source title", year="Year"),
        current_year=2025,
    )
    profile = analyze_researcher(data, config)
    assert profile.researcher == "X"
    assert profile.h_index == 2
    assert profile.i10_index == 2
    assert profile.vip_publications == 1


def test_vip_journals_from_config(single: pd.DataFrame) -> None:
    config = AnalysisConfig(vip_journals={"PLOS ONE"}, current_year=2025)
    assert analyze_researcher(single, config).vip_publications == 1


@pytest.mark.parametrize("bad", [-1, 2.5, None, "many"])
def test_invalid_citation_counts(single: pd.DataFrame, bad) -> None:
    data = single.astype({"tc": object})
    data.loc[0, "tc"] = bad
    with pytest.raises(InvalidCitationError):
        analyze_researcher(data, CONFIG)


def test_analyze_researcher_missing_columns_fails_before_computing() -> None:
    with pytest.raises(MissingColumnError) as excinfo:
        analyze_researcher(pd.DataFrame({"researcher": ["A"]}), CONFIG)
    assert excinfo.value.missing == ("tc", "source", "pyear")


# ---------------------------------------------------------------------------
# analyze_all
# ---------------------------------------------------------------------------

def test_analyze_all_one_profile_per_researcher(cohort_data: pd.DataFrame) -> None:
    cohort = analyze_all(cohort_data, CONFIG)
    assert isinstance(cohort, CohortTable)
    assert [p.researcher for p in cohort] == ["Alice", "Bob", "Carol"]
    assert [p.h_index for p in cohort] == [10, 4, 1]
    assert cohort[0].years_active == 16
    assert cohort.skipped == ()


def test_analyze_all_parallel_matches_sequential(cohort_data: pd.DataFrame) -> None:
    sequential = analyze_all(cohort_data, CONFIG)
    parallel = analyze_all(cohort_data, CONFIG, max_workers=3)
    assert parallel.profiles == sequential.profiles


def test_analyze_all_requires_researcher_column(cohort_data: pd.DataFrame) -> None:
    with pytest.raises(MissingColumnError) as excinfo:
        analyze_all(cohort_data.drop(columns=["researcher", "pyear"]), CONFIG)
    assert excinfo.value.missing == ("researcher", "pyear")


def test_analyze_all_fails_fast_by_default(cohort_data: pd.DataFrame) -> None:
    data = cohort_data.copy()
    data.loc[data["researcher"] == "Bob", "tc"] = -5
    with pytest.raises(InvalidCitationError):
        analyze_all(data, CONFIG)


def test_analyze_all_skip_policy_records_failures(cohort_data: pd.DataFrame) -> None:
    data = cohort_data.copy()
    data.loc[data["researcher"] == "Bob", "tc"] = -5
    cohort = analyze_all(data, CONFIG, on_error="skip")
    assert [p.researcher for p in cohort] == ["Alice", "Carol"]
    assert len(cohort.skipped) == 1
    researcher, error = cohort.skipped[0]
    assert researcher == "Bob"
    assert isinstance(error, InvalidCitationError)


def test_analyze_all_rejects_unknown_policy(cohort_data: pd.DataFrame) -> None:
    with pytest.raises(ValueError):
        analyze_all(cohort_data, CONFIG, on_error="ignore")


def test_analyze_all_empty_table() -> None:
    with pytest.raises(EmptyTableError):
        analyze_all(pd.DataFrame(), CONFIG)


# ---------------------------------------------------------------------------
# CSV in/out
# ---------------------------------------------------------------------------

def test_export_and_load_round_trip(tmp_path: Path, cohort_data: pd.DataFrame) -> None:
    articles_path = tmp_path / "articles.csv"
    cohort_data.to_csv(articles_path, index=False)

    cohort = analyze_all(load_articles(articles_path), CONFIG)
    out = tmp_path / "results.csv"
    export_results(cohort, out)

    written = pd.read_csv(out)
    assert list(written.columns) == list(PROFILE_FIELDS)
    assert written["researcher"].tolist() == ["Alice", "Bob", "Carol"]


# ---------------------------------------------------------------------------
# Researcher ids
# ---------------------------------------------------------------------------

def _mixed_id_articles() -> pd.DataFrame:
    return pd.DataFrame({
        "researcher": pd.Series([1, "1", 1], dtype=object),
        "tc": [3, 2, 5],
        "source": ["A", "B", "C"],
        "pyear": [2020, 2021, 2022],
    })


def test_split_by_researcher_keeps_ids_of_different_types_apart() -> None:
    parts = split_by_researcher(_mixed_id_articles())
    assert len(parts) == 2
    assert sum(len(frame) for frame in parts.values()) == 3


def test_analyze_all_rejects_ids_that_collide_as_text() -> None:
    with pytest.raises(ValidationError, match="indistinguishable"):
        analyze_all(_mixed_id_articles(), CONFIG)


def test_analyze_all_numeric_ids_become_text() -> None:
    data = _mixed_id_articles().assign(researcher=[7, 8, 7])
    cohort = analyze_all(data, CONFIG)
    assert [p.researcher for p in cohort] == ["7", "8"]
    assert sum(p.total_papers for p in cohort) == 3


def test_rows_without_researcher_are_dropped_with_warning(
    cohort_data: pd.DataFrame, caplog: pytest.LogCaptureFixture
) -> None:
    data = cohort_data.copy()
    data.loc[data["researcher"] == "Carol", "researcher"] = None
    with caplog.at_level(logging.WARNING, logger="data_processing"):
        cohort = analyze_all(data, CONFIG)
    assert [p.researcher for p in cohort] == ["Alice", "Bob"]
    assert "Dropping 3 article(s)" in caplog.text
