"""
errors.py
=========

Exception hierarchy for BiblioMetric-Analyzer.

All failures of the analysis pipeline are deterministic and raised
synchronously to the caller:

- ValidationError: the input table cannot be analyzed
  (missing columns, empty table, invalid citation counts)
- DomainError: a request names something the pipeline does not know
  (e.g. an unknown ranking metric)
- ConfigError: the environment configuration cannot be parsed

Numeric edge cases (empty citation vectors, zero citations, non-positive
career length) are NOT errors; they resolve to zero/None values.

Date: 11/2025
Version: 2.0
"""


class BiblioMetricError(Exception):
    """Base class for every BiblioMetric-Analyzer error."""


class ValidationError(BiblioMetricError):
    """Input data failed validation and cannot be analyzed."""


class MissingColumnError(ValidationError):
    """One or more required columns are absent from the article table."""

    def __init__(self, missing):
        self.missing = tuple(missing)
        super().__init__(f"Missing required columns: {', '.join(self.missing)}")


class EmptyTableError(ValidationError):
    """The article table is empty or not tabular."""


class InvalidCitationError(ValidationError):
    """Citation counts are missing, non-numeric or negative."""


class DomainError(BiblioMetricError):
    """A request refers to something outside the known domain."""


class UnknownMetricError(DomainError):
    """Ranking was requested by a metric that is not a profile field."""

    def __init__(self, metric, available):
        self.metric = metric
        self.available = tuple(available)
        super().__init__(
            f"Unknown metric: {metric!r} (available: {', '.join(self.available)})"
        )


class ConfigError(BiblioMetricError):
    """Environment configuration is malformed."""
