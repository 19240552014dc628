"""
Reporting over loaded and parsed name statistics.

Modules:
    diagnostics: Fixed SQL queries run against the store after each import
    statistics: Dataframe aggregations over parsed records (top names,
        births per year, totals by gender)
"""

__all__ = [
    "run_diagnostics",
    "format_diagnostic",
    "top_names",
    "yearly_stats",
    "gender_stats",
]

from analytics.diagnostics import run_diagnostics, format_diagnostic
from analytics.statistics import top_names, yearly_stats, gender_stats
