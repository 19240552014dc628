"""
Name statistics over parsed records.

These are the aggregations the front end draws its charts from: the most
popular names across all years, births per year split by gender, and totals
per gender.
"""

from typing import Iterable, List
from models.base import Gender
from schemas.records import NameStatRecord
import numpy as np
import pandas as pd

GENDER_FILTERS = ("both", Gender.MALE.value, Gender.FEMALE.value)

RECORD_COLUMNS = ["year", "gender", "rank", "name", "count", "per_thousand"]


def records_frame(records: Iterable[NameStatRecord], gender_filter: str = "both") -> pd.DataFrame:
    """
    Build a dataframe of records, optionally keeping one gender.

    Raises:
        ValueError: If gender_filter is not "both", "male" or "female"
    """
    if gender_filter not in GENDER_FILTERS:
        raise ValueError(f"Unknown gender filter: {gender_filter!r}")

    frame = pd.DataFrame([record.to_row() for record in records], columns=RECORD_COLUMNS)
    if gender_filter != "both":
        frame = frame[frame["gender"] == gender_filter]
    return frame.reset_index(drop=True)


def top_names(
    records: Iterable[NameStatRecord],
    gender_filter: str = "both",
    limit: int = 20
) -> pd.DataFrame:
    """
    Names with the highest total count across all years.

    avg_count is the total divided by the number of yearly entries, rounded
    half up.
    """
    frame = records_frame(records, gender_filter)
    columns = ["name", "gender", "total_count", "avg_count"]
    if frame.empty:
        return pd.DataFrame(columns=columns)

    grouped = (
        frame.groupby(["name", "gender"], sort=False)["count"]
        .agg(total_count="sum", years="size")
        .reset_index()
    )
    grouped["avg_count"] = np.floor(grouped["total_count"] / grouped["years"] + 0.5).astype(int)

    return (
        grouped.sort_values("total_count", ascending=False, kind="stable")
        .head(limit)[columns]
        .reset_index(drop=True)
    )


def yearly_stats(records: Iterable[NameStatRecord], gender_filter: str = "both") -> pd.DataFrame:
    """Summed counts per year for each gender and overall, ascending by year"""
    frame = records_frame(records, gender_filter)
    columns = ["year", Gender.MALE.value, Gender.FEMALE.value, "total"]
    if frame.empty:
        return pd.DataFrame(columns=columns)

    pivot = frame.pivot_table(
        index="year",
        columns="gender",
        values="count",
        aggfunc="sum",
        fill_value=0
    )
    pivot = pivot.reindex(columns=[Gender.MALE.value, Gender.FEMALE.value], fill_value=0)
    pivot["total"] = pivot.sum(axis=1)

    stats = pivot.sort_index().reset_index()
    stats.columns.name = None
    return stats[columns].astype(int)


def gender_stats(records: Iterable[NameStatRecord], gender_filter: str = "both") -> pd.DataFrame:
    """Total count and number of distinct names per gender"""
    frame = records_frame(records, gender_filter)
    columns = ["gender", "total_count", "unique_names"]
    if frame.empty:
        return pd.DataFrame(columns=columns)

    return (
        frame.groupby("gender", sort=False)
        .agg(total_count=("count", "sum"), unique_names=("name", "nunique"))
        .reset_index()[columns]
    )


def format_frame(title: str, frame: pd.DataFrame) -> str:
    if frame.empty:
        return f"{title}:\n(no rows)"
    return f"{title}:\n{frame.to_string(index=False)}"


def statistics_report(
    records: List[NameStatRecord],
    gender_filter: str = "both",
    limit: int = 20
) -> List[str]:
    """Rendered tables for the statistics script"""
    return [
        format_frame(f"Top {limit} names", top_names(records, gender_filter, limit)),
        format_frame("Births per year", yearly_stats(records, gender_filter)),
        format_frame("Totals by gender", gender_stats(records, gender_filter)),
    ]
