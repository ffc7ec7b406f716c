"""
Ranks a frequency table by descending count and renders the report lines.
"""
import typing

import pandas as pd

from frequency import FrequencyTable

REPORT_SIZE = 100


def check_limit(limit: int) -> int:
    if not 1 <= limit <= REPORT_SIZE:
        raise ValueError(f"Report size must be between 1 and {REPORT_SIZE}, got {limit}")
    return limit


def rank(table: FrequencyTable, limit: int = REPORT_SIZE) -> pd.DataFrame:
    """
    Sorts all trigrams by frequency, highest first. Trigrams with equal frequency keep lexicographic order.
    :param table: filled frequency table
    :param limit: maximum number of rows, at most REPORT_SIZE
    :return: DataFrame with the columns "trigram" and "frequency"
    """
    check_limit(limit)
    report = pd.DataFrame(table.items(), columns=["trigram", "frequency"])
    report = report.sort_values(
        by=["frequency", "trigram"],
        ascending=[False, True],
        kind="stable",
    )
    return report.iloc[:limit].reset_index(drop=True)


def ranked_pairs(table: FrequencyTable, limit: int = REPORT_SIZE) -> typing.List[typing.Tuple[str, int]]:
    report = rank(table, limit)
    return list(zip(report["trigram"].tolist(), report["frequency"].tolist()))


def format_report(report: pd.DataFrame) -> typing.List[str]:
    """
    Formats every row as "<trigram>: <count>"
    :param report: output of rank
    :return: report lines in ranked order
    """
    return [
        f"{trigram}: {frequency}"
        for trigram, frequency in zip(report["trigram"], report["frequency"])
    ]
