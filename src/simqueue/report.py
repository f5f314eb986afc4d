"""
Plain-text and tab-separated reports of a simulation.
"""

from __future__ import annotations

import csv
import math
from pathlib import Path

from simqueue.history import EventHistory
from simqueue.stats import Comparison, StatisticsSnapshot

CSV_HEADER = [
    "Time",
    "ArrivalTime",
    "ServiceTime",
    "LeavingTime",
    "ArrivalTimeSamples",
    "ServiceTimeSamples",
]

# (label, snapshot field, unit)
_LINES = [
    ("Mean arrive time", "mean_arrival", "min"),
    ("Variance arrive time", "var_arrival", "min^2"),
    ("Std dev arrive time", "sd_arrival", "min"),
    ("Maximum service time", "max_service", "min"),
    ("Mean service time", "mean_service", "min"),
    ("Variance service time", "var_service", "min^2"),
    ("Std dev service time", "sd_service", "min"),
]


def format_history(history: EventHistory) -> str:
    lines = [
        "Client\tArrival Time (min)\tServing Time (min)\tLeaving Time (min)",
        "------\t------------------\t------------------\t------------------",
    ]
    for row in history.rows():
        lines.append(f"[{row.client + 1}]\t{row.arrival}\t{row.service_start}\t{row.departure}")
    return "\n".join(lines)


def _block(title: str, snapshot: StatisticsSnapshot, value) -> str:
    lines = [title]
    for i, (label, field, unit) in enumerate(_LINES, start=1):
        comparison: Comparison = getattr(snapshot, field)
        lines.append(f" {i}- {label + ':':<24}{value(comparison, unit)}")
    return "\n".join(lines)


def format_theoretical(snapshot: StatisticsSnapshot) -> str:
    return _block("[THEORETICAL VALUES]", snapshot, lambda c, unit: f"{c.theoretical} {unit}")


def format_simulated(snapshot: StatisticsSnapshot) -> str:
    return _block("[SIMULATED VALUES]", snapshot, lambda c, unit: f"{c.simulated} {unit}")


def format_errors(snapshot: StatisticsSnapshot) -> str:
    def error(c: Comparison, unit: str) -> str:
        percent = "n/a" if math.isnan(c.percent_error) else f"{c.percent_error} %"
        return f"{c.absolute_error} {unit}\t[{percent}]"

    return _block("[ERRORS]", snapshot, error)


def format_sample_statistics(snapshot: StatisticsSnapshot) -> str:
    return "\n".join(
        [
            "[SAMPLE VALUES]",
            f" 1- Variance arrive time:     {snapshot.sample_var_arrival} min^2",
            f" 2- Std dev arrive time:      {snapshot.sample_sd_arrival} min",
            f" 3- Variance service time:    {snapshot.sample_var_service} min^2",
            f" 4- Std dev service time:     {snapshot.sample_sd_service} min",
        ]
    )


def format_elapsed(seconds: float) -> str:
    total_ms = int(round(seconds * 1000))
    minutes, rest = divmod(total_ms, 60000)
    secs, ms = divmod(rest, 1000)
    return f"Running time of the simulation: {minutes} min {secs} s {ms} ms"


def write_history_csv(path: str | Path, history: EventHistory) -> None:
    """
    Write the history as a tab-separated file.

    The two sample columns hold the inter-arrival and service times sorted
    ascending. There is one inter-arrival time fewer than clients, so the
    last cell of that column is empty.
    """
    gaps = sorted(history.inter_arrival_times())
    durations = sorted(history.service_times())
    with open(path, "w", newline="") as f:
        writer = csv.writer(f, delimiter="\t")
        writer.writerow(CSV_HEADER)
        for row in history.rows():
            i = row.client
            writer.writerow(
                [
                    i,
                    row.arrival,
                    row.service_start,
                    row.departure,
                    gaps[i] if i < len(gaps) else "",
                    durations[i],
                ]
            )
