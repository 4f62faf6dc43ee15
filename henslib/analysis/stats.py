"""
Summary figures of a synthesized heat exchanger network.
"""

import pandas as pd

from ..common import COLD, HOT
from ..streams import normalize_streams, total_duty


def exchanger_table(exchangers):
    """
    Tabulate exchangers.

    Parameters
    ----------
    exchangers : sequence of Exchanger
        The network.

    Returns
    -------
    pandas.DataFrame
        One row per exchanger with the columns ``hot`` and ``cold`` (nullable integers), ``load`` [MW] and ``kind`` (``"cell"``, ``"heater"`` or ``"cooler"``).
    """
    return pd.DataFrame(
        {
            HOT: pd.array([ex.hot for ex in exchangers], dtype="Int64"),
            COLD: pd.array([ex.cold for ex in exchangers], dtype="Int64"),
            "load": pd.Series([float(ex.load) for ex in exchangers], dtype=float),
            "kind": pd.Series([ex.kind for ex in exchangers], dtype=object),
        }
    )


def stream_balance(hot_streams, cold_streams, exchangers):
    """
    Compare the heat assigned to every stream with its required duty.

    Parameters
    ----------
    hot_streams : sequence of stream or dict
        Hot streams of the problem.
    cold_streams : sequence of stream or dict
        Cold streams of the problem.
    exchangers : sequence of Exchanger
        The network.

    Returns
    -------
    pandas.DataFrame
        Indexed by ``(side, index)`` with the columns ``required``, ``assigned`` and ``residual`` (required minus assigned) [MW].
    """
    table = exchanger_table(exchangers)
    rows = []
    for side, streams in (
        (HOT, normalize_streams(hot_streams)),
        (COLD, normalize_streams(cold_streams)),
    ):
        assigned = table.groupby(side)["load"].sum()
        for index, stream in enumerate(streams):
            rows.append(
                {
                    "side": side,
                    "index": index,
                    "required": stream.required_duty,
                    "assigned": float(assigned.get(index, 0.0)),
                }
            )
    frame = pd.DataFrame(rows, columns=["side", "index", "required", "assigned"])
    frame = frame.set_index(["side", "index"])
    frame["residual"] = frame["required"] - frame["assigned"]
    return frame


def solution_stats(
    hot_streams, cold_streams, exchangers, algorithm=None, solve_time_ms=None
):
    """
    Compute the summary statistics of a network.

    The saved external power compares the utilities of the network with heating every cold stream and cooling every hot stream entirely with utilities.

    Parameters
    ----------
    hot_streams : sequence of stream or dict
        Hot streams of the problem.
    cold_streams : sequence of stream or dict
        Cold streams of the problem.
    exchangers : sequence of Exchanger
        The network.
    algorithm : str, optional
        Name of the engine that produced the network.
    solve_time_ms : float, optional
        Synthesis time [ms].

    Returns
    -------
    dict
        ``total_load_hot``, ``total_load_cold``, ``load_diff`` (cold minus hot), ``cell_count``, ``utility_count``, ``total_load_cells``, ``total_load_utilities``, ``external_power_saved``, ``algorithm`` and ``solve_time_ms``.
    """
    total_hot = total_duty(normalize_streams(hot_streams))
    total_cold = total_duty(normalize_streams(cold_streams))

    table = exchanger_table(exchangers)
    cells = table[table["kind"] == "cell"]
    utilities = table[table["kind"].isin(["heater", "cooler"])]
    utility_load = float(utilities["load"].sum())

    return {
        "total_load_hot": total_hot,
        "total_load_cold": total_cold,
        "load_diff": total_cold - total_hot,
        "cell_count": len(cells),
        "utility_count": len(utilities),
        "total_load_cells": float(cells["load"].sum()),
        "total_load_utilities": utility_load,
        "external_power_saved": max(0.0, total_hot + total_cold - utility_load),
        "algorithm": algorithm,
        "solve_time_ms": solve_time_ms,
    }
