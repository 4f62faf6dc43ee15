"""
Greedy heat exchanger network synthesis.

The network is built one match at a time. In every round the hottest cold stream that still has a feasible hot partner is matched with the coolest such hot stream, transferring as much heat as the minimum approach temperature and the remaining duties allow. Cold streams that cannot be served by any hot stream are closed by a heater, and the heat left in the hot streams at the end goes to a cooler.

The engine never fails for thermodynamic reasons: in the worst case every duty is covered by utilities.
"""

import logging

from ..common import (
    COLD,
    DEFAULT_MIN_APPROACH_TEMP,
    EPS,
    HOT,
    Exchanger,
)
from ..feasibility import max_transferable
from ..streams import StreamState, prepare_streams

logger = logging.getLogger(__name__)


def _feasible_load(hot, cold, min_approach_temp):
    if hot.remaining <= EPS:
        return None
    q = max_transferable(hot, cold, min_approach_temp)
    if q is None or q <= EPS:
        return None
    return q


def _select_cold(hot_states, cold_states, min_approach_temp):
    """Hottest unsatisfied cold stream having at least one feasible hot partner."""
    selected = None
    for cold in cold_states:
        if cold.remaining <= EPS:
            continue
        if not any(
            _feasible_load(hot, cold, min_approach_temp) is not None
            for hot in hot_states
        ):
            continue
        if selected is None or cold.temp > selected.temp:
            selected = cold
    return selected


def _select_hot(hot_states, cold, min_approach_temp):
    """Coolest hot stream able to heat ``cold``."""
    selected = None
    for hot in hot_states:
        if _feasible_load(hot, cold, min_approach_temp) is None:
            continue
        if selected is None or hot.temp < selected.temp:
            selected = hot
    return selected


def _hottest_unsatisfied(cold_states):
    selected = None
    for cold in cold_states:
        if cold.remaining <= EPS:
            continue
        if selected is None or cold.temp > selected.temp:
            selected = cold
    return selected


def _close_with_heater(cold, exchangers):
    logger.debug("Heater on cold stream %d: %.6g MW", cold.index, cold.remaining)
    exchangers.append(Exchanger(None, cold.index, cold.remaining))
    cold.remaining = 0.0


def _close_residual(states, exchangers):
    """
    Cover the heat left in ``states`` with a single utility.

    The whole residual of the side is attributed to the stream with the largest individual residual, so only one utility is added per side.
    """
    residual = sum(state.remaining for state in states)
    if residual <= EPS:
        return
    largest = None
    for state in states:
        if state.remaining > 0 and (
            largest is None or state.remaining > largest.remaining
        ):
            largest = state
    if largest is None:
        return
    if largest.side == HOT:
        exchangers.append(Exchanger(largest.index, None, residual))
    else:
        exchangers.append(Exchanger(None, largest.index, residual))
    logger.debug(
        "Residual %.6g MW on the %s side closed on stream %d",
        residual,
        largest.side,
        largest.index,
    )


def solve_greedy(
    hot_streams, cold_streams, min_approach_temp=DEFAULT_MIN_APPROACH_TEMP
):
    """
    Synthesize a heat exchanger network with the greedy temperature-ordered heuristic.

    Parameters
    ----------
    hot_streams : sequence of stream or dict
        Streams to be cooled, as stream objects or records (see :func:`henslib.streams.normalize_stream`).
    cold_streams : sequence of stream or dict
        Streams to be heated.
    min_approach_temp : float
        Minimum temperature difference between the hot and the cold stream of a match [K].

    Returns
    -------
    list of Exchanger
        Exchangers in the order they were placed: process matches and heaters first, then at most one closing cooler and one closing heater.

    Raises
    ------
    InvalidStreamError
        If a stream is malformed. Raised before any matching.
    """
    hot, cold = prepare_streams(hot_streams, cold_streams)
    hot_states = [StreamState(s, HOT, i) for i, s in enumerate(hot)]
    cold_states = [StreamState(s, COLD, j) for j, s in enumerate(cold)]

    exchangers = []
    while True:
        cold_state = _select_cold(hot_states, cold_states, min_approach_temp)
        if cold_state is None:
            # No cold stream can be served by a process stream any more.
            cold_state = _hottest_unsatisfied(cold_states)
            if cold_state is None:
                break
            _close_with_heater(cold_state, exchangers)
            continue

        hot_state = _select_hot(hot_states, cold_state, min_approach_temp)
        if hot_state is None:
            _close_with_heater(cold_state, exchangers)
            continue

        q = min(
            max_transferable(hot_state, cold_state, min_approach_temp),
            hot_state.remaining,
            cold_state.remaining,
        )
        if q <= EPS:
            _close_with_heater(cold_state, exchangers)
            continue

        logger.debug(
            "Match hot %d (%.6g K) -> cold %d (%.6g K): %.6g MW",
            hot_state.index,
            hot_state.temp,
            cold_state.index,
            cold_state.temp,
            q,
        )
        exchangers.append(Exchanger(hot_state.index, cold_state.index, q))
        hot_state.advance(q)
        cold_state.advance(q)

    _close_residual(hot_states, exchangers)
    _close_residual(cold_states, exchangers)

    logger.info(
        "Greedy synthesis: %d cells, %d utilities, %.6g MW of utilities",
        sum(1 for ex in exchangers if ex.is_cell),
        sum(1 for ex in exchangers if ex.is_utility),
        sum(ex.load for ex in exchangers if ex.is_utility),
    )
    return exchangers
