"""
Heat cascade synthesis of a heat exchanger network.

The minimum hot utility is computed first with the problem table algorithm: heat surpluses of the temperature intervals are cascaded from the hottest interval down, and every time the running balance would become negative the deficit must be supplied by an external heater. The interval where the last deficit occurs is the pinch.

The heat is then allocated deterministically. Walking the intervals from the top, heat released by the hot streams is pooled per stream, and each cold stream demand (in input order) draws from the pool in hot stream order. Demand the pool cannot meet is drawn from the hot utility budget found by the cascade, and heat left in the pool at the bottom goes to coolers. Since the utility budget is the thermodynamic minimum, the resulting network uses less external energy than the greedy heuristic.

References:
    Linnhoff, B., & Flower, J. R. (1978). Synthesis of heat exchanger networks: I. Systematic generation of energy optimal networks. AIChE Journal, 24(4), 633-642. https://doi.org/10.1002/aic.690240411
"""

import logging

from ..common import (
    DEFAULT_MIN_APPROACH_TEMP,
    EPS,
    INFEASIBLE_EPS,
    Exchanger,
    InfeasibleError,
)
from ..compactor import compact_exchangers
from ..streams import prepare_streams
from .intervals import build_intervals

logger = logging.getLogger(__name__)


class HeatTargets(object):
    """
    Result of the heat cascade.

    Attributes
    ----------
    hot_utility : float
        Minimum external heating [MW].
    cold_utility : float
        Corresponding external cooling [MW].
    pinch_temp : float or None
        Pinch on the shifted temperature axis [K]; None when no heat deficit occurs (threshold problem).
    min_approach_temp : float
        Minimum approach temperature used for the shift [K].
    intervals : list of TemperatureInterval
        The cascade intervals, boundary interval last.
    """

    def __init__(
        self, hot_utility, cold_utility, pinch_temp, min_approach_temp, intervals
    ):
        self.hot_utility = hot_utility
        self.cold_utility = cold_utility
        self.pinch_temp = pinch_temp
        self.min_approach_temp = min_approach_temp
        self.intervals = intervals

    @property
    def hot_pinch_temp(self):
        return self.pinch_temp

    @property
    def cold_pinch_temp(self):
        if self.pinch_temp is None:
            return None
        return self.pinch_temp - self.min_approach_temp

    @property
    def breakpoints(self):
        return [interval.t_hi for interval in self.intervals]

    def __repr__(self):
        return "HeatTargets(hot_utility={:.6g}, cold_utility={:.6g}, pinch_temp={})".format(
            self.hot_utility, self.cold_utility, self.pinch_temp
        )


def _cascade(intervals, min_approach_temp):
    hot_utility = 0.0
    balance = 0.0
    pinch_temp = None
    for interval in intervals:
        balance += interval.surplus
        if balance < -EPS:
            hot_utility += -balance
            balance = 0.0
            pinch_temp = interval.t_lo
    return HeatTargets(
        hot_utility, max(balance, 0.0), pinch_temp, min_approach_temp, intervals
    )


def compute_targets(
    hot_streams, cold_streams, min_approach_temp=DEFAULT_MIN_APPROACH_TEMP
):
    """
    Minimum utility targets of a set of streams.

    Parameters
    ----------
    hot_streams : sequence of stream or dict
        Streams to be cooled.
    cold_streams : sequence of stream or dict
        Streams to be heated.
    min_approach_temp : float
        Minimum approach temperature [K].

    Returns
    -------
    HeatTargets
        Minimum hot and cold utility and the pinch location.

    Raises
    ------
    InvalidStreamError
        If a stream is malformed.
    """
    hot, cold = prepare_streams(hot_streams, cold_streams)
    return _cascade(build_intervals(hot, cold, min_approach_temp), min_approach_temp)


def solve_cascade(
    hot_streams, cold_streams, min_approach_temp=DEFAULT_MIN_APPROACH_TEMP
):
    """
    Synthesize a minimum utility heat exchanger network with the heat cascade.

    Parameters
    ----------
    hot_streams : sequence of stream or dict
        Streams to be cooled, as stream objects or records (see :func:`henslib.streams.normalize_stream`).
    cold_streams : sequence of stream or dict
        Streams to be heated.
    min_approach_temp : float
        Minimum approach temperature [K].

    Returns
    -------
    list of Exchanger
        Compacted exchangers, sorted by ``(hot, cold)`` with utilities last on each axis.

    Raises
    ------
    InvalidStreamError
        If a stream is malformed.
    InfeasibleError
        If a cold stream demand cannot be reconciled with the hot utility target.
    """
    hot, cold = prepare_streams(hot_streams, cold_streams)
    intervals = build_intervals(hot, cold, min_approach_temp)
    targets = _cascade(intervals, min_approach_temp)
    logger.debug("Heat cascade targets: %r", targets)

    utility_budget = targets.hot_utility
    pool = [0.0] * len(hot)
    heater_load = [0.0] * len(cold)
    exchangers = []

    for interval in intervals:
        for i, q in enumerate(interval.hot_heat):
            pool[i] += q

        hot_index = 0
        for j, demand in enumerate(interval.cold_heat):
            if demand <= EPS:
                continue
            while demand > EPS:
                while hot_index < len(pool) and pool[hot_index] <= EPS:
                    hot_index += 1
                if hot_index >= len(pool):
                    break
                q = min(demand, pool[hot_index])
                if q <= EPS:
                    break
                exchangers.append(Exchanger(hot_index, j, q))
                pool[hot_index] -= q
                demand -= q

            if demand > EPS:
                q = min(demand, utility_budget)
                if q > EPS:
                    heater_load[j] += q
                    utility_budget -= q
                    demand -= q
                if demand > INFEASIBLE_EPS:
                    raise InfeasibleError(
                        "Cold stream {} lacks {:.6g} MW below {:.6g} K after the hot utility target is spent".format(
                            j, demand, interval.t_hi
                        )
                    )

    for j, q in enumerate(heater_load):
        if q > EPS:
            exchangers.append(Exchanger(None, j, q))
    for i, q in enumerate(pool):
        if q > EPS:
            exchangers.append(Exchanger(i, None, q))

    exchangers = compact_exchangers(exchangers)
    logger.info(
        "Cascade synthesis: %d cells, %d utilities, hot utility %.6g MW, cold utility %.6g MW",
        sum(1 for ex in exchangers if ex.is_cell),
        sum(1 for ex in exchangers if ex.is_utility),
        targets.hot_utility,
        targets.cold_utility,
    )
    return exchangers
