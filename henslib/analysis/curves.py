"""
Composite temperature-enthalpy curves.

The hot composite curve merges all hot streams into one equivalent stream: on each temperature interval its heat-capacity flow rate is the sum of the rates of the glide streams spanning the interval, and isothermal streams add a plateau at their temperature. The cold composite curve is built the same way from the cold streams. Both curves run from the lowest to the highest temperature.

When the total hot and cold duties differ, a single isothermal utility stream closes the gap so that both curves end at the same load: a hot utility above the hottest stream, or a cold utility below the coldest one.
"""

import pandas as pd

from ..common import DEFAULT_MIN_APPROACH_TEMP, DEFAULT_UTILITY_OFFSET, EPS
from ..streams import IsothermalStream, prepare_streams, total_duty


class CompositeCurves(object):
    """
    Hot and cold composite curves of a set of streams.

    Attributes
    ----------
    hot : pandas.DataFrame
        Points of the hot composite curve, columns ``load`` [MW] and ``temp`` [K].
    cold : pandas.DataFrame
        Points of the cold composite curve.
    min_approach_temp : float
        Minimum approach temperature the curves are meant to be compared with [K].
    hot_utility : float
        Load of the synthetic hot utility added to the hot curve [MW].
    cold_utility : float
        Load of the synthetic cold utility added to the cold curve [MW].
    """

    def __init__(self, hot, cold, min_approach_temp, hot_utility, cold_utility):
        self.hot = hot
        self.cold = cold
        self.min_approach_temp = min_approach_temp
        self.hot_utility = hot_utility
        self.cold_utility = cold_utility


def _sorted_temps(streams):
    temps = []
    for stream in streams:
        temps.extend((stream.in_temp, stream.out_temp))
    unique = []
    for t in sorted(temps):
        if not unique or abs(t - unique[-1]) > EPS:
            unique.append(t)
    return unique


def _active_rate(streams, t0, t1):
    # Glide streams spanning the whole interval.
    total = 0.0
    for stream in streams:
        if stream.isothermal:
            continue
        lo = min(stream.in_temp, stream.out_temp)
        hi = max(stream.in_temp, stream.out_temp)
        if lo <= t0 + EPS and hi >= t1 - EPS:
            total += stream.rate
    return total


def _isothermal_load(streams, temp):
    return sum(
        stream.load
        for stream in streams
        if stream.isothermal and abs(stream.temp - temp) <= EPS
    )


def composite_curve(streams):
    """
    Composite curve of one side.

    Parameters
    ----------
    streams : list of stream
        Validated streams of one side.

    Returns
    -------
    pandas.DataFrame
        Points ``(load, temp)`` with the load accumulated from the lowest temperature upwards.
    """
    temps = _sorted_temps(streams)
    if not temps:
        return pd.DataFrame(columns=["load", "temp"], dtype=float)

    load = 0.0
    points = [(load, temps[0])]
    plateau = _isothermal_load(streams, temps[0])
    if plateau > EPS:
        load += plateau
        points.append((load, temps[0]))

    for t0, t1 in zip(temps, temps[1:]):
        rate = _active_rate(streams, t0, t1)
        if rate > EPS:
            load += rate * (t1 - t0)
        last_load, last_temp = points[-1]
        if abs(last_temp - t1) > EPS or abs(last_load - load) > EPS:
            points.append((load, t1))

        plateau = _isothermal_load(streams, t1)
        if plateau > EPS:
            load += plateau
            points.append((load, t1))

    return pd.DataFrame(points, columns=["load", "temp"])


def composite_curves(
    hot_streams,
    cold_streams,
    min_approach_temp=DEFAULT_MIN_APPROACH_TEMP,
    utility_offset=DEFAULT_UTILITY_OFFSET,
):
    """
    Build the hot and cold composite curves.

    Parameters
    ----------
    hot_streams : sequence of stream or dict
        Streams to be cooled.
    cold_streams : sequence of stream or dict
        Streams to be heated.
    min_approach_temp : float
        Minimum approach temperature, carried along for the comparison of the curves [K].
    utility_offset : float
        Distance between the synthetic utility and the hottest (hot utility) or coldest (cold utility) stream temperature [K].

    Returns
    -------
    CompositeCurves
        Both curves, ending at the same load.
    """
    hot, cold = prepare_streams(hot_streams, cold_streams)
    temps = [t for s in hot + cold for t in (s.in_temp, s.out_temp)]
    t_min = min(temps) if temps else 0.0
    t_max = max(temps) if temps else 0.0

    shortfall = total_duty(cold) - total_duty(hot)
    hot_utility = 0.0
    cold_utility = 0.0
    if shortfall > EPS:
        hot_utility = shortfall
        hot = hot + [IsothermalStream(t_max + utility_offset, shortfall)]
    elif shortfall < -EPS:
        cold_utility = -shortfall
        cold = cold + [IsothermalStream(t_min - utility_offset, -shortfall)]

    return CompositeCurves(
        composite_curve(hot),
        composite_curve(cold),
        min_approach_temp,
        hot_utility,
        cold_utility,
    )
