"""
Stream model of the heat exchanger network.

A process stream either changes temperature linearly with the heat it exchanges (a "glide" stream, characterized by its heat-capacity flow rate) or exchanges its whole load at a single temperature (an "isothermal" stream, e.g. a condensing or boiling fluid).
Hot streams must be cooled from their inlet to their outlet temperature, cold streams must be heated. The side of a stream is given by the sequence it belongs to.

Stream records are mappings with the keys ``in``, ``out``, ``rate`` and ``load``. Values may be plain numbers, read in the given temperature and power units, or pint quantities. All streams are stored in kelvin, megawatt per kelvin and megawatt.
"""

import math

import pint
from pint import UnitRegistry

from .common import (
    COLD,
    DEFAULT_POWER_UNIT,
    DEFAULT_TEMP_UNIT,
    EPS,
    HOT,
    InvalidStreamError,
)

ureg = UnitRegistry()
Q_ = ureg.Quantity

_UNIT_ERRORS = (
    TypeError,
    ValueError,
    pint.DimensionalityError,
    pint.UndefinedUnitError,
)


class IsothermalStream:
    """
    A stream exchanging its whole load at a constant temperature.

    Parameters
    ----------
    temp : float
        Temperature of the stream [K].
    load : float
        Heat the stream must release (hot) or absorb (cold) [MW].
    """

    isothermal = True

    def __init__(self, temp, load):
        self.temp = float(temp)
        self.load = float(load)

    @property
    def in_temp(self):
        return self.temp

    @property
    def out_temp(self):
        return self.temp

    @property
    def rate(self):
        return 0.0

    @property
    def required_duty(self):
        return self.load

    def __eq__(self, other):
        if not isinstance(other, IsothermalStream):
            return NotImplemented
        return (self.temp, self.load) == (other.temp, other.load)

    def __repr__(self):
        return "IsothermalStream(temp={!r}, load={!r})".format(self.temp, self.load)


class GlideStream:
    """
    A stream whose temperature moves linearly with the exchanged heat.

    Parameters
    ----------
    in_temp : float
        Inlet temperature [K].
    out_temp : float
        Outlet (target) temperature [K].
    rate : float
        Heat-capacity flow rate, i.e. flow times heat capacity [MW/K].
    """

    isothermal = False

    def __init__(self, in_temp, out_temp, rate):
        self.in_temp = float(in_temp)
        self.out_temp = float(out_temp)
        self.rate = float(rate)

    @property
    def required_duty(self):
        return self.rate * abs(self.out_temp - self.in_temp)

    def __eq__(self, other):
        if not isinstance(other, GlideStream):
            return NotImplemented
        return (self.in_temp, self.out_temp, self.rate) == (
            other.in_temp,
            other.out_temp,
            other.rate,
        )

    def __repr__(self):
        return "GlideStream(in_temp={!r}, out_temp={!r}, rate={!r})".format(
            self.in_temp, self.out_temp, self.rate
        )


STREAM_TYPES = (IsothermalStream, GlideStream)


class StreamState(object):
    """
    Working state of one stream during a single synthesis run.

    The temperature moves from the inlet toward the outlet temperature and the remaining duty decreases to zero as heat is exchanged. A state is created, mutated and discarded within one call of an engine.

    Parameters
    ----------
    stream : IsothermalStream or GlideStream
        The stream this state tracks. It is never modified.
    side : str
        Either ``"hot"`` or ``"cold"``.
    index : int
        Position of the stream in its input sequence.
    """

    def __init__(self, stream, side, index):
        self.side = side
        self.index = index
        self.isothermal = stream.isothermal
        self.temp = stream.in_temp
        self.target = stream.out_temp
        self.rate = 0.0 if stream.isothermal else stream.rate
        self.remaining = stream.required_duty

    def heat_to_target(self):
        """
        Heat that brings a glide stream from its current temperature to its target. Isothermal streams are not limited by temperature.
        """
        if self.isothermal:
            return math.inf
        if self.side == HOT:
            gap = self.temp - self.target
        else:
            gap = self.target - self.temp
        return gap * self.rate if gap > 0 else 0.0

    def advance(self, load):
        """Exchange ``load`` [MW]: update the temperature and the remaining duty."""
        if not self.isothermal and self.rate > EPS:
            if self.side == HOT:
                self.temp -= load / self.rate
            else:
                self.temp += load / self.rate
        self.remaining -= load

    def __repr__(self):
        return "StreamState({} {}: temp={:.6g}, remaining={:.6g})".format(
            self.side, self.index, self.temp, self.remaining
        )


def total_duty(streams):
    """Sum of the required duties of ``streams`` [MW]."""
    return sum(stream.required_duty for stream in streams)


def _convert_temp(value, temp_unit):
    if isinstance(value, pint.Quantity):
        return value.to("K").magnitude
    if temp_unit == "K":
        return float(value)
    return Q_(float(value), temp_unit).to("K").magnitude


def _convert_power(value, power_unit):
    if isinstance(value, pint.Quantity):
        return value.to("MW").magnitude
    return Q_(float(value), power_unit).to("MW").magnitude


def _convert_rate(value, power_unit):
    if isinstance(value, pint.Quantity):
        return value.to("MW / K").magnitude
    return Q_(float(value), "{} / K".format(power_unit)).to("MW / K").magnitude


def _read_field(record, name, convert):
    value = record.get(name)
    if value is None:
        return None
    try:
        number = convert(value)
    except _UNIT_ERRORS as err:
        raise InvalidStreamError(
            "Invalid value of '{}': {!r}".format(name, value)
        ) from err
    if not math.isfinite(number) or number < 0:
        raise InvalidStreamError(
            "Value of '{}' must be a finite non-negative number, got {!r}".format(
                name, number
            )
        )
    return number


def normalize_stream(
    record, temp_unit=DEFAULT_TEMP_UNIT, power_unit=DEFAULT_POWER_UNIT
):
    """
    Build a stream from a mapping record.

    A record without ``out`` (or with ``out`` equal to ``in``) is isothermal and needs a positive ``load``. Otherwise the temperature difference must be positive and either a positive ``rate`` or a positive ``load`` is required; ``rate`` wins when both are given, and a load-only record derives its rate as ``load / |out - in|``.

    Parameters
    ----------
    record : dict or IsothermalStream or GlideStream
        The stream record. Stream objects are returned unchanged.
    temp_unit : str
        Unit of plain-number temperatures, e.g. ``"K"`` or ``"degC"``.
    power_unit : str
        Unit of plain-number loads, e.g. ``"MW"`` or ``"kW"``. Plain-number rates are read in ``power_unit`` per kelvin.

    Returns
    -------
    IsothermalStream or GlideStream
        The normalized stream in K, MW/K and MW.

    Raises
    ------
    InvalidStreamError
        If the record is malformed.
    """
    if isinstance(record, STREAM_TYPES):
        return record
    if not hasattr(record, "get"):
        raise InvalidStreamError("Stream record must be a mapping, got {!r}".format(record))

    in_temp = _read_field(record, "in", lambda v: _convert_temp(v, temp_unit))
    if in_temp is None:
        raise InvalidStreamError("Stream record is missing 'in': {!r}".format(record))
    out_temp = _read_field(record, "out", lambda v: _convert_temp(v, temp_unit))
    rate = _read_field(record, "rate", lambda v: _convert_rate(v, power_unit))
    load = _read_field(record, "load", lambda v: _convert_power(v, power_unit))

    if out_temp is None or out_temp == in_temp:
        if not (load is not None and load > 0):
            raise InvalidStreamError("Isothermal stream requires a positive 'load'")
        return IsothermalStream(in_temp, load)

    delta = abs(out_temp - in_temp)
    if not delta > 0:
        raise InvalidStreamError("Invalid temperature difference (out - in)")
    if rate is not None and rate > 0:
        return GlideStream(in_temp, out_temp, rate)
    if load is not None and load > 0:
        return GlideStream(in_temp, out_temp, load / delta)
    raise InvalidStreamError("Non-isothermal stream requires 'rate' or 'load'")


def normalize_streams(
    records, temp_unit=DEFAULT_TEMP_UNIT, power_unit=DEFAULT_POWER_UNIT
):
    """Normalize a sequence of stream records, see :func:`normalize_stream`."""
    return [normalize_stream(r, temp_unit, power_unit) for r in records]


def validate_streams(hot_streams, cold_streams):
    """
    Check the streams before synthesis begins.

    Glide streams need a positive rate and a nonzero temperature difference, isothermal streams a non-negative load.

    Raises
    ------
    InvalidStreamError
        On the first offending stream, naming its side and index.
    """
    for side, streams in ((HOT, hot_streams), (COLD, cold_streams)):
        for index, stream in enumerate(streams):
            if not isinstance(stream, STREAM_TYPES):
                raise InvalidStreamError(
                    "{} stream {}: expected a stream, got {!r}".format(
                        side.capitalize(), index, stream
                    )
                )
            if stream.isothermal:
                if not stream.load >= 0:
                    raise InvalidStreamError(
                        "{} stream {}: isothermal load must be non-negative, got {!r}".format(
                            side.capitalize(), index, stream.load
                        )
                    )
            else:
                if not stream.rate > 0:
                    raise InvalidStreamError(
                        "{} stream {}: rate must be positive, got {!r}".format(
                            side.capitalize(), index, stream.rate
                        )
                    )
                if not abs(stream.out_temp - stream.in_temp) > 0:
                    raise InvalidStreamError(
                        "{} stream {}: inlet and outlet temperatures coincide".format(
                            side.capitalize(), index
                        )
                    )


def prepare_streams(hot_streams, cold_streams):
    """
    Normalize and validate the input of an engine.

    Returns
    -------
    tuple of list
        The hot and cold streams as stream objects. The caller's records are left untouched.
    """
    hot = normalize_streams(hot_streams)
    cold = normalize_streams(cold_streams)
    validate_streams(hot, cold)
    return hot, cold
