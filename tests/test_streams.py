"""
Tests of the stream model: record normalization, unit conversion, validation and the working state of a stream.
"""

import math

import pytest

from henslib.common import COLD, HOT, InvalidStreamError
from henslib.streams import (
    Q_,
    GlideStream,
    IsothermalStream,
    StreamState,
    normalize_stream,
    normalize_streams,
    prepare_streams,
    total_duty,
    validate_streams,
)


class TestNormalizeStream:
    """Records are turned into glide or isothermal streams."""

    def test_missing_outlet_is_isothermal(self):
        assert normalize_stream({"in": 400, "load": 100}) == IsothermalStream(400, 100)

    def test_equal_temperatures_are_isothermal(self):
        stream = normalize_stream({"in": 400, "out": 400, "load": 5, "rate": 3})
        assert stream.isothermal
        assert stream.required_duty == pytest.approx(5)

    def test_rate_wins_over_load(self):
        stream = normalize_stream({"in": 400, "out": 300, "rate": 2, "load": 999})
        assert stream == GlideStream(400, 300, 2)
        assert stream.required_duty == pytest.approx(200)

    def test_rate_derived_from_load(self):
        stream = normalize_stream({"in": 300, "out": 400, "load": 50})
        assert not stream.isothermal
        assert stream.rate == pytest.approx(0.5)

    def test_zero_rate_falls_back_on_load(self):
        stream = normalize_stream({"in": 300, "out": 350, "rate": 0, "load": 10})
        assert stream.rate == pytest.approx(0.2)

    def test_stream_objects_pass_through(self):
        stream = GlideStream(400, 300, 2)
        assert normalize_stream(stream) is stream

    def test_record_is_not_modified(self):
        record = {"in": 300, "out": 400, "load": 50}
        normalize_stream(record)
        assert record == {"in": 300, "out": 400, "load": 50}

    @pytest.mark.parametrize(
        "record",
        [
            {"out": 300, "rate": 1},
            {"in": -5, "out": 300, "rate": 1},
            {"in": 400, "out": 300, "rate": -1},
            {"in": 400, "out": 300, "rate": 0},
            {"in": 400, "out": 300},
            {"in": 400},
            {"in": 400, "load": 0},
            {"in": "hot", "load": 1},
            {"in": float("nan"), "load": 1},
            {"in": float("inf"), "load": 1},
        ],
    )
    def test_malformed_records(self, record):
        with pytest.raises(InvalidStreamError):
            normalize_stream(record)

    def test_record_must_be_a_mapping(self):
        with pytest.raises(InvalidStreamError):
            normalize_stream([400, 300, 2])

    def test_invalid_stream_is_infeasible(self):
        """Malformed input is reported through the common error type."""
        from henslib.common import InfeasibleError

        assert issubclass(InvalidStreamError, InfeasibleError)


class TestUnits:
    """Plain numbers are read in the given units, pint quantities in their own."""

    def test_celsius_numbers(self):
        stream = normalize_stream({"in": 100, "out": 50, "rate": 2}, temp_unit="degC")
        assert stream.in_temp == pytest.approx(373.15)
        assert stream.out_temp == pytest.approx(323.15)

    def test_kilowatt_numbers(self):
        stream = normalize_stream({"in": 400, "load": 500}, power_unit="kW")
        assert stream.load == pytest.approx(0.5)
        glide = normalize_stream({"in": 400, "out": 300, "rate": 30}, power_unit="kW")
        assert glide.rate == pytest.approx(0.03)

    def test_quantities(self):
        stream = normalize_stream(
            {"in": Q_(100, "degC"), "out": Q_(50, "degC"), "rate": Q_(2, "kW/K")}
        )
        assert stream.in_temp == pytest.approx(373.15)
        assert stream.out_temp == pytest.approx(323.15)
        assert stream.rate == pytest.approx(0.002)
        assert stream.required_duty == pytest.approx(0.1)

    def test_wrong_dimension(self):
        with pytest.raises(InvalidStreamError):
            normalize_stream({"in": Q_(5, "m"), "load": 1})

    def test_unknown_unit(self):
        with pytest.raises(InvalidStreamError):
            normalize_stream({"in": 400, "load": 1}, power_unit="horsefeathers")


class TestValidateStreams:
    """Streams are checked before any synthesis begins."""

    def test_valid_streams(self):
        validate_streams(
            [GlideStream(400, 300, 2), IsothermalStream(380, 0)],
            [GlideStream(300, 350, 1)],
        )

    def test_zero_rate(self):
        with pytest.raises(InvalidStreamError, match="Hot stream 0"):
            validate_streams([GlideStream(400, 300, 0)], [])

    def test_coinciding_temperatures(self):
        with pytest.raises(InvalidStreamError, match="Cold stream 1"):
            validate_streams([], [GlideStream(300, 350, 1), GlideStream(300, 300, 1)])

    def test_negative_isothermal_load(self):
        with pytest.raises(InvalidStreamError):
            validate_streams([IsothermalStream(400, -1)], [])

    def test_not_a_stream(self):
        with pytest.raises(InvalidStreamError):
            validate_streams([{"in": 400, "load": 1}], [])

    def test_prepare_streams(self):
        hot, cold = prepare_streams(
            [{"in": 400, "out": 300, "rate": 2}], [{"in": 300, "load": 10}]
        )
        assert hot == [GlideStream(400, 300, 2)]
        assert cold == [IsothermalStream(300, 10)]
        assert total_duty(hot + cold) == pytest.approx(210)

    def test_normalize_streams_keeps_order(self):
        streams = normalize_streams([{"in": 1, "load": 1}, {"in": 2, "load": 2}])
        assert [s.temp for s in streams] == [1, 2]


class TestStreamState:
    """The working state moves toward the target as heat is exchanged."""

    def test_hot_glide(self):
        state = StreamState(GlideStream(500, 400, 2), HOT, 0)
        assert state.heat_to_target() == pytest.approx(200)
        state.advance(50)
        assert state.temp == pytest.approx(475)
        assert state.remaining == pytest.approx(150)
        assert state.heat_to_target() == pytest.approx(150)

    def test_cold_glide(self):
        state = StreamState(GlideStream(300, 350, 1), COLD, 3)
        state.advance(20)
        assert state.index == 3
        assert state.temp == pytest.approx(320)
        assert state.remaining == pytest.approx(30)

    def test_glide_at_target(self):
        state = StreamState(GlideStream(300, 350, 1), COLD, 0)
        state.advance(50)
        assert state.heat_to_target() == 0.0

    def test_isothermal(self):
        state = StreamState(IsothermalStream(400, 100), HOT, 0)
        assert math.isinf(state.heat_to_target())
        state.advance(40)
        assert state.temp == 400
        assert state.remaining == pytest.approx(60)

    def test_stream_is_not_modified(self):
        stream = GlideStream(500, 400, 2)
        StreamState(stream, HOT, 0).advance(100)
        assert stream == GlideStream(500, 400, 2)


if __name__ == "__main__":
    pytest.main([__file__])
