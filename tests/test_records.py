import pytest
from pydantic import ValidationError

from dump1090_exporter.models import NormalizedRecord, RawRecord


def _raw(**overrides):
    payload = {
        "Hex": "ABC123",
        "Squawk": "1200",
        "Flight": " UAL123 ",
        "lat": 40.1,
        "lon": -73.9,
        "validposition": 1,
        "Altitude": 35000,
        "vert_rate": -64,
        "Track": 90,
        "validtrack": 1,
        "Speed": 450,
        "Messages": 10,
        "Seen": 2,
    }
    payload.update(overrides)
    return RawRecord.model_validate(payload)


def test_raw_record_reads_wire_field_names():
    raw = _raw()

    assert raw.hex == "ABC123"
    assert raw.squawk == "1200"
    assert raw.latitude == 40.1
    assert raw.longitude == -73.9
    assert raw.valid_position == 1
    assert raw.vertical_rate == -64
    assert raw.valid_track == 1


def test_raw_record_matches_keys_case_insensitively():
    raw = RawRecord.model_validate(
        {"hex": "a1b2c3", "FLIGHT": "DLH4  ", "Lat": 1.5, "ValidPosition": 1}
    )

    assert raw.hex == "a1b2c3"
    assert raw.flight == "DLH4  "
    assert raw.latitude == 1.5
    assert raw.valid_position == 1


def test_raw_record_prefers_exact_lowercase_key():
    raw = RawRecord.model_validate({"HEX": "upper", "hex": "lower"})
    assert raw.hex == "lower"

    raw = RawRecord.model_validate({"hex": "lower", "HEX": "upper"})
    assert raw.hex == "lower"


def test_raw_record_missing_and_null_fields_take_zero_values():
    raw = RawRecord.model_validate({"Hex": "ABC123", "lat": None, "Flight": None})

    assert raw.flight == ""
    assert raw.latitude == 0.0
    assert raw.altitude == 0
    assert raw.valid_track == 0


def test_raw_record_rejects_wrong_types():
    with pytest.raises(ValidationError):
        RawRecord.model_validate({"Altitude": {"feet": 100}})
    with pytest.raises(ValidationError):
        RawRecord.model_validate({"lat": "north"})


@pytest.mark.parametrize("flag, expected", [(0, False), (1, True), (2, True), (-1, True)])
def test_validity_flags_follow_non_zero_rule(flag, expected):
    record = NormalizedRecord.from_raw(_raw(validposition=flag, validtrack=flag))

    assert record.valid_position is expected
    assert record.valid_track is expected


def test_flight_is_trimmed_of_spaces_only_at_the_ends():
    record = NormalizedRecord.from_raw(_raw(Flight="  N 12 AB  "))

    assert record.flight == "N 12 AB"


def test_normalized_record_keeps_other_fields():
    record = NormalizedRecord.from_raw(_raw())

    assert record.hex == "ABC123"
    assert record.flight == "UAL123"
    assert record.altitude == 35000
    assert record.speed == 450
    assert record.messages == 10
    assert record.seen == 2
    assert record.position == (40.1, -73.9)
    assert record.heading == 90
    assert record.is_reportable


def test_invalid_position_and_track_read_as_absent():
    record = NormalizedRecord.from_raw(_raw(validposition=0, validtrack=0, lat=0.0))

    assert record.position is None
    assert record.heading is None
    assert not record.is_reportable


def test_normalized_record_is_immutable():
    record = NormalizedRecord.from_raw(_raw())

    with pytest.raises(ValidationError):
        record.flight = "OTHER"
