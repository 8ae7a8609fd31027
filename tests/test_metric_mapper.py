from prometheus_client import REGISTRY
from prometheus_client.parser import text_string_to_metric_families

from dump1090_exporter.models import NormalizedRecord
from dump1090_exporter.services import (
    GAUGE_SPECS,
    ScrapeMetrics,
    build_scrape_metrics,
    label_values,
)


def _record(**overrides) -> NormalizedRecord:
    fields = {
        "hex": "ABC123",
        "squawk": "1200",
        "flight": "UAL123",
        "latitude": 40.1,
        "longitude": -73.9,
        "valid_position": True,
        "altitude": 35000,
        "vertical_rate": -64,
        "track": 90,
        "valid_track": True,
        "speed": 450,
        "messages": 10,
        "seen": 2,
    }
    fields.update(overrides)
    return NormalizedRecord(**fields)


def _samples(metrics: ScrapeMetrics) -> dict[str, list]:
    body, _ = metrics.render()
    return {
        family.name: family.samples
        for family in text_string_to_metric_families(body.decode("utf-8"))
    }


def test_all_gauge_families_are_exported_with_labels():
    samples = _samples(build_scrape_metrics([_record()]))

    assert set(samples) == {spec.name for spec in GAUGE_SPECS}
    assert len(samples) == 8
    labels = {"flight": "UAL123", "hex": "ABC123", "squawk": "1200"}
    values = {name: family[0].value for name, family in samples.items()}
    for family in samples.values():
        assert family[0].labels == labels

    assert values == {
        "dump1090_latitude": 40.1,
        "dump1090_longitude": -73.9,
        "dump1090_altitude": 35000.0,
        "dump1090_vertical_rate": -64.0,
        "dump1090_track": 90.0,
        "dump1090_speed": 450.0,
        "dump1090_messages": 10.0,
        "dump1090_seen": 2.0,
    }


def test_records_without_valid_position_or_track_are_skipped_entirely():
    records = [
        _record(hex="NOPOS", valid_position=False),
        _record(hex="NOTRK", valid_track=False),
        _record(hex="NONE", valid_position=False, valid_track=False),
    ]

    metrics = build_scrape_metrics(records)
    samples = _samples(metrics)

    assert metrics.emitted == 0
    assert metrics.skipped == 3
    assert all(family == [] for family in samples.values())


def test_only_fully_valid_records_are_emitted():
    flags = [(True, True), (True, False), (False, True), (False, False), (True, True)]
    records = [
        _record(hex=f"H{i}", valid_position=pos, valid_track=trk)
        for i, (pos, trk) in enumerate(flags)
    ]

    samples = _samples(build_scrape_metrics(records))

    for family in samples.values():
        assert [s.labels["hex"] for s in family] == ["H0", "H4"]


def test_empty_flight_becomes_unknown():
    record = _record(flight="")

    assert label_values(record)["flight"] == "UNKNOWN"
    body, _ = build_scrape_metrics([record]).render()
    assert 'dump1090_speed{flight="UNKNOWN",hex="ABC123",squawk="1200"} 450.0' in body.decode()


def test_each_scrape_gets_its_own_registry():
    first = build_scrape_metrics([_record(hex="FIRST")])
    second = build_scrape_metrics([_record(hex="SECOND")])

    assert first.registry is not second.registry
    assert "FIRST" not in second.render()[0].decode()
    assert "SECOND" not in first.render()[0].decode()
    assert REGISTRY.get_sample_value("dump1090_latitude", label_values(_record())) is None


def test_rebuilding_from_same_records_is_byte_identical():
    records = [_record(), _record(hex="DEF456", flight="", squawk="7000")]

    first, _ = build_scrape_metrics(records).render()
    second, _ = build_scrape_metrics(records).render()

    assert first == second


def test_render_negotiates_openmetrics():
    metrics = build_scrape_metrics([_record()])

    body, content_type = metrics.render("application/openmetrics-text; version=1.0.0")
    assert content_type.startswith("application/openmetrics-text")
    assert body.decode().endswith("# EOF\n")

    body, content_type = metrics.render("text/plain")
    assert content_type.startswith("text/plain")
    assert "# EOF" not in body.decode()
