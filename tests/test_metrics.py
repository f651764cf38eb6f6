"""Unit tests for metric records, the accumulator and the store."""

from datetime import datetime, timedelta, timezone

from metrics import CycleReport, MetricAccumulator, MetricRecord, MetricsStore

TS = datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=timezone.utc)
TS_NS = int(TS.timestamp()) * 1_000_000_000 + 123456000


def _record(**overrides):
    values = {
        "measurement": "huebridge_light",
        "tags": {"huebridge_url": "https://bridge", "huebridge_room": "Flur", "huebridge_device": "Lamp 2"},
        "fields": {"on": 1},
        "timestamp": TS,
    }
    values.update(overrides)
    return MetricRecord(**values)


# --- MetricRecord ---

def test_line_protocol_sorted_tags_and_integer_field():
    line = _record().to_line_protocol()
    assert line == (
        "huebridge_light,huebridge_device=Lamp\\ 2,huebridge_room=Flur,huebridge_url=https://bridge "
        f"on=1i {TS_NS}"
    )


def test_line_protocol_float_fields():
    record = _record(
        measurement="huebridge_light_level",
        fields={"light_level_lux": 1.5, "light_level": 1563},
    )
    assert " light_level=1563i,light_level_lux=1.5 " in record.to_line_protocol()


def test_line_protocol_escapes_tag_values():
    record = _record(tags={"huebridge_device": "a,b=c d"})
    assert record.to_line_protocol().startswith("huebridge_light,huebridge_device=a\\,b\\=c\\ d ")


def test_record_to_dict():
    data = _record().to_dict()
    assert data["measurement"] == "huebridge_light"
    assert data["fields"] == {"on": 1}
    assert data["timestamp"] == TS.isoformat()


def test_record_timestamp_assigned_on_creation():
    before = datetime.now(timezone.utc)
    record = MetricRecord("m", {}, {"x": 1})
    assert before <= record.timestamp <= datetime.now(timezone.utc)


# --- MetricAccumulator ---

def test_accumulator_copies_maps():
    accumulator = MetricAccumulator()
    tags = {"huebridge_device": "Lamp 1"}
    accumulator.add_counter("huebridge_light", {"on": 1}, tags)
    tags["huebridge_device"] = "changed"

    assert accumulator.records[0].tags == {"huebridge_device": "Lamp 1"}
    assert accumulator.has_measurement("huebridge_light")
    assert not accumulator.has_measurement("huebridge_motion")


def test_accumulator_ignores_none_errors():
    accumulator = MetricAccumulator()
    accumulator.add_error(None)
    accumulator.add_error(ValueError("boom"))
    assert [str(e) for e in accumulator.errors] == ["boom"]


# --- MetricsStore ---

def _report(errors=(), config_error=None):
    return CycleReport(
        started=TS,
        finished=TS + timedelta(seconds=2),
        records=[_record()],
        errors=list(errors),
        config_error=config_error,
    )


def test_store_starts_empty():
    store = MetricsStore()
    status = store.get_status()
    assert store.latest is None
    assert status["cycle_count"] == 0
    assert status["last_cycle_started"] is None


def test_store_counts_cycles_and_errors():
    store = MetricsStore()
    store.update(_report(errors=["e1", "e2"]))
    store.update(_report(config_error="huebridge: Empty bridge list"))

    status = store.get_status()
    assert status["cycle_count"] == 2
    assert status["failed_cycle_count"] == 1
    assert status["error_count"] == 2
    assert status["last_config_error"] == "huebridge: Empty bridge list"
    assert status["last_cycle_duration_seconds"] == 2.0
    assert status["last_cycle_records"] == 1
