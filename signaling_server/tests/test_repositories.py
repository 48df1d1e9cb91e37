import pydantic
import pytest

from signaling_server.models import CommandRecord, RobotStatusUpdate
from signaling_server.repositories import COMMAND_LOG_CAPACITY, CommandLog, RobotStatusStore


def make_record(index: int, timestamp: int = 1_000, source: str = "viewer") -> CommandRecord:
    return CommandRecord(command=f"cmd-{index}", params={"i": index}, timestamp=timestamp, source=source)


def test_command_log_evicts_oldest_first():
    log = CommandLog()
    for i in range(COMMAND_LOG_CAPACITY + 1):
        log.insert(make_record(i))

    records = list(log)
    assert len(log) == 100
    assert records[0].command == "cmd-1"
    assert records[-1].command == "cmd-100"
    assert [r.params["i"] for r in records] == list(range(1, 101))


def test_command_log_never_exceeds_capacity():
    log = CommandLog(capacity=3)
    for i in range(10):
        log.insert(make_record(i))
        assert len(log) <= 3
    assert [r.command for r in log] == ["cmd-7", "cmd-8", "cmd-9"]


def test_recent_returns_suffix_in_insertion_order():
    log = CommandLog()
    for i in range(5):
        log.insert(make_record(i))

    assert [r.command for r in log.recent(2)] == ["cmd-3", "cmd-4"]
    assert len(log.recent(50)) == 5
    assert log.recent(0) == []


def test_count_by_command_uses_strict_lower_bound():
    log = CommandLog()
    log.insert(CommandRecord(command="forward", timestamp=100, source="viewer"))
    log.insert(CommandRecord(command="forward", timestamp=200, source="viewer"))
    log.insert(CommandRecord(command="stop", timestamp=300, source="api"))
    log.insert(CommandRecord(command="forward", timestamp=400, source="viewer"))

    assert log.count_by_command(100) == {"forward": 2, "stop": 1}
    assert log.count_by_command(400) == {}


def test_command_log_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        CommandLog(capacity=0)


def test_command_record_is_immutable():
    record = make_record(1)
    with pytest.raises(pydantic.ValidationError):
        record.command = "other"


def test_initial_status_is_empty():
    status = RobotStatusStore().snapshot()
    assert status.to_json() == {
        "connected": False,
        "streaming": False,
        "position": None,
        "battery": None,
        "lastCommand": None,
        "commandCount": 0,
    }


def test_merge_only_overwrites_present_fields():
    store = RobotStatusStore()
    store.set_connected(True)
    store.merge(RobotStatusUpdate.model_validate({"position": {"x": 1, "y": 2}}))

    merged = store.merge(RobotStatusUpdate.model_validate({"battery": 42}))

    assert merged.battery == 42
    assert isinstance(merged.battery, int)
    assert merged.to_json()["battery"] == 42
    assert merged.connected is True
    assert merged.streaming is False
    assert merged.position == {"x": 1, "y": 2}


def test_merge_ignores_unknown_keys_and_null_flags():
    store = RobotStatusStore()
    store.set_streaming(True)

    merged = store.merge(
        RobotStatusUpdate.model_validate({"streaming": None, "commandCount": 99, "injected": "x"})
    )

    assert merged.streaming is True
    assert merged.command_count == 0
    assert "injected" not in merged.to_json()


def test_merge_can_clear_optional_fields():
    store = RobotStatusStore()
    store.merge(RobotStatusUpdate.model_validate({"battery": 80}))
    merged = store.merge(RobotStatusUpdate.model_validate({"battery": None}))
    assert merged.battery is None


def test_snapshot_is_detached_from_store():
    store = RobotStatusStore()
    snapshot = store.snapshot()
    store.set_connected(True)
    assert snapshot.connected is False


def test_record_command_updates_last_command_and_count():
    store = RobotStatusStore()
    store.record_command(make_record(1))
    store.record_command(make_record(2))

    status = store.snapshot()
    assert status.command_count == 2
    assert status.last_command.command == "cmd-2"
    assert status.to_json()["lastCommand"]["source"] == "viewer"
