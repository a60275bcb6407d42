from sentinel_core.events import (
    AxisValue, ButtonPressEvent, ButtonReleaseEvent, Metadata, MetadataChangedEvent,
    MonitorMetadata, MotionEvent, OsInfo, ScrollEvent, TouchBeginEvent,
    TouchEndEvent, TouchUpdateEvent, chunk_to_wire,
)


def test_event_type_tags_are_stable():
    assert MotionEvent.tag == 0
    assert ScrollEvent.tag == 1
    assert TouchBeginEvent.tag == 2
    assert TouchUpdateEvent.tag == 3
    assert TouchEndEvent.tag == 4
    assert ButtonPressEvent.tag == 5
    assert ButtonReleaseEvent.tag == 6
    assert MetadataChangedEvent.tag == 7


def test_motion_flattens_tag_first():
    record = MotionEvent(1234, AxisValue(-3, 7), AxisValue(4, 0), -5, 600)
    assert record.to_wire() == [0, 1234, -3, 7, 4, 0, -5, 600]


def test_touch_variants_share_motion_shape():
    x, y = AxisValue(1, 2), AxisValue(3, 4)
    assert TouchBeginEvent(9, x, y, 5, 6).to_wire() == [2, 9, 1, 2, 3, 4, 5, 6]
    assert TouchUpdateEvent(9, x, y, 5, 6).to_wire()[0] == 3
    assert TouchEndEvent(9, x, y, 5, 6).to_wire()[0] == 4


def test_scroll_has_single_axis():
    record = ScrollEvent(55, AxisValue(-1, 0), 100, 200)
    assert record.to_wire() == [1, 55, -1, 0, 100, 200]


def test_button_carries_coordinates_then_button():
    assert ButtonPressEvent(10, 1, 2, 3).to_wire() == [5, 10, 1, 2, 3]
    assert ButtonReleaseEvent(11, 1, 2, 3).to_wire() == [6, 11, 1, 2, 3]


def test_metadata_changed_embeds_object():
    metadata = Metadata(
        user_id="alice",
        host_id="abc",
        monitor=[MonitorMetadata(1, True, 0, 0, 1920, 1080, 508, 286, 96.0)],
        input_device="N: Name=\"mouse\"\n",
        os=OsInfo(os_type="Ubuntu", version="24.04", bitness="64-bit", architecture="x86_64"),
    )
    tag, time, payload = MetadataChangedEvent(42, metadata).to_wire()
    assert (tag, time) == (7, 42)
    assert payload["user_id"] == "alice"
    assert payload["host_id"] == "abc"
    assert payload["monitor"][0]["width_in_millimeters"] == 508
    assert payload["monitor"][0]["primary"] is True
    assert payload["os"]["os_type"] == "Ubuntu"
    assert set(payload) == {"user_id", "host_id", "monitor", "input_device", "os"}


def test_axis_value_fixed_point():
    assert AxisValue.from_float(1.5) == AxisValue(1, 1 << 31)
    assert AxisValue.from_float(-1.5) == AxisValue(-2, 1 << 31)
    assert AxisValue.from_float(3) == AxisValue(3, 0)
    assert AxisValue.from_float(-0.25).to_float() == -0.25


def test_axis_value_fraction_carries_into_integral():
    tiny = AxisValue.from_float(-1e-17)
    assert tiny == AxisValue(0, 0)
    assert abs(tiny.to_float()) < 1e-6


def test_chunk_to_wire_keeps_order():
    batch = [ButtonPressEvent(1, 0, 0, 1), ScrollEvent(2, AxisValue(1), 0, 0)]
    assert [r[0] for r in chunk_to_wire(batch)] == [5, 1]
