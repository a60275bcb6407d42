"""
Event records — the closed set of variants that make up a chunk.

On the wire every record is a flat JSON array whose first element is the
event-type tag, followed by the variant's fields in fixed order:

  Motion / TouchBegin / TouchUpdate / TouchEnd
      [tag, time, x_integral, x_frac, y_integral, y_frac, root_x, root_y]
  Scroll
      [tag, time, integral, frac, root_x, root_y]
  ButtonPress / ButtonRelease
      [tag, time, root_x, root_y, button]
  MetadataChanged
      [tag, time, {metadata object}]
"""

import math
from dataclasses import dataclass, field, asdict
from typing import ClassVar, List

from .constants import (
    MOTION_EVENT_TYPE, SCROLL_EVENT_TYPE, TOUCH_BEGIN_EVENT_TYPE,
    TOUCH_UPDATE_EVENT_TYPE, TOUCH_END_EVENT_TYPE, BUTTON_PRESS_EVENT_TYPE,
    BUTTON_RELEASE_EVENT_TYPE, METADATA_CHANGED_EVENT_TYPE,
)

_FRAC_SCALE = 1 << 32


@dataclass(frozen=True)
class AxisValue:
    """Fixed-point axis value: signed integral part + unsigned 32-bit fraction."""

    integral: int
    frac: int = 0

    @classmethod
    def from_float(cls, value):
        integral = math.floor(value)
        frac = int((value - integral) * _FRAC_SCALE)
        # A fraction that rounds up to a whole unit carries into the integral.
        if frac >= _FRAC_SCALE:
            frac = 0
            integral += 1
        return cls(int(integral), frac)

    def to_float(self):
        return self.integral + self.frac / _FRAC_SCALE


# ─── Metadata snapshot ───────────────────────────────────────────

@dataclass(frozen=True)
class MonitorMetadata:
    name: int
    primary: bool
    x: int
    y: int
    width: int
    height: int
    width_in_millimeters: int = 0
    height_in_millimeters: int = 0
    dpi: float = 0.0


@dataclass(frozen=True)
class OsInfo:
    os_type: str = ""
    version: str = ""
    edition: str = ""
    codename: str = ""
    bitness: str = ""
    architecture: str = ""


@dataclass(frozen=True)
class Metadata:
    user_id: str = ""
    host_id: str = ""
    monitor: List[MonitorMetadata] = field(default_factory=list)
    input_device: str = ""
    os: OsInfo = field(default_factory=OsInfo)

    def to_wire(self):
        return asdict(self)


# ─── Event records ───────────────────────────────────────────────

class EventRecord:
    """Base for all chunk records. `tag` is the stable wire discriminant."""

    tag: ClassVar[int]

    def to_wire(self) -> list:
        raise NotImplementedError


@dataclass(frozen=True)
class _TwoAxisEvent(EventRecord):
    time: int
    x: AxisValue
    y: AxisValue
    root_x: int
    root_y: int

    def to_wire(self) -> list:
        return [
            self.tag, self.time,
            self.x.integral, self.x.frac,
            self.y.integral, self.y.frac,
            self.root_x, self.root_y,
        ]


@dataclass(frozen=True)
class MotionEvent(_TwoAxisEvent):
    tag: ClassVar[int] = MOTION_EVENT_TYPE


@dataclass(frozen=True)
class TouchBeginEvent(_TwoAxisEvent):
    tag: ClassVar[int] = TOUCH_BEGIN_EVENT_TYPE


@dataclass(frozen=True)
class TouchUpdateEvent(_TwoAxisEvent):
    tag: ClassVar[int] = TOUCH_UPDATE_EVENT_TYPE


@dataclass(frozen=True)
class TouchEndEvent(_TwoAxisEvent):
    tag: ClassVar[int] = TOUCH_END_EVENT_TYPE


@dataclass(frozen=True)
class ScrollEvent(EventRecord):
    tag: ClassVar[int] = SCROLL_EVENT_TYPE

    time: int
    value: AxisValue
    root_x: int
    root_y: int

    def to_wire(self) -> list:
        return [self.tag, self.time, self.value.integral, self.value.frac,
                self.root_x, self.root_y]


@dataclass(frozen=True)
class _ButtonEvent(EventRecord):
    time: int
    root_x: int
    root_y: int
    button: int

    def to_wire(self) -> list:
        return [self.tag, self.time, self.root_x, self.root_y, self.button]


@dataclass(frozen=True)
class ButtonPressEvent(_ButtonEvent):
    tag: ClassVar[int] = BUTTON_PRESS_EVENT_TYPE


@dataclass(frozen=True)
class ButtonReleaseEvent(_ButtonEvent):
    tag: ClassVar[int] = BUTTON_RELEASE_EVENT_TYPE


@dataclass(frozen=True)
class MetadataChangedEvent(EventRecord):
    tag: ClassVar[int] = METADATA_CHANGED_EVENT_TYPE

    time: int
    metadata: Metadata

    def to_wire(self) -> list:
        return [self.tag, self.time, self.metadata.to_wire()]


def chunk_to_wire(batch):
    """Flatten a batch of records into the `chunk` array of an envelope."""
    return [record.to_wire() for record in batch]
