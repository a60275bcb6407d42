"""
Platform and device metadata probe.

Each facet (host id, monitors, input devices, OS) is collected
independently. A facet that cannot be resolved degrades to an empty value;
it never fails the whole snapshot.
"""

import getpass
import os
import platform
from pathlib import Path

import mss
from mss.exception import ScreenShotError

from .config import log
from .events import Metadata, MonitorMetadata, OsInfo

MACHINE_ID_FILE = Path("/etc/machine-id")
INPUT_DEVICES_FILE = Path("/proc/bus/input/devices")


def calculate_dpi(length_in_pixel, length_in_mm):
    """Dots per inch. 0.0 when the physical length is unknown."""
    if not length_in_mm:
        return 0.0
    return length_in_pixel / mm_to_inch(length_in_mm)


def mm_to_inch(x):
    return x / 25.4


# ─── Facets ──────────────────────────────────────────────────────

def get_user_id():
    user = os.environ.get("USERNAME") or os.environ.get("USER")
    if user:
        return user
    try:
        return getpass.getuser()
    except (KeyError, OSError) as e:
        log.warning("Could not resolve login name: %s", e)
        return ""


def get_host_id(path=MACHINE_ID_FILE):
    try:
        return Path(path).read_text(encoding="utf-8").strip()
    except OSError as e:
        log.warning("Could not read host id from %s: %s", path, e)
        return ""


def get_monitor_metadata():
    """
    Physical monitors as reported by mss. Index 0 of `monitors` is the
    virtual bounding box of all screens and is skipped; index 1 is primary.
    """
    try:
        with mss.mss() as sct:
            monitors = list(sct.monitors[1:])
    except (ScreenShotError, OSError) as e:
        log.warning("Could not enumerate monitors: %s", e)
        return []

    result = []
    for index, mon in enumerate(monitors, start=1):
        width_mm = int(mon.get("width_mm", 0) or 0)
        height_mm = int(mon.get("height_mm", 0) or 0)
        result.append(MonitorMetadata(
            name=index,
            primary=index == 1,
            x=int(mon["left"]),
            y=int(mon["top"]),
            width=int(mon["width"]),
            height=int(mon["height"]),
            width_in_millimeters=width_mm,
            height_in_millimeters=height_mm,
            dpi=calculate_dpi(float(mon["width"]), float(width_mm)),
        ))
    return result


def get_input_device_metadata(path=INPUT_DEVICES_FILE):
    """
    Blocks of /proc/bus/input/devices that describe pointer devices
    (their handler list mentions `mouse`). Raw text, blocks separated
    by a blank line.

    Line prefixes: I (bus/vendor/product/version), N (name), P (physical
    path), S (sysfs path), U (unique id), H (handlers), B (bitmaps:
    PROP, EV, KEY, REL, MSC, LED).
    """
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.warning("Could not read input devices from %s: %s", path, e)
        return ""

    blocks = [b.strip("\n") for b in text.split("\n\n") if b.strip()]
    mice = [b for b in blocks if "mouse" in b]
    return "\n\n".join(mice) + ("\n" if mice else "")


def get_os_metadata():
    try:
        release = platform.freedesktop_os_release()
    except OSError:
        release = {}

    bits = platform.architecture()[0]
    return OsInfo(
        os_type=release.get("NAME") or platform.system(),
        version=release.get("VERSION_ID") or platform.release(),
        edition=release.get("VARIANT", ""),
        codename=release.get("VERSION_CODENAME", ""),
        bitness=bits.replace("bit", "-bit") if bits else "",
        architecture=platform.machine(),
    )


# ─── Probe ───────────────────────────────────────────────────────

class MetadataProbe:
    """On-demand snapshot of host, user, monitors, input devices and OS."""

    def __init__(self, machine_id_path=MACHINE_ID_FILE, input_devices_path=INPUT_DEVICES_FILE):
        self._machine_id_path = machine_id_path
        self._input_devices_path = input_devices_path

    def snapshot(self) -> Metadata:
        return Metadata(
            user_id=get_user_id(),
            host_id=get_host_id(self._machine_id_path),
            monitor=get_monitor_metadata(),
            input_device=get_input_device_metadata(self._input_devices_path),
            os=_safe_os_metadata(),
        )


def _safe_os_metadata():
    try:
        return get_os_metadata()
    except Exception as e:
        log.warning("Could not query OS metadata: %s", e)
        return OsInfo()
