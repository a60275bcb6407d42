"""
Constants, defaults, event-type tags, and network timeouts.
"""

AGENT_VERSION = "0.3.0"
APP_NAME = "X11 Sentinel Client"

# ─── Config defaults (overridable via APP_* env vars / CLI) ──────
DEFAULT_API_KEY_NAME = "api-key"
DEFAULT_API_KEY_VALUE = "x11-sentinel-client"
DEFAULT_BUFFER_SIZE_LIMIT = 100        # Events held before a capacity flush
DEFAULT_IDLE_TIMEOUT = 10000           # ms without input → idle flush
DEFAULT_LOCK_ENABLED = False
DEFAULT_LOCK_THRESHOLD = 0.5           # Lock when verify score drops below this
DEFAULT_LOCK_UTILITY = "slock"
DEFAULT_METADATA_QUERY_INTERVAL = 600000   # ms (10 min)
DEFAULT_STATUS_BASE_URL = "http://localhost:3000/status"
DEFAULT_STATUS_INTERVAL = 100          # Seconds between status polls
DEFAULT_SUBMIT_URL = "http://localhost:3000/chunk"
DEFAULT_USER_ID = "default_user"

# ─── Event-type tags (first element of every wire tuple) ─────────
# Stable protocol values. Never renumber.
MOTION_EVENT_TYPE = 0
SCROLL_EVENT_TYPE = 1
TOUCH_BEGIN_EVENT_TYPE = 2
TOUCH_UPDATE_EVENT_TYPE = 3
TOUCH_END_EVENT_TYPE = 4
BUTTON_PRESS_EVENT_TYPE = 5
BUTTON_RELEASE_EVENT_TYPE = 6
METADATA_CHANGED_EVENT_TYPE = 7

# ─── Network ─────────────────────────────────────────────────────
API_TIMEOUT_SUBMIT = 10        # Seconds, bounds a stalled chunk POST
API_TIMEOUT_STATUS = 15
STATUS_VERIFY_PHASE = "verify"

# ─── Input source ────────────────────────────────────────────────
LISTENER_READY_TIMEOUT_SEC = 5
INT16_MIN = -32768
INT16_MAX = 32767
