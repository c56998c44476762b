"""Constants for the Oelo Lights Zone integration."""

DOMAIN = "oelo_zone"
DRIVER_VERSION = "0.9.0"

PLATFORMS = ["light"]

# Configuration keys
CONF_IP_ADDRESS = "ip_address"
CONF_ZONES = "zones"
CONF_POLL_INTERVAL = "poll_interval"
CONF_AUTO_POLL = "auto_poll"
CONF_COMMAND_TIMEOUT = "command_timeout"
CONF_DEBUG_LOGGING = "debug_logging"
CONF_MAX_LEDS = "max_leds"
CONF_SPOTLIGHT_PLAN_LIGHTS = "spotlight_plan_lights"
CONF_VERIFY_COMMANDS = "verify_commands"
CONF_VERIFICATION_RETRIES = "verification_retries"
CONF_VERIFICATION_DELAY = "verification_delay"
CONF_VERIFICATION_TIMEOUT = "verification_timeout"
CONF_DISCOVERY_SUBNET = "discovery_subnet"
CONF_DISCOVERY_PROBE_TIMEOUT = "discovery_probe_timeout"

# Defaults
DEFAULT_POLL_INTERVAL = 30
DEFAULT_AUTO_POLL = True
DEFAULT_COMMAND_TIMEOUT = 10
DEFAULT_DEBUG_LOGGING = False
DEFAULT_MAX_LEDS = 500
DEFAULT_SPOTLIGHT_PLAN_LIGHTS = "1,2,3,4,8,9,10,11,21,22,23,24,25,35,36,37,38,59,60,61,62,67,68,69,70,93,94,95,112,113,114,115,132,133,134,135,153,154,155,156"
DEFAULT_VERIFY_COMMANDS = False
DEFAULT_VERIFICATION_RETRIES = 3
DEFAULT_VERIFICATION_DELAY = 2
DEFAULT_VERIFICATION_TIMEOUT = 30
DEFAULT_DISCOVERY_SUBNET = ""
DEFAULT_DISCOVERY_PROBE_TIMEOUT = 2
DEFAULT_ZONES = [1, 2, 3, 4, 5, 6]
DEFAULT_DEBOUNCE_INTERVAL = 1.0

MIN_ZONE = 1
MAX_ZONE = 6

# Controller protocol
STATUS_PATH = "getController"
COMMAND_PATH = "setPattern"
COMMAND_RECEIVED = "Command Received"
PATTERN_OFF = "off"
PATTERN_CUSTOM = "custom"
PATTERN_SPOTLIGHT = "spotlight"
PLAN_SPOTLIGHT = "spotlight"
PLAN_NON_SPOTLIGHT = "non-spotlight"

# Order matters: the controller expects the query in this order
COMMAND_PARAM_KEYS = (
    "patternType",
    "zones",
    "num_zones",
    "num_colors",
    "colors",
    "direction",
    "speed",
    "gap",
    "other",
    "pause",
)

# Storage
STORAGE_VERSION = 1
STORAGE_KEY_ZONE = f"{DOMAIN}_zone"

# Pattern storage limits
MAX_PATTERNS = 200

# Discovery
DISCOVERY_FIRST_HOST = 1
DISCOVERY_LAST_HOST = 254
DISCOVERY_SAFETY_MARGIN = 1.0
DISCOVERY_STEP_DELAY = 0
DISCOVERY_FALLBACK_SUBNETS = [
    "192.168.1",
    "192.168.0",
    "10.0.0",
    "10.0.1",
    "192.168.2",
    "192.168.86",
    "172.16.0",
]

# Scheduler keys
JOB_DISPATCH = "dispatch"
JOB_VERIFICATION = "verification"
JOB_POLL = "poll"
JOB_DISCOVERY_STEP = "discovery_step"
JOB_DISCOVERY_SAFETY = "discovery_safety"

# Verification statuses
VERIFICATION_IDLE = "idle"
VERIFICATION_PENDING = "pending"
VERIFICATION_VERIFIED = "verified"
VERIFICATION_FAILED = "failed"
VERIFICATION_TIMEOUT = "timeout"
VERIFICATION_ERROR = "error"
VERIFICATION_SKIPPED = "skipped"

# Discovery statuses
DISCOVERY_IDLE = "idle"
DISCOVERY_SCANNING = "scanning"
DISCOVERY_FOUND = "found"
DISCOVERY_NOT_FOUND = "not_found"
DISCOVERY_STOPPED = "stopped"

# Published zone attributes
ATTR_AVAILABLE = "available"
ATTR_SWITCH = "switch"
ATTR_CURRENT_PATTERN = "current_pattern"
ATTR_EFFECT_NAME = "effect_name"
ATTR_LAST_COMMAND = "last_command"
ATTR_VERIFICATION_STATUS = "verification_status"
ATTR_DISCOVERY_STATUS = "discovery_status"
ATTR_DISCOVERED_ADDRESS = "discovered_address"
ATTR_AVAILABLE_PATTERNS = "available_patterns"
ATTR_DRIVER_VERSION = "driver_version"
ATTR_ZONE = "zone"
ATTR_CONTROLLER_IP = "controller_ip"

# Service names (using "effect" for Home Assistant consistency)
SERVICE_CAPTURE_EFFECT = "capture_effect"
SERVICE_APPLY_EFFECT = "apply_effect"
SERVICE_RENAME_EFFECT = "rename_effect"
SERVICE_DELETE_EFFECT = "delete_effect"
SERVICE_LIST_EFFECTS = "list_effects"
SERVICE_LOAD_PREDEFINED_EFFECTS = "load_predefined_effects"
SERVICE_START_DISCOVERY = "start_discovery"
SERVICE_STOP_DISCOVERY = "stop_discovery"

EVENT_PATTERN_UPDATED = f"{DOMAIN}_pattern_updated"
