"""
  File with all constants in project
"""

# Percentage range reported by the hub for dimmers, shutters and tilt
PERCENT_MIN = 0
PERCENT_MAX = 100

# The hub reports "fully open/on" as 99 and "fully closed" as 1
SNAP_HIGH_FROM = 99
SNAP_HIGH_TO = 100
SNAP_LOW_FROM = 1
SNAP_LOW_TO = 0

# Default HomeKit tilt angle range (degrees)
TILT_ANGLE_MIN = -90
TILT_ANGLE_MAX = 90

# Battery
BATTERY_MAX = 100  # values above are an "unknown" sentinel
LOW_BATTERY_THRESHOLD = 20

# Outlet is "in use" when power draw is strictly above this (W)
OUTLET_IN_USE_WATTS = 1.0

# Garage/door raw values used when no state string is reported
DOOR_CLOSED_VALUE = 0
DOOR_OPEN_VALUE = 99

# Property names that need an alias in python
START_STOP_ACTIVITY_SWITCH = "ui.startStopActivitySwitch.value"

# Hub REST API paths
CLIMATE_ZONE_PATH = "/api/panels/climate/{zone_id}"
HEATING_ZONE_PATH = "/api/panels/heating/{zone_id}"
DEFAULT_HUB_TIMEOUT = 5.0

# Configuration file paths
CONFIG_PATH = "/etc/fibaro-homekit-bridge.conf"

# For logging to syslog/journald with name "fibaro-homekit-values"
FIBARO_HOMEKIT_CLI_LOGGER_NAME = "fibaro-homekit-values"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
