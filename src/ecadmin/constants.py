"""Literal constants used by ecadmin."""

APP_NAME = "ecadmin"

# Command names start with this marker, e.g. -setPolicy.
COMMAND_PREFIX = "-"
OPTION_TERMINATOR = "--"

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_NAMESPACE_ERROR = 2
EXIT_INVALID_ARGUMENT = -1

DEFAULT_FS = "ecfs://localhost"
DEFAULT_STATE_FILE = "~/.ecadmin/namespace.json"
DEFAULT_WORKING_DIR = "/"
CONF_ENV_VAR = "ECADMIN_CONF"

SYSTEM_POLICY_NAMES = (
    "RS-10-4-1024k",
    "RS-3-2-1024k",
    "RS-6-3-1024k",
    "RS-LEGACY-6-3-1024k",
    "XOR-2-1-1024k",
)

OPTION_TABLE_WIDTH = 80
CATALOG_INDENT = " " * 10
