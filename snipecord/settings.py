"""
SnipeCord Settings
==================

Runtime settings for the section sniper service.

Values can be overridden through environment variables or a .env file in the
project root. Watch-list settings (indexes, term, webhook, ...) live in
config.json, see snipecord/config.py.
"""

import os
from pathlib import Path

# Load .env file from project root
from dotenv import load_dotenv

_project_root = Path(__file__).parent.parent
_env_path = _project_root / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

# =============================================================================
# CONFIG FILE
# =============================================================================

# Path to the JSON watch-list config
CONFIG_PATH = os.environ.get("SNIPECORD_CONFIG", "config.json")

# Overrides the webhook URL from config.json when set (keeps secrets out of the file)
WEBHOOK_URL_OVERRIDE = os.environ.get("SNIPECORD_WEBHOOK", "")

# =============================================================================
# TIMING SETTINGS
# =============================================================================

# Open sections poll frequency. One tick per interval; repeat_timeout counts ticks.
POLL_INTERVAL_SECONDS = float(os.environ.get("POLL_INTERVAL_SECONDS", "1.0"))

# Default number of ticks to wait before repeating an alert for a section
DEFAULT_REPEAT_TIMEOUT = 60

# =============================================================================
# SOC API SETTINGS
# =============================================================================

SOC_COURSES_URL = os.environ.get(
    "SOC_COURSES_URL", "https://sis.rutgers.edu/soc/courses.gz"
)
SOC_OPEN_SECTIONS_URL = os.environ.get(
    "SOC_OPEN_SECTIONS_URL", "https://sis.rutgers.edu/soc/openSections.gz"
)

# WebReg link included in alerts
WEBREG_URL = "http://sims.rutgers.edu/webreg/editSchedule.htm"

# =============================================================================
# DISCORD WEBHOOK SETTINGS
# =============================================================================

WEBHOOK_USERNAME = "RU SnipeCord"
WEBHOOK_AVATAR_URL = (
    "https://upload.wikimedia.org/wikipedia/commons/thumb/1/1c/"
    "Rifle_scope.svg/240px-Rifle_scope.svg.png"
)
READY_MESSAGE = "Ready for action!!"

# Discord rejects message content longer than this
DISCORD_MAX_MESSAGE_LENGTH = 2000
WEBHOOK_TIMEOUT_SECONDS = 10

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("LOG_FILE", "logs/snipecord.log")
