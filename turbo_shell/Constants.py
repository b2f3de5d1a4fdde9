# Constants.py
# Description: Shared constants for the turbo shell
#
# Imports
from pathlib import Path
#
#######################################################################################################################
#
# Constants:

APP_COMPONENT_ROOT = Path(__file__).parent

# Bundled path configuration shipped with the shell; the offline fallback
BUNDLED_PATH_CONFIGURATION = APP_COMPONENT_ROOT / "Config_Files" / "Turbo.json"

# --- Visit actions ---
ACTION_ADVANCE = "advance"
ACTION_REPLACE = "replace"
ACTION_RESTORE = "restore"

# --- Path properties ---
PRESENTATION_MODAL = "modal"

# --- Path configuration source kinds ---
SOURCE_SERVER = "server"
SOURCE_BUNDLED = "bundled"

# --- Session names ---
SESSION_PRIMARY = "primary"
SESSION_MODAL = "modal"

# Appended to the configured user agent so the backend can tell native shells apart
TURBO_USER_AGENT_SUFFIX = "Turbo-TUI"

# Meta tag read after every successful load to decide which affordances are offered
AUTHENTICATION_META_NAME = "turbo:authenticated"

HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")

#
# End of Constants.py
#######################################################################################################################
