"""Application-level constants for mongonav.

This module keeps only cross-cutting app/shell/timeout constants.
"""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "mongonav"
PROMPT_LABEL = "mon-go"

# ============================================================================
# Connection
# ============================================================================

DEFAULT_CONNECTION_STRING = "mongodb://localhost:27017"

# ============================================================================
# Timeouts (seconds)
# ============================================================================

# Connect + ping at session start.
CONNECT_TIMEOUT_SEC = 10

# Each backend call made while validating a cd target.
RESOLVE_TIMEOUT_SEC = 5

# Each backend call made while producing a listing.
LIST_TIMEOUT_SEC = 5

# ============================================================================
# Listing
# ============================================================================

DEFAULT_LIST_LIMIT = 5
SHOW_ALL_FLAG = "-la"
TRUNCATION_MARKER = "... (results truncated)\n"

# Maximum number of path segments: database, collection, document id.
MAX_PATH_DEPTH = 3

# ============================================================================
# Environment variables
# ============================================================================

ENV_LOG_FILE = "MONGONAV_LOG_FILE"
ENV_DEBUG = "MONGONAV_DEBUG"
