"""Library-wide constants for railway-env.

Names of the Railway-provided environment variables and the HTTP headers
injected by the Railway edge proxy. These names are the wire contract with
the platform and must match exactly.

See:
    https://docs.railway.com/reference/variables#railway-provided-variables
    https://docs.railway.com/reference/public-networking
"""

__all__ = [
    # Library identity
    "APP_NAME",
    "LOG_LEVEL_ENV_VAR",
    "DEFAULT_LOG_LEVEL",
    # Platform detection
    "PROJECT_ID_ENV_VAR",
    # Integer bounds
    "INT64_MIN",
    "INT64_MAX",
    # Request headers
    "HEADER_REAL_IP",
    "HEADER_FORWARDED_PROTO",
    "HEADER_FORWARDED_HOST",
    "HEADER_RAILWAY_EDGE",
    "HEADER_REQUEST_START",
    "HEADER_RAILWAY_REQUEST_ID",
    # Logging
    "MAX_LOGGED_VALUE_LENGTH",
    # Fatal exit
    "EXIT_CODE_CONFIGURATION",
]

# ============================================================================
# Library Identity
# ============================================================================

# Used as the logger namespace
APP_NAME: str = "railway-env"

# Log level for the system logger, read once when the logger is created
LOG_LEVEL_ENV_VAR: str = "RAILWAY_ENV_LOG_LEVEL"
DEFAULT_LOG_LEVEL: str = "WARNING"

# ============================================================================
# Platform Detection
# ============================================================================

# Set on every Railway deployment. Its presence is how we know we're on Railway.
PROJECT_ID_ENV_VAR: str = "RAILWAY_PROJECT_ID"

# ============================================================================
# Integer Bounds
# ============================================================================

# Integer variables are signed 64-bit on the platform side
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1

# ============================================================================
# Request Headers (set by the Railway edge proxy)
# ============================================================================

# Client's remote IP
HEADER_REAL_IP: str = "X-Real-IP"

# Always "https" on Railway
HEADER_FORWARDED_PROTO: str = "X-Forwarded-Proto"

# Original Host header
HEADER_FORWARDED_HOST: str = "X-Forwarded-Host"

# Edge region that handled the request
HEADER_RAILWAY_EDGE: str = "X-Railway-Edge"

# Time the request was received at the edge (Unix milliseconds)
HEADER_REQUEST_START: str = "X-Request-Start"

# Correlates the request against Railway network logs
HEADER_RAILWAY_REQUEST_ID: str = "X-Railway-Request-Id"

# ============================================================================
# Logging
# ============================================================================

# Untrusted header values are truncated before logging
MAX_LOGGED_VALUE_LENGTH: int = 64

# ============================================================================
# Fatal Exit
# ============================================================================

# sysexits.h EX_CONFIG
EXIT_CODE_CONFIGURATION: int = 78
