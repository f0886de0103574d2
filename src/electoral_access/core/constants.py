"""Package-wide constants."""

# Logging
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Problem details
DEFAULT_PROBLEM_BASE_URL = "https://elections.example.com"

# Generic denial reasons
REASON_PERMISSION_DENIED = "Insufficient permission"
REASON_VALIDATION_DENIED = "Insufficient validation permission"
REASON_AUTH_REQUIRED = "Authentication required"

# Record keys read by default when filtering or checking territorial access
DEFAULT_ARRONDISSEMENT_FIELD = "arrondissement_code"
DEFAULT_DEPARTMENT_FIELD = "department_code"
DEFAULT_REGION_FIELD = "region_code"
