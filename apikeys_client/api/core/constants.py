from datetime import datetime, timezone
from uuid import UUID

# Endpoint paths (relative to the service base URL)
APIKEYS_PATH = "/apikeys"
APIKEY_BY_ID_PATH = "/apikeys/{key_id}"
APIKEY_BY_SECRET_PATH = "/apikeys/key/{secret}"
APIKEY_VALIDATE_PATH = "/apikeys/key/{secret}/validate"

JSON_CONTENT_TYPE = "application/json"

# Transport defaults
DEFAULT_TIMEOUT_SECONDS = 10.0

# Zero values the service uses for unset identifiers and timestamps
NIL_UUID = UUID(int=0)
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

# Retry defaults (reads only)
DEFAULT_RETRY_MAX_ATTEMPTS = 3
DEFAULT_RETRY_BACKOFF_FACTOR = 0.5
DEFAULT_RETRY_STATUSES = (502, 503, 504)

# Placeholder used in logs instead of secret path segments
REDACTED = "***"

# Max characters of a response body kept in error details
ERROR_BODY_EXCERPT_LENGTH = 512
