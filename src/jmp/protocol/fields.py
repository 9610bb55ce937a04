"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Separates the routing identities from the signed segments.
DELIMITER = b"<IDS|MSG>"

DEFAULT_SCHEME = "sha256"

# Number of frames that must follow the delimiter: the signature plus the
# four JSON segments.
SIGNED_FRAMES = 5

# Header keys
MSG_ID = "msg_id"
MSG_TYPE = "msg_type"
SESSION = "session"
USERNAME = "username"
VERSION = "version"

# Reasons a delivery fails to decode
MALFORMED = "malformed"
SIGNATURE = "signature"
JSON = "json"
OVERSIZED = "oversized"
