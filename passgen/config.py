"""Configuration constants for passgen.

Every value can be overridden through a ``PASSGEN_*`` environment variable.
"""

import os
from pathlib import Path

# Remote services
HIBP_URL = os.environ.get("PASSGEN_HIBP_URL", "https://api.pwnedpasswords.com").rstrip("/")
SHARE_URL = os.environ.get("PASSGEN_SHARE_URL", "https://pwpush.com").rstrip("/")
HIBP_NAME = "Have I Been Pwned"
SHARE_NAME = "Password Pusher"

# Network timeouts (seconds)
REQUEST_TIMEOUT = float(os.environ.get("PASSGEN_TIMEOUT", "10"))
PROBE_TIMEOUT = float(os.environ.get("PASSGEN_PROBE_TIMEOUT", "5"))
CURL_EXECUTABLE = os.environ.get("PASSGEN_CURL", "curl")

# Rate limiting
COOLDOWN_SECONDS = int(os.environ.get("PASSGEN_COOLDOWN", "10"))

# Persistence
PRESETS_FILE = Path(
    os.environ.get("PASSGEN_PRESETS_FILE", Path.home() / ".passgen" / "presets.json")
)

# Generation limits
MIN_LENGTH = 8
MAX_LENGTH = 32
MIN_WORDS = 1
MAX_WORDS = 5

# Share defaults
DEFAULT_EXPIRE_DAYS = 1
DEFAULT_EXPIRE_VIEWS = 1
DEFAULT_DELETABLE_BY_VIEWER = True
DEFAULT_RETRIEVAL_STEP = False
