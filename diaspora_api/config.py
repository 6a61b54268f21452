"""Configuration constants for the diaspora* pod client."""

import os

# Connection defaults can also be supplied via DIASPORA_* env vars
DEFAULT_POD = os.environ.get("DIASPORA_POD", "")
DEFAULT_USER = os.environ.get("DIASPORA_USERNAME", "")
DEFAULT_PASSWORD = os.environ.get("DIASPORA_PASSWORD", "")
DEFAULT_CA_BUNDLE = os.environ.get("DIASPORA_CA_BUNDLE") or None
DEFAULT_PROVIDER = os.environ.get("DIASPORA_PROVIDER", "WP to diaspora*")

SIGN_IN_PATH         = "/users/sign_in"
BOOKMARKLET_PATH     = "/bookmarklet"        # session-gated, embeds aspects/services
STATUS_MESSAGES_PATH = "/status_messages"

REQUEST_TIMEOUT = 60    # seconds per HTTP request

USER_AGENT = "diaspora-api/1.0 (+https://diasporafoundation.org)"

# Things the pod lets us delete through DELETE /<kind>s/<id>
DELETABLE_KINDS: frozenset[str] = frozenset(["post", "comment"])

# The aspect every account has; never sent to the pod as an id
PUBLIC_ASPECT = "public"

CREDENTIAL_HASH_ITERATIONS = 100_000

# Public directory of pods (JSON: {"pods": [{"domain", "secure", "hidden"}, ...]})
POD_LIST_URL = "http://podupti.me/api.php?format=json&key=4r45tg"
