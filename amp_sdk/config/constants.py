"""
Amp SDK constants

Central location for protocol defaults and limits. All durations are
integer milliseconds; conversion to seconds happens at the transport
and registration boundaries only.
"""

# Client defaults (a value of 0 in the options means "use these")
DEFAULT_TIMEOUT_MS = 10 * 1000
DEFAULT_SESSION_LIFETIME_MS = 30 * 60 * 1000

# Upper bound on the size of the candidate cross product for one decide call
DECIDE_UPPER_LIMIT = 50

# Decide calls ask the agent for exactly one combination
DECIDE_LIMIT = 1

# Index of the combination used when the agent can't provide a decision
FALLBACK_INDEX = 0

# Token used in place of server issued tokens when dont_use_tokens is set
SENTINEL_AMP_TOKEN = "CUSTOM"

# Generated user / session identifiers
RANDOM_ID_LENGTH = 16
RANDOM_ID_CHARSET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

# Shared connection pool
DEFAULT_MAX_KEEPALIVE_CONNECTIONS = 5000
DEFAULT_IDLE_TIMEOUT_MS = 60 * 1000

# Consistent hashing
VIRTUAL_NODES_PER_AGENT = 160

# Agent URL layout
ALLOWED_AGENT_SCHEMES = ("http", "https")
API_PREFIX = "/api/core/v2"
DECIDE_PATH = "decideV2"
DECIDE_WITH_CONTEXT_PATH = "decideWithContextV2"
OBSERVE_PATH = "observeV2"
REGISTRATION_PATH = "/test/update_from_spa"

# Environment variables read by AmpOptions.from_env()
ENV_PROJECT_KEY = "AMP_PROJECT_KEY"
ENV_AGENTS = "AMP_AGENTS"
ENV_TIMEOUT_MS = "AMP_TIMEOUT_MS"
ENV_SESSION_LIFETIME_MS = "AMP_SESSION_LIFETIME_MS"
ENV_DONT_USE_TOKENS = "AMP_DONT_USE_TOKENS"
