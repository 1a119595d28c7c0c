"""llmhub.config.defaults
======================

Central place for small, stable default values used across the llmhub core
and the service layer. These defaults can be overridden via environment
variables or an external configuration file, but provide sensible fallbacks
for local development and tests.

Only plain constants live here; this module imports nothing from the rest of
the package to avoid circular dependencies.
"""

from __future__ import annotations

# ---- Service / HTTP layer ----

# Comma-separated list of allowed origins for the dev server.
LLMHUB_SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"
LLMHUB_SERVICE_DEFAULT_HOST = "127.0.0.1"
LLMHUB_SERVICE_DEFAULT_PORT = 8091
# Request header carrying the acting user's identity.
LLMHUB_USER_HEADER = "X-User-Id"


# ---- Provider endpoints ----

OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_API_VERSION = "2023-06-01"
GOOGLE_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"
MISTRAL_DEFAULT_BASE_URL = "https://api.mistral.ai/v1"
COHERE_DEFAULT_BASE_URL = "https://api.cohere.ai/v1"


# ---- Generation defaults ----
# Applied when no per-user, per-model settings row exists.
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2048
DEFAULT_TOP_P = 1.0
DEFAULT_FREQUENCY_PENALTY = 0.0
DEFAULT_PRESENCE_PENALTY = 0.0
DEFAULT_SYSTEM_PROMPT = ""


# ---- Transcript conventions ----
# Reply used when a provider answers successfully without a text payload.
NO_RESPONSE_PLACEHOLDER = "No response generated"
# Prefix of assistant turns that record a failed send.
ERROR_TURN_PREFIX = "Error: "
# Marker prepended to the system prompt for providers without a system role.
GOOGLE_SYSTEM_MARKER = "System: "
COHERE_SYSTEM_SEPARATOR = "\n\n"
# Maximum number of conversations returned by a listing.
CONVERSATION_LIST_LIMIT = 50


# ---- SQLite config (infrastructure) ----
# Standard busy timeout to mitigate lock contention (milliseconds).
SQLITE_BUSY_TIMEOUT_MS = 5000
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"


__all__ = [
    # Service
    "LLMHUB_SERVICE_CORS_DEFAULT_ORIGINS",
    "LLMHUB_SERVICE_DEFAULT_HOST",
    "LLMHUB_SERVICE_DEFAULT_PORT",
    "LLMHUB_USER_HEADER",
    # Endpoints
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "GOOGLE_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "MISTRAL_DEFAULT_BASE_URL",
    "COHERE_DEFAULT_BASE_URL",
    # Generation
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TOP_P",
    "DEFAULT_FREQUENCY_PENALTY",
    "DEFAULT_PRESENCE_PENALTY",
    "DEFAULT_SYSTEM_PROMPT",
    # Transcript
    "NO_RESPONSE_PLACEHOLDER",
    "ERROR_TURN_PREFIX",
    "GOOGLE_SYSTEM_MARKER",
    "COHERE_SYSTEM_SEPARATOR",
    "CONVERSATION_LIST_LIMIT",
    # SQLite
    "SQLITE_BUSY_TIMEOUT_MS",
    "SQLITE_JOURNAL_MODE",
    "SQLITE_SYNCHRONOUS",
]
