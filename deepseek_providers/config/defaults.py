"""deepseek_providers.config.defaults
==================================

Central place for small, stable default values used across the
deepseek_providers package. These defaults can be overridden via environment
variables or external configuration, but provide sensible fallbacks for local
development and tests.

This module intentionally avoids importing from other package modules to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- DeepSeek endpoint ----
DEEPSEEK_PROVIDER = "deepseek"
DEEPSEEK_DISPLAY_NAME = "DeepSeek"
DEEPSEEK_DESCRIPTION = "Advanced LLMs from DeepSeek"
DEEPSEEK_DOC_URL = "https://platform.deepseek.com/api-docs"

DEEPSEEK_DEFAULT_HOST = "https://api.deepseek.com"
# Relative path; joined onto the host with RFC 3986 resolution.
DEEPSEEK_DEFAULT_BASE_PATH = "v1/chat/completions"
DEEPSEEK_MODELS_PATH = "v1/models"

# Whole-request deadline in seconds, including the streamed body.
DEEPSEEK_DEFAULT_TIMEOUT_SECONDS = 600

# ---- Models ----
DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"
DEEPSEEK_KNOWN_MODELS = ["deepseek-chat", "deepseek-reasoner"]

# ---- CLI ----
CLI_DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."
