"""Default paths, environment variable names, and constants."""

from __future__ import annotations

from pathlib import Path

import platformdirs

APP_NAME = "homebridge-openclaw"
APP_AUTHOR = "OpenClaw"

PLUGIN_NAME = "homebridge-openclaw"
DEFAULT_DISPLAY_NAME = "OpenClaw API"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_API_TOKEN = "OPENCLAW_HB_TOKEN"
ENV_STORAGE_PATH = "UIX_STORAGE_PATH"
ENV_UI_URL = "OPENCLAW_HB_UI_URL"
ENV_UI_USER = "OPENCLAW_HB_UI_USER"
ENV_UI_PASS = "OPENCLAW_HB_UI_PASS"

# Homebridge storage layout
STORAGE_CANDIDATES = (Path("/var/lib/homebridge"), Path.home() / ".homebridge")
SECRETS_FILE_NAME = ".uix-secrets"
USERS_FILE_NAME = "auth.json"
TOKEN_FILE_NAME = ".openclaw-token"

# Inbound token derivation
DEFAULT_TOKEN_SEED = "openclaw-default-seed"
TOKEN_DOMAIN = "openclaw-hb-api-token"
GENERATED_TOKEN_LENGTH = 48
MIN_FILE_TOKEN_LENGTH = 16
MIN_CONFIG_TOKEN_LENGTH = 8

# Server defaults
DEFAULT_PORT = 8899
DEFAULT_BIND = "0.0.0.0"
DEFAULT_UI_URL = "http://localhost:8581"
DEFAULT_TIMEOUT = 30.0

# Outbound credential lifetimes (seconds)
SIGNED_TOKEN_TTL = 8 * 3600
SIGNED_TOKEN_REFRESH_AFTER = 7 * 3600
LOGIN_DEFAULT_TTL = 28800
LOGIN_EXPIRY_MARGIN = 60
