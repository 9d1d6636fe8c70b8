"""Runtime configuration defaults for timing, services and logging."""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


LOG_PATH = os.getenv("INDASTREET_LOG_PATH", "/tmp/indastreet-debug.log")
LOG_LEVEL = os.getenv("INDASTREET_LOG_LEVEL", "INFO")

# Mapping services are optional; without a key the wizard falls back to manual entry.
GOOGLE_MAPS_API_KEY = os.getenv("GOOGLE_MAPS_API_KEY", "")
GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
PLACES_AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"
COUNTRY_CODE = os.getenv("INDASTREET_COUNTRY", "id")
HTTP_TIMEOUT_SECONDS = 9.0

# Identity service; an empty project id selects the in-memory service.
APPWRITE_ENDPOINT = os.getenv("APPWRITE_ENDPOINT", "https://cloud.appwrite.io/v1")
APPWRITE_PROJECT_ID = os.getenv("APPWRITE_PROJECT_ID", "")

# A terminal has no GPS; a configured position stands in for the device.
DEVICE_LATITUDE = _env_float("INDASTREET_DEVICE_LAT")
DEVICE_LONGITUDE = _env_float("INDASTREET_DEVICE_LNG")

PHONE_PREFIX = "+62"
MIN_PHONE_DIGITS = 9
OTP_LENGTH = 4

NOTIFICATION_DISPLAY_SECONDS = 5.0
PROFILE_IMAGE_CLEAR_DELAY_SECONDS = 0.3
GUEST_REWARD_HOURS = 48
GUEST_REWARD_MULTIPLIER = 0.95
GUEST_REWARD_POLL_SECONDS = 60.0
DRAWER_CLOCK_TICK_SECONDS = 1.0
MAX_SPECIAL_INSTRUCTIONS = 500
