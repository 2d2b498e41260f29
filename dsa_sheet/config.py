"""Runtime configuration for the DSA sheet tracker."""

import os

from .models import Difficulty

# API configuration
API_BASE_URL = os.getenv("DSA_SHEET_API_URL", "http://localhost:5000/api").rstrip("/")
API_TOKEN = os.getenv("DSA_SHEET_TOKEN") or None
REQUEST_TIMEOUT = float(os.getenv("DSA_SHEET_TIMEOUT", "10"))
TOGGLE_TIMEOUT = 15.0

# Logging configuration
DEBUG = bool(os.getenv("DEBUG"))
LOG_LEVEL = os.getenv("DSA_SHEET_LOG_LEVEL", "WARNING").upper()

# Display configuration
DIFFICULTY_ICONS = {
    Difficulty.EASY: "🟢",
    Difficulty.MEDIUM: "🟡",
    Difficulty.HARD: "🔴"
}

PROGRESS_BAR_WIDTH = 20
