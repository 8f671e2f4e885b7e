"""
Configuration constants for the study planner.

This module contains all configuration values and constants used throughout
the planner. Centralizing these makes it easy to point the planner at a
different academic year or module API without touching the engines.
"""

import os
from pathlib import Path

# =============================================================================
# FILE PATHS
# =============================================================================

BASE_DIR = Path(__file__).parent
DATA_DIR = BASE_DIR / "data"
SAMPLE_PLAN_PATH = DATA_DIR / "sample_plan.json"


# =============================================================================
# MODULE API
# =============================================================================

# NUSMods v2 API. Module detail lives at {API_BASE_URL}/{ACAD_YEAR}/modules/{code}.json
API_BASE_URL = "https://api.nusmods.com/v2"
ACAD_YEAR = os.environ.get("STUDYPLAN_ACAD_YEAR", "2024-2025")
MODULE_PAGE_URL = "https://nusmods.com/modules/"

# Seconds before a single HTTP request is abandoned
REQUEST_TIMEOUT = 15

# Resolver calls for one validation pass fan out over this many threads
MAX_RESOLVER_WORKERS = 8

USER_AGENT = "studyplan/1.0 (+https://nusmods.com)"


# =============================================================================
# MODULE DEFAULTS
# =============================================================================

# Credits assumed for a basket selection the API knows nothing about
DEFAULT_CREDITS = 4

# Canonical module code: letters, digits, optional letter suffix (CS1231S)
MODULE_CODE_PATTERN = r"[A-Z]+\d+[A-Z]*"

# Module codes mentioned in free text (preclusion/corequisite descriptions).
# Stricter than MODULE_CODE_PATTERN so words like "H2" or "A1" are skipped.
MODULE_CODE_IN_TEXT_PATTERN = r"\b[A-Z]{2,4}\d{4}[A-Z]{0,3}\b"

# Display name of an unbound basket slot
BASKET_PLACEHOLDER_NAME = "Select A Basket"


# =============================================================================
# VALIDATION POLICY
# =============================================================================

# Preclusion codes of placed modules count as "taken" for later prerequisite
# checks. Preclusions are tracked in their own set either way; this flag only
# controls whether that set is merged in when evaluating prerequisite trees.
PRECLUSIONS_SATISFY_PREREQS = True


# =============================================================================
# COSMETIC TAGS
# =============================================================================

# One colour per requirement pool, cycled when there are more pools than colours
MODULE_COLORS = [
    "red.100",
    "orange.100",
    "yellow.100",
    "green.100",
    "teal.100",
    "blue.100",
    "cyan.100",
    "purple.100",
    "pink.100",
]
DEFAULT_MODULE_COLOR = "gray.100"


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("STUDYPLAN_LOG_LEVEL", "WARNING")
