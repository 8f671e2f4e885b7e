"""
Data access module.

This package handles module resolution against the module API, catalog
helpers, and loading plan descriptions from JSON.
"""

from .resolver import ModuleResolver, NUSModsResolver
from .loader import build_plan, load_plan
from .catalog import (
    is_valid_module_code,
    extract_module_codes,
    module_page_url,
    modules_with_prefix,
    non_duplicate_modules,
    basket_options,
    options_for_placeholder,
)

__all__ = [
    "ModuleResolver",
    "NUSModsResolver",
    "build_plan",
    "load_plan",
    "is_valid_module_code",
    "extract_module_codes",
    "module_page_url",
    "modules_with_prefix",
    "non_duplicate_modules",
    "basket_options",
    "options_for_placeholder",
]
