"""
Catalog helpers.

Small pure functions over module codes and the module catalog: code
validation, code extraction from free text, and the option lists offered
when a student fills a basket slot.
"""

import re
from typing import Iterable, List, Optional, Tuple

from ..config import MODULE_CODE_IN_TEXT_PATTERN, MODULE_CODE_PATTERN, MODULE_PAGE_URL
from ..models import BasicModuleInfo, Module

_CODE_RE = re.compile(MODULE_CODE_PATTERN)
_CODE_IN_TEXT_RE = re.compile(MODULE_CODE_IN_TEXT_PATTERN)

# Basket slots for general-education pillars are coded "^GEA...", "^GEC..."
GE_BASKET_PREFIX = "^GE"


def is_valid_module_code(code: str) -> bool:
    """True for canonical codes such as "CS1231" or "CS1231S"."""
    return bool(_CODE_RE.fullmatch(code or ""))


def extract_module_codes(text: Optional[str]) -> List[str]:
    """
    Pull module codes out of free text, keeping first-seen order.

    "CS1231 or MA1100; CS1231" -> ["CS1231", "MA1100"]

    Lists are passed through unchanged (minus duplicates), since some
    mirrors of the module API already send code lists.
    """
    if not text:
        return []
    if isinstance(text, (list, tuple)):
        found = [str(code) for code in text]
    else:
        found = _CODE_IN_TEXT_RE.findall(text)
    return list(dict.fromkeys(found))


def module_page_url(code: str) -> str:
    return MODULE_PAGE_URL + code


def modules_with_prefix(catalog: Iterable[BasicModuleInfo], prefix: str) -> List[BasicModuleInfo]:
    """Catalog modules whose code starts with ``prefix`` (e.g. every "GEA" module)."""
    return [m for m in catalog if m.code.startswith(prefix)]


def non_duplicate_modules(catalog: Iterable[BasicModuleInfo],
                          existing_codes: Iterable[str]) -> List[BasicModuleInfo]:
    """Catalog modules not already in the plan."""
    existing = set(existing_codes)
    return [m for m in catalog if m.code not in existing]


def basket_options(modules: Iterable[BasicModuleInfo]) -> List[Tuple[str, str]]:
    """(label, value) pairs for a selection list: ("GEA1000 Quantitative Reasoning", "GEA1000")."""
    return [(f"{m.code} {m.name}".strip(), m.code) for m in modules]


def options_for_placeholder(placeholder: Module, catalog: List[BasicModuleInfo],
                            existing_codes: Iterable[str]) -> List[BasicModuleInfo]:
    """
    Modules a basket slot may be bound to.

    A GE slot ("^GEA1000") offers the catalog modules of its pillar ("GEA").
    Any other slot is an unrestricted elective and offers every catalog
    module not already in the plan.
    """
    if placeholder.code.startswith(GE_BASKET_PREFIX):
        return modules_with_prefix(catalog, placeholder.code[1:4])
    return non_duplicate_modules(catalog, existing_codes)
