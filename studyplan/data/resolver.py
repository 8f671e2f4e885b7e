"""
Module data resolution and caching.

This module defines the ModuleResolver contract the engines depend on, and
NUSModsResolver, which implements it over the NUSMods v2 JSON API.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from ..config import ACAD_YEAR, API_BASE_URL, REQUEST_TIMEOUT, USER_AGENT
from ..errors import ResolverUnavailable
from ..models import BasicModuleInfo, PrereqTree, parse_prereq_tree
from .catalog import extract_module_codes

logger = logging.getLogger(__name__)


class ModuleResolver(ABC):
    """
    Supplies requirement data and catalog metadata by module code.

    Implementations may block (network, disk). They must be safe to call
    from several threads at once: the validation pipeline fans lookups out
    over a thread pool. Any failure is raised as ResolverUnavailable.
    """

    @abstractmethod
    def fetch_prereq_tree(self, code: str) -> Optional[PrereqTree]:
        """Prerequisite tree for a module, None if it has no prerequisites."""

    @abstractmethod
    def fetch_preclusions(self, code: str) -> List[str]:
        """Codes precluded by a module."""

    @abstractmethod
    def fetch_coreqs(self, code: str) -> List[str]:
        """Codes that must be taken in the same term as a module."""

    @abstractmethod
    def fetch_module_list(self) -> List[BasicModuleInfo]:
        """The full module catalog."""

    @abstractmethod
    def fetch_basic_module_info(self, code: str) -> Optional[BasicModuleInfo]:
        """Catalog entry for one module, None if the module is unknown."""

    def refresh(self):
        """Drop cached data so the next lookups go back to the source."""


class NUSModsResolver(ModuleResolver):
    """
    Resolves modules against the NUSMods v2 API.

    WHY CACHING: every validation pass asks for the requirements of every
    placed module. Module detail and the full catalog are fetched once and
    kept until refresh() is called. Nothing is invalidated automatically.

    ENDPOINTS:
    - {base}/{acad_year}/modules/{code}.json: prereqTree, preclusion,
      corequisite, title, moduleCredit for one module
    - {base}/{acad_year}/moduleInfo.json: the whole catalog

    A 404 for a single module means the module does not exist in that
    academic year. It is treated as "no requirements" rather than an error,
    so a typo in a plan does not block validation of everything else.

    Usage:
        resolver = NUSModsResolver(acad_year="2024-2025")
        tree = resolver.fetch_prereq_tree("CS3243")
    """

    def __init__(self, acad_year: str = ACAD_YEAR, base_url: str = API_BASE_URL,
                 session: Optional[requests.Session] = None,
                 timeout: float = REQUEST_TIMEOUT):
        self.acad_year = acad_year
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

        # None means "not loaded yet"
        self._module_list = None
        self._module_cache = {}  # code -> module detail dict ({} when unknown)
        self._lock = threading.Lock()

    def _get_json(self, path: str, code: Optional[str] = None):
        """GET a JSON document. Returns None on 404."""
        url = f"{self.base_url}/{self.acad_year}/{path}"
        logger.debug("GET %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise ResolverUnavailable(code, str(exc)) from exc

    def _module_detail(self, code: str) -> dict:
        with self._lock:
            if code in self._module_cache:
                return self._module_cache[code]

        # Fetched outside the lock so lookups for different codes run in parallel
        detail = self._get_json(f"modules/{code}.json", code)
        if detail is None:
            logger.warning("Module %s not found for %s", code, self.acad_year)
            detail = {}

        with self._lock:
            self._module_cache[code] = detail
        return detail

    def fetch_prereq_tree(self, code: str) -> Optional[PrereqTree]:
        return parse_prereq_tree(self._module_detail(code).get("prereqTree"))

    def fetch_preclusions(self, code: str) -> List[str]:
        preclusion = self._module_detail(code).get("preclusion")
        return [c for c in extract_module_codes(preclusion) if c != code]

    def fetch_coreqs(self, code: str) -> List[str]:
        corequisite = self._module_detail(code).get("corequisite")
        return [c for c in extract_module_codes(corequisite) if c != code]

    def fetch_module_list(self) -> List[BasicModuleInfo]:
        with self._lock:
            if self._module_list is not None:
                return self._module_list

        raw = self._get_json("moduleInfo.json")
        if raw is None:
            raise ResolverUnavailable(None, f"no catalog published for {self.acad_year}")
        modules = [_to_basic_info(entry) for entry in raw if entry.get("moduleCode")]
        logger.info("Loaded %d modules for %s", len(modules), self.acad_year)

        with self._lock:
            self._module_list = modules
        return modules

    def fetch_basic_module_info(self, code: str) -> Optional[BasicModuleInfo]:
        detail = self._module_detail(code)
        if not detail:
            return None
        return _to_basic_info(detail)

    def refresh(self):
        with self._lock:
            self._module_list = None
            self._module_cache = {}
        logger.info("Module caches cleared")


def _to_basic_info(entry: dict) -> BasicModuleInfo:
    return BasicModuleInfo(
        code=entry["moduleCode"],
        name=entry.get("title", ""),
        credits=_parse_credits(entry.get("moduleCredit")),
    )


def _parse_credits(value) -> float:
    # The API sends credits as a string ("4", "2.5")
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
