"""
Terminal Display Implementation.

This module handles all console/terminal output formatting.
It's the ONLY place where printing happens in the studyplan package.

To create a different UI (web, PDF, etc.), create a new class with
the same method signatures but different output handling.
"""

from ..data import module_page_url
from ..models import BasicModuleInfo, Module, Plan, RequirementPool, Term, UNAVAILABLE


class TerminalDisplay:
    """
    Pretty terminal output for a validated plan.

    ═══════════════════════════════════════════════════════════════════════════
    HOW TO REPLACE THIS UI
    ═══════════════════════════════════════════════════════════════════════════

    1. FOR WEB UI:
       Create a WebDisplay class with the same method signatures.
       Instead of print(), return HTML or render templates.

    2. FOR API RESPONSE:
       Don't display at all: the Plan dataclasses convert to JSON directly
       with dataclasses.asdict.

    ═══════════════════════════════════════════════════════════════════════════
    """

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    CYAN = "\033[96m"
    MAGENTA = "\033[95m"
    WHITE = "\033[97m"

    BG_GREEN = "\033[42m"
    BG_YELLOW = "\033[43m"
    BG_RED = "\033[41m"

    @classmethod
    def print_header(cls, title: str):
        """Print a major section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        """Print a subsection header."""
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def status_badge(cls, ok: bool, unknown: bool = False) -> str:
        """Return a colored status badge."""
        if unknown:
            return f"{cls.BG_YELLOW}{cls.WHITE} ? NO DATA {cls.RESET}"
        if ok:
            return f"{cls.BG_GREEN}{cls.WHITE} ✓ OK {cls.RESET}"
        return f"{cls.BG_RED}{cls.WHITE} ✗ BLOCKED {cls.RESET}"

    @staticmethod
    def format_violations(groups) -> str:
        """
        [["CS3243", "CS3245"], ["ST2131"]] -> "(CS3243 or CS3245) and ST2131"
        """
        parts = []
        for group in groups:
            if len(group) == 1:
                parts.append(group[0])
            else:
                parts.append("(" + " or ".join(group) + ")")
        return " and ".join(parts)

    @staticmethod
    def format_credits(credits: float) -> str:
        return f"{credits:g}MCs" if credits else ""

    @classmethod
    def print_plan(cls, plan: Plan):
        """Print the requirement pools followed by every term."""
        cls.print_header("REQUIRED MODULES")
        for index, pool in enumerate(plan.pools):
            cls.print_pool(pool, index)

        cls.print_header("STUDY PLAN")
        for index, term in enumerate(plan.terms):
            cls.print_term(term, index)

        blocked = [m for term in plan.terms for m in term.modules if m.has_violations]
        print()
        if blocked:
            print(f"  {cls.RED}{len(blocked)} module(s) with unmet requirements{cls.RESET}")
        else:
            print(f"  {cls.GREEN}All placed modules have their requirements met{cls.RESET}")

    @classmethod
    def print_pool(cls, pool: RequirementPool, index: int):
        cls.print_subheader(f"[requirement:{index}] {pool.name}")
        if not pool.modules:
            print(f"    {cls.DIM}(all placed){cls.RESET}")
            return
        for module in pool.modules:
            print(f"    {module.code:<12} {module.effective_name:<40} {cls.DIM}{cls.format_credits(module.effective_credits)}{cls.RESET}")

    @classmethod
    def print_term(cls, term: Term, index: int):
        credits = cls.format_credits(term.total_credits)
        cls.print_subheader(f"[planner:{index}] {term.name}  {credits}")
        if not term.modules:
            print(f"    {cls.DIM}(empty){cls.RESET}")
            return
        for position, module in enumerate(term.modules):
            cls.print_module(module, position)

    @classmethod
    def print_module(cls, module: Module, position: int):
        unknown = module.prereqs_violated is UNAVAILABLE
        badge = cls.status_badge(not module.has_violations and not unknown, unknown)

        label = module.code
        if module.is_placeholder and module.underlying is not None:
            label = f"{module.code} → {module.effective_code}"
        name = module.effective_name

        print(f"    {position:>2}. {label:<22} {name:<34} {badge}")

        if unknown:
            print(f"        {cls.YELLOW}└─ prerequisite data unavailable{cls.RESET}")
        elif module.prereqs_violated is not None:
            missing = cls.format_violations(module.prereqs_violated)
            print(f"        {cls.RED}└─ needs earlier: {missing}{cls.RESET}")
        if module.coreqs_violated:
            print(f"        {cls.RED}└─ needs same term: {', '.join(module.coreqs_violated)}{cls.RESET}")

    @classmethod
    def print_basket_options(cls, placeholder: Module, options: list, limit: int = 20):
        """List the modules a basket slot can be bound to."""
        cls.print_subheader(f"Options for {placeholder.code}")
        for i, (label, _) in enumerate(options[:limit], 1):
            print(f"    {i}. {label}")
        if len(options) > limit:
            print(f"    {cls.DIM}... and {len(options) - limit} more{cls.RESET}")

    @classmethod
    def print_module_info(cls, info: BasicModuleInfo):
        print(f"  {cls.BOLD}{info.code}{cls.RESET} {info.name} ({cls.format_credits(info.credits)})")
        print(f"  {cls.DIM}{module_page_url(info.code)}{cls.RESET}")

    @classmethod
    def print_error(cls, message: str):
        print(f"  {cls.RED}✗ {message}{cls.RESET}")

    @classmethod
    def print_notice(cls, message: str):
        print(f"  {cls.GREEN}✓ {message}{cls.RESET}")
