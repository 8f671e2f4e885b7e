"""
Exceptions raised by the planner.

Only caller-contract violations and resolver failures are exceptions.
Unknown or malformed prerequisite data is reported as data on the module
(see ``UNAVAILABLE`` in ``studyplan.models``), never raised.
"""

from typing import Optional


class PlannerError(Exception):
    """Base class for every error raised by the study planner."""


class ResolverUnavailable(PlannerError):
    """
    A module resolver call failed.

    The whole validation call that triggered it is abandoned. Plans are
    values, so the caller still holds its last good plan and can retry.
    """

    def __init__(self, code: Optional[str], reason: str):
        self.code = code
        self.reason = reason
        target = f"module {code}" if code else "module catalog"
        super().__init__(f"Could not resolve {target}: {reason}")


class InvalidPlacement(PlannerError):
    """A move referenced a position or module that is not in the plan."""
