"""
Corequisite Validator.

Checks that every module's corequisites sit in the same term.
"""

from dataclasses import replace

from ..models import Plan, Term


class CoreqValidator:
    """
    Same-term corequisite check.

    Terms are independent of each other: a corequisite taken in an earlier
    term does not count. The check only needs corequisite lists to be
    resolved already, which the ValidationPipeline guarantees before
    calling it.

    ``coreqs_violated`` is rebuilt from scratch on every run, in the order
    the corequisites are declared, so running the check twice gives the
    same list, not a doubled one.
    """

    def validate_coreqs(self, plan: Plan) -> Plan:
        return replace(plan, terms=tuple(self._check_term(term) for term in plan.terms))

    def _check_term(self, term: Term) -> Term:
        present = term.effective_codes
        modules = tuple(
            replace(module, coreqs_violated=[c for c in module.coreqs if c not in present])
            for module in term.modules
        )
        return replace(term, modules=modules)
