from typing import Set

from .report import IllegalTransition

INVOICE_DRAFT = "draft"
INVOICE_SUBMITTED = "submitted"

ALLOWED_INVOICE_TRANSITIONS: dict[str, Set[str]] = {
    INVOICE_DRAFT: {INVOICE_SUBMITTED},
    INVOICE_SUBMITTED: set(),
}


def assert_invoice_transition(*, from_status: str, to_status: str) -> None:
    allowed = ALLOWED_INVOICE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise IllegalTransition(
            f"Illegal invoice transition: {from_status} → {to_status}"
        )
