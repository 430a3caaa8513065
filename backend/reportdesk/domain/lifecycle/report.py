from typing import Set

from reportdesk.domain.invariants.exceptions import InvariantViolation

REPORT_DRAFT = "draft"
REPORT_IN_PROGRESS = "in_progress"
REPORT_COMPLETED = "completed"

REPORT_STATUSES = (REPORT_DRAFT, REPORT_IN_PROGRESS, REPORT_COMPLETED)

# Explicit allowed state transitions
ALLOWED_REPORT_TRANSITIONS: dict[str, Set[str]] = {
    REPORT_DRAFT: {REPORT_IN_PROGRESS},
    REPORT_IN_PROGRESS: {REPORT_COMPLETED, REPORT_DRAFT},
    REPORT_COMPLETED: set(),  # terminal
}

REPORT_EVENTS: dict[str, tuple[str, str]] = {
    "submit": (REPORT_DRAFT, REPORT_IN_PROGRESS),
    "approve": (REPORT_IN_PROGRESS, REPORT_COMPLETED),
    "reject": (REPORT_IN_PROGRESS, REPORT_DRAFT),
}


class IllegalTransition(InvariantViolation):
    status_code = 409


def assert_report_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards report lifecycle transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_REPORT_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise IllegalTransition(
            f"Illegal report transition: {from_status} → {to_status}"
        )


def next_report_status(status: str, event: str) -> str:
    if event not in REPORT_EVENTS:
        raise IllegalTransition(f"Unknown report event: {event}")

    expected_from, to_status = REPORT_EVENTS[event]
    if status != expected_from:
        raise IllegalTransition(
            f"Cannot {event} a report that is {status.replace('_', ' ')}"
        )

    assert_report_transition(from_status=status, to_status=to_status)
    return to_status
