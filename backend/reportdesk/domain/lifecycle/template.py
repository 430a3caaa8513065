from typing import Set

from .report import IllegalTransition

TEMPLATE_DRAFT = "draft"
TEMPLATE_PUBLISHED = "published"

# Templates are never submitted or approved; they only toggle visibility
ALLOWED_TEMPLATE_TRANSITIONS: dict[str, Set[str]] = {
    TEMPLATE_DRAFT: {TEMPLATE_PUBLISHED},
    TEMPLATE_PUBLISHED: {TEMPLATE_DRAFT},
}


def assert_template_transition(*, from_status: str, to_status: str) -> None:
    allowed = ALLOWED_TEMPLATE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise IllegalTransition(
            f"Illegal template transition: {from_status} → {to_status}"
        )
