from reportdesk.application.documents.kinds import TEMPLATE
from reportdesk.auth_context import current_actor
from reportdesk.domain.lifecycle.template import (
    TEMPLATE_DRAFT,
    TEMPLATE_PUBLISHED,
    assert_template_transition,
)
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def set_template_status(*, template_id: str, publish: bool = True):
    """Publish a template for staff to use, or take it back to draft."""
    actor = current_actor()
    template = TEMPLATE.load_for(template_id, actor)
    TEMPLATE.assert_can_edit(template, actor)

    to_status = TEMPLATE_PUBLISHED if publish else TEMPLATE_DRAFT
    assert_template_transition(from_status=template.status, to_status=to_status)

    with transactional():
        template.status = to_status

        log_action(
            action="template.publish" if publish else "template.unpublish",
            entity_type="template",
            entity_id=template.id,
            payload={"status": to_status},
        )

    return template
