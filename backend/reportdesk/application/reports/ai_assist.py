from typing import Any, Dict

from reportdesk.application.documents.kinds import REPORT
from reportdesk.application.knowledge_base.report_types import get_report_type
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import PermissionDenied, ValidationError
from reportdesk.integrations.functions_client import functions_client


def generate_report_text(*, report_type_id, user_inputs: Dict[str, Any]) -> str:
    """Draft report prose from the report type's knowledge base."""
    actor = current_actor()
    if not actor.role.is_active:
        raise PermissionDenied("Your account is inactive. Ask an administrator for access.")

    if not report_type_id:
        raise ValidationError("Report type ID is required")
    if not isinstance(user_inputs, dict):
        raise ValidationError("userInputs must be an object")

    report_type = get_report_type(report_type_id)
    return functions_client().generate_report(report_type.id, user_inputs)


def review_report(*, report_id) -> Dict[str, Any]:
    actor = current_actor()
    report = REPORT.load_for(report_id, actor)
    return functions_client().review_report(report.id)
