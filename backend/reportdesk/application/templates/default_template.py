"""The built-in NDT inspection report template."""
import copy

from reportdesk.application.documents.kinds import TEMPLATE
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import PermissionDenied
from reportdesk.domain.lifecycle.template import TEMPLATE_PUBLISHED
from reportdesk.extensions import db
from reportdesk.models.template import ReportTemplate
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional

DEFAULT_TITLE = "Default NDT Report"
DEFAULT_DESCRIPTION = "Standard Non-Destructive Testing report template with all essential sections"
DEFAULT_CATEGORY = "NDT"


def _table(title, labels):
    return {"title": title, "rows": [{"label": label, "value": ""} for label in labels]}


NDT_BLOCKS = [
    ("heading", {"text": "FLUORESCENT MAGNETIC PARTICLE AND ULTRASONIC INSPECTION REPORT", "level": 1}),
    ("data_table", _table("Job & Client Details", [
        "Job No", "Client", "Contact", "Location", "Subject",
        "Report No", "Test Date", "Order No", "Report Date", "Technician",
    ])),
    ("data_table", _table("Technical Data Ultrasonic Inspection", [
        "Test Specification", "Probe", "Acceptance Standard", "Surface Condition",
        "Range", "Material Specification", "Couplant", "Sensitivity", "Sizing",
        "APEC Test Procedure", "Test Restrictions", "Flaw Detector", "Probe S/N",
        "Equipment Performance Before Tests", "Probe Index", "Beam Angle",
        "Beam Alignment", "Overall System Gain",
    ])),
    ("data_table", _table("Technical Data Magnetic Particle Inspection", [
        "Test Specification", "Material", "Acceptance Standard", "Surface Condition",
        "Black Light", "Media", "APEC Test Procedure", "Test Method", "Demagnetised",
        "Test Restrictions", "Magnetising Unit", "Lighting",
    ])),
    ("notes", {"title": "Examination Notes", "text": ""}),
    ("data_table", _table("Examination Summary", [
        "Extent of testing", "Magnetic Particle Results", "Ultrasonic Results",
    ])),
    ("photo_upload", {"photos": []}),
    ("notes", {"title": "Additional Observations", "text": ""}),
    ("text", {"text": "Overall Result: ACCEPT  REJECT  ACCEPT WITH REPAIR\n\nSummary:\n\nRecommendations:"}),
    ("data_table", _table("Inspector Certification", [
        "Inspector Name", "Qualification/Certification Level", "Certificate Number",
        "Signature", "Date",
    ])),
    ("data_table", _table("Review & Approval", ["Reviewed By", "Position", "Signature", "Date"])),
]


def create_default_template() -> ReportTemplate:
    """Create the published NDT template with its standard sections."""
    actor = current_actor()
    if not actor.is_admin:
        raise PermissionDenied("Only administrators can manage templates")

    template = ReportTemplate()
    template.title = DEFAULT_TITLE
    template.description = DEFAULT_DESCRIPTION
    template.category = DEFAULT_CATEGORY
    template.status = TEMPLATE_PUBLISHED
    template.created_by = actor.user_id

    with transactional():
        db.session.add(template)
        db.session.flush()

        for order_index, (block_type, content) in enumerate(NDT_BLOCKS):
            TEMPLATE.store.create(template.id, block_type, copy.deepcopy(content), order_index)

        log_action(
            action="template.create_default",
            entity_type="template",
            entity_id=template.id,
            payload={"blocks": len(NDT_BLOCKS)},
        )

    return template
