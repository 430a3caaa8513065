from collections import defaultdict
from typing import Any, Dict, List

from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import PermissionDenied
from reportdesk.domain.lifecycle.report import REPORT_COMPLETED
from reportdesk.models.report import Report

UNASSIGNED = "Unassigned"


def company_folders(*, search: str | None = None) -> List[Dict[str, Any]]:
    """
    Completed reports grouped into one folder per client.

    Folders are sorted by name; reports inside a folder newest approval
    first. ``search`` filters folder names case-insensitively.
    """
    actor = current_actor()
    if not actor.role.is_active:
        raise PermissionDenied("Your account is inactive. Ask an administrator for access.")

    reports = Report.query.filter(Report.status == REPORT_COMPLETED).all()

    folders: Dict[str, List[Report]] = defaultdict(list)
    for report in reports:
        name = (report.client_name or "").strip() or UNASSIGNED
        folders[name].append(report)

    needle = (search or "").strip().lower()
    result = []
    for name in sorted(folders, key=str.lower):
        if needle and needle not in name.lower():
            continue

        items = sorted(
            folders[name],
            key=lambda r: (r.approved_at is not None, r.approved_at or r.updated_at),
            reverse=True,
        )
        result.append({"client_name": name, "count": len(items), "reports": items})

    return result
