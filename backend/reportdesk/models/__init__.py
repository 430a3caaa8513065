from .audit_log import AuditLog
from .block import InvoiceBlock, InvoiceTemplateBlock, ReportBlock, TemplateBlock
from .invoice import Invoice
from .knowledge_base import KnowledgeBaseDocument, PlatformSetting, ReportType
from .report import Report
from .template import InvoiceTemplate, ReportTemplate
from .user import Profile, UserRole

__all__ = [
    "AuditLog",
    "Invoice",
    "InvoiceBlock",
    "InvoiceTemplate",
    "InvoiceTemplateBlock",
    "KnowledgeBaseDocument",
    "PlatformSetting",
    "Profile",
    "Report",
    "ReportBlock",
    "ReportTemplate",
    "ReportType",
    "TemplateBlock",
    "UserRole",
]
