from flask import current_app

from reportdesk.application.knowledge_base.report_types import get_report_type
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import DomainError, NotFoundError
from reportdesk.extensions import db
from reportdesk.integrations.functions_client import functions_client
from reportdesk.models.knowledge_base import KnowledgeBaseDocument
from reportdesk.utils import media
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def list_documents(*, report_type_id=None):
    query = KnowledgeBaseDocument.query
    if report_type_id:
        query = query.filter_by(report_type_id=report_type_id)
    return query.order_by(KnowledgeBaseDocument.created_at.desc()).all()


def _extract_content(*, path, report_type_id, file_name, file_type) -> str:
    """Text for the AI prompt. Extraction failures never block the upload."""
    try:
        data = functions_client().parse_kb_document(
            file_path=path,
            report_type_id=report_type_id,
            file_name=file_name,
            file_type=file_type,
        )
    except DomainError as exc:
        current_app.logger.warning("Content extraction failed for %s: %s", file_name, exc)
        return f"Document uploaded: {file_name}. Content extraction failed."

    return data.get("content") or f"Document uploaded: {file_name}"


def upload_document(*, report_type_id, file) -> KnowledgeBaseDocument:
    """
    Store a reference document under ``<report_type_id>/`` in the
    knowledge base bucket and keep its extracted text.
    """
    report_type = get_report_type(report_type_id)
    actor = current_actor()

    path = media.upload(media.KNOWLEDGE_BASE_BUCKET, file, folder=report_type.id, keep_name=True)
    file_type = media.file_extension(file.filename) or "unknown"

    document = KnowledgeBaseDocument()
    document.report_type_id = report_type.id
    document.file_name = file.filename
    document.file_path = path
    document.file_type = file_type
    document.content = _extract_content(
        path=path,
        report_type_id=report_type.id,
        file_name=file.filename,
        file_type=file_type,
    )
    document.created_by = actor.user_id

    try:
        with transactional():
            db.session.add(document)
            db.session.flush()

            log_action(
                action="knowledge_base.upload",
                entity_type="knowledge_base_document",
                entity_id=document.id,
                payload={"report_type_id": report_type.id, "file_name": file.filename},
            )
    except Exception:
        media.remove(media.KNOWLEDGE_BASE_BUCKET, [path])
        raise

    return document


def delete_document(*, document_id) -> None:
    document = db.session.get(KnowledgeBaseDocument, document_id) if document_id else None
    if document is None:
        raise NotFoundError("Document not found")

    path = document.file_path

    with transactional():
        db.session.delete(document)

        log_action(
            action="knowledge_base.delete",
            entity_type="knowledge_base_document",
            entity_id=document_id,
            payload={"file_path": path},
        )

    media.remove(media.KNOWLEDGE_BASE_BUCKET, [path])
