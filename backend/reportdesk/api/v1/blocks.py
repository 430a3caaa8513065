"""
Block routes.

Every document kind exposes the same block collection API under its own
prefix; the routes are registered once per kind.
"""
from flask import jsonify, request
from flask_jwt_extended import jwt_required

from reportdesk.application.blocks import photos
from reportdesk.application.blocks.editor import BlockEditor
from reportdesk.application.documents.kinds import INVOICE, INVOICE_TEMPLATE, REPORT, TEMPLATE
from reportdesk.application.templates.invoice_template import get_invoice_template
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import ValidationError
from reportdesk.normalizers.block import normalize_block
from . import v1_bp


def _index(data, key):
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{key} must be an integer")
    return value


def register_block_routes(kind, prefix, resolve_id=None):
    """
    ``prefix`` either carries ``<document_id>`` or, with ``resolve_id``,
    names a singleton document.
    """
    # Singleton prefixes carry no <document_id> in the URL
    options = {"defaults": {"document_id": None}} if resolve_id else {}

    def editor_for(document_id):
        if resolve_id:
            document_id = resolve_id()
        document = kind.load_for(document_id, current_actor())
        return BlockEditor(kind, document)

    @jwt_required()
    def list_blocks(document_id):
        editor = editor_for(document_id)
        return jsonify([normalize_block(block) for block in editor.blocks]), 200

    @jwt_required()
    def add_block(document_id):
        data = request.get_json(silent=True) or {}
        if not data.get("type"):
            raise ValidationError("Block type is required")

        block = editor_for(document_id).add_block(data["type"], data.get("content"))
        return jsonify(normalize_block(block)), 201

    @jwt_required()
    def update_block(document_id, block_id):
        data = request.get_json(silent=True) or {}
        if "content" not in data:
            raise ValidationError("Block content is required")

        block = editor_for(document_id).update_block_content(block_id, data["content"])
        return jsonify(normalize_block(block)), 200

    @jwt_required()
    def delete_block(document_id, block_id):
        editor = editor_for(document_id)
        photos.delete_block(editor, block_id)
        return jsonify({
            "deleted": block_id,
            "blocks": [normalize_block(block) for block in editor.blocks],
        }), 200

    @jwt_required()
    def reorder_blocks(document_id):
        """Accepts ``{source, destination}`` indices or ``{active_id, over_id}``."""
        data = request.get_json(silent=True) or {}
        editor = editor_for(document_id)

        if "active_id" in data:
            blocks = editor.move_over(data["active_id"], data.get("over_id"))
        else:
            source = _index(data, "source")
            if source is None:
                raise ValidationError("source is required")
            blocks = editor.reorder(source, _index(data, "destination"))

        return jsonify({"blocks": [normalize_block(block) for block in blocks]}), 200

    @jwt_required()
    def upload_photo(document_id, block_id):
        file = request.files.get("file")
        if file is None:
            raise ValidationError("No file provided")

        block = photos.add_photo(
            editor_for(document_id), block_id, file, caption=request.form.get("caption", "")
        )
        return jsonify(normalize_block(block)), 201

    @jwt_required()
    def delete_photo(document_id, block_id, index):
        block = photos.remove_photo(editor_for(document_id), block_id, index)
        return jsonify(normalize_block(block)), 200

    routes = [
        ("/blocks", "list", list_blocks, ["GET"]),
        ("/blocks", "add", add_block, ["POST"]),
        ("/blocks/reorder", "reorder", reorder_blocks, ["PUT"]),
        ("/blocks/<block_id>", "update", update_block, ["PUT"]),
        ("/blocks/<block_id>", "delete", delete_block, ["DELETE"]),
        ("/blocks/<block_id>/photos", "upload_photo", upload_photo, ["POST"]),
        ("/blocks/<block_id>/photos/<int:index>", "delete_photo", delete_photo, ["DELETE"]),
    ]
    for suffix, name, view, methods in routes:
        v1_bp.add_url_rule(
            f"{prefix}{suffix}",
            endpoint=f"{kind.name}_blocks_{name}",
            view_func=view,
            methods=methods,
            **options,
        )


register_block_routes(REPORT, "/reports/<document_id>")
register_block_routes(INVOICE, "/invoices/<document_id>")
register_block_routes(TEMPLATE, "/templates/<document_id>")
register_block_routes(INVOICE_TEMPLATE, "/invoices/template", resolve_id=lambda: get_invoice_template().id)
