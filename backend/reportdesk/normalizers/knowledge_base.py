from ._dates import iso


def normalize_report_type(report_type):
    return {
        "id": report_type.id,
        "name": report_type.name,
        "description": report_type.description,
        "created_at": iso(report_type.created_at),
    }


def normalize_kb_document(document, include_content=False):
    data = {
        "id": document.id,
        "report_type_id": document.report_type_id,
        "file_name": document.file_name,
        "file_path": document.file_path,
        "file_type": document.file_type,
        "created_at": iso(document.created_at),
    }
    if include_content:
        data["content"] = document.content
    return data


def normalize_setting(setting):
    value = setting.value
    if isinstance(value, dict) and value.get("apiKey"):
        # Only the tail of a stored key is ever sent back
        value = dict(value, apiKey=f"...{str(value['apiKey'])[-4:]}")

    return {
        "key": setting.key,
        "value": value,
        "updated_at": iso(setting.updated_at),
    }
