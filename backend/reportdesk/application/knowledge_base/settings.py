from typing import Any

from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import NotFoundError, ValidationError
from reportdesk.extensions import db
from reportdesk.integrations.functions_client import functions_client
from reportdesk.models.knowledge_base import PlatformSetting
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional

OPENAI_MODEL = "openai_model"

# Never echoed back in audit payloads
SECRET_KEYS = {"apiKey", "api_key"}


def get_setting(key: str) -> PlatformSetting:
    setting = PlatformSetting.query.filter_by(key=key).first()
    if setting is None:
        raise NotFoundError(f"Setting {key} not found")
    return setting


def put_setting(*, key: str, value: Any) -> PlatformSetting:
    if not key:
        raise ValidationError("Setting key is required")
    if value is None:
        raise ValidationError("Setting value is required")

    setting = PlatformSetting.query.filter_by(key=key).first()

    with transactional():
        if setting is None:
            setting = PlatformSetting()
            setting.key = key
            db.session.add(setting)

        setting.value = value
        setting.updated_by = current_actor().user_id
        db.session.flush()

        shown = (
            sorted(k for k in value if k not in SECRET_KEYS)
            if isinstance(value, dict)
            else None
        )
        log_action(
            action="setting.update",
            entity_type="platform_setting",
            entity_id=setting.id,
            payload={"key": key, "fields": shown},
        )

    return setting


def list_openai_models(*, api_key: str | None = None):
    """
    Chat models visible to an OpenAI key. Falls back to the key saved in
    the ``openai_model`` setting.
    """
    if not api_key:
        setting = PlatformSetting.query.filter_by(key=OPENAI_MODEL).first()
        value = setting.value if setting else None
        api_key = value.get("apiKey") if isinstance(value, dict) else None

    if not api_key:
        raise ValidationError("API key is required")

    return functions_client().fetch_openai_models(api_key)
