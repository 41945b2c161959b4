from quizcms.crud.application import (
    get_application_by_id,
    get_published_application,
    update_application,
)
from quizcms.crud.media import (
    MEDIA_MODELS,
    get_all_media_items,
    get_media_item,
)
from quizcms.crud.section import (
    get_section_by_id,
    update_section_status,
)
from quizcms.crud.step import (
    get_step_by_id,
    update_step_status,
)
from quizcms.crud.template import (
    deactivate_active_templates,
    get_active_templates,
    get_template_by_quiz_id,
    upsert_template,
)

__all__ = [
    "get_application_by_id",
    "get_published_application",
    "update_application",
    "get_section_by_id",
    "update_section_status",
    "get_step_by_id",
    "update_step_status",
    "MEDIA_MODELS",
    "get_media_item",
    "get_all_media_items",
    "get_template_by_quiz_id",
    "get_active_templates",
    "deactivate_active_templates",
    "upsert_template",
]
