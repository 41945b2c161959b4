from quizcms.services.deploy_service import build_worklist, push_application_live
from quizcms.services.publish_service import (
    cascade_publish,
    publish_application,
    update_application,
)
from quizcms.services.quiz_compiler import compile_section, compile_step

__all__ = [
    "build_worklist",
    "push_application_live",
    "cascade_publish",
    "publish_application",
    "update_application",
    "compile_section",
    "compile_step",
]
