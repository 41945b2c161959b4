from quizcms.schemas.content import (
    ApplicationResponse,
    ApplicationUpdateRequest,
    ApplicationUpdateResponse,
    CollectionKind,
    ContentStatus,
    MediaRef,
    PublishOptions,
    PublishSummary,
)
from quizcms.schemas.deploy import (
    CompiledTemplate,
    DeployedTemplateResponse,
    DeploySummary,
    PushLiveResponse,
    SectionReport,
)
from quizcms.schemas.quiz import (
    MediaContent,
    QuizChoice,
    QuizDocument,
    QuizStep,
    QuizStepProperties,
    RatingLabel,
)

__all__ = [
    "ContentStatus",
    "CollectionKind",
    "MediaRef",
    "PublishOptions",
    "PublishSummary",
    "ApplicationUpdateRequest",
    "ApplicationResponse",
    "ApplicationUpdateResponse",
    "QuizChoice",
    "RatingLabel",
    "MediaContent",
    "QuizStepProperties",
    "QuizStep",
    "QuizDocument",
    "CompiledTemplate",
    "DeployedTemplateResponse",
    "DeploySummary",
    "PushLiveResponse",
    "SectionReport",
]
