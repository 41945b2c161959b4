from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DeployedTemplateResponse(BaseModel):
    """Production template row"""
    quiz_id: str
    title: str
    description: str | None
    quiz_data: list[dict[str, Any]]
    version: str
    is_active: bool
    order: int
    is_required: bool
    section_id: int | None
    application_id: int | None

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class SectionReport(BaseModel):
    """A section that was skipped or failed during deployment"""
    section_id: int
    title: str
    reason: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompiledTemplate(BaseModel):
    """A section compiled and ready to be written to the production store"""
    quiz_id: str
    title: str
    description: str
    quiz_data: list[dict[str, Any]]
    order: int
    is_required: bool
    section_id: int
    application_id: int


class DeploySummary(BaseModel):
    """Result of pushing the published application live"""
    application_id: int
    application_title: str
    deactivated_count: int = 0
    created_count: int = 0
    updated_count: int = 0
    main_sections: int = 0
    follow_up_sections: int = 0
    skipped_sections: list[SectionReport] = Field(default_factory=list)
    failed_sections: list[SectionReport] = Field(default_factory=list)
    templates: list[DeployedTemplateResponse] = Field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.failed_sections)


class PushLiveResponse(BaseModel):
    """Push-live action response (camelCase for the admin UI)"""
    success: bool
    error: str | None = None
    application_title: str | None = None
    deactivated_count: int | None = None
    created_count: int | None = None
    updated_count: int | None = None
    main_sections: int | None = None
    follow_up_sections: int | None = None
    partial: bool | None = None
    skipped_sections: list[SectionReport] | None = None
    failed_sections: list[SectionReport] | None = None
    templates: list[DeployedTemplateResponse] | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_summary(cls, summary: DeploySummary) -> "PushLiveResponse":
        return cls(
            success=True,
            application_title=summary.application_title,
            deactivated_count=summary.deactivated_count,
            created_count=summary.created_count,
            updated_count=summary.updated_count,
            main_sections=summary.main_sections,
            follow_up_sections=summary.follow_up_sections,
            partial=summary.partial,
            skipped_sections=summary.skipped_sections,
            failed_sections=summary.failed_sections,
            templates=summary.templates,
        )
