import json
from typing import Any

from pydantic import BaseModel, Field


class QuizChoice(BaseModel):
    """A selectable choice: a multiple-choice option or a resolved media item"""
    id: str
    label: str
    image_url: str | None = None
    description: str | None = None


class RatingLabel(BaseModel):
    label: str
    value: float | int


class MediaContent(BaseModel):
    """Video/audio file entry in a statement's content list"""
    link: str
    name: str


class QuizStepProperties(BaseModel):
    """Type-specific step properties (unused keys are omitted on the wire)"""
    placeholder: str | None = None
    choices: list[QuizChoice] | None = None
    items: list[QuizChoice] | None = None
    rating_labels: list[RatingLabel] | None = None
    content: str | list[MediaContent | str] | None = None
    thumbnail_url: str | None = None
    button_text: str | None = None
    button_url: str | None = None


class QuizStep(BaseModel):
    """One step of a compiled quiz"""
    id: str
    type: str = Field(..., description="question | statement | video_statement | audio_statement")
    title: str
    required: bool = True
    question_type: str | None = Field(None, serialization_alias="questionType")
    subtitle: str | None = None
    description: str | None = None
    properties: QuizStepProperties = Field(default_factory=QuizStepProperties)


class QuizDocument(BaseModel):
    """Compiled section in the wire format consumed by the quiz runtime"""
    section_id: int
    title: str
    steps: list[QuizStep] = Field(default_factory=list)

    def to_wire(self) -> list[dict[str, Any]]:
        """Wire representation: a JSON array of steps, absent optionals omitted"""
        return [step.model_dump(mode="json", by_alias=True, exclude_none=True) for step in self.steps]

    def to_json(self) -> str:
        """Canonical serialization (same document, same bytes)"""
        return json.dumps(self.to_wire(), ensure_ascii=False, separators=(",", ":"))
