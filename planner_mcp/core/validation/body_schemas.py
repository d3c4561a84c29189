"""
Activity payload schemas.

One pydantic model per ActivityKind describing the shape of body_data.
Required strings are checked after stripping whitespace, so a value of
"   " counts as missing for every kind.

Dependencies: pydantic
System role: Typed payload definitions for the validation engine
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic_core import PydanticCustomError

from planner_mcp.core.validation.activity_kinds import ActivityKind

MIN_OPTIONS = 2
MAX_OPTIONS = 4
MAX_OPTION_TEXT_LENGTH = 500


def _require_non_blank(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("blank_string", "value must not be blank")
    return value


RequiredText = Annotated[str, AfterValidator(_require_non_blank)]


class McqOption(BaseModel):
    """Single answer option of a multiple-choice question."""

    id: RequiredText
    text: str = Field(max_length=MAX_OPTION_TEXT_LENGTH)
    imageUrl: str | None = None


class McqBody(BaseModel):
    """Payload of a multiple-choice-question activity."""

    question: RequiredText
    imageFile: str | None = None
    imageUrl: str | None = None
    imageAlt: str | None = None
    options: list[McqOption] = Field(min_length=MIN_OPTIONS, max_length=MAX_OPTIONS)
    correctOptionId: RequiredText

    @model_validator(mode="after")
    def _correct_option_exists(self) -> "McqBody":
        if self.correctOptionId not in {option.id for option in self.options}:
            raise PydanticCustomError(
                "unknown_correct_option",
                "correctOptionId must match the id of one of the provided options",
            )
        return self


class ShortTextBody(BaseModel):
    """Payload of a short-text-question activity; unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    question: RequiredText
    modelAnswer: RequiredText


class TextBody(BaseModel):
    """Payload of a text activity."""

    text: RequiredText


BODY_SCHEMAS: dict[ActivityKind, type[BaseModel]] = {
    ActivityKind.MULTIPLE_CHOICE_QUESTION: McqBody,
    ActivityKind.SHORT_TEXT_QUESTION: ShortTextBody,
    ActivityKind.TEXT: TextBody,
}
