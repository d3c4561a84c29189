"""
Activity kind enumeration.

The closed set of activity kinds the validation engine knows a payload
schema for. Kinds outside this set are stored without structural checks.

Dependencies: enum (stdlib)
System role: Discriminator for activity payload schemas
"""

import enum


class ActivityKind(str, enum.Enum):
    """
    Activity kinds with a known payload schema.

    MULTIPLE_CHOICE_QUESTION: question with 2-4 options and one correct option
    SHORT_TEXT_QUESTION: question with a model answer
    TEXT: informational text block, not scorable
    """

    MULTIPLE_CHOICE_QUESTION = "multiple-choice-question"
    SHORT_TEXT_QUESTION = "short-text-question"
    TEXT = "text"

    @property
    def is_scorable(self) -> bool:
        """Whether activities of this kind may be marked summative."""
        return self is not ActivityKind.TEXT

    @classmethod
    def parse(cls, value: "str | ActivityKind") -> "ActivityKind | None":
        """Return the matching kind, or None for kinds without a schema."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None
