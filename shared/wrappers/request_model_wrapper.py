import re
from typing import Any, ClassVar, Tuple
from pydantic import BaseModel, model_validator

INVISIBLE_CHARS_PATTERN = re.compile(
    r'[\u200b-\u200f\u202a-\u202e\u2066-\u2069\ufeff]')


def clean_text(value: Any, trim: bool = True):
    """Trim strings, drop invisible unicode chars and stringify numbers."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and trim:
        return INVISIBLE_CHARS_PATTERN.sub("", value).strip()
    return value


class TrimmedModel(BaseModel):
    """Request body whose top-level values are cleaned before validation.

    Fields named in `untrimmed_fields` (secrets) keep their exact value.
    """

    untrimmed_fields: ClassVar[Tuple[str, ...]] = ()

    model_config = {
        "extra": "ignore",
    }

    @model_validator(mode="before")
    @classmethod
    def clean_input(cls, values):
        if isinstance(values, dict):
            return {k: clean_text(v, trim=k not in cls.untrimmed_fields)
                    for k, v in values.items()}
        return values
