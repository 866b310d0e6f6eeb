from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SourceType = Literal["pdf", "docx"]


class ParsedDoc(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: str
    source_type: SourceType
    byte_size: int = Field(default=0, ge=0)
    text: str
    parsing_warnings: list[str] = Field(default_factory=list)

    @field_validator("source_type", mode="before")
    @classmethod
    def _lower_source_type(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @property
    def char_count(self) -> int:
        return len(self.text.strip())
