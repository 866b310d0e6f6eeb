from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ScoringPolicyName = Literal["hybrid", "local"]
RuleGroup = Literal["structure", "quality", "length", "composite"]


class JobMatch(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(min_length=1, max_length=120)
    match_percentage: str = Field(alias="matchPercentage", pattern=r"^\d{1,3}%$")
    reason: str = Field(min_length=1, max_length=300)


class ResumeAssessment(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    score: int = Field(ge=0, le=100)
    summary: str
    pros: list[str] = Field(min_length=1)
    cons: list[str] = Field(min_length=1)
    recommendations: list[str] = Field(min_length=1)
    jobs: list[JobMatch] = Field(min_length=1, max_length=3)


class AnalyzeResponse(ResumeAssessment):
    id: str


class ResumeRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    owner_id: str
    file_name: str
    score: int
    analysis: ResumeAssessment
    created_at: datetime


class ResumeHistoryResponse(BaseModel):
    items: list[ResumeRecord] = Field(default_factory=list)
