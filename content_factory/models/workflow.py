"""
Request schemas for the workflow and auth endpoints.

Bodies are camelCase on the wire; anything failing these schemas is
rejected with 400 before a handler runs.
"""

from typing import Optional
from uuid import UUID

from pydantic import Field

from content_factory.config import ORIGINAL_TEXT_MIN_LENGTH, PROJECT_TITLE_MAX_LENGTH

from .artifacts import CopywriterFormula, CopywriterTitle
from .base import CamelModel


class LoginRequest(CamelModel):
    username: str = Field(min_length=1, max_length=128)
    password: str


class CreateProjectRequest(CamelModel):
    title: str = Field(min_length=1, max_length=PROJECT_TITLE_MAX_LENGTH)
    original_text: str = Field(min_length=ORIGINAL_TEXT_MIN_LENGTH)


class MiningRequest(CamelModel):
    project_id: UUID


class AnalysisRequest(CamelModel):
    topic_id: UUID


class DirectorRequest(CamelModel):
    analysis_id: UUID


class CopywriterRequest(CamelModel):
    analysis_id: UUID
    step: int = Field(ge=1, le=4)
    selected_formula: Optional[CopywriterFormula] = None  # required by step 2
    selected_title: Optional[CopywriterTitle] = None      # required by step 4


class PlanningRequest(CamelModel):
    output_id: UUID


__all__ = [
    "LoginRequest",
    "CreateProjectRequest",
    "MiningRequest",
    "AnalysisRequest",
    "DirectorRequest",
    "CopywriterRequest",
    "PlanningRequest",
]
