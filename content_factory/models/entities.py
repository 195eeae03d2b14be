"""
Persisted records

Every downstream record references its upstream parent by id:
Project <- Topic <- Analysis <- Output <- NewTopic. Ownership is recorded on
the Project only and gates every descendant.

Output is a tagged variant on `type`: a director output carries a fully
populated DirectorContent, a copywriter output carries the CopywriterContent
accumulated across its four steps.
"""

import uuid
from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter

from .artifacts import (
    AnalysisResponse,
    CopywriterContent,
    DirectorContent,
    MinedTopic,
    PlannedTopic,
)
from .base import CamelModel
from .status import ProjectStage


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(CamelModel):
    id: str = Field(default_factory=new_id)
    owner: str
    title: str
    original_text: str
    current_stage: ProjectStage = ProjectStage.MINING
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Topic(MinedTopic):
    id: str = Field(default_factory=new_id)
    project_id: str
    is_selected: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class Analysis(AnalysisResponse):
    id: str = Field(default_factory=new_id)
    topic_id: str
    created_at: datetime = Field(default_factory=utcnow)


class DirectorOutput(CamelModel):
    id: str = Field(default_factory=new_id)
    analysis_id: str
    type: Literal["director"] = "director"
    director_content: DirectorContent
    created_at: datetime = Field(default_factory=utcnow)


class CopywriterOutput(CamelModel):
    id: str = Field(default_factory=new_id)
    analysis_id: str
    type: Literal["copywriter"] = "copywriter"
    copywriter_content: CopywriterContent
    created_at: datetime = Field(default_factory=utcnow)


Output = Annotated[Union[DirectorOutput, CopywriterOutput], Field(discriminator="type")]
OutputAdapter: TypeAdapter = TypeAdapter(Output)


class NewTopic(PlannedTopic):
    id: str = Field(default_factory=new_id)
    output_id: str
    is_used: bool = False
    created_at: datetime = Field(default_factory=utcnow)


__all__ = [
    "new_id",
    "utcnow",
    "Project",
    "Topic",
    "Analysis",
    "DirectorOutput",
    "CopywriterOutput",
    "Output",
    "OutputAdapter",
    "NewTopic",
]
