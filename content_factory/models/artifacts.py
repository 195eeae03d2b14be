"""
Stage response schemas

The exact shape each stage expects back from the model. Model output is
validated against these before anything is persisted; the same types are
embedded in the stored records.
"""

from typing import List, Optional

from pydantic import Field, field_validator

from .base import CamelModel
from .status import Direction


# === Mining ===

class SupportMaterials(CamelModel):
    """How many cases / quotes / data points back a topic"""
    cases: int
    quotes: int
    data: int


class MinedTopic(CamelModel):
    title: str
    core_idea: str
    emotion_level: int = Field(ge=1, le=5)
    support_materials: SupportMaterials
    highlighted_text: List[str]  # substrings of the project's original text
    reason: Optional[str] = None


class MiningResponse(CamelModel):
    topics: List[MinedTopic]


# === Analysis ===

class CognitiveContrast(CamelModel):
    common_belief: str
    our_point: str
    tension: str


class LogicChain(CamelModel):
    because: str
    so: str
    moreover: str


class SpreadElements(CamelModel):
    quotes: List[str]
    cases: List[str]
    data: List[str]


class AudienceQuestion(CamelModel):
    question: str
    answer_direction: str


class AnalysisResponse(CamelModel):
    core_argument: str
    cognitive_contrast: CognitiveContrast
    logic_chain: LogicChain
    spread_elements: SpreadElements
    audience_questions: List[AudienceQuestion]


# === Director ===

class DirectorStructure(CamelModel):
    name: str
    description: str
    parts: List[str]


class ClipPoint(CamelModel):
    part: str
    purpose: str
    original_text: str
    duration: str

    @field_validator("duration", mode="before")
    @classmethod
    def _stringify_seconds(cls, value):
        # "15" and 15 both mean fifteen seconds
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class RerecordSuggestion(CamelModel):
    position: str
    type: str
    content: str


class DirectorContent(CamelModel):
    content_type: str
    structure: DirectorStructure
    clip_points: List[ClipPoint]
    rerecord_suggestions: List[RerecordSuggestion]
    preview: str


# === Copywriter ===

class CopywriterFormula(CamelModel):
    name: str
    description: str
    why_fit: str
    example: str


class FormulaResponse(CamelModel):
    formulas: List[CopywriterFormula]


class StructureSection(CamelModel):
    section: str
    subtitle: str
    key_points: List[str]
    estimated_words: int


class StructureResponse(CamelModel):
    structure: List[StructureSection]
    total_estimated_words: int


class CopywriterTitle(CamelModel):
    title: str
    elements: List[str]
    hook: str


class TitleResponse(CamelModel):
    titles: List[CopywriterTitle]


class CopywriterContent(CamelModel):
    """Copy accumulated across the four copywriter steps"""
    formulas: Optional[List[CopywriterFormula]] = None
    selected_formula: Optional[CopywriterFormula] = None
    structure: Optional[List[StructureSection]] = None
    total_estimated_words: Optional[int] = None
    titles: Optional[List[CopywriterTitle]] = None
    selected_title: Optional[CopywriterTitle] = None
    full_content: Optional[str] = None
    current_step: int = Field(ge=1, le=4)


# === Planning ===

class PlannedTopic(CamelModel):
    title: str
    direction: Direction
    direction_label: str
    description: str
    potential_angle: Optional[str] = None


class PlanningResponse(CamelModel):
    new_topics: List[PlannedTopic]


__all__ = [
    "SupportMaterials",
    "MinedTopic",
    "MiningResponse",
    "CognitiveContrast",
    "LogicChain",
    "SpreadElements",
    "AudienceQuestion",
    "AnalysisResponse",
    "DirectorStructure",
    "ClipPoint",
    "RerecordSuggestion",
    "DirectorContent",
    "CopywriterFormula",
    "FormulaResponse",
    "StructureSection",
    "StructureResponse",
    "CopywriterTitle",
    "TitleResponse",
    "CopywriterContent",
    "PlannedTopic",
    "PlanningResponse",
]
