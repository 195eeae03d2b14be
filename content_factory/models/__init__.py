"""
Pydantic models for the content pipeline

Organization:
    - base.py: CamelModel (snake_case in Python, camelCase on the wire)
    - status.py: Stage, output type and direction enums
    - artifacts.py: Exact response shape expected from each stage
    - entities.py: Persisted records (Project, Topic, Analysis, Output, NewTopic)
    - workflow.py: HTTP request bodies
"""

from .base import CamelModel
from .status import ProjectStage, OutputType, Direction, STAGE_RANKS, PIPELINE_STAGES
from .artifacts import (
    SupportMaterials,
    MinedTopic,
    MiningResponse,
    CognitiveContrast,
    LogicChain,
    SpreadElements,
    AudienceQuestion,
    AnalysisResponse,
    DirectorStructure,
    ClipPoint,
    RerecordSuggestion,
    DirectorContent,
    CopywriterFormula,
    FormulaResponse,
    StructureSection,
    StructureResponse,
    CopywriterTitle,
    TitleResponse,
    CopywriterContent,
    PlannedTopic,
    PlanningResponse,
)
from .entities import (
    Project,
    Topic,
    Analysis,
    DirectorOutput,
    CopywriterOutput,
    Output,
    OutputAdapter,
    NewTopic,
)
from .workflow import (
    LoginRequest,
    CreateProjectRequest,
    MiningRequest,
    AnalysisRequest,
    DirectorRequest,
    CopywriterRequest,
    PlanningRequest,
)

__all__ = [
    "CamelModel",
    # Status
    "ProjectStage",
    "OutputType",
    "Direction",
    "STAGE_RANKS",
    "PIPELINE_STAGES",
    # Stage artifacts
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
    # Entities
    "Project",
    "Topic",
    "Analysis",
    "DirectorOutput",
    "CopywriterOutput",
    "Output",
    "OutputAdapter",
    "NewTopic",
    # Requests
    "LoginRequest",
    "CreateProjectRequest",
    "MiningRequest",
    "AnalysisRequest",
    "DirectorRequest",
    "CopywriterRequest",
    "PlanningRequest",
]
