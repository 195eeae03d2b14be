"""
Use cases - one business operation each, independent of HTTP.

Stage handlers (mining, analysis, director, copywriter, planning) share
`StageHandler`; project operations that never call the model live in
project_use_cases.
"""

from .base import UseCase, StageHandler, OwnedResourceMixin
from .tracker import StageTracker
from .project_use_cases import (
    CreateProjectUseCase,
    CreateProjectUseCaseRequest,
    ProjectUseCaseResponse,
    ListProjectsUseCase,
    ListProjectsUseCaseRequest,
    ListProjectsUseCaseResponse,
    ProjectDetailsUseCase,
    ProjectDetailsUseCaseRequest,
    ProjectDetailsUseCaseResponse,
    UseNewTopicUseCase,
    UseNewTopicUseCaseRequest,
    UseNewTopicUseCaseResponse,
)
from .mining_use_case import MiningUseCase, MiningUseCaseRequest, MiningUseCaseResponse
from .analysis_use_case import AnalysisUseCase, AnalysisUseCaseRequest, AnalysisUseCaseResponse
from .director_use_case import DirectorUseCase, DirectorUseCaseRequest, DirectorUseCaseResponse
from .copywriter_use_case import (
    CopywriterUseCase,
    CopywriterUseCaseRequest,
    CopywriterUseCaseResponse,
    FullContentResult,
)
from .planning_use_case import PlanningUseCase, PlanningUseCaseRequest, PlanningUseCaseResponse

__all__ = [
    "UseCase",
    "StageHandler",
    "OwnedResourceMixin",
    "StageTracker",
    "CreateProjectUseCase",
    "CreateProjectUseCaseRequest",
    "ProjectUseCaseResponse",
    "ListProjectsUseCase",
    "ListProjectsUseCaseRequest",
    "ListProjectsUseCaseResponse",
    "ProjectDetailsUseCase",
    "ProjectDetailsUseCaseRequest",
    "ProjectDetailsUseCaseResponse",
    "UseNewTopicUseCase",
    "UseNewTopicUseCaseRequest",
    "UseNewTopicUseCaseResponse",
    "MiningUseCase",
    "MiningUseCaseRequest",
    "MiningUseCaseResponse",
    "AnalysisUseCase",
    "AnalysisUseCaseRequest",
    "AnalysisUseCaseResponse",
    "DirectorUseCase",
    "DirectorUseCaseRequest",
    "DirectorUseCaseResponse",
    "CopywriterUseCase",
    "CopywriterUseCaseRequest",
    "CopywriterUseCaseResponse",
    "FullContentResult",
    "PlanningUseCase",
    "PlanningUseCaseRequest",
    "PlanningUseCaseResponse",
]
