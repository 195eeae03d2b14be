"""
Workflow routes - projects and the five pipeline stages.

Routes only translate between HTTP and use cases: build the request
object from the body and the authenticated caller, run the use case, and
wrap the result in the response envelope. Errors propagate as
ContentFactoryError and are mapped to statuses by the app.
"""

from fastapi import APIRouter, Depends, Query

from ..config import DEFAULT_PROJECT_LIST_LIMIT, STAGE_PERSONAS
from ..core import get_current_user
from ..models import (
    AnalysisRequest,
    CopywriterRequest,
    CreateProjectRequest,
    DirectorRequest,
    MiningRequest,
    PIPELINE_STAGES,
    PlanningRequest,
)
from ..services.llm import LLMProvider
from ..services.storage import WorkflowRepository
from ..services.use_cases import (
    AnalysisUseCase,
    AnalysisUseCaseRequest,
    CopywriterUseCase,
    CopywriterUseCaseRequest,
    CreateProjectUseCase,
    CreateProjectUseCaseRequest,
    DirectorUseCase,
    DirectorUseCaseRequest,
    ListProjectsUseCase,
    ListProjectsUseCaseRequest,
    MiningUseCase,
    MiningUseCaseRequest,
    PlanningUseCase,
    PlanningUseCaseRequest,
    ProjectDetailsUseCase,
    ProjectDetailsUseCaseRequest,
    UseNewTopicUseCase,
    UseNewTopicUseCaseRequest,
)
from .dependencies import get_llm, get_repository

router = APIRouter(prefix="/api/workflow", tags=["workflow"])


# === Projects ===

@router.post("")
async def create_project(
    payload: CreateProjectRequest,
    user: str = Depends(get_current_user),
    repository: WorkflowRepository = Depends(get_repository),
):
    """Create a project from source text; it starts in the mining stage."""
    response = await CreateProjectUseCase(repository).execute(
        CreateProjectUseCaseRequest(user=user, title=payload.title, original_text=payload.original_text)
    )
    return response.project.to_wire()


@router.get("")
async def list_projects(
    limit: int = Query(DEFAULT_PROJECT_LIST_LIMIT, ge=1, le=100),
    user: str = Depends(get_current_user),
    repository: WorkflowRepository = Depends(get_repository),
):
    """Caller's projects, most recently updated first."""
    response = await ListProjectsUseCase(repository).execute(
        ListProjectsUseCaseRequest(user=user, limit=limit)
    )
    return [project.to_wire() for project in response.projects]


@router.get("/stages")
async def list_stages():
    """Pipeline stages with their digital-employee persona."""
    return [
        {"stage": stage.value, "order": index + 1, **STAGE_PERSONAS[stage.value]}
        for index, stage in enumerate(PIPELINE_STAGES)
    ]


@router.post("/new-topics/{new_topic_id}/use")
async def use_new_topic(
    new_topic_id: str,
    user: str = Depends(get_current_user),
    repository: WorkflowRepository = Depends(get_repository),
):
    """Start a fresh project from a planned topic."""
    response = await UseNewTopicUseCase(repository).execute(
        UseNewTopicUseCaseRequest(user=user, new_topic_id=new_topic_id)
    )
    return {
        "success": True,
        "newTopic": response.new_topic.to_wire(),
        "project": response.project.to_wire(),
    }


# === Stages ===

@router.post("/mining")
async def run_mining(
    payload: MiningRequest,
    user: str = Depends(get_current_user),
    repository: WorkflowRepository = Depends(get_repository),
    llm: LLMProvider = Depends(get_llm),
):
    response = await MiningUseCase(repository, llm).execute(
        MiningUseCaseRequest(user=user, project_id=str(payload.project_id))
    )
    return {"success": True, "topics": [topic.to_wire() for topic in response.topics]}


@router.post("/analysis")
async def run_analysis(
    payload: AnalysisRequest,
    user: str = Depends(get_current_user),
    repository: WorkflowRepository = Depends(get_repository),
    llm: LLMProvider = Depends(get_llm),
):
    response = await AnalysisUseCase(repository, llm).execute(
        AnalysisUseCaseRequest(user=user, topic_id=str(payload.topic_id))
    )
    return {"success": True, "analysis": response.analysis.to_wire()}


@router.post("/director")
async def run_director(
    payload: DirectorRequest,
    user: str = Depends(get_current_user),
    repository: WorkflowRepository = Depends(get_repository),
    llm: LLMProvider = Depends(get_llm),
):
    response = await DirectorUseCase(repository, llm).execute(
        DirectorUseCaseRequest(user=user, analysis_id=str(payload.analysis_id))
    )
    return {"success": True, "output": response.output.to_wire()}


@router.post("/copywriter")
async def run_copywriter(
    payload: CopywriterRequest,
    user: str = Depends(get_current_user),
    repository: WorkflowRepository = Depends(get_repository),
    llm: LLMProvider = Depends(get_llm),
):
    response = await CopywriterUseCase(repository, llm).execute(
        CopywriterUseCaseRequest(
            user=user,
            analysis_id=str(payload.analysis_id),
            step=payload.step,
            selected_formula=payload.selected_formula,
            selected_title=payload.selected_title,
        )
    )
    return {
        "success": True,
        "step": response.step,
        "result": response.result.to_wire(),
        "output": response.output.to_wire() if response.output else None,
    }


@router.post("/planning")
async def run_planning(
    payload: PlanningRequest,
    user: str = Depends(get_current_user),
    repository: WorkflowRepository = Depends(get_repository),
    llm: LLMProvider = Depends(get_llm),
):
    response = await PlanningUseCase(repository, llm).execute(
        PlanningUseCaseRequest(user=user, output_id=str(payload.output_id))
    )
    return {"success": True, "newTopics": [topic.to_wire() for topic in response.new_topics]}


# === Details (after the fixed paths so "/stages" is not taken for an id) ===

@router.get("/{project_id}")
async def get_project_details(
    project_id: str,
    user: str = Depends(get_current_user),
    repository: WorkflowRepository = Depends(get_repository),
):
    """Project with its topics, analyses, outputs and planned topics."""
    response = await ProjectDetailsUseCase(repository).execute(
        ProjectDetailsUseCaseRequest(user=user, project_id=project_id)
    )
    return response.to_wire()
