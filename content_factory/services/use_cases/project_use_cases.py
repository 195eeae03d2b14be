"""
Project use cases.

Operations on the pipeline's root entity that do not call the model:
create, list, full detail view, and starting a new project from a planned
topic.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List

from content_factory.config import DEFAULT_PROJECT_LIST_LIMIT, PROJECT_TITLE_MAX_LENGTH
from content_factory.core import get_logger, set_project_id
from content_factory.models.entities import NewTopic, OutputAdapter, Project
from content_factory.services.prompts import build_new_topic_seed
from content_factory.services.storage import WorkflowRepository

from .base import OwnedResourceMixin, UseCase

logger = get_logger(__name__, component="projects")


# === Create ===

@dataclass
class CreateProjectUseCaseRequest:
    user: str
    title: str
    original_text: str


@dataclass
class ProjectUseCaseResponse:
    project: Project


class CreateProjectUseCase(UseCase[CreateProjectUseCaseRequest, ProjectUseCaseResponse]):
    """Create a project in the mining stage. Input shape is validated upstream."""

    def __init__(self, repository: WorkflowRepository):
        self.repository = repository

    async def execute(self, request: CreateProjectUseCaseRequest) -> ProjectUseCaseResponse:
        project = self.repository.create_project(
            Project(owner=request.user, title=request.title, original_text=request.original_text)
        )
        set_project_id(project.id)
        logger.info("Project created", extra={"title_chars": len(project.title)})
        return ProjectUseCaseResponse(project=project)


# === List ===

@dataclass
class ListProjectsUseCaseRequest:
    user: str
    limit: int = DEFAULT_PROJECT_LIST_LIMIT


@dataclass
class ListProjectsUseCaseResponse:
    projects: List[Project]


class ListProjectsUseCase(UseCase[ListProjectsUseCaseRequest, ListProjectsUseCaseResponse]):
    def __init__(self, repository: WorkflowRepository):
        self.repository = repository

    async def execute(self, request: ListProjectsUseCaseRequest) -> ListProjectsUseCaseResponse:
        return ListProjectsUseCaseResponse(
            projects=self.repository.list_projects(request.user, request.limit)
        )


# === Details ===

@dataclass
class ProjectDetailsUseCaseRequest:
    user: str
    project_id: str


@dataclass
class ProjectDetailsUseCaseResponse:
    project: Project
    topics: List[Dict[str, Any]] = field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        return {**self.project.to_wire(), "topics": self.topics}


class ProjectDetailsUseCase(
    OwnedResourceMixin,
    UseCase[ProjectDetailsUseCaseRequest, ProjectDetailsUseCaseResponse],
):
    """Project with its whole artifact tree, topics by emotion level."""

    def __init__(self, repository: WorkflowRepository):
        self.repository = repository

    async def execute(self, request: ProjectDetailsUseCaseRequest) -> ProjectDetailsUseCaseResponse:
        project = self.resolve_project(request.project_id, request.user)
        topics = await asyncio.to_thread(self._build_tree, project.id)
        return ProjectDetailsUseCaseResponse(project=project, topics=topics)

    def _build_tree(self, project_id: str) -> List[Dict[str, Any]]:
        topics = []
        for topic in self.repository.list_topics(project_id):
            analyses = []
            for analysis in self.repository.list_analyses(topic.id):
                outputs = []
                for output in self.repository.list_outputs(analysis.id):
                    wire = OutputAdapter.dump_python(output, mode="json", by_alias=True)
                    wire["newTopics"] = [n.to_wire() for n in self.repository.list_new_topics(output.id)]
                    outputs.append(wire)
                analyses.append({**analysis.to_wire(), "outputs": outputs})
            topics.append({**topic.to_wire(), "analyses": analyses})
        return topics


# === Reuse a planned topic ===

@dataclass
class UseNewTopicUseCaseRequest:
    user: str
    new_topic_id: str


@dataclass
class UseNewTopicUseCaseResponse:
    new_topic: NewTopic
    project: Project


class UseNewTopicUseCase(
    OwnedResourceMixin,
    UseCase[UseNewTopicUseCaseRequest, UseNewTopicUseCaseResponse],
):
    """Mark a planned topic used and start a fresh project from it."""

    def __init__(self, repository: WorkflowRepository):
        self.repository = repository

    async def execute(self, request: UseNewTopicUseCaseRequest) -> UseNewTopicUseCaseResponse:
        new_topic, source_project = self.resolve_new_topic(request.new_topic_id, request.user)

        new_topic = self.repository.mark_new_topic_used(new_topic.id) or new_topic
        project = self.repository.create_project(
            Project(
                owner=request.user,
                title=new_topic.title[:PROJECT_TITLE_MAX_LENGTH],
                original_text=build_new_topic_seed(new_topic),
            )
        )
        logger.info(
            "Project started from planned topic",
            extra={"source_project_id": source_project.id, "new_project_id": project.id},
        )
        return UseNewTopicUseCaseResponse(new_topic=new_topic, project=project)
