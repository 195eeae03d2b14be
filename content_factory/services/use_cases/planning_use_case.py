"""
Planning use case.

Branches 3-5 new topics (up / down / parallel) out of a finished output and
moves the project to its terminal stage.
"""

from dataclasses import dataclass
from typing import List

from content_factory.models.artifacts import PlanningResponse
from content_factory.models.entities import NewTopic
from content_factory.models.status import ProjectStage
from content_factory.services.prompts import PLANNING_SYSTEM, build_planning_prompt

from .base import StageHandler
from .tracker import StageTracker


@dataclass
class PlanningUseCaseRequest:
    user: str
    output_id: str


@dataclass
class PlanningUseCaseResponse:
    new_topics: List[NewTopic]


class PlanningUseCase(StageHandler[PlanningUseCaseRequest, PlanningUseCaseResponse]):
    stage_name = "planning"
    failure_message = "Failed to generate new topics"

    async def execute(self, request: PlanningUseCaseRequest) -> PlanningUseCaseResponse:
        output, analysis, topic, project = self.resolve_output(request.output_id, request.user)

        planned = await self.generate_artifact(
            "planning",
            PLANNING_SYSTEM.format(),
            build_planning_prompt(output, analysis, topic),
            PlanningResponse,
        )

        new_topics = self.repository.create_new_topics([
            NewTopic(output_id=output.id, **candidate.model_dump())
            for candidate in planned.new_topics
        ])
        StageTracker(self.repository).advance(project, ProjectStage.COMPLETED)
        self.logger.info("New topics planned", extra={"count": len(new_topics), "output_type": output.type})
        return PlanningUseCaseResponse(new_topics=new_topics)
