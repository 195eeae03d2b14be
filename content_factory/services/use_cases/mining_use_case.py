"""
Mining use case.

Mines 3-5 candidate topics from a project's source text. Mining does not
advance the project stage; that happens when a topic completes analysis.
"""

from dataclasses import dataclass
from typing import List

from content_factory.models.artifacts import MiningResponse
from content_factory.models.entities import Topic
from content_factory.services.prompts import MINING_SYSTEM, build_mining_prompt

from .base import StageHandler


@dataclass
class MiningUseCaseRequest:
    user: str
    project_id: str


@dataclass
class MiningUseCaseResponse:
    topics: List[Topic]


class MiningUseCase(StageHandler[MiningUseCaseRequest, MiningUseCaseResponse]):
    stage_name = "mining"
    failure_message = "Failed to process content"

    async def execute(self, request: MiningUseCaseRequest) -> MiningUseCaseResponse:
        project = self.resolve_project(request.project_id, request.user)

        mined = await self.generate_artifact(
            "mining",
            MINING_SYSTEM.format(),
            build_mining_prompt(project),
            MiningResponse,
        )

        topics = [
            Topic(project_id=project.id, **candidate.model_dump())
            for candidate in mined.topics
        ]
        self.repository.create_topics(topics)
        self.logger.info("Topics mined", extra={"count": len(topics)})
        return MiningUseCaseResponse(topics=topics)
