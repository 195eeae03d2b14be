"""
Director use case.

Produces a short-video editing plan from an analysis. Each call creates a
new director Output; earlier plans are not replaced.
"""

from dataclasses import dataclass

from content_factory.models.artifacts import DirectorContent
from content_factory.models.entities import DirectorOutput
from content_factory.models.status import ProjectStage
from content_factory.services.prompts import DIRECTOR_SYSTEM, build_director_prompt

from .base import StageHandler
from .tracker import StageTracker


@dataclass
class DirectorUseCaseRequest:
    user: str
    analysis_id: str


@dataclass
class DirectorUseCaseResponse:
    output: DirectorOutput


class DirectorUseCase(StageHandler[DirectorUseCaseRequest, DirectorUseCaseResponse]):
    stage_name = "director"
    failure_message = "Failed to generate director plan"

    async def execute(self, request: DirectorUseCaseRequest) -> DirectorUseCaseResponse:
        analysis, topic, project = self.resolve_analysis(request.analysis_id, request.user)

        content = await self.generate_artifact(
            "director",
            DIRECTOR_SYSTEM.format(),
            build_director_prompt(analysis, topic, project),
            DirectorContent,
        )

        output = self.repository.create_output(
            DirectorOutput(analysis_id=analysis.id, director_content=content)
        )
        StageTracker(self.repository).advance(project, ProjectStage.DIRECTOR)
        self.logger.info("Director plan created", extra={"output_id": output.id})
        return DirectorUseCaseResponse(output=output)
