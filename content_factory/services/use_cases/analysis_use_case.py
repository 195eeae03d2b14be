"""
Analysis use case.

Runs the five-step deep analysis on one topic. The topic is marked
selected before the model is called and stays selected if generation
fails. Every successful call creates a new Analysis; earlier ones are kept.
"""

from dataclasses import dataclass

from content_factory.models.artifacts import AnalysisResponse
from content_factory.models.entities import Analysis
from content_factory.models.status import ProjectStage
from content_factory.services.prompts import ANALYSIS_SYSTEM, build_analysis_prompt

from .base import StageHandler
from .tracker import StageTracker


@dataclass
class AnalysisUseCaseRequest:
    user: str
    topic_id: str


@dataclass
class AnalysisUseCaseResponse:
    analysis: Analysis


class AnalysisUseCase(StageHandler[AnalysisUseCaseRequest, AnalysisUseCaseResponse]):
    stage_name = "analysis"
    failure_message = "Failed to analyze content"

    async def execute(self, request: AnalysisUseCaseRequest) -> AnalysisUseCaseResponse:
        topic, project = self.resolve_topic(request.topic_id, request.user)

        topic = self.repository.select_topic(topic.id) or topic

        result = await self.generate_artifact(
            "analysis",
            ANALYSIS_SYSTEM.format(),
            build_analysis_prompt(topic, project),
            AnalysisResponse,
        )

        analysis = self.repository.create_analysis(
            Analysis(topic_id=topic.id, **result.model_dump())
        )
        StageTracker(self.repository).advance(project, ProjectStage.ANALYSIS)
        self.logger.info("Analysis created", extra={"analysis_id": analysis.id})
        return AnalysisUseCaseResponse(analysis=analysis)
