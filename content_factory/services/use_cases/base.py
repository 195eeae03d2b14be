"""
Base use case classes.

Each use case encapsulates a single business operation and is independent
of HTTP. Routes build a request object, call `execute()` and turn the
response object into JSON; errors are raised as `ContentFactoryError`
subclasses and mapped to statuses by the application's exception handler.

StageHandler adds what every pipeline stage shares:

    1. Resolve the input entity, walk its parent chain up to the Project
       (404 if any link is missing) and check the Project owner (403)
    2. Call the text generation backend once with the stage's settings
    3. Extract, parse and validate the response before anything is written
"""

from abc import ABC, abstractmethod
from typing import Generic, Tuple, Type, TypeVar

from pydantic import BaseModel

from content_factory.config import get_stage_config
from content_factory.core import (
    AuthorizationError,
    GenerationError,
    LogTimer,
    NotFoundError,
    ResponseParseError,
    ResponseSchemaError,
    ResponseValidationError,
    get_logger,
    set_project_id,
)
from content_factory.models.entities import Analysis, NewTopic, Output, Project, Topic
from content_factory.services.llm import LLMConfig, LLMProvider
from content_factory.services.parsing import parse_json_payload, validate_artifact
from content_factory.services.storage import WorkflowRepository

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")
ArtifactT = TypeVar("ArtifactT", bound=BaseModel)


class UseCase(ABC, Generic[RequestT, ResponseT]):
    """
    Base use case abstract class.

    Type Parameters:
        RequestT: Type of the input request object
        ResponseT: Type of the output response object
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """
        Execute the use case and return a response.

        Raises:
            ContentFactoryError subclasses; HTTP mapping is the caller's job.
        """


class OwnedResourceMixin:
    """Resolve an entity and its ancestors, enforcing Project ownership."""

    repository: WorkflowRepository

    def resolve_project(self, project_id: str, user: str) -> Project:
        project = self.repository.get_project(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        if project.owner != user:
            raise AuthorizationError("Forbidden")
        set_project_id(project.id)
        return project

    def resolve_topic(self, topic_id: str, user: str) -> Tuple[Topic, Project]:
        topic = self.repository.get_topic(topic_id)
        if topic is None:
            raise NotFoundError("Topic not found")
        return topic, self.resolve_project(topic.project_id, user)

    def resolve_analysis(self, analysis_id: str, user: str) -> Tuple[Analysis, Topic, Project]:
        analysis = self.repository.get_analysis(analysis_id)
        if analysis is None:
            raise NotFoundError("Analysis not found")
        topic, project = self.resolve_topic(analysis.topic_id, user)
        return analysis, topic, project

    def resolve_output(self, output_id: str, user: str) -> Tuple[Output, Analysis, Topic, Project]:
        output = self.repository.get_output(output_id)
        if output is None:
            raise NotFoundError("Output not found")
        analysis, topic, project = self.resolve_analysis(output.analysis_id, user)
        return output, analysis, topic, project

    def resolve_new_topic(self, new_topic_id: str, user: str) -> Tuple[NewTopic, Project]:
        new_topic = self.repository.get_new_topic(new_topic_id)
        if new_topic is None:
            raise NotFoundError("New topic not found")
        *_, project = self.resolve_output(new_topic.output_id, user)
        return new_topic, project


class StageHandler(OwnedResourceMixin, UseCase[RequestT, ResponseT]):
    """
    Base class for the five pipeline stages.

    Subclasses set `stage_name` (for logs) and `failure_message` (returned
    to the caller when the backend call fails).
    """

    stage_name: str = "stage"
    failure_message: str = "Failed to process content"

    def __init__(self, repository: WorkflowRepository, llm: LLMProvider):
        self.repository = repository
        self.llm = llm
        self.logger = get_logger(f"content_factory.stage.{self.stage_name}", component=self.stage_name)

    async def generate_text(self, stage_key: str, system_prompt: str, user_prompt: str) -> str:
        """One model round-trip with the stage's configured settings."""
        settings = get_stage_config(stage_key)
        config = LLMConfig(temperature=settings.temperature, json_mode=settings.json_mode)

        try:
            with LogTimer(self.logger, f"{stage_key} generation via {self.llm.name}"):
                response = await self.llm.generate(system_prompt, user_prompt, config)
        except GenerationError as e:
            self.logger.error(
                "Generation backend failed",
                extra={"stage_key": stage_key, "error": e.message},
            )
            raise GenerationError(self.failure_message) from e

        text = (response.text or "").strip()
        if not text:
            self.logger.error("Generation backend returned empty content", extra={"stage_key": stage_key})
            raise GenerationError(self.failure_message)

        if response.usage:
            self.logger.debug(
                "Token usage",
                extra={
                    "stage_key": stage_key,
                    "input_tokens": response.usage.input_tokens,
                    "output_tokens": response.usage.output_tokens,
                },
            )
        return text

    async def generate_artifact(
        self,
        stage_key: str,
        system_prompt: str,
        user_prompt: str,
        schema: Type[ArtifactT],
    ) -> ArtifactT:
        """Generate, parse and validate a structured stage response.

        Parse and schema failures are logged with their own diagnostics and
        both surface as the generic "Invalid AI response format".
        """
        text = await self.generate_text(stage_key, system_prompt, user_prompt)

        try:
            payload = parse_json_payload(text)
        except ResponseParseError as e:
            self.logger.error(
                "Model response is not valid JSON",
                extra={
                    "stage_key": stage_key,
                    "truncated": e.truncated,
                    "response_chars": len(text),
                    "response_head": text[:300],
                },
            )
            raise ResponseValidationError() from e

        try:
            return validate_artifact(payload, schema)
        except ResponseSchemaError as e:
            self.logger.error(
                "Model response failed schema validation",
                extra={"stage_key": stage_key, "schema": schema.__name__, "errors": e.errors},
            )
            raise ResponseValidationError() from e
