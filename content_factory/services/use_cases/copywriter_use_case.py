"""
Copywriter use case.

Four steps share one copywriter Output per analysis:

    1. formulas     - recommend copy structure formulas; creates the Output
                      if none exists, otherwise updates it
    2. structure    - article skeleton for `selected_formula` (required)
    3. titles       - headline candidates
    4. full content - Markdown article for `selected_title` (required);
                      needs an Output holding structure and titles, and
                      advances the project to the copywriter stage

Steps 2 and 3 return their result but persist nothing when step 1 has not
created the Output yet.
"""

from dataclasses import dataclass
from typing import Optional, Union

from content_factory.config import COPYWRITER_STEP_NAMES
from content_factory.core import PreconditionError
from content_factory.models.artifacts import (
    CopywriterContent,
    CopywriterFormula,
    CopywriterTitle,
    FormulaResponse,
    StructureResponse,
    TitleResponse,
)
from content_factory.models.base import CamelModel
from content_factory.models.entities import Analysis, CopywriterOutput, Project, Topic
from content_factory.models.status import OutputType, ProjectStage
from content_factory.services.prompts import (
    COPYWRITER_CONTENT_SYSTEM,
    COPYWRITER_FORMULA_SYSTEM,
    COPYWRITER_STRUCTURE_SYSTEM,
    COPYWRITER_TITLE_SYSTEM,
    build_content_prompt,
    build_formula_prompt,
    build_structure_prompt,
    build_title_prompt,
)

from .base import StageHandler
from .tracker import StageTracker


class FullContentResult(CamelModel):
    full_content: str


StepResult = Union[FormulaResponse, StructureResponse, TitleResponse, FullContentResult]


@dataclass
class CopywriterUseCaseRequest:
    user: str
    analysis_id: str
    step: int
    selected_formula: Optional[CopywriterFormula] = None
    selected_title: Optional[CopywriterTitle] = None


@dataclass
class CopywriterUseCaseResponse:
    step: int
    result: StepResult
    output: Optional[CopywriterOutput]


class CopywriterUseCase(StageHandler[CopywriterUseCaseRequest, CopywriterUseCaseResponse]):
    stage_name = "copywriter"
    failure_message = "Failed to generate content"

    async def execute(self, request: CopywriterUseCaseRequest) -> CopywriterUseCaseResponse:
        if request.step not in COPYWRITER_STEP_NAMES:
            raise PreconditionError(f"Unknown copywriter step: {request.step}")

        analysis, topic, project = self.resolve_analysis(request.analysis_id, request.user)
        output = self._find_output(analysis.id)
        self.logger.info(
            "Copywriter step requested",
            extra={"step": request.step, "step_name": COPYWRITER_STEP_NAMES[request.step]},
        )

        if request.step == 1:
            result = await self._formulas(analysis, topic, output)
        elif request.step == 2:
            result = await self._structure(request, analysis, topic, output)
        elif request.step == 3:
            result = await self._titles(analysis, topic, output)
        else:
            result = await self._full_content(request, analysis, topic, project, output)

        return CopywriterUseCaseResponse(
            step=request.step,
            result=result,
            output=self._find_output(analysis.id),
        )

    def _find_output(self, analysis_id: str) -> Optional[CopywriterOutput]:
        return self.repository.find_output(analysis_id, OutputType.COPYWRITER)

    def _save(self, output: CopywriterOutput, **changes) -> None:
        content = output.copywriter_content.model_copy(update=changes)
        self.repository.update_output(output.model_copy(update={"copywriter_content": content}))

    async def _formulas(
        self, analysis: Analysis, topic: Topic, output: Optional[CopywriterOutput]
    ) -> FormulaResponse:
        result = await self.generate_artifact(
            "copywriter_formulas",
            COPYWRITER_FORMULA_SYSTEM.format(),
            build_formula_prompt(analysis, topic),
            FormulaResponse,
        )

        if output is None:
            output = self.repository.create_output(
                CopywriterOutput(
                    analysis_id=analysis.id,
                    copywriter_content=CopywriterContent(formulas=result.formulas, current_step=1),
                )
            )
            self.logger.info("Copywriter output created", extra={"output_id": output.id})
        else:
            self._save(output, formulas=result.formulas, current_step=1)
        return result

    async def _structure(
        self,
        request: CopywriterUseCaseRequest,
        analysis: Analysis,
        topic: Topic,
        output: Optional[CopywriterOutput],
    ) -> StructureResponse:
        if request.selected_formula is None:
            raise PreconditionError("Selected formula is required for step 2")

        result = await self.generate_artifact(
            "copywriter_structure",
            COPYWRITER_STRUCTURE_SYSTEM.format(),
            build_structure_prompt(request.selected_formula, analysis, topic),
            StructureResponse,
        )

        if output is None:
            self.logger.warning("No copywriter output to update; structure not saved", extra={"step": 2})
        else:
            self._save(
                output,
                selected_formula=request.selected_formula,
                structure=result.structure,
                total_estimated_words=result.total_estimated_words,
                current_step=2,
            )
        return result

    async def _titles(
        self, analysis: Analysis, topic: Topic, output: Optional[CopywriterOutput]
    ) -> TitleResponse:
        result = await self.generate_artifact(
            "copywriter_titles",
            COPYWRITER_TITLE_SYSTEM.format(),
            build_title_prompt(analysis, topic),
            TitleResponse,
        )

        if output is None:
            self.logger.warning("No copywriter output to update; titles not saved", extra={"step": 3})
        else:
            self._save(output, titles=result.titles, current_step=3)
        return result

    async def _full_content(
        self,
        request: CopywriterUseCaseRequest,
        analysis: Analysis,
        topic: Topic,
        project: Project,
        output: Optional[CopywriterOutput],
    ) -> FullContentResult:
        content = output.copywriter_content if output else None
        if (
            request.selected_title is None
            or content is None
            or not content.structure
            or not content.titles
        ):
            raise PreconditionError("Selected title and previous steps are required")

        text = await self.generate_text(
            "copywriter_content",
            COPYWRITER_CONTENT_SYSTEM.format(),
            build_content_prompt(request.selected_title, content.structure, analysis, topic, project),
        )

        self._save(
            output,
            selected_title=request.selected_title,
            full_content=text,
            current_step=4,
        )
        StageTracker(self.repository).advance(project, ProjectStage.COPYWRITER)
        return FullContentResult(full_content=text)
