"""
Tests for stage ordering, stage configuration and the persisted record shapes
"""

import pytest
from pydantic import ValidationError

from content_factory.config import COPYWRITER_STEP_NAMES, STAGE_PERSONAS, get_coze_mode, get_stage_config
from content_factory.config import CozeMode
from content_factory.models import (
    CopywriterContent,
    CopywriterRequest,
    CreateProjectRequest,
    OutputAdapter,
    PIPELINE_STAGES,
    Project,
    ProjectStage,
)


class TestProjectStage:
    def test_forward_moves_are_allowed(self):
        assert ProjectStage.MINING.can_advance_to(ProjectStage.ANALYSIS)
        assert ProjectStage.ANALYSIS.can_advance_to(ProjectStage.COMPLETED)

    def test_branches_share_a_rank(self):
        assert ProjectStage.DIRECTOR.can_advance_to(ProjectStage.COPYWRITER)
        assert ProjectStage.COPYWRITER.can_advance_to(ProjectStage.DIRECTOR)

    def test_backward_moves_are_refused(self):
        assert not ProjectStage.PLANNING.can_advance_to(ProjectStage.ANALYSIS)
        assert not ProjectStage.COMPLETED.can_advance_to(ProjectStage.PLANNING)

    def test_terminal(self):
        assert ProjectStage.COMPLETED.is_terminal()
        assert not ProjectStage.PLANNING.is_terminal()

    def test_every_pipeline_stage_has_a_persona(self):
        for stage in PIPELINE_STAGES:
            assert set(STAGE_PERSONAS[stage.value]) == {"name", "icon", "description"}


class TestRecords:
    def test_project_wire_format_is_camel_case(self):
        wire = Project(owner="alice", title="t", original_text="some source text").to_wire()
        assert wire["currentStage"] == "mining"
        assert "originalText" in wire and "createdAt" in wire

    def test_output_is_discriminated_by_type(self):
        output = OutputAdapter.validate_python({
            "analysisId": "a",
            "type": "copywriter",
            "copywriterContent": {"currentStep": 1},
        })
        assert output.type == "copywriter"
        assert output.copywriter_content.formulas is None

    def test_unknown_output_type(self):
        with pytest.raises(ValidationError):
            OutputAdapter.validate_python({"analysisId": "a", "type": "podcast"})

    def test_copywriter_step_bounds(self):
        with pytest.raises(ValidationError):
            CopywriterContent(current_step=5)


class TestRequests:
    def test_create_project_accepts_camel_case(self):
        request = CreateProjectRequest.model_validate({"title": "t", "originalText": "ten chars!"})
        assert request.original_text == "ten chars!"

    def test_copywriter_request_validates_ids_and_step(self):
        with pytest.raises(ValidationError):
            CopywriterRequest.model_validate({"analysisId": "nope", "step": 1})
        with pytest.raises(ValidationError):
            CopywriterRequest.model_validate({"analysisId": "1b4e28ba-2fa1-11d2-883f-0016d3cca427", "step": 0})


class TestStageConfig:
    def test_full_content_is_not_json(self):
        assert get_stage_config("copywriter_content").json_mode is False
        assert get_stage_config("mining").json_mode is True

    def test_ideation_stages_run_hotter(self):
        assert get_stage_config("copywriter_titles").temperature == 0.8
        assert get_stage_config("planning").temperature == 0.8
        assert get_stage_config("analysis").temperature == 0.7

    def test_unknown_stage(self):
        with pytest.raises(ValueError):
            get_stage_config("editing")

    def test_copywriter_step_names(self):
        assert COPYWRITER_STEP_NAMES == {1: "formulas", 2: "structure", 3: "titles", 4: "fullContent"}

    def test_coze_mode(self, monkeypatch):
        assert get_coze_mode() is CozeMode.POLL
        monkeypatch.setenv("COZE_MODE", "STREAM")
        assert get_coze_mode() is CozeMode.STREAM
