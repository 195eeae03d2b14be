"""
Tests for content_factory.services.parsing.validation against the stage schemas
"""

import pytest

from content_factory.core import ResponseSchemaError, ResponseValidationError
from content_factory.models import (
    AnalysisResponse,
    DirectorContent,
    Direction,
    MiningResponse,
    PlanningResponse,
    StructureResponse,
)
from content_factory.services.parsing import validate_artifact


class TestMiningSchema:
    def test_valid_payload(self, mining_payload):
        result = validate_artifact(mining_payload, MiningResponse)
        assert len(result.topics) == 3
        assert result.topics[1].emotion_level == 5
        assert result.topics[0].support_materials.quotes == 2

    @pytest.mark.parametrize("level", [0, 6, -1])
    def test_emotion_level_out_of_range_is_rejected(self, mining_payload, level):
        mining_payload["topics"][0]["emotionLevel"] = level
        with pytest.raises(ResponseSchemaError) as exc_info:
            validate_artifact(mining_payload, MiningResponse)
        assert exc_info.value.errors
        assert exc_info.value.errors[0]["loc"][-1] == "emotionLevel"

    def test_missing_required_field(self, mining_payload):
        del mining_payload["topics"][0]["coreIdea"]
        with pytest.raises(ResponseSchemaError):
            validate_artifact(mining_payload, MiningResponse)

    def test_reason_is_optional_and_arrays_may_be_empty(self, mining_payload):
        del mining_payload["topics"][0]["reason"]
        mining_payload["topics"][0]["highlightedText"] = []
        result = validate_artifact(mining_payload, MiningResponse)
        assert result.topics[0].reason is None
        assert result.topics[0].highlighted_text == []

    def test_schema_error_is_a_response_validation_error(self):
        with pytest.raises(ResponseValidationError):
            validate_artifact(["not", "an", "object"], MiningResponse)


class TestOtherStageSchemas:
    def test_analysis(self, analysis_payload):
        result = validate_artifact(analysis_payload, AnalysisResponse)
        assert result.logic_chain.moreover == "Environment works without effort"
        assert result.spread_elements.data == []

    def test_director_duration_accepts_numbers(self, director_payload):
        result = validate_artifact(director_payload, DirectorContent)
        assert [c.duration for c in result.clip_points] == ["5", "12"]

    def test_structure_word_counts_are_integers(self, structure_payload):
        structure_payload["totalEstimatedWords"] = "many"
        with pytest.raises(ResponseSchemaError):
            validate_artifact(structure_payload, StructureResponse)

    def test_planning_direction_enum(self, planning_payload):
        result = validate_artifact(planning_payload, PlanningResponse)
        assert result.new_topics[0].direction is Direction.UP
        assert result.new_topics[1].potential_angle is None

    def test_planning_unknown_direction(self, planning_payload):
        planning_payload["newTopics"][0]["direction"] = "sideways"
        with pytest.raises(ResponseSchemaError):
            validate_artifact(planning_payload, PlanningResponse)
