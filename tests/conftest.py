"""
Shared fixtures: a scripted LLM, an open file repository and sample
model responses for every stage.
"""

import json
from typing import List, Optional, Union

import pytest

from content_factory.services.llm import LLMConfig, LLMProvider, LLMResponse, ProviderType
from content_factory.services.storage import FileBasedWorkflowRepository


class ScriptedLLM(LLMProvider):
    """Returns queued responses in order; queued exceptions are raised."""

    provider_type = ProviderType.OLLAMA

    def __init__(self, responses: Optional[List[Union[str, dict, Exception]]] = None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, *responses: Union[str, dict, Exception]) -> "ScriptedLLM":
        self.responses.extend(responses)
        return self

    def is_available(self) -> bool:
        return True

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        self.calls.append({"system": system_prompt, "user": user_prompt, "config": config})
        if not self.responses:
            raise AssertionError("ScriptedLLM ran out of responses")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        text = json.dumps(item, ensure_ascii=False) if isinstance(item, dict) else item
        return LLMResponse(text=text, model="scripted", provider=self.provider_type)


@pytest.fixture
def llm():
    return ScriptedLLM()


@pytest.fixture
def repository(tmp_path):
    repo = FileBasedWorkflowRepository(tmp_path / "store")
    repo.open()
    yield repo
    repo.close()


SOURCE_TEXT = (
    "Most people think discipline is about willpower. It is not. "
    "Discipline is about designing your environment so the right choice is the easy one. "
    "When I moved my phone out of the bedroom my reading doubled in a month."
)


@pytest.fixture
def source_text():
    return SOURCE_TEXT


def _topic(title: str, emotion: int) -> dict:
    return {
        "title": title,
        "coreIdea": "Discipline is about designing your environment.",
        "emotionLevel": emotion,
        "supportMaterials": {"cases": 1, "quotes": 2, "data": 0},
        "highlightedText": ["Discipline is about designing your environment so the right choice is the easy one."],
        "reason": "Counter-intuitive and practical",
    }


@pytest.fixture
def mining_payload():
    return {
        "topics": [
            _topic("Environment beats willpower", 3),
            _topic("Phone out of the bedroom", 5),
            _topic("Reading doubled", 4),
        ]
    }


@pytest.fixture
def analysis_payload():
    return {
        "coreArgument": "Discipline is an environment problem, not a willpower problem.",
        "cognitiveContrast": {
            "commonBelief": "Discipline means forcing yourself.",
            "ourPoint": "Discipline means removing friction.",
            "tension": "Effort is the wrong lever.",
        },
        "logicChain": {
            "because": "Willpower is limited",
            "so": "Relying on it fails",
            "moreover": "Environment works without effort",
        },
        "spreadElements": {
            "quotes": ["Make the right choice the easy one."],
            "cases": ["Phone out of the bedroom"],
            "data": [],
        },
        "audienceQuestions": [
            {"question": "What if I cannot change my environment?", "answerDirection": "Change the smallest thing first"},
        ],
    }


@pytest.fixture
def director_payload():
    return {
        "contentType": "opinion",
        "structure": {"name": "Hook-Proof-Close", "description": "Three beats", "parts": ["hook", "proof", "close"]},
        "clipPoints": [
            {"part": "hook", "purpose": "grab attention", "originalText": "It is not.", "duration": 5},
            {"part": "proof", "purpose": "evidence", "originalText": "my reading doubled", "duration": "12"},
        ],
        "rerecordSuggestions": [
            {"position": "after hook", "type": "voice-over", "content": "Here is why."},
        ],
        "preview": "A 40 second clip that flips the usual advice on discipline.",
    }


@pytest.fixture
def formulas_payload():
    return {
        "formulas": [
            {"name": "Contrast", "description": "Myth versus reality", "whyFit": "The topic flips a belief", "example": "Myth / Truth / Proof"},
            {"name": "Story arc", "description": "Setting to takeaway", "whyFit": "There is a personal case", "example": "Before / Change / After"},
            {"name": "Listicle", "description": "N parallel points", "whyFit": "Easy tips", "example": "1 / 2 / 3"},
        ]
    }


@pytest.fixture
def structure_payload():
    return {
        "structure": [
            {"section": "Opening", "subtitle": "The myth", "keyPoints": ["willpower"], "estimatedWords": 200},
            {"section": "Body", "subtitle": "The fix", "keyPoints": ["environment", "phone"], "estimatedWords": 600},
        ],
        "totalEstimatedWords": 800,
    }


@pytest.fixture
def titles_payload():
    return {
        "titles": [
            {"title": "Stop trying harder", "elements": ["contrast"], "hook": "Flips the advice"},
            {"title": "I doubled my reading in 30 days", "elements": ["numbers"], "hook": "Concrete result"},
        ]
    }


@pytest.fixture
def planning_payload():
    return {
        "newTopics": [
            {"title": "Why willpower runs out", "direction": "up", "directionLabel": "causes", "description": "Root cause", "potentialAngle": "Biology"},
            {"title": "Designing a workday", "direction": "parallel", "directionLabel": "related scenarios", "description": "Same idea at work"},
            {"title": "Kids and screens", "direction": "down", "directionLabel": "consequences", "description": "Where it leads"},
        ]
    }
