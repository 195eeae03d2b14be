"""
Workflow stage constants and enumerations.

Stages form a strict linear order with one branch point:

    mining -> analysis -> {director | copywriter} -> planning -> completed

director and copywriter share a rank; either branch leads to planning.
"""

from enum import Enum


class ProjectStage(str, Enum):
    """Stage a project is currently in."""

    MINING = "mining"
    ANALYSIS = "analysis"
    DIRECTOR = "director"
    COPYWRITER = "copywriter"
    PLANNING = "planning"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        return STAGE_RANKS[self]

    def is_terminal(self) -> bool:
        return self is ProjectStage.COMPLETED

    def can_advance_to(self, target: "ProjectStage") -> bool:
        """Stages only move forward; the two branch stages may replace each other."""
        return target.rank >= self.rank


class OutputType(str, Enum):
    """Which branch produced an Output."""

    DIRECTOR = "director"
    COPYWRITER = "copywriter"


class Direction(str, Enum):
    """Branching direction of a planned new topic."""

    UP = "up"              # causes
    DOWN = "down"          # consequences
    PARALLEL = "parallel"  # related scenarios


STAGE_RANKS = {
    ProjectStage.MINING: 0,
    ProjectStage.ANALYSIS: 1,
    ProjectStage.DIRECTOR: 2,
    ProjectStage.COPYWRITER: 2,
    ProjectStage.PLANNING: 3,
    ProjectStage.COMPLETED: 4,
}

# Stages that have a digital-employee persona, in pipeline order
PIPELINE_STAGES = [
    ProjectStage.MINING,
    ProjectStage.ANALYSIS,
    ProjectStage.DIRECTOR,
    ProjectStage.COPYWRITER,
    ProjectStage.PLANNING,
]


__all__ = [
    "ProjectStage",
    "OutputType",
    "Direction",
    "STAGE_RANKS",
    "PIPELINE_STAGES",
]
