"""
Project stage tracker.

Records which stage a project has reached. Stages only move forward; the
director and copywriter branches share a rank and may replace each other.
A request that would move a project backwards (e.g. re-running analysis
after the director plan exists) leaves the stage untouched.
"""

from content_factory.core import get_logger
from content_factory.models.entities import Project
from content_factory.models.status import ProjectStage
from content_factory.services.storage import WorkflowRepository

logger = get_logger(__name__, component="stage_tracker")


class StageTracker:
    def __init__(self, repository: WorkflowRepository):
        self.repository = repository

    def advance(self, project: Project, target: ProjectStage) -> Project:
        current = project.current_stage
        if not current.can_advance_to(target):
            logger.info(
                "Stage not advanced",
                extra={"current_stage": current.value, "requested_stage": target.value},
            )
            return project

        updated = self.repository.update_project_stage(project.id, target)
        if updated is None:
            # Deleted between resolve and completion
            logger.warning("Project vanished before stage update", extra={"requested_stage": target.value})
            return project

        if current != target:
            logger.info(
                "Stage advanced",
                extra={"from_stage": current.value, "to_stage": target.value},
            )
        return updated
