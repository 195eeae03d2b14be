"""
Workflow repository - persistence for projects and their stage artifacts.

Implements the Repository pattern so stage handlers depend on an interface
rather than a storage engine. The handle is constructed explicitly, opened
at process start and closed at shutdown; the application injects it into
every use case.

Classes:
    WorkflowRepository: Abstract interface for workflow data access
    FileBasedWorkflowRepository: One JSON document per record on disk
"""

from __future__ import annotations

import json
import os
import re
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set, TypeVar

from pydantic import ValidationError

from content_factory.config import DATA_DIR
from content_factory.core import InfrastructureError, get_logger
from content_factory.models.entities import (
    Analysis,
    NewTopic,
    Output,
    OutputAdapter,
    Project,
    Topic,
    utcnow,
)
from content_factory.models.status import OutputType, ProjectStage

logger = get_logger(__name__, component="repository")

RecordT = TypeVar("RecordT")


class WorkflowRepository(ABC):
    """
    Abstract repository for workflow data access.

    Every record is a validated pydantic model. Lookups by an unknown or
    malformed id return None; callers decide whether that is a 404.
    """

    # === Lifecycle ===

    @abstractmethod
    def open(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass

    # === Projects ===

    @abstractmethod
    def create_project(self, project: Project) -> Project:
        pass

    @abstractmethod
    def get_project(self, project_id: str) -> Optional[Project]:
        pass

    @abstractmethod
    def list_projects(self, owner: str, limit: int = 20) -> List[Project]:
        """Owner's projects, most recently updated first."""

    @abstractmethod
    def update_project_stage(self, project_id: str, stage: ProjectStage) -> Optional[Project]:
        pass

    @abstractmethod
    def delete_project(self, project_id: str) -> bool:
        """Delete a project and every record descending from it."""

    # === Topics ===

    @abstractmethod
    def create_topics(self, topics: List[Topic]) -> List[Topic]:
        pass

    @abstractmethod
    def get_topic(self, topic_id: str) -> Optional[Topic]:
        pass

    @abstractmethod
    def list_topics(self, project_id: str) -> List[Topic]:
        """Project's topics, highest emotion level first."""

    @abstractmethod
    def select_topic(self, topic_id: str) -> Optional[Topic]:
        pass

    # === Analyses ===

    @abstractmethod
    def create_analysis(self, analysis: Analysis) -> Analysis:
        pass

    @abstractmethod
    def get_analysis(self, analysis_id: str) -> Optional[Analysis]:
        pass

    @abstractmethod
    def list_analyses(self, topic_id: str) -> List[Analysis]:
        pass

    # === Outputs ===

    @abstractmethod
    def create_output(self, output: Output) -> Output:
        pass

    @abstractmethod
    def update_output(self, output: Output) -> Output:
        pass

    @abstractmethod
    def get_output(self, output_id: str) -> Optional[Output]:
        pass

    @abstractmethod
    def list_outputs(self, analysis_id: str) -> List[Output]:
        pass

    @abstractmethod
    def find_output(self, analysis_id: str, output_type: OutputType) -> Optional[Output]:
        """Most recent output of a type for an analysis."""

    # === New topics ===

    @abstractmethod
    def create_new_topics(self, new_topics: List[NewTopic]) -> List[NewTopic]:
        pass

    @abstractmethod
    def get_new_topic(self, new_topic_id: str) -> Optional[NewTopic]:
        pass

    @abstractmethod
    def list_new_topics(self, output_id: str) -> List[NewTopic]:
        pass

    @abstractmethod
    def mark_new_topic_used(self, new_topic_id: str) -> Optional[NewTopic]:
        pass


class FileBasedWorkflowRepository(WorkflowRepository):
    """File-based repository: `<base_dir>/<collection>/<id>.json`.

    Writes go through a temp file and an atomic replace, serialized by a
    re-entrant lock. There is no cross-record transaction; concurrent
    updates of the same record are last-write-wins.

    Each record is indexed in memory under its parent (projects under their
    owner) when the repository is opened, so listing children reads only
    their own files. The handle must be the only writer of its directory.
    """
    _SAFE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

    PROJECTS = "projects"
    TOPICS = "topics"
    ANALYSES = "analyses"
    OUTPUTS = "outputs"
    NEW_TOPICS = "new_topics"
    COLLECTIONS = (PROJECTS, TOPICS, ANALYSES, OUTPUTS, NEW_TOPICS)

    # collection -> (loader, attribute holding the parent key)
    _PARENT_KEYS = {
        PROJECTS: (Project.model_validate_json, "owner"),
        TOPICS: (Topic.model_validate_json, "project_id"),
        ANALYSES: (Analysis.model_validate_json, "topic_id"),
        OUTPUTS: (OutputAdapter.validate_json, "analysis_id"),
        NEW_TOPICS: (NewTopic.model_validate_json, "output_id"),
    }

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir or DATA_DIR).resolve()
        self._lock = threading.RLock()
        self._open = False
        self._children: Dict[str, Dict[str, Set[str]]] = {}

    # === Lifecycle ===

    def open(self) -> None:
        with self._lock:
            try:
                for collection in self.COLLECTIONS:
                    (self.base_dir / collection).mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise InfrastructureError(f"Cannot create data directory {self.base_dir}: {e}") from e
            self._build_index()
            self._open = True
            logger.info(
                "Repository opened",
                extra={"data_dir": str(self.base_dir), "projects": self._count(self.PROJECTS)},
            )

    def close(self) -> None:
        with self._lock:
            if self._open:
                logger.info("Repository closed", extra={"data_dir": str(self.base_dir)})
            self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def __enter__(self) -> "FileBasedWorkflowRepository":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # === Low-level document access ===

    def _ensure_open(self) -> None:
        if not self._open:
            raise RuntimeError("Repository is closed")

    def _build_target(self, collection: str, record_id: str) -> Optional[Path]:
        safe_id = str(record_id or "").strip()
        if not safe_id or not self._SAFE_ID_PATTERN.fullmatch(safe_id):
            return None

        collection_dir = self.base_dir / collection
        target = (collection_dir / f"{safe_id}.json").resolve()
        if target.parent != collection_dir:
            return None
        return target

    def _write(self, collection: str, record_id: str, payload: str) -> None:
        self._ensure_open()
        target = self._build_target(collection, record_id)
        if not target:
            raise ValueError(f"Unsafe record id: {record_id!r}")

        tmp = target.with_suffix(f".{os.getpid()}.tmp")
        with self._lock:
            try:
                with open(tmp, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp, target)
            except OSError as e:
                tmp.unlink(missing_ok=True)
                raise InfrastructureError(f"Failed to write {collection}/{record_id}: {e}") from e

    def _load(self, path: Path, loader: Callable[[str], RecordT]) -> RecordT:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return loader(f.read())
        except (OSError, ValidationError, json.JSONDecodeError) as e:
            logger.error("Unreadable record", extra={"path": str(path), "error": str(e)})
            raise InfrastructureError(f"Corrupt record {path.name}") from e

    def _read(self, collection: str, record_id: str, loader: Callable[[str], RecordT]) -> Optional[RecordT]:
        self._ensure_open()
        target = self._build_target(collection, record_id)
        if not target or not target.is_file():
            return None
        with self._lock:
            return self._load(target, loader)

    def _delete(self, collection: str, record_id: str, parent_key: str) -> bool:
        target = self._build_target(collection, record_id)
        if not target or not target.is_file():
            return False
        try:
            target.unlink()
        except OSError as e:
            raise InfrastructureError(f"Failed to delete {collection}/{record_id}: {e}") from e
        self._children[collection].get(parent_key, set()).discard(record_id)
        return True

    # === Parent index ===

    def _build_index(self) -> None:
        children: Dict[str, Dict[str, Set[str]]] = {collection: {} for collection in self._PARENT_KEYS}
        for collection, (loader, parent_attr) in self._PARENT_KEYS.items():
            for path in (self.base_dir / collection).glob("*.json"):
                record = self._load(path, loader)
                children[collection].setdefault(getattr(record, parent_attr), set()).add(record.id)
        self._children = children

    def _index(self, collection: str, record) -> None:
        parent_attr = self._PARENT_KEYS[collection][1]
        self._children[collection].setdefault(getattr(record, parent_attr), set()).add(record.id)

    def _count(self, collection: str) -> int:
        return sum(len(ids) for ids in self._children[collection].values())

    def _list_children(self, collection: str, parent_key: str) -> List:
        self._ensure_open()
        loader = self._PARENT_KEYS[collection][0]
        with self._lock:
            ids = sorted(self._children[collection].get(parent_key, ()))
            records = [self._read(collection, record_id, loader) for record_id in ids]
        return [record for record in records if record is not None]

    # === Projects ===

    def create_project(self, project: Project) -> Project:
        with self._lock:
            self._write(self.PROJECTS, project.id, project.model_dump_json(by_alias=True, indent=2))
            self._index(self.PROJECTS, project)
        return project

    def get_project(self, project_id: str) -> Optional[Project]:
        return self._read(self.PROJECTS, project_id, Project.model_validate_json)

    def list_projects(self, owner: str, limit: int = 20) -> List[Project]:
        projects: List[Project] = self._list_children(self.PROJECTS, owner)
        projects.sort(key=lambda p: p.updated_at, reverse=True)
        return projects[:limit]

    def update_project_stage(self, project_id: str, stage: ProjectStage) -> Optional[Project]:
        with self._lock:
            project = self.get_project(project_id)
            if project is None:
                return None
            updated = project.model_copy(update={"current_stage": stage, "updated_at": utcnow()})
            return self.create_project(updated)

    def delete_project(self, project_id: str) -> bool:
        with self._lock:
            project = self.get_project(project_id)
            if project is None:
                return False
            for topic in self.list_topics(project_id):
                for analysis in self.list_analyses(topic.id):
                    for output in self.list_outputs(analysis.id):
                        for new_topic in self.list_new_topics(output.id):
                            self._delete(self.NEW_TOPICS, new_topic.id, output.id)
                        self._delete(self.OUTPUTS, output.id, analysis.id)
                    self._delete(self.ANALYSES, analysis.id, topic.id)
                self._delete(self.TOPICS, topic.id, project_id)
            deleted = self._delete(self.PROJECTS, project_id, project.owner)
            logger.info("Project deleted", extra={"deleted_project": project_id})
            return deleted

    # === Topics ===

    def create_topics(self, topics: List[Topic]) -> List[Topic]:
        with self._lock:
            for topic in topics:
                self._write(self.TOPICS, topic.id, topic.model_dump_json(by_alias=True, indent=2))
                self._index(self.TOPICS, topic)
        return topics

    def get_topic(self, topic_id: str) -> Optional[Topic]:
        return self._read(self.TOPICS, topic_id, Topic.model_validate_json)

    def list_topics(self, project_id: str) -> List[Topic]:
        topics: List[Topic] = self._list_children(self.TOPICS, project_id)
        topics.sort(key=lambda t: (-t.emotion_level, t.created_at))
        return topics

    def select_topic(self, topic_id: str) -> Optional[Topic]:
        with self._lock:
            topic = self.get_topic(topic_id)
            if topic is None:
                return None
            selected = topic.model_copy(update={"is_selected": True})
            self._write(self.TOPICS, selected.id, selected.model_dump_json(by_alias=True, indent=2))
            return selected

    # === Analyses ===

    def create_analysis(self, analysis: Analysis) -> Analysis:
        with self._lock:
            self._write(self.ANALYSES, analysis.id, analysis.model_dump_json(by_alias=True, indent=2))
            self._index(self.ANALYSES, analysis)
        return analysis

    def get_analysis(self, analysis_id: str) -> Optional[Analysis]:
        return self._read(self.ANALYSES, analysis_id, Analysis.model_validate_json)

    def list_analyses(self, topic_id: str) -> List[Analysis]:
        analyses: List[Analysis] = self._list_children(self.ANALYSES, topic_id)
        analyses.sort(key=lambda a: a.created_at)
        return analyses

    # === Outputs ===

    @staticmethod
    def _dump_output(output: Output) -> str:
        return OutputAdapter.dump_json(output, by_alias=True, indent=2).decode("utf-8")

    def create_output(self, output: Output) -> Output:
        with self._lock:
            self._write(self.OUTPUTS, output.id, self._dump_output(output))
            self._index(self.OUTPUTS, output)
        return output

    def update_output(self, output: Output) -> Output:
        # Re-validate so a mutated copywriter content cannot be stored malformed
        output = OutputAdapter.validate_python(output.model_dump())
        with self._lock:
            if self.get_output(output.id) is None:
                raise ValueError(f"Output {output.id} does not exist")
            self._write(self.OUTPUTS, output.id, self._dump_output(output))
        return output

    def get_output(self, output_id: str) -> Optional[Output]:
        return self._read(self.OUTPUTS, output_id, OutputAdapter.validate_json)

    def list_outputs(self, analysis_id: str) -> List[Output]:
        outputs: List[Output] = self._list_children(self.OUTPUTS, analysis_id)
        outputs.sort(key=lambda o: o.created_at)
        return outputs

    def find_output(self, analysis_id: str, output_type: OutputType) -> Optional[Output]:
        matches = [o for o in self.list_outputs(analysis_id) if o.type == OutputType(output_type).value]
        return matches[-1] if matches else None

    # === New topics ===

    def create_new_topics(self, new_topics: List[NewTopic]) -> List[NewTopic]:
        with self._lock:
            for new_topic in new_topics:
                self._write(self.NEW_TOPICS, new_topic.id, new_topic.model_dump_json(by_alias=True, indent=2))
                self._index(self.NEW_TOPICS, new_topic)
        return new_topics

    def get_new_topic(self, new_topic_id: str) -> Optional[NewTopic]:
        return self._read(self.NEW_TOPICS, new_topic_id, NewTopic.model_validate_json)

    def list_new_topics(self, output_id: str) -> List[NewTopic]:
        new_topics: List[NewTopic] = self._list_children(self.NEW_TOPICS, output_id)
        new_topics.sort(key=lambda n: n.created_at)
        return new_topics

    def mark_new_topic_used(self, new_topic_id: str) -> Optional[NewTopic]:
        with self._lock:
            new_topic = self.get_new_topic(new_topic_id)
            if new_topic is None:
                return None
            used = new_topic.model_copy(update={"is_used": True})
            self._write(self.NEW_TOPICS, used.id, used.model_dump_json(by_alias=True, indent=2))
            return used
