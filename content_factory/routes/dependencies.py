"""
FastAPI dependencies resolving the per-application service handles.
"""

from fastapi import Request

from ..core import InfrastructureError
from ..services.llm import LLMProvider
from ..services.storage import WorkflowRepository


def get_repository(request: Request) -> WorkflowRepository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None or not repository.is_open:
        raise InfrastructureError("Storage is not available")
    return repository


def get_llm(request: Request) -> LLMProvider:
    provider = getattr(request.app.state, "llm_provider", None)
    if provider is None:
        raise InfrastructureError("No LLM provider is configured")
    return provider
