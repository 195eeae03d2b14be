"""
Schema validation of parsed model responses.
"""

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from content_factory.core import ResponseSchemaError

ArtifactT = TypeVar("ArtifactT", bound=BaseModel)


def validate_artifact(payload: Any, schema: Type[ArtifactT]) -> ArtifactT:
    """Validate parsed JSON against a stage response schema.

    Out-of-range values (e.g. emotionLevel 6) fail outright; nothing is
    clamped or corrected.

    Raises:
        ResponseSchemaError: With the pydantic error list attached
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_input=False)
        raise ResponseSchemaError(
            f"Model response does not match {schema.__name__}",
            errors=errors,
        ) from e
