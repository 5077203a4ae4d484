"""Request and response models for SDS validation."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ValidationRequest(BaseModel):
    document_id: UUID = Field(..., description="Persisted SDS document to validate")


class ValidationResponse(BaseModel):
    """Compliance report, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    osha_compliant: bool
    ghs_compliant: bool
