"""Project schemas for service input/output."""

from pydantic import BaseModel, Field, field_validator


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(min_length=1, max_length=200)
    unique_id: str | None = Field(default=None, min_length=1, max_length=64)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("unique_id")
    @classmethod
    def validate_unique_id(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project unique_id cannot be empty or whitespace only")
        return v


class ProjectRename(BaseModel):
    """Schema for renaming a project."""

    name: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v


class ProjectRead(BaseModel):
    """Snapshot of a project."""

    id: int
    unique_id: str
    name: str
    is_current: bool

    model_config = {"from_attributes": True}
