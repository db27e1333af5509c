"""Pydantic models for delete picture request/response."""

from pydantic import BaseModel, ConfigDict, Field


class DeletePictureRequest(BaseModel):
    """Validation model for delete picture request."""

    model_config = ConfigDict(str_strip_whitespace=True)
    picture_id: str = Field(
        ...,
        min_length=1,
        description="Picture ID to delete",
    )


class DeletePictureResponse(BaseModel):
    """Response model for successful picture deletion."""

    picture_id: str = Field(..., description="Deleted picture ID")
    message: str = Field(..., description="Success message")
    deleted_at: str = Field(..., description="Deletion timestamp")
