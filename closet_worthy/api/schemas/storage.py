"""
Storage schemas for photo upload responses
"""
from pydantic import BaseModel, Field


class PhotoUploadResponse(BaseModel):
    """
    Response schema for photo upload endpoint

    Attributes:
        urls: Public URLs of the uploaded photos, in upload order
        message: Success message
    """
    urls: list[str] = Field(..., description="Public URLs of the uploaded photos")
    message: str = Field(default="Photos uploaded successfully", description="Upload status message")

    model_config = {"json_schema_extra": {"example": {
        "urls": ["https://closet-photos.s3.ca-central-1.amazonaws.com/closet-photos/20250101_abc12345.jpg"],
        "message": "Photos uploaded successfully",
    }}}
