from typing import Literal

from pydantic import BaseModel, Field


class StoredFile(BaseModel):
    """A file in the upload directory, as shown in the listing."""
    name: str = Field(..., description="On-disk filename (<timestamp>-<original name>)")
    url: str = Field(..., description="Public path of the raw file")
    mime: str = Field("application/octet-stream", description="Type derived from the extension")
    category: Literal["image", "text", "other"] = Field("other", description="Preview category")
    size: int = Field(0, description="Size in bytes")
    has_password: bool = Field(False, description="Whether deleting requires a password")
