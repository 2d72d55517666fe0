"""
Pydantic schemas returned to gateway callers.
"""
from pydantic import BaseModel, Field


class UploadResult(BaseModel):
    """
    Record of a successful upload.
    
    The gateway keeps no copy; the caller persists it (e.g. in a database
    row). Serialize with ``model_dump(by_alias=True)`` for the wire names.
    """
    key: str = Field(..., alias="file_name", description="Object key in the bucket")
    content_type: str = Field(..., description="MIME type the object was stored with")
    url: str = Field(..., alias="file_url", description="Permanent public URL")
    size_kb: int = Field(..., alias="size", description="Declared size in KB (half-up rounded)")
    
    class Config:
        frozen = True
        populate_by_name = True  # Allow both alias and original name
        json_schema_extra = {
            "example": {
                "file_name": "photo-3b241101-e2bb-4255-8caf-4136c566a962_1700000000.png",
                "content_type": "image/png",
                "file_url": "https://play.min.io/media/photo-3b241101-e2bb-4255-8caf-4136c566a962_1700000000.png",
                "size": 12
            }
        }
