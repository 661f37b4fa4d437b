from .document import (
    DocumentDeleteResponse,
    DocumentGetResponse,
    DocumentHighlightResponse,
    DocumentListResponse,
    DocumentSearchResponse,
    DocumentUploadResponse,
)

__all__ = [
    "DocumentUploadResponse",
    "DocumentListResponse",
    "DocumentGetResponse",
    "DocumentSearchResponse",
    "DocumentHighlightResponse",
    "DocumentDeleteResponse",
]
