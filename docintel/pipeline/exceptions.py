class PipelineError(Exception):
    """Base error for user-facing pipeline failures."""


class EmptyUploadError(PipelineError):
    """Raised when the uploaded file has no content."""


class UnsupportedDocumentError(PipelineError):
    """Raised when no extraction path exists for the document's mime type."""

    def __init__(self, mime_type: str) -> None:
        self.mime_type = mime_type
        super().__init__(f"Unsupported document type: {mime_type or 'unknown'}")


class AssetNotFoundError(PipelineError):
    """Raised when an asset does not exist or belongs to another owner."""

    def __init__(self, asset_id: str) -> None:
        self.asset_id = asset_id
        super().__init__(f"Document {asset_id} not found")


class UnsupportedActionError(PipelineError):
    def __init__(self, action_type: str) -> None:
        self.action_type = action_type
        super().__init__(f"Unsupported action type: {action_type}")
