from docintel.pipeline.actions import DocumentActionService
from docintel.pipeline.exceptions import (
    AssetNotFoundError,
    EmptyUploadError,
    PipelineError,
    UnsupportedActionError,
    UnsupportedDocumentError,
)
from docintel.pipeline.factory import build_action_service, build_pipeline
from docintel.pipeline.models import ActionResult, AnalysisResponse
from docintel.pipeline.pipeline import DocumentPipeline

__all__ = [
    "ActionResult",
    "AnalysisResponse",
    "AssetNotFoundError",
    "DocumentActionService",
    "DocumentPipeline",
    "EmptyUploadError",
    "PipelineError",
    "UnsupportedActionError",
    "UnsupportedDocumentError",
    "build_action_service",
    "build_pipeline",
]
