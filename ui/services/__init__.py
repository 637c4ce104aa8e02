"""UI services module."""
from .analysis_service import AnalysisResult, AnalysisRunner, AnalysisService
from .session_manager import SessionManager
from .upload_service import UploadService

__all__ = ["AnalysisResult", "AnalysisRunner", "AnalysisService", "SessionManager", "UploadService"]
