"""Analyzer service access."""
from .client import AnalyzerClient, analyzer, encode_multipart, error_message

__all__ = ["AnalyzerClient", "analyzer", "encode_multipart", "error_message"]
