"""Orchestrator package - drives the submission workflow."""
from .core import UploadOrchestrator
from .file_collector import FileCollector

__all__ = ["UploadOrchestrator", "FileCollector"]
