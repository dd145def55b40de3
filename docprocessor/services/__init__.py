"""Services for docprocessor module."""
from .api_client import HTTPProcessingClient
from .request_builder import MultipartPayload, RequestBuilder
from .response_mapper import ResponseMapper
from .projector import (
    FileResultView,
    ResultsView,
    project_results,
    project_state,
    render_key_values,
)

__all__ = [
    "HTTPProcessingClient",
    "MultipartPayload",
    "RequestBuilder",
    "ResponseMapper",
    "FileResultView",
    "ResultsView",
    "project_results",
    "project_state",
    "render_key_values",
]
