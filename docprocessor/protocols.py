"""
Protocols (Interfaces) for Dependency Inversion.

The orchestrator depends on these, not on httpx, so it can be driven by
fakes in tests.
"""
from typing import List, Protocol, runtime_checkable

from .models import FileResult, SubmissionRequest


@runtime_checkable
class IProcessingClient(Protocol):
    """Interface for the remote processing endpoint."""

    async def submit(self, request: SubmissionRequest) -> List[FileResult]:
        """
        Send one submission and return the per-file results.

        Raises ApplicationError or TransportError on failure.
        """
        ...
