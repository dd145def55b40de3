"""Result Projector - display-time rendering of FileResults."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..models import FileResult, KeyValues, StructuredKeyValues, WorkflowState

NEW_PROMPT_LABEL = "Newly Created Prompt"
REUSED_PROMPT_LABEL = "Reused Prompt"


def render_key_values(key_values: KeyValues) -> str:
    """
    Render key-values for display.

    Text passes through unchanged; structured values become 2-space
    indented JSON in the order the server sent the keys.
    """
    if isinstance(key_values, StructuredKeyValues):
        return json.dumps(key_values.value, indent=2, ensure_ascii=False)
    return key_values.text


def prompt_label(result: FileResult) -> str:
    return NEW_PROMPT_LABEL if result.prompt_created else REUSED_PROMPT_LABEL


@dataclass(frozen=True)
class FileResultView:
    file_name: str
    extracted_text: str
    prompt: str
    prompt_label: str
    key_values_text: str


@dataclass(frozen=True)
class ResultsView:
    document_type: str
    files: List[FileResultView]


def project_file(result: FileResult) -> FileResultView:
    return FileResultView(
        file_name=result.file_name,
        extracted_text=result.extracted_text,
        prompt=result.prompt,
        prompt_label=prompt_label(result),
        key_values_text=render_key_values(result.key_values),
    )


def project_results(document_type: str, results: Sequence[FileResult]) -> ResultsView:
    return ResultsView(
        document_type=document_type.strip(),
        files=[project_file(result) for result in results],
    )


def project_state(state: WorkflowState) -> Optional[ResultsView]:
    """Build the results view for the current state, or None when there is nothing to show."""
    if state.results is None:
        return None
    return project_results(state.document_type, state.results)


def to_wire(result: FileResult) -> dict:
    """Server-shaped dict for a result, used for machine-readable output."""
    key_values = result.key_values
    return {
        "fileName": result.file_name,
        "extractedText": result.extracted_text,
        "prompt": result.prompt,
        "promptCreated": result.prompt_created,
        "keyValues": key_values.value if isinstance(key_values, StructuredKeyValues) else key_values.text,
    }
