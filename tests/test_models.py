"""Tests for docprocessor models."""
import pytest
from pathlib import Path

from docprocessor.models import (
    FileHandle,
    FileResult,
    StructuredKeyValues,
    SubmissionOutcome,
    TextKeyValues,
    UploadConfig,
    WorkflowState,
    WorkflowStatus,
)


class TestFileHandle:
    def test_from_path_reads_bytes(self, tmp_path):
        path = tmp_path / "scan.png"
        path.write_bytes(b"png-bytes")
        handle = FileHandle.from_path(path)
        assert handle.name == "scan.png"
        assert handle.read() == b"png-bytes"

    def test_from_bytes(self):
        handle = FileHandle.from_bytes("a.jpg", b"jpeg")
        assert handle.read() == b"jpeg"
        assert handle.suffix == ".jpg"

    def test_missing_source_raises(self):
        with pytest.raises(ValueError):
            FileHandle(name="ghost.png").read()

    def test_immutable(self):
        handle = FileHandle.from_bytes("a.png", b"x")
        with pytest.raises(Exception):
            handle.name = "b.png"


class TestFileResult:
    def test_defaults(self):
        result = FileResult(file_name="a.png")
        assert result.extracted_text == ""
        assert result.prompt_created is False
        assert result.prompt_reused is True
        assert result.key_values == TextKeyValues("")

    def test_structured_key_values(self):
        result = FileResult(
            file_name="a.png",
            prompt_created=True,
            key_values=StructuredKeyValues({"total": "50"}),
        )
        assert result.key_values.value == {"total": "50"}
        assert result.prompt_reused is False


class TestSubmissionOutcome:
    def test_ok(self):
        outcome = SubmissionOutcome.ok([FileResult(file_name="a.png")])
        assert outcome.success is True
        assert outcome.status == WorkflowStatus.SUCCEEDED
        assert len(outcome.results) == 1
        assert outcome.error is None

    def test_fail(self):
        outcome = SubmissionOutcome.fail("OCR engine unavailable", "application")
        assert outcome.success is False
        assert outcome.status == WorkflowStatus.FAILED
        assert outcome.results == ()
        assert outcome.error_kind == "application"

    def test_busy(self):
        outcome = SubmissionOutcome.busy()
        assert outcome.success is False
        assert outcome.error_kind == "busy"


class TestWorkflowState:
    def test_initial_state(self):
        state = WorkflowState()
        assert state.status == WorkflowStatus.IDLE
        assert state.is_submitting is False
        assert state.results is None
        assert state.last_error is None
        assert state.selected_files == []

    def test_begin_submission_clears_previous_outcome(self):
        state = WorkflowState()
        state.fail("boom")
        state.begin_submission()
        assert state.is_submitting is True
        assert state.last_error is None
        assert state.results is None

    def test_succeed_and_fail_are_exclusive(self):
        state = WorkflowState()
        state.fail("boom")
        state.succeed([FileResult(file_name="a.png")])
        assert state.last_error is None
        assert state.results and state.results[0].file_name == "a.png"

        state.fail("again")
        assert state.results is None
        assert state.last_error == "again"

    def test_invalidate_returns_to_idle(self):
        state = WorkflowState()
        state.succeed([FileResult(file_name="a.png")])
        state.invalidate()
        assert state.status == WorkflowStatus.IDLE
        assert state.results is None
        assert state.last_error is None

    def test_invalidate_keeps_submitting(self):
        state = WorkflowState()
        state.begin_submission()
        state.invalidate()
        assert state.is_submitting is True


class TestUploadConfig:
    def test_default_config(self):
        config = UploadConfig()
        assert config.endpoint_url == "http://localhost:5000/api/upload"
        assert config.timeout == 180
        assert config.files_field == "files"
        assert config.document_type_field == "documentType"

    def test_endpoint_url_joins_slashes(self):
        config = UploadConfig(api_url="http://proc:8080/", upload_path="api/upload")
        assert config.endpoint_url == "http://proc:8080/api/upload"

    def test_accepted_extensions(self):
        config = UploadConfig()
        assert config.is_accepted("a.png") is True
        assert config.is_accepted("b.TIF") is True
        assert config.is_accepted("c.tiff") is True
        assert config.is_accepted("d.jpeg") is True
        assert config.is_accepted(str(Path("dir") / "e.jpg")) is True
        assert config.is_accepted("notes.pdf") is False
