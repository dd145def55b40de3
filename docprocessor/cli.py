"""Command line interface for docprocessor package."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.logging import RichHandler

from .cli_display import (
    SubmissionStatusDisplay,
    render_configuration_summary,
    render_error,
    render_results,
)
from .models import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS, DEFAULT_UPLOAD_PATH, UploadConfig
from .orchestrator import FileCollector, UploadOrchestrator
from .services.projector import to_wire
from .utils.events import SUBMIT_FAILED, SUBMIT_STARTED, SUBMIT_SUCCEEDED


class CLIError(RuntimeError):
    """Raised when CLI validation/execution fails."""


def _setup_logging(debug: bool, silent: bool, log_level: Optional[str]) -> str:
    """
    Configure logging.

    Default behavior is silent unless --debug, --log-level or LOG_LEVEL is
    provided. Returns a string describing effective mode.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    logging.disable(logging.NOTSET)

    env_level = os.getenv("LOG_LEVEL")
    if silent or (not debug and not log_level and not env_level):
        logging.disable(logging.CRITICAL)
        root_logger.setLevel(logging.CRITICAL + 1)
        return "silent"

    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, (log_level or env_level or "INFO").upper(), logging.INFO)

    handler = RichHandler(
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return logging.getLevelName(level)


def _strip_optional_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _load_env_file(path: Path, override: bool = False) -> None:
    if not path.exists():
        raise CLIError(f"env file not found: {path}")
    if not path.is_file():
        raise CLIError(f"env path is not a file: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"could not read env file {path}: {exc}") from exc

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        value = _strip_optional_quotes(value.strip())
        if override or key not in os.environ:
            os.environ[key] = value


def _resolve_default_env_file() -> Optional[Path]:
    default_env = Path(".env")
    return default_env if default_env.exists() and default_env.is_file() else None


def _resolve_timeout(value: Optional[float]) -> float:
    if value is not None:
        timeout = value
    else:
        env_timeout = os.getenv("DOC_PROCESSOR_TIMEOUT")
        if not env_timeout:
            return DEFAULT_TIMEOUT_SECONDS
        try:
            timeout = float(env_timeout)
        except ValueError as exc:
            raise CLIError(f"DOC_PROCESSOR_TIMEOUT is not a number: {env_timeout!r}") from exc
    if timeout <= 0:
        raise CLIError(f"timeout must be positive, got {timeout}")
    return timeout


def _build_config(api_url: Optional[str], timeout: Optional[float]) -> UploadConfig:
    return UploadConfig(
        api_url=api_url or os.getenv("DOC_PROCESSOR_API_URL") or DEFAULT_API_URL,
        upload_path=os.getenv("DOC_PROCESSOR_UPLOAD_PATH") or DEFAULT_UPLOAD_PATH,
        timeout=_resolve_timeout(timeout),
    )


async def _run_submission(
    config: UploadConfig,
    document_type: str,
    sources: List[Path],
    as_json: bool,
) -> int:
    handles = FileCollector(config).collect(sources)

    async with UploadOrchestrator(config=config) as orchestrator:
        if not as_json:
            display = SubmissionStatusDisplay()
            orchestrator.on(SUBMIT_STARTED, display.on_submit_started)
            orchestrator.on(SUBMIT_SUCCEEDED, display.on_submit_succeeded)
            orchestrator.on(SUBMIT_FAILED, display.on_submit_failed)

        orchestrator.set_document_type(document_type)
        orchestrator.set_files(handles)
        outcome = await orchestrator.submit()

        if as_json:
            if outcome.success:
                print(json.dumps(
                    {"success": True, "files": [to_wire(result) for result in outcome.results]},
                    indent=2,
                    ensure_ascii=False,
                ))
            else:
                print(json.dumps({"success": False, "error": outcome.error}, ensure_ascii=False))
            return 0 if outcome.success else 1

        if not outcome.success:
            render_error(outcome.error or "")
            return 1

        view = orchestrator.view()
        if view is not None:
            render_results(view)
        return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docproc",
        description="Upload images for OCR, prompt generation and key-value extraction.",
    )
    parser.add_argument(
        "sources",
        nargs="*",
        type=Path,
        help="Image files or folders (.png, .tif/.tiff, .jpg/.jpeg)",
    )
    parser.add_argument(
        "-t",
        "--document-type",
        default="",
        help="Document type used to save/reuse the extraction prompt (example: Invoice)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help=f"Processing API base URL (default from DOC_PROCESSOR_API_URL or {DEFAULT_API_URL})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help=(
            "Seconds to wait for the endpoint (default from DOC_PROCESSOR_TIMEOUT "
            f"or {int(DEFAULT_TIMEOUT_SECONDS)})"
        ),
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load environment variables from this .env file",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logs")
    parser.add_argument("--silent", action="store_true", help="Only print errors")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Explicit log level (DEBUG/INFO/WARNING/ERROR)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="docproc (from docprocessor)",
    )
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    used_env_file = args.env_file or _resolve_default_env_file()
    if used_env_file is not None:
        try:
            _load_env_file(Path(used_env_file))
        except CLIError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    effective_log_mode = _setup_logging(
        debug=args.debug,
        silent=args.silent,
        log_level=args.log_level,
    )

    if not args.sources and not args.document_type:
        parser.print_help()
        return 0

    sources = [Path(source).expanduser() for source in args.sources]
    missing = [source for source in sources if not source.exists()]
    if missing:
        print(f"ERROR: source does not exist: {missing[0]}", file=sys.stderr)
        return 1

    try:
        config = _build_config(args.api_url, args.timeout)
    except CLIError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if not args.json:
        render_configuration_summary(
            {
                "Document Type": args.document_type.strip() or "(missing)",
                "Sources": ", ".join(str(source) for source in sources) or "(none)",
                "Endpoint": config.endpoint_url,
                "Timeout": f"{config.timeout:g}s",
                "Env File": str(used_env_file) if used_env_file else "-",
                "Logging": effective_log_mode,
            }
        )

    try:
        return asyncio.run(
            _run_submission(
                config=config,
                document_type=args.document_type,
                sources=sources,
                as_json=args.json,
            )
        )
    except KeyboardInterrupt:
        print("Cancelled.", file=sys.stderr)
        return 130


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
