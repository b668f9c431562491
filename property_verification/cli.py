"""CLI entry point for the verification service."""

import argparse
import asyncio
import contextlib
import mimetypes
import sys
from pathlib import Path

import uvicorn

from property_verification.core.database import get_session_factory, init_db
from property_verification.core.exceptions import VerificationServiceError
from property_verification.core.settings import get_settings
from property_verification.core.utils import setup_logging
from property_verification.enums import DocumentType
from property_verification.models import SubmissionResponse, UploadedFile, UserSession
from property_verification.services import (
    HistoryService,
    IntakeService,
    SimulatedProgress,
    SubmissionService,
    VerificationClient,
)

PROGRESS_INTERVAL = 0.3


def main() -> int:
    """
    Main CLI entry point.

    Returns:
        int: Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(
        description="Property Verification Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("server", help="Start the API server")
    server_parser.add_argument("--host", default=None, help="Server host")
    server_parser.add_argument("--port", type=int, default=None, help="Server port")
    server_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    # Verify command
    verify_parser = subparsers.add_parser("verify", help="Verify a document file")
    verify_parser.add_argument("path", type=Path, help="Certificate image or PDF")
    verify_parser.add_argument(
        "--type",
        dest="document_type",
        type=DocumentType,
        choices=list(DocumentType),
        default=DocumentType.SHM,
        help="Document type (default SHM)",
    )
    verify_parser.add_argument(
        "--user-id",
        default=None,
        help="Store the result in this user's history",
    )

    args = parser.parse_args()

    if args.command == "server":
        return run_server(args)
    elif args.command == "verify":
        return run_verify(args)
    else:
        parser.print_help()
        return 0


def run_server(args: argparse.Namespace) -> int:
    """
    Run the API server.

    Args:
        args (argparse.Namespace): Parsed command line arguments.

    Returns:
        int: Exit code (0 for success).
    """
    settings = get_settings()

    host = args.host or settings.api_server.host
    port = args.port or settings.api_server.port

    uvicorn.run(
        app="property_verification.api.server:app",
        host=host,
        port=port,
        reload=args.reload,
    )
    return 0


async def _report_progress(progress: SimulatedProgress, interval: float = PROGRESS_INTERVAL) -> None:
    while True:
        print(f"\rVerifying... {progress.value:3.0f}%", end="", file=sys.stderr, flush=True)
        await asyncio.sleep(interval)


async def submit_with_progress(
    service: SubmissionService,
    upload: UploadedFile,
    document_type: DocumentType,
    session: UserSession,
) -> SubmissionResponse:
    """
    Submit a document while printing simulated progress to stderr.

    Args:
        service (SubmissionService): Submission orchestrator.
        upload (UploadedFile): File read from disk.
        document_type (DocumentType): Document type tag.
        session (UserSession): Submitting user.

    Returns:
        SubmissionResponse: The submission result.
    """
    progress = SimulatedProgress()
    reporter = asyncio.create_task(_report_progress(progress))
    try:
        return await service.submit(upload, document_type, session, progress=progress)
    finally:
        reporter.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await reporter
        print(f"\rVerifying... {progress.value:3.0f}%", file=sys.stderr)


def run_verify(args: argparse.Namespace) -> int:
    """
    Verify one file and print the rendered result as JSON.

    Args:
        args (argparse.Namespace): Parsed command line arguments.

    Returns:
        int: 0 on success, 1 on any verification failure.
    """
    settings = get_settings()
    setup_logging(settings=settings.logging)

    path: Path = args.path
    if not path.is_file():
        print(f"File not found: {path}", file=sys.stderr)
        return 1

    content = path.read_bytes()
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    upload = UploadedFile(
        filename=path.name,
        content_type=content_type,
        size=len(content),
        content=content,
    )

    history = None
    db = None
    if args.user_id:
        init_db()
        db = get_session_factory()()
        history = HistoryService(db, limit=settings.verification.history_limit)

    service = SubmissionService(
        intake=IntakeService.from_settings(settings.verification),
        client=VerificationClient(settings.verification),
        history=history,
    )
    session = UserSession(user_id=args.user_id or "cli")

    try:
        response = asyncio.run(
            submit_with_progress(service, upload, args.document_type, session)
        )
    except VerificationServiceError as e:
        print(f"Verification failed: {e.message}", file=sys.stderr)
        return 1
    finally:
        if db is not None:
            db.close()

    print(response.model_dump_json(indent=2, exclude={"preview"}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
