"""Pytest configuration and fixtures."""

from collections.abc import Generator, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import property_verification.models.records  # noqa: F401
from property_verification.api.dependencies import clear_dependency_caches
from property_verification.api.server import app, limiter
from property_verification.core.database import Base, get_db, reset_engine
from property_verification.core.settings import AppSettings, reload_settings
from property_verification.core.settings.app_settings import (
    APIServerSettings,
    LoggingSettings,
    VerificationSettings,
)
from property_verification.enums import DocumentType, UserRole, VerificationStatus
from property_verification.models import UploadedFile, UserSession, VerificationResult
from property_verification.models.records import PropertyRecord


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """
    Reset settings and cached clients before each test.

    Demo-mode delays are zeroed so mock submissions return immediately.
    """
    monkeypatch.delenv("PVS_VERIFICATION__BASE_URL", raising=False)
    monkeypatch.delenv("PVS_API_SERVER__API_KEY", raising=False)
    monkeypatch.delenv("PVS_RATE_LIMIT__FUNCTION_URL", raising=False)
    monkeypatch.setenv("PVS_VERIFICATION__MOCK_DELAY_MIN", "0")
    monkeypatch.setenv("PVS_VERIFICATION__MOCK_DELAY_MAX", "0")
    monkeypatch.setenv("PVS_DATABASE__URL", "sqlite:///:memory:")
    reload_settings()
    clear_dependency_caches()
    reset_engine()
    limiter.reset()
    yield
    clear_dependency_caches()
    reset_engine()


@pytest.fixture
def mock_settings() -> AppSettings:
    """
    Create mock application settings for testing.

    Returns:
        AppSettings: Mock settings instance.
    """
    return AppSettings(
        api_server=APIServerSettings(
            host="127.0.0.1",
            port=8000,
            workers=1,
            cors_allow_origins=["http://localhost:3000"],
            rate_limit="100/minute",
        ),
        verification=VerificationSettings(
            base_url="https://verify.example.com",
            mock_delay_min=0,
            mock_delay_max=0,
        ),
        logging=LoggingSettings(
            log_level="DEBUG",
            log_format="%(message)s",
        ),
    )


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    """
    Create an in-memory database shared across threads.

    Yields:
        Engine: Engine with all tables created.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(db_engine: Engine) -> Iterator[Session]:
    """
    Create a database session for one test.

    Yields:
        Session: Session bound to the in-memory engine.
    """
    session = sessionmaker(bind=db_engine, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture
def test_client(db: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the database dependency overridden.

    Args:
        db (Session): In-memory database session.

    Yields:
        TestClient: FastAPI test client.
    """

    def override_get_db() -> Iterator[Session]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers() -> dict[str, str]:
    """Auth proxy headers for a regular user."""
    return {"X-User-Id": "user-1", "X-User-Role": "user"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Auth proxy headers for an admin."""
    return {"X-User-Id": "admin-1", "X-User-Role": "admin"}


@pytest.fixture
def user_session() -> UserSession:
    """Signed-in regular user."""
    return UserSession(user_id="user-1", role=UserRole.USER)


@pytest.fixture
def jpeg_file() -> UploadedFile:
    """
    Create a small JPEG upload.

    Returns:
        UploadedFile: 1.2MB JPEG.
    """
    content = b"\xff\xd8\xff" + b"\x00" * (1_200_000 - 3)
    return UploadedFile(
        filename="cert.jpg",
        content_type="image/jpeg",
        size=len(content),
        content=content,
    )


@pytest.fixture
def pdf_file() -> UploadedFile:
    """
    Create a small PDF upload.

    Returns:
        UploadedFile: PDF document.
    """
    content = b"%PDF-1.4\n%test\n"
    return UploadedFile(
        filename="cert.pdf",
        content_type="application/pdf",
        size=len(content),
        content=content,
    )


@pytest.fixture
def result_payload() -> dict:
    """
    Verification service response for an SHM certificate.

    Returns:
        dict: JSON body as returned by the service.
    """
    return {
        "success": True,
        "verification_id": "VER-20250101-AB12CD34",
        "verification_status": "VERIFIED",
        "risk_assessment": {
            "total_score": 85,
            "risk_level": "LOW",
            "color": "green",
            "recommendation": "Dokumen terlihat valid. Tetap lakukan verifikasi fisik.",
            "breakdown": {
                "ocr_quality": {"score": 18, "max": 20, "detail": "OCR confidence: 92%"},
                "data_extraction": {"score": 22, "max": 25, "detail": "Passed 5/6 checks"},
            },
        },
        "extracted_data": {
            "owner_name": "BUDI SANTOSO",
            "certificate_number": "SHM/2024/12345",
            "address": "Jl. Merdeka No. 123",
            "land_area": "250 m²",
        },
        "validation_details": {
            "is_valid": True,
            "checks_passed": ["owner_name_valid"],
            "errors": [],
            "warnings": [{"field": "format", "message": "Blurry stamp"}],
            "critical_errors": [],
            "total_checks": 6,
            "passed_checks": 5,
        },
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def verified_result(result_payload: dict) -> VerificationResult:
    """Parsed VERIFIED result."""
    return VerificationResult.model_validate(result_payload)


@pytest.fixture
def needs_review_result(result_payload: dict) -> VerificationResult:
    """Parsed NEEDS_REVIEW result with a MEDIUM risk level."""
    payload = dict(result_payload)
    payload["verification_id"] = "VER-20250102-ZZ99YY88"
    payload["verification_status"] = VerificationStatus.NEEDS_REVIEW
    payload["risk_assessment"] = {"total_score": 62, "risk_level": "MEDIUM", "color": "yellow"}
    return VerificationResult.model_validate(payload)


@pytest.fixture
def pending_property(db: Session) -> PropertyRecord:
    """
    Create a property listing awaiting review.

    Returns:
        PropertyRecord: Committed listing.
    """
    listing = PropertyRecord(
        owner_id="user-1",
        title="Rumah Menteng",
        verification_status="pending",
        is_published=False,
        verification_id="VER-20250101-AB12CD34",
    )
    db.add(listing)
    db.commit()
    return listing


@pytest.fixture
def document_type() -> DocumentType:
    return DocumentType.SHM
