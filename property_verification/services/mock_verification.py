"""Mock verification results for demo mode.

Used only when no verification endpoint is configured. Results are flagged
with demo_mode=True so they can never be mistaken for a real verification.
"""

import asyncio
import logging
import random
import string
from datetime import datetime
from typing import Any

from property_verification.core.utils import utc_now
from property_verification.enums import DocumentType, VerificationStatus
from property_verification.models import VerificationResult

logger = logging.getLogger(__name__)

ID_ALPHABET = string.digits + string.ascii_uppercase

MOCK_RESULTS: dict[DocumentType, dict[str, Any]] = {
    DocumentType.SHM: {
        "verification_status": VerificationStatus.VERIFIED,
        "risk_assessment": {
            "total_score": 85,
            "risk_level": "LOW",
            "color": "green",
            "recommendation": "Dokumen terlihat valid. Tetap lakukan verifikasi fisik.",
            "breakdown": {
                "ocr_quality": {"score": 18, "max": 20, "detail": "OCR confidence: 92%"},
                "data_extraction": {"score": 22, "max": 25, "detail": "Passed 5/6 checks"},
                "format_check": {"score": 13, "max": 15, "detail": "0 errors, 1 warning"},
                "data_completeness": {
                    "score": 16,
                    "max": 20,
                    "detail": "4/5 optional fields found",
                },
                "document_type": {"score": 20, "max": 20, "detail": "SHM reliability: 100%"},
            },
        },
        "extracted_data": {
            "owner_name": "BUDI SANTOSO",
            "certificate_number": "SHM/2024/12345",
            "certificate_type": "SHM",
            "address": "Jl. Merdeka No. 123, Kel. Menteng, Kec. Menteng",
            "land_area": "250 m²",
            "kelurahan": "Menteng",
            "kecamatan": "Menteng",
            "kabupaten": "Jakarta Pusat",
            "provinsi": "DKI Jakarta",
            "nib": "12.34.56.78.90123",
        },
    },
    DocumentType.SHGB: {
        "verification_status": VerificationStatus.NEEDS_REVIEW,
        "risk_assessment": {
            "total_score": 62,
            "risk_level": "MEDIUM",
            "color": "yellow",
            "recommendation": "Beberapa data perlu diverifikasi manual. Hubungi notaris.",
        },
        "extracted_data": {
            "owner_name": "PT PROPERTI MAKMUR",
            "certificate_number": "SHGB/2023/67890",
            "certificate_type": "SHGB",
            "address": "Kawasan Industri, Bekasi",
            "land_area": "1500 m²",
        },
    },
    DocumentType.GIRIK: {
        "verification_status": VerificationStatus.NEEDS_REVIEW,
        "risk_assessment": {
            "total_score": 45,
            "risk_level": "MEDIUM",
            "color": "yellow",
            "recommendation": (
                "Dokumen Girik memerlukan verifikasi tambahan. Konsultasi dengan notaris."
            ),
        },
        "extracted_data": {
            "owner_name": "AHMAD",
            "certificate_type": "GIRIK",
            "address": "Desa Sukamaju, Bogor",
            "land_area": "500 m²",
        },
    },
    DocumentType.AJB: {
        "verification_status": VerificationStatus.NEEDS_REVIEW,
        "risk_assessment": {
            "total_score": 55,
            "risk_level": "MEDIUM",
            "color": "yellow",
            "recommendation": "AJB perlu dicocokkan dengan sertifikat asli.",
        },
        "extracted_data": {
            "owner_name": "SITI RAHAYU",
            "certificate_type": "AJB",
            "address": "Jl. Sudirman No. 45, Jakarta",
        },
    },
    DocumentType.IMB: {
        "verification_status": VerificationStatus.VERIFIED,
        "risk_assessment": {
            "total_score": 72,
            "risk_level": "LOW",
            "color": "green",
            "recommendation": "IMB terlihat valid.",
        },
        "extracted_data": {
            "certificate_type": "IMB",
            "address": "Jl. Gatot Subroto No. 100",
        },
    },
    DocumentType.PBB: {
        "verification_status": VerificationStatus.VERIFIED,
        "risk_assessment": {
            "total_score": 78,
            "risk_level": "LOW",
            "color": "green",
            "recommendation": "Data PBB terverifikasi.",
        },
        "extracted_data": {
            "nop": "32.01.020.003.001-0001.0",
            "address": "Jl. Kemang Raya No. 10",
            "land_area": "300 m²",
        },
    },
}

MOCK_STATUSES = frozenset(entry["verification_status"] for entry in MOCK_RESULTS.values())


class MockVerificationGenerator:
    """Produces canned, per-document-type verification results."""

    def __init__(
        self,
        delay_min: float = 2.0,
        delay_max: float = 3.0,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the mock generator.

        Args:
            delay_min (float): Minimum simulated processing delay in seconds.
            delay_max (float): Maximum simulated processing delay in seconds.
            rng (random.Random | None): Random source for ids and delays.
        """
        self.delay_min = delay_min
        self.delay_max = delay_max
        self._rng = rng or random.Random()

    def generate_id(self, now: datetime | None = None) -> str:
        """
        Generate a local verification id.

        Args:
            now (datetime | None): Timestamp used for the date part.

        Returns:
            str: Id such as VER-20250101-AB12CD34.
        """
        now = now or utc_now()
        suffix = "".join(self._rng.choice(ID_ALPHABET) for _ in range(8))
        return f"VER-{now:%Y%m%d}-{suffix}"

    def generate(self, document_type: DocumentType, now: datetime | None = None) -> VerificationResult:
        """
        Build the canned result for a document type.

        Args:
            document_type (DocumentType): Submitted document type.
            now (datetime | None): Creation timestamp.

        Returns:
            VerificationResult: A result flagged as demo_mode.
        """
        now = now or utc_now()
        entry = MOCK_RESULTS.get(document_type, MOCK_RESULTS[DocumentType.SHM])
        status = entry["verification_status"]
        needs_review = status == VerificationStatus.NEEDS_REVIEW
        verified = status == VerificationStatus.VERIFIED

        return VerificationResult.model_validate(
            {
                "success": True,
                "verification_id": self.generate_id(now=now),
                "verification_status": status,
                "risk_assessment": entry["risk_assessment"],
                "extracted_data": entry["extracted_data"],
                "validation_details": {
                    "is_valid": verified,
                    "checks_passed": [
                        "required_certificate_number",
                        "owner_name_valid",
                        "address_present",
                    ],
                    "errors": [],
                    "warnings": (
                        [
                            {
                                "field": "format",
                                "code": "NEEDS_MANUAL_CHECK",
                                "message": "Beberapa field memerlukan verifikasi manual",
                            }
                        ]
                        if needs_review
                        else []
                    ),
                    "critical_errors": [],
                    "total_checks": 6,
                    "passed_checks": 5 if verified else 3,
                },
                "created_at": now,
                "demo_mode": True,
            }
        )

    async def verify(self, document_type: DocumentType) -> VerificationResult:
        """
        Simulate a verification round trip.

        Args:
            document_type (DocumentType): Submitted document type.

        Returns:
            VerificationResult: A result flagged as demo_mode.
        """
        delay = self._rng.uniform(self.delay_min, self.delay_max)
        if delay > 0:
            await asyncio.sleep(delay)
        result = self.generate(document_type)
        logger.warning(
            f"Demo mode: returning mock {result.verification_status} result "
            f"{result.verification_id} for {document_type}"
        )
        return result
