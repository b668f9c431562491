"""Tests for the demo-mode mock generator."""

import random
import re
from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import pytest

from property_verification.enums import DocumentType, RiskLevel, VerificationStatus
from property_verification.services.mock_verification import (
    MOCK_RESULTS,
    MOCK_STATUSES,
    MockVerificationGenerator,
)

ID_PATTERN = re.compile(r"^VER-\d{8}-[0-9A-Z]{8}$")


class TestGenerateId:
    """Tests for MockVerificationGenerator.generate_id."""

    def test_id_format(self) -> None:
        """
        Test that ids embed the date and an 8 character suffix.

        """
        generator = MockVerificationGenerator(rng=random.Random(1))

        verification_id = generator.generate_id(now=datetime(2025, 3, 4, tzinfo=UTC))

        assert ID_PATTERN.match(verification_id)
        assert verification_id.startswith("VER-20250304-")

    def test_ids_are_unique(self) -> None:
        """
        Test that consecutive ids differ.

        """
        generator = MockVerificationGenerator(rng=random.Random(1))

        assert generator.generate_id() != generator.generate_id()


class TestGenerate:
    """Tests for MockVerificationGenerator.generate."""

    def test_shm_result(self) -> None:
        """
        Test the SHM mock result.

        """
        result = MockVerificationGenerator().generate(DocumentType.SHM)

        assert result.demo_mode is True
        assert result.verification_status in MOCK_STATUSES
        assert result.verification_status is VerificationStatus.VERIFIED
        assert result.risk_assessment.risk_level is RiskLevel.LOW
        assert result.risk_assessment.total_score == 85
        assert list(result.risk_assessment.breakdown) == [
            "ocr_quality",
            "data_extraction",
            "format_check",
            "data_completeness",
            "document_type",
        ]
        assert ID_PATTERN.match(result.verification_id)

    @pytest.mark.parametrize("document_type", list(DocumentType))
    def test_every_type_has_a_result(self, document_type: DocumentType) -> None:
        """
        Test that every document type maps to a flagged mock result.

        """
        result = MockVerificationGenerator().generate(document_type)

        assert document_type in MOCK_RESULTS
        assert result.demo_mode is True
        assert result.verification_id
        assert result.verification_status in MOCK_STATUSES

    def test_needs_review_carries_warning(self) -> None:
        """
        Test that NEEDS_REVIEW mocks include a manual check warning.

        """
        result = MockVerificationGenerator().generate(DocumentType.GIRIK)

        assert result.verification_status is VerificationStatus.NEEDS_REVIEW
        assert result.validation_details.warnings[0].code == "NEEDS_MANUAL_CHECK"

    def test_pbb_uses_tax_object_number(self) -> None:
        """
        Test that the PBB mock carries a NOP instead of a certificate number.

        """
        result = MockVerificationGenerator().generate(DocumentType.PBB)

        assert result.extracted_data.nop == "32.01.020.003.001-0001.0"
        assert result.extracted_data.certificate_number is None


class TestVerify:
    """Tests for MockVerificationGenerator.verify."""

    @pytest.mark.asyncio
    async def test_sleeps_within_delay_range(self) -> None:
        """
        Test that verify simulates processing time.

        """
        generator = MockVerificationGenerator(delay_min=2, delay_max=3)

        with patch(
            "property_verification.services.mock_verification.asyncio.sleep",
            new_callable=AsyncMock,
        ) as mock_sleep:
            result = await generator.verify(DocumentType.SHGB)

        delay = mock_sleep.call_args[0][0]
        assert 2 <= delay <= 3
        assert result.verification_status is VerificationStatus.NEEDS_REVIEW

    @pytest.mark.asyncio
    async def test_logs_demo_mode_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """
        Test that every mock result is logged at warning level.

        """
        generator = MockVerificationGenerator(delay_min=0, delay_max=0)

        await generator.verify(DocumentType.IMB)

        assert any(
            r.levelname == "WARNING" and "Demo mode" in r.getMessage() for r in caplog.records
        )
