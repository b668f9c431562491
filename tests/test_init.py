"""Tests for property_verification package initialization."""

import property_verification


class TestPackageInit:
    """Tests for package initialization."""

    def test_version_exists(self) -> None:
        """
        Test that __version__ is defined.

        Returns:
            None
        """
        assert hasattr(property_verification, "__version__")

    def test_version_format(self) -> None:
        """
        Test that __version__ follows semantic versioning format.

        Returns:
            None
        """
        version = property_verification.__version__
        parts = version.split(".")
        assert len(parts) >= 2
        assert parts[0].isdigit()
        assert parts[1].isdigit()
