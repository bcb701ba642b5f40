"""Tests for tagged outcomes."""

from unittest.mock import Mock

from saih_scraper.core.results import Failure, FailureKind, Outcome


class TestOutcome:
    """Tests for Outcome and Failure."""

    def test_ok_outcome(self):
        """An outcome without failure is ok and unwraps silently."""
        logger = Mock()
        outcome = Outcome([1, 2])

        assert outcome.ok
        assert outcome.unwrap(logger) == [1, 2]
        logger.warning.assert_not_called()
        logger.error.assert_not_called()

    def test_fail_builds_failure(self):
        """Outcome.fail keeps the empty value and the failure details."""
        outcome = Outcome.fail([], FailureKind.TRANSPORT, "fetch_failed", url="http://x")

        assert not outcome.ok
        assert outcome.value == []
        assert outcome.failure == Failure(
            kind=FailureKind.TRANSPORT,
            reason="fetch_failed",
            details={"url": "http://x"},
        )

    def test_structural_logs_warning(self):
        """Structural mismatches are warnings."""
        logger = Mock()
        Outcome.fail([], FailureKind.STRUCTURE, "table_missing").unwrap(logger, page="list")

        logger.warning.assert_called_once_with(
            "table_missing", failure="structural_mismatch", page="list"
        )
        logger.error.assert_not_called()

    def test_decode_logs_error(self):
        """Decode failures are errors."""
        logger = Mock()
        Outcome.fail([], FailureKind.DECODE, "bad_literal", error="boom").unwrap(logger)

        logger.error.assert_called_once_with("bad_literal", failure="decode_failure", error="boom")

    def test_unwrap_without_logger(self):
        """Unwrapping without a logger just returns the value."""
        assert Outcome.fail({}, FailureKind.TRANSPORT, "x").unwrap() == {}
