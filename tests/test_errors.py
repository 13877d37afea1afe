# Area: Shared Tests
"""Tests for live_engine.errors — exception hierarchy and error blocks."""

from live_engine.errors import (
    CatalogValidationError,
    ConfigError,
    LiveEngineError,
    PersistenceError,
    ResolutionConflictError,
)


class TestHierarchy:
    """All engine errors share one base."""

    def test_subclasses(self):
        for cls in (ResolutionConflictError, PersistenceError,
                    CatalogValidationError, ConfigError):
            assert issubclass(cls, LiveEngineError)
        assert issubclass(ConfigError, ValueError)


class TestResolutionConflictError:
    """Tests for ResolutionConflictError."""

    def test_attributes_and_message(self):
        err = ResolutionConflictError("q1-1", "yes", "no")
        assert err.question_id == "q1-1"
        assert err.existing_option_id == "yes"
        assert err.attempted_option_id == "no"
        assert "q1-1" in str(err)
        assert "'yes'" in str(err)

    def test_error_block(self):
        block = ResolutionConflictError("q1-1", "yes", "no").format_error_log()
        assert "LIVE ENGINE ERROR" in block
        assert "RESOLUTION_CONFLICT" in block
        assert '"existing_correct_option_id": "yes"' in block
        assert '"attempted_correct_option_id": "no"' in block
        assert "Persisted state was left unchanged." in block


class TestPersistenceError:
    """Tests for PersistenceError."""

    def test_defaults(self):
        err = PersistenceError("boom")
        assert err.source is None
        assert err.problems == []
        assert "<unknown>" in err.format_error_log()

    def test_block_lists_problems(self):
        err = PersistenceError("bad doc", "live.json", ["answers.0: missing"])
        block = err.format_error_log()
        assert "PERSISTENCE_FAILURE" in block
        assert "live.json" in block
        assert "• answers.0: missing" in block


class TestCatalogValidationError:
    """Tests for CatalogValidationError."""

    def test_block(self):
        err = CatalogValidationError(["q1-1: points: too small"])
        assert err.problems == ["q1-1: points: too small"]
        block = err.format_error_log()
        assert "CATALOG_VALIDATION_FAILURE" in block
        assert "DETAILS" not in block
        assert "q1-1: points: too small" in block
