"""
Tests for the Correlate exception hierarchy.
"""

import pytest

from correlate.exceptions import (
    ActivityStateError,
    ConfigurationError,
    ConfigurationValidationError,
    CorrelateError,
    ErrorDetails,
    InvalidConfigurationError,
    MissingConfigurationError,
    get_exception_correlation_id,
    tag_exception,
)


@pytest.mark.unit
class TestCorrelateError:
    """Test the base exception."""

    def test_message_only(self):
        error = CorrelateError("Something failed")

        assert str(error) == "Something failed"
        assert error.correlation_id is None
        assert error.context == {}

    def test_string_includes_details(self):
        details = ErrorDetails(
            help_text="Try again",
            user_action="Check settings",
            context={"key": "value", "missing": None},
            correlation_id="abc",
        )

        text = str(CorrelateError("Something failed", details))

        assert text.startswith("Something failed")
        assert "Help: Try again" in text
        assert "Action: Check settings" in text
        assert "Context: key: value" in text
        assert "missing" not in text
        assert "Correlation ID: abc" in text

    def test_to_dict(self):
        error = CorrelateError("Failed", ErrorDetails(error_code="CODE", context={"a": 1}))

        data = error.to_dict()

        assert data["error_type"] == "CorrelateError"
        assert data["message"] == "Failed"
        assert data["error_code"] == "CODE"
        assert data["context"] == {"a": 1}
        assert "timestamp" in data

    def test_add_context_chains(self):
        error = CorrelateError("Failed")

        assert error.add_context(step="load") is error
        assert error.context == {"step": "load"}

    def test_details_context_not_shared(self):
        details = ErrorDetails(context={"a": 1})
        error = CorrelateError("Failed", details)

        error.add_context(b=2)

        assert details.context == {"a": 1}


@pytest.mark.unit
class TestTagException:
    """Test attaching correlation ids to exceptions."""

    def test_tags_plain_exception(self):
        error = ValueError("boom")

        assert tag_exception(error, "abc") is True
        assert get_exception_correlation_id(error) == "abc"

    def test_first_tag_wins(self):
        error = ValueError("boom")
        tag_exception(error, "inner")

        assert tag_exception(error, "outer") is False
        assert get_exception_correlation_id(error) == "inner"

    def test_own_correlation_id_field_left_alone(self):
        """Test that an exception type's own correlation_id field neither blocks nor receives the tag."""
        class UpstreamError(Exception):
            def __init__(self, correlation_id):
                super().__init__("upstream failed")
                self.correlation_id = correlation_id

        error = UpstreamError("upstream-id")

        assert tag_exception(error, "abc") is True
        assert get_exception_correlation_id(error) == "abc"
        assert error.correlation_id == "upstream-id"

    def test_correlate_error_with_id_is_not_retagged(self):
        error = CorrelateError("Failed", ErrorDetails(correlation_id="original"))

        assert tag_exception(error, "abc") is False
        assert get_exception_correlation_id(error) == "original"

    def test_correlate_error_gets_context(self):
        error = CorrelateError("Failed")

        tag_exception(error, "abc")

        assert error.correlation_id == "abc"
        assert error.context == {"correlation_id": "abc"}
        assert "Correlation ID: abc" in str(error)

    def test_untagged_exception(self):
        assert get_exception_correlation_id(RuntimeError()) is None

    def test_read_only_exception_not_tagged(self):
        class Frozen(Exception):
            def __setattr__(self, name, value):
                raise AttributeError(name)

        assert tag_exception(Frozen(), "abc") is False


@pytest.mark.unit
class TestSpecificErrors:
    """Test the concrete exception types."""

    def test_activity_state_error(self):
        error = ActivityStateError("RootActivity")

        assert isinstance(error, CorrelateError)
        assert error.error_code == "ACTIVITY_STATE"
        assert "RootActivity" in error.message

    def test_invalid_configuration_error(self):
        error = InvalidConfigurationError("logging.format", "xml", "console, json or rich")

        assert isinstance(error, ConfigurationError)
        assert error.error_code == "CONFIG_INVALID"
        assert error.field == "logging.format"
        assert "'xml'" in error.message

    def test_missing_configuration_error(self):
        error = MissingConfigurationError("id_factory", "CorrelationManager")

        assert error.error_code == "CONFIG_MISSING"
        assert error.message == "Missing required configuration: 'id_factory' for CorrelationManager"

    def test_configuration_validation_error(self):
        error = ConfigurationValidationError(["a: bad", "b: worse"])

        assert error.error_code == "CONFIG_VALIDATION"
        assert error.errors == ["a: bad", "b: worse"]
        assert "  - a: bad" in error.message
        assert "  - b: worse" in error.message
