"""
Tests for correlation header lookup.
"""

import pytest
from requests.structures import CaseInsensitiveDict

from correlate.http.headers import CorrelationHttpHeaders, get_correlation_id_header


@pytest.mark.unit
class TestCorrelationHttpHeaders:

    def test_header_names(self):
        assert CorrelationHttpHeaders.CORRELATION_ID == "X-Correlation-ID"
        assert CorrelationHttpHeaders.REQUEST_ID == "X-Request-ID"


@pytest.mark.unit
class TestGetCorrelationIdHeader:
    """Test finding the correlation id among accepted headers."""

    def test_empty_accepted_headers(self):
        headers = {"X-Correlation-ID": "abc"}

        assert get_correlation_id_header(headers, []) == ("X-Correlation-ID", None)

    def test_none_accepted_headers_rejected(self):
        with pytest.raises(ValueError):
            get_correlation_id_header({}, None)

    def test_no_match_returns_first_accepted(self):
        headers = {"Other": "x"}

        result = get_correlation_id_header(headers, ["X-Request-ID", "X-Correlation-ID"])

        assert result == ("X-Request-ID", None)

    def test_first_accepted_with_value_wins(self):
        headers = {"X-Correlation-ID": "corr", "X-Request-ID": "req"}

        result = get_correlation_id_header(headers, ["X-Request-ID", "X-Correlation-ID"])

        assert result == ("X-Request-ID", "req")

    def test_blank_value_skipped(self):
        headers = {"X-Request-ID": "  ", "X-Correlation-ID": "corr"}

        result = get_correlation_id_header(headers, ["X-Request-ID", "X-Correlation-ID"])

        assert result == ("X-Correlation-ID", "corr")

    def test_present_but_blank_reports_header(self):
        """Test that a present header is reported even when blank."""
        headers = {"X-Request-ID": ""}

        result = get_correlation_id_header(headers, ["X-Correlation-ID", "X-Request-ID"])

        assert result == ("X-Request-ID", "")

    def test_multi_valued_uses_last(self):
        headers = {"X-Correlation-ID": ["first", "last"]}

        assert get_correlation_id_header(headers, ["X-Correlation-ID"]) == ("X-Correlation-ID", "last")

    def test_case_insensitive_plain_dict(self):
        headers = {"x-correlation-id": "abc"}

        assert get_correlation_id_header(headers, ["X-Correlation-ID"]) == ("X-Correlation-ID", "abc")

    def test_case_insensitive_dict(self):
        headers = CaseInsensitiveDict({"x-request-id": "abc"})

        assert get_correlation_id_header(headers, ["X-Request-ID"]) == ("X-Request-ID", "abc")
