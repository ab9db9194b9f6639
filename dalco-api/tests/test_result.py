from app.services.result import Resolved, Result, ResultSource


class TestResultSuccess:
    def test_success_creates_ok_result(self):
        result = Result.success({"intent": "faq"})
        assert result.ok is True
        assert result.value == {"intent": "faq"}
        assert result.error is None


class TestResultFailure:
    def test_failure_creates_not_ok_result(self):
        result = Result.failure("HTTP 502", "http_error")
        assert result.ok is False
        assert result.error == "HTTP 502"
        assert result.error_code == "http_error"
        assert result.value is None

    def test_failure_default_code(self):
        result = Result.failure("Error message")
        assert result.error_code == "unknown"


class TestResultUnwrapOr:
    def test_unwrap_or_returns_value_on_success(self):
        assert Result.success("remote").unwrap_or("fallback") == "remote"

    def test_unwrap_or_returns_default_on_failure(self):
        assert Result.failure("timeout", "timeout").unwrap_or("fallback") == "fallback"


class TestResultMap:
    def test_map_transforms_success(self):
        result = Result.success({"answer": "Ya"}).map(lambda data: data["answer"])
        assert result.ok is True
        assert result.value == "Ya"

    def test_map_keeps_failure(self):
        result = Result.failure("boom", "transport_error").map(lambda data: data["answer"])
        assert result.ok is False
        assert result.error_code == "transport_error"


class TestResolved:
    def test_remote_tag(self):
        resolved = Resolved.remote("faq")
        assert resolved.source == ResultSource.REMOTE
        assert resolved.is_fallback is False

    def test_fallback_tag(self):
        resolved = Resolved.fallback("general")
        assert resolved.source == ResultSource.FALLBACK
        assert resolved.is_fallback is True
        assert resolved.value == "general"
