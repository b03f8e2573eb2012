"""Tests for the exception hierarchy and config re-exports."""

from claudeai_cli.exceptions import (
    CliError,
    EmptyResultWarning,
    HTTPError,
    MalformedChunkError,
    SetupError,
    UnexpectedResponseShape,
    ValidationError,
)


class TestExceptionHierarchy:
    def test_setup_error_is_cli_error(self):
        assert issubclass(SetupError, CliError)

    def test_client_errors_are_cli_errors(self):
        for cls in (
            ValidationError,
            EmptyResultWarning,
            MalformedChunkError,
            UnexpectedResponseShape,
        ):
            assert issubclass(cls, CliError)

    def test_http_error_not_cli_error(self):
        assert not issubclass(HTTPError, CliError)

    def test_exit_codes(self):
        assert CliError.exit_code == 1
        assert SetupError.exit_code == 2
        assert ValidationError.exit_code == 1
        assert EmptyResultWarning.exit_code == 0


class TestHTTPError:
    def test_fields(self):
        err = HTTPError(403, "Forbidden", '{"error": "nope"}', {"X-Id": "1"})
        assert err.code == 403
        assert err.reason == "Forbidden"
        assert err.body == '{"error": "nope"}'
        assert err.headers == {"X-Id": "1"}

    def test_message(self):
        assert str(HTTPError(500, "Server Error", "")) == "HTTP 500: Server Error"

    def test_headers_default_empty(self):
        assert HTTPError(404, "Not Found", "").headers == {}


class TestPackageExports:
    def test_package_re_exports(self):
        import claudeai_cli

        assert claudeai_cli.ValidationError is ValidationError
        assert claudeai_cli.HTTPError is HTTPError
