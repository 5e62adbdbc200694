import logging

from poolpal.logging_config import SecretRedactionFilter, _coerce_level, configure_logging


def _record(msg, *args):
    return logging.LogRecord("poolpal.test", logging.WARNING, __file__, 1, msg, args, None)


def test_google_api_keys_are_redacted():
    record = _record("calling Gemini with %s", "AIza" + "x" * 35)
    SecretRedactionFilter().filter(record)
    assert record.getMessage() == "calling Gemini with [REDACTED_KEY]"


def test_key_value_secrets_are_redacted():
    record = _record("api_key=abc123 token: xyz")
    SecretRedactionFilter().filter(record)
    message = record.getMessage()
    assert "abc123" not in message
    assert "xyz" not in message


def test_bearer_tokens_are_redacted():
    record = _record("Authorization header Bearer abc.def.ghi")
    SecretRedactionFilter().filter(record)
    assert "abc.def.ghi" not in record.getMessage()


def test_coerce_level():
    assert _coerce_level("debug") == logging.DEBUG
    assert _coerce_level("nonsense") == logging.INFO
    assert _coerce_level(logging.ERROR) == logging.ERROR


def test_configure_logging_installs_filter_once(app):
    configure_logging(app)
    configure_logging(app)
    for handler in logging.getLogger().handlers:
        filters = [f for f in handler.filters if isinstance(f, SecretRedactionFilter)]
        assert len(filters) <= 1
