import hmac
import logging

import pytest

from twofactor import CryptoUnavailable, InvalidCharacter, current_code, decode_base32

SECRET = "JBSWY3DPEHPK3PXP"


def test_errors_logged_at_debug_without_secrets(caplog, monkeypatch):
    caplog.set_level(logging.DEBUG, logger="twofactor")

    with pytest.raises(InvalidCharacter):
        decode_base32("JBSWY3DPEHPK3PX1")

    def refuse(*args, **kwargs):
        raise ValueError("fips")

    monkeypatch.setattr(hmac, "new", refuse)
    with pytest.raises(CryptoUnavailable):
        current_code(SECRET, 1111111109)

    records = [(r.name, r.levelno) for r in caplog.records]
    assert records.count(("twofactor.base32", logging.DEBUG)) == 1
    assert records.count(("twofactor.otp", logging.DEBUG)) == 1
    for record in caplog.records:
        message = record.getMessage()
        assert "JBSWY3DPEHPK3PX" not in message
        assert "071271" not in message


def test_package_logger_has_null_handler():
    handlers = logging.getLogger("twofactor").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
