"""SOAP sender factory.

Provides get_sender() / set_sender() to swap implementations:
- FakeSoapSender for development and testing
- HttpSoapSender for a real broker

The default is chosen from SOAP_SENDER ("fake" or "http"). When that is
unset, production and any configured DSUB_BROKER_URL select HttpSoapSender.
"""

import os

from dsub.broker.fake_sender import FakeSoapSender
from dsub.broker.port import SoapSender

_current_sender: SoapSender | None = None


def _default_adapter(environ) -> str:
    adapter = environ.get("SOAP_SENDER")
    if adapter:
        return adapter.lower()
    if environ.get("PROTEAN_ENV") == "production" or environ.get("DSUB_BROKER_URL"):
        return "http"
    return "fake"


def build_sender(environ=None) -> SoapSender:
    """Build the SOAP sender the environment asks for."""
    environ = os.environ if environ is None else environ
    adapter = _default_adapter(environ)
    if adapter == "fake":
        return FakeSoapSender()
    if adapter == "http":
        from dsub.broker.http_sender import HttpSoapSender

        return HttpSoapSender()
    raise ValueError(f"Unknown SOAP sender: {adapter}")


def get_sender() -> SoapSender:
    """Return the current SOAP sender, building the configured one on first use."""
    global _current_sender
    if _current_sender is None:
        _current_sender = build_sender()
    return _current_sender


def set_sender(sender: SoapSender) -> None:
    """Override the active SOAP sender (useful for tests)."""
    global _current_sender
    _current_sender = sender


def reset_sender() -> None:
    """Reset to default sender."""
    global _current_sender
    _current_sender = None
