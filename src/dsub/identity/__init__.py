"""Identity resolver factory.

Provides get_resolver() / set_resolver() to swap implementations:
- FakeIdentityResolver for development and testing
- PIXmIdentityResolver for a real PIX manager

The default is chosen from IDENTITY_RESOLVER ("fake" or "pixm"). When that
is unset, production and any configured PIX_MANAGER_URL select PIXm.
"""

import os

from dsub.identity.fake_resolver import FakeIdentityResolver
from dsub.identity.port import IdentityResolver

_current_resolver: IdentityResolver | None = None


def _default_adapter(environ) -> str:
    adapter = environ.get("IDENTITY_RESOLVER")
    if adapter:
        return adapter.lower()
    if environ.get("PROTEAN_ENV") == "production" or environ.get("PIX_MANAGER_URL"):
        return "pixm"
    return "fake"


def build_resolver(environ=None) -> IdentityResolver:
    """Build the identity resolver the environment asks for."""
    environ = os.environ if environ is None else environ
    adapter = _default_adapter(environ)
    if adapter == "fake":
        return FakeIdentityResolver()
    if adapter == "pixm":
        from dsub.config import get_config
        from dsub.identity.pixm_resolver import PIXmIdentityResolver

        return PIXmIdentityResolver(get_config())
    raise ValueError(f"Unknown identity resolver: {adapter}")


def get_resolver() -> IdentityResolver:
    """Return the current identity resolver, building the configured one on first use."""
    global _current_resolver
    if _current_resolver is None:
        _current_resolver = build_resolver()
    return _current_resolver


def set_resolver(resolver: IdentityResolver) -> None:
    """Override the active identity resolver (useful for tests)."""
    global _current_resolver
    _current_resolver = resolver


def reset_resolver() -> None:
    """Reset to default resolver."""
    global _current_resolver
    _current_resolver = None
