"""In-memory identity resolver for development and testing."""

from dsub.identity.port import NOT_FOUND, IdentityResolver, ResolvedIdentity


class FakeIdentityResolver(IdentityResolver):
    """Resolves identifiers from a configurable map and records every call."""

    def __init__(self, identities: dict[tuple[str, str], str] | None = None) -> None:
        self.identities: dict[tuple[str, str], str] = dict(identities or {})
        self.calls: list[dict] = []
        self.should_fail = False
        self.failure_reason = "PIX manager unavailable"

    def register(self, local_id: str, authority: str, national_id: str) -> None:
        self.identities[(local_id, authority)] = national_id

    def configure(self, should_fail: bool = False, failure_reason: str = "PIX manager unavailable") -> None:
        """Make subsequent lookups raise instead of answering."""
        self.should_fail = should_fail
        self.failure_reason = failure_reason

    def resolve(self, local_id: str, authority: str) -> ResolvedIdentity:
        self.calls.append({"local_id": local_id, "authority": authority})

        if self.should_fail:
            raise ConnectionError(self.failure_reason)

        national_id = self.identities.get((local_id, authority))
        if national_id is None:
            return NOT_FOUND
        return ResolvedIdentity(found=True, national_id=national_id)

    def reset(self) -> None:
        self.identities.clear()
        self.calls.clear()
        self.should_fail = False
        self.failure_reason = "PIX manager unavailable"
