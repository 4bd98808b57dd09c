"""Identity resolver port (abstract interface).

Maps a regional (local) patient identifier and its assigning authority to
the patient's national NHS number.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedIdentity:
    """Result of an identity lookup."""

    found: bool
    national_id: str | None = None


NOT_FOUND = ResolvedIdentity(found=False)


class IdentityResolver(ABC):
    @abstractmethod
    def resolve(self, local_id: str, authority: str) -> ResolvedIdentity:
        """Look up the national identifier for ``local_id`` issued by ``authority``."""
        ...
