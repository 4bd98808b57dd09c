"""National identifier lookup — one resolver call per notification.

Wraps an ``IdentityResolver`` and enforces the NHS number invariant: a
resolved identifier counts only when it is exactly ten characters long.
"""

import structlog

from dsub.event.workflow_event import NHS_ID_LENGTH, is_valid_nhs_id
from dsub.exceptions import IdentityUnresolved
from dsub.identity.port import IdentityResolver

logger = structlog.get_logger(__name__)


class NationalIdLookup:
    def __init__(self, resolver: IdentityResolver, authority: str) -> None:
        self.resolver = resolver
        self.authority = authority

    def nhs_id_for(self, xds_pid: str | None) -> str:
        """Return the patient's NHS number or raise ``IdentityUnresolved``."""
        if not xds_pid:
            raise IdentityUnresolved("notification carries no XDS patient id")

        logger.info("Resolving NHS id", xds_pid=xds_pid, authority=self.authority)
        try:
            identity = self.resolver.resolve(xds_pid, self.authority)
        except Exception as exc:
            logger.error("Identity resolver failed", xds_pid=xds_pid, error=str(exc))
            raise IdentityUnresolved(f"identity lookup failed for pid {xds_pid}") from exc

        if not identity.found:
            raise IdentityUnresolved(f"no patient returned for pid {xds_pid}")
        if not is_valid_nhs_id(identity.national_id):
            raise IdentityUnresolved(
                f"resolved id for pid {xds_pid} is not a {NHS_ID_LENGTH} character NHS id"
            )

        logger.info("Resolved NHS id", xds_pid=xds_pid, nhs_id=identity.national_id)
        return identity.national_id
