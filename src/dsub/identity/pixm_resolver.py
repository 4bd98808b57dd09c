"""IHE PIXm (FHIR) identity resolver.

Queries the PIX manager's Patient endpoint with the regional identifier and
reads the NHS number from the identifier whose system is the NHS OID.
"""

import requests
import structlog

from dsub.config import DsubConfig
from dsub.identity.port import NOT_FOUND, IdentityResolver, ResolvedIdentity

logger = structlog.get_logger(__name__)


class PIXmIdentityResolver(IdentityResolver):
    def __init__(self, config: DsubConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def resolve(self, local_id: str, authority: str) -> ResolvedIdentity:
        params = {"identifier": f"{authority}|{local_id}", "_format": "json"}
        logger.info("Querying PIX manager", url=self.config.pix_url, local_id=local_id, authority=authority)

        response = self.session.get(
            self.config.pix_url,
            params=params,
            headers={"Accept": "*/*", "Connection": "keep-alive"},
            timeout=self.config.pix_timeout,
        )
        response.raise_for_status()

        # The PIX manager reports query errors in a 200 body
        if "Error" in response.text:
            logger.warning("PIX manager returned an error body", local_id=local_id, body=response.text[:500])
            return NOT_FOUND

        return self._national_id_from_bundle(response.json(), local_id)

    def _national_id_from_bundle(self, bundle: dict, local_id: str) -> ResolvedIdentity:
        entries = bundle.get("entry") or []
        if len(entries) != 1:
            logger.info("No unique patient returned", local_id=local_id, count=len(entries))
            return NOT_FOUND

        nhs_system = f"urn:oid:{self.config.nhs_oid}"
        for identifier in entries[0].get("resource", {}).get("identifier", []):
            if identifier.get("system") == nhs_system and identifier.get("value"):
                return ResolvedIdentity(found=True, national_id=identifier["value"])

        logger.info("Patient has no NHS identifier", local_id=local_id)
        return NOT_FOUND
