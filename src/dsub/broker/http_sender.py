"""HTTP SOAP sender backed by ``requests``."""

import requests
import structlog

from dsub.broker.port import SoapSender
from dsub.exceptions import TransportFailure

logger = structlog.get_logger(__name__)

SOAP_XML = "application/soap+xml"


class HttpSoapSender(SoapSender):
    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session or requests.Session()

    def send(self, url: str, action: str, body: bytes, timeout: float) -> bytes:
        headers = {
            "Content-Type": SOAP_XML,
            "Accept": "*/*",
            "Connection": "keep-alive",
        }
        if action:
            headers["SOAPAction"] = action

        try:
            response = self.session.post(url, data=body, headers=headers, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("SOAP request failed", url=url, action=action, error=str(exc))
            raise TransportFailure(f"SOAP request to {url} failed: {exc}") from exc

        logger.debug("SOAP response received", url=url, action=action, status=response.status_code)
        return response.content
