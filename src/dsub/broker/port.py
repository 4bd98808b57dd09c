"""SOAP sender port — the contract for talking to the DSUB broker."""

from abc import ABC, abstractmethod


class SoapSender(ABC):
    @abstractmethod
    def send(self, url: str, action: str, body: bytes, timeout: float) -> bytes:
        """POST a SOAP envelope and return the response body.

        Raises:
            TransportFailure: the request could not be completed.
        """
        ...
