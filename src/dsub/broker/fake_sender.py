"""Fake SOAP sender — records outbound broker requests for testing."""

from dsub.broker.port import SoapSender
from dsub.exceptions import TransportFailure


class FakeSoapSender(SoapSender):
    """SOAP sender that records requests in memory and returns a canned response."""

    def __init__(self, response: bytes = b"") -> None:
        self.sent: list[dict] = []
        self.response = response
        self.should_succeed = True
        self.failure_reason = "Broker unreachable"

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Broker unreachable",
        response: bytes | None = None,
    ) -> None:
        """Configure the fake sender behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        if response is not None:
            self.response = response

    def send(self, url: str, action: str, body: bytes, timeout: float) -> bytes:
        if not self.should_succeed:
            raise TransportFailure(self.failure_reason)

        self.sent.append({"url": url, "action": action, "body": body, "timeout": timeout})
        return self.response

    def sent_with_action(self, action: str) -> list[dict]:
        return [request for request in self.sent if request["action"] == action]

    def reset(self) -> None:
        """Clear recorded requests (useful between tests)."""
        self.sent.clear()
        self.response = b""
        self.should_succeed = True
        self.failure_reason = "Broker unreachable"
