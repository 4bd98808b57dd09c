"""Ack template — the empty SOAP body returned to the broker for every correlated Notify."""

ACK_ENVELOPE = (
    "<SOAP-ENV:Envelope xmlns:SOAP-ENV='http://www.w3.org/2003/05/soap-envelope' "
    "xmlns:s='http://www.w3.org/2001/XMLSchema' "
    "xmlns:xsi='http://www.w3.org/2001/XMLSchema-instance'>"
    "<SOAP-ENV:Body/>"
    "</SOAP-ENV:Envelope>"
).encode("utf-8")


class AckTemplate:
    name = "ack"
    action = ""

    @staticmethod
    def render(context: dict | None = None) -> bytes:
        return ACK_ENVELOPE
