"""Cancel template — WS-BaseNotification Unsubscribe addressed to a subscription reference."""

from xml.sax.saxutils import escape

UNSUBSCRIBE_ACTION = "http://docs.oasis-open.org/wsn/bw-2/SubscriptionManager/UnsubscribeRequest"


class CancelTemplate:
    name = "cancel"
    action = UNSUBSCRIBE_ACTION

    @staticmethod
    def render(context: dict) -> bytes:
        broker_ref = escape(context["broker_ref"])
        correlation_id = escape(context["correlation_id"])
        return (
            "<soap:Envelope xmlns:soap='http://www.w3.org/2003/05/soap-envelope'>"
            "<soap:Header>"
            "<Action xmlns='http://www.w3.org/2005/08/addressing' soap:mustUnderstand='true'>"
            f"{UNSUBSCRIBE_ACTION}"
            "</Action>"
            "<MessageID xmlns='http://www.w3.org/2005/08/addressing' soap:mustUnderstand='true'>"
            f"urn:uuid:{correlation_id}"
            "</MessageID>"
            f"<To xmlns='http://www.w3.org/2005/08/addressing' soap:mustUnderstand='true'>{broker_ref}</To>"
            "<ReplyTo xmlns='http://www.w3.org/2005/08/addressing' soap:mustUnderstand='true'>"
            "<Address>http://www.w3.org/2005/08/addressing/anonymous</Address>"
            "</ReplyTo>"
            "</soap:Header>"
            "<soap:Body>"
            "<Unsubscribe xmlns='http://docs.oasis-open.org/wsn/b-2' "
            "xmlns:ns2='http://www.w3.org/2005/08/addressing' "
            "xmlns:ns3='http://docs.oasis-open.org/wsrf/bf-2' "
            "xmlns:ns4='urn:oasis:names:tc:ebxml-regrep:xsd:rim:3.0' "
            "xmlns:ns5='urn:oasis:names:tc:ebxml-regrep:xsd:rs:3.0' "
            "xmlns:ns6='urn:oasis:names:tc:ebxml-regrep:xsd:lcm:3.0' "
            "xmlns:ns7='http://docs.oasis-open.org/wsn/t-1' "
            "xmlns:ns8='http://docs.oasis-open.org/wsrf/r-2'/>"
            "</soap:Body>"
            "</soap:Envelope>"
        ).encode("utf-8")
