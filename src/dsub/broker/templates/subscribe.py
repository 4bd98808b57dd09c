"""Subscribe template — WS-BaseNotification Subscribe with an XDS AdhocQuery filter."""

from xml.sax.saxutils import escape

SUBSCRIBE_ACTION = "http://docs.oasis-open.org/wsn/bw-2/NotificationProducer/SubscribeRequest"


class SubscribeTemplate:
    name = "subscribe"
    action = SUBSCRIBE_ACTION

    @staticmethod
    def render(context: dict) -> bytes:
        broker_url = escape(context["broker_url"])
        consumer_url = escape(context["consumer_url"])
        topic = escape(context["topic"], {"'": "&apos;"})
        expression = escape(context["expression"])
        correlation_id = escape(context["correlation_id"])
        return (
            "<SOAP-ENV:Envelope xmlns:SOAP-ENV='http://www.w3.org/2003/05/soap-envelope' "
            "xmlns:xsi='http://www.w3.org/2001/XMLSchema-instance' "
            "xmlns:s='http://www.w3.org/2001/XMLSchema' "
            "xmlns:wsa='http://www.w3.org/2005/08/addressing'>"
            "<SOAP-ENV:Header>"
            f"<wsa:Action SOAP-ENV:mustUnderstand='true'>{SUBSCRIBE_ACTION}</wsa:Action>"
            f"<wsa:MessageID>urn:uuid:{correlation_id}</wsa:MessageID>"
            "<wsa:ReplyTo SOAP-ENV:mustUnderstand='true'>"
            "<wsa:Address>http://www.w3.org/2005/08/addressing/anonymous</wsa:Address>"
            "</wsa:ReplyTo>"
            f"<wsa:To>{broker_url}</wsa:To>"
            "</SOAP-ENV:Header>"
            "<SOAP-ENV:Body>"
            "<wsnt:Subscribe xmlns:wsnt='http://docs.oasis-open.org/wsn/b-2' "
            "xmlns:a='http://www.w3.org/2005/08/addressing' "
            "xmlns:rim='urn:oasis:names:tc:ebxml-regrep:xsd:rim:3.0' "
            "xmlns:wsa='http://www.w3.org/2005/08/addressing'>"
            f"<wsnt:ConsumerReference><wsa:Address>{consumer_url}</wsa:Address></wsnt:ConsumerReference>"
            "<wsnt:Filter>"
            "<wsnt:TopicExpression Dialect='http://docs.oasis-open.org/wsn/t-1/TopicExpression/Simple'>"
            "ihe:FullDocumentEntry"
            "</wsnt:TopicExpression>"
            "<rim:AdhocQuery id='urn:uuid:742790e0-aba6-43d6-9f1f-e43ed9790b79'>"
            f"<rim:Slot name='{topic}'><rim:ValueList><rim:Value>('{expression}')</rim:Value></rim:ValueList></rim:Slot>"
            "</rim:AdhocQuery>"
            "</wsnt:Filter>"
            "</wsnt:Subscribe>"
            "</SOAP-ENV:Body>"
            "</SOAP-ENV:Envelope>"
        ).encode("utf-8")
