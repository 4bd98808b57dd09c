"""Shared fixtures for the DSUB tests: broker messages, adapters and stored subscriptions."""

from xml.sax.saxutils import quoteattr

import pytest
from dsub.broker.fake_sender import FakeSoapSender
from dsub.config import DsubConfig
from dsub.event.store import DomainEventStore
from dsub.identity.fake_resolver import FakeIdentityResolver
from dsub.subscription.subscription import Subscription
from protean import current_domain

REGIONAL_OID = "2.16.840.1.113883.2.1.3.31.2.1.1"

_CLASSIFICATIONS = {
    "class_code": ("urn:uuid:41a5887f-8865-4c09-adf7-e362475b143a", "Correspondence"),
    "conf_code": ("urn:uuid:f4f85eac-e6cb-4883-b524-f2705394840f", "Normal"),
    "format_code": ("urn:uuid:a09d5840-386c-46f2-b5ad-9c3699a4309d", "CDA Document"),
    "facility_code": ("urn:uuid:f33fb8ac-18af-42cc-ae0e-ed0b0bdb91e1", "Hospital Setting"),
    "practice_code": ("urn:uuid:cccf5598-8b07-4b77-a05e-ae952c785ead", "General Medicine"),
    "type_code": ("urn:uuid:f0306f51-975f-434e-a61c-c59651d33983", "14Day^^1.2.840.114350"),
}


def _classification(scheme, value):
    return (
        f"<rim:Classification classificationScheme={quoteattr(scheme)} nodeRepresentation='code'>"
        f"<rim:Name><rim:LocalizedString value={quoteattr(value)}/></rim:Name>"
        "</rim:Classification>"
    )


def _author(persons, institutions):
    def slot(name, values):
        rendered = "".join(f"<rim:Value>{value}</rim:Value>" for value in values)
        return f"<rim:Slot name='{name}'><rim:ValueList>{rendered}</rim:ValueList></rim:Slot>"

    return (
        "<rim:Classification classificationScheme='urn:uuid:93606bcf-9494-43ec-9b4e-a7748d1a838d' nodeRepresentation=''>"
        f"{slot('authorPerson', persons)}{slot('authorInstitution', institutions)}"
        "</rim:Classification>"
    )


def build_notify(
    broker_ref="urn:uuid:abc",
    xds_pid="REG.1MWU5C92M2^^^&2.16.840.1.113883.2.1.3.31.2.1.1&ISO",
    doc_entry_uid="2.25.269186386137582345643167830211302146",
    repository_unique_id="2.16.840.1.113883.2.1.3.31.2.1.1.1.3.1.1",
    doc_name="Discharge Summary",
    persons=("D12345^Smith^John^^^Dr",),
    institutions=("Leeds General^^^^^^^^^1.2.3",),
    extra_classifications="",
    **overrides,
) -> bytes:
    """Build a SOAP-wrapped Notify message as a broker would deliver it."""
    classifications = "".join(
        _classification(scheme, overrides.get(name, value)) for name, (scheme, value) in _CLASSIFICATIONS.items()
    )
    pid_identifier = (
        "<rim:ExternalIdentifier identificationScheme='urn:uuid:58a6f841-87b3-4a3e-92fd-a8ffeff98427' "
        f"value={quoteattr(xds_pid)}/>"
        if xds_pid is not None
        else ""
    )
    message = (
        "<soap:Envelope xmlns:soap='http://www.w3.org/2003/05/soap-envelope' "
        "xmlns:wsa='http://www.w3.org/2005/08/addressing'>"
        "<soap:Header>"
        "<wsa:Action>http://docs.oasis-open.org/wsn/bw-2/NotificationConsumer/Notify</wsa:Action>"
        "</soap:Header>"
        "<soap:Body>"
        "<wsnt:Notify xmlns:wsnt='http://docs.oasis-open.org/wsn/b-2'>"
        "<wsnt:NotificationMessage>"
        f"<wsnt:SubscriptionReference><wsa:Address>{broker_ref}</wsa:Address></wsnt:SubscriptionReference>"
        "<wsnt:Topic Dialect='http://docs.oasis-open.org/wsn/t-1/TopicExpression/Simple'>ihe:FullDocumentEntry</wsnt:Topic>"
        "<wsnt:ProducerReference><wsa:Address>https://broker.example.nhs.uk/producer</wsa:Address></wsnt:ProducerReference>"
        "<wsnt:Message>"
        "<lcm:SubmitObjectsRequest xmlns:lcm='urn:oasis:names:tc:ebxml-regrep:xsd:lcm:3.0'>"
        "<rim:RegistryObjectList xmlns:rim='urn:oasis:names:tc:ebxml-regrep:xsd:rim:3.0'>"
        "<rim:ExtrinsicObject id='urn:uuid:e0d7a3c5-5a7e-4d45-9b7a-7f3e2a4e1c11' mimeType='text/xml'>"
        "<rim:Slot name='creationTime'><rim:ValueList><rim:Value>20240101120000</rim:Value></rim:ValueList></rim:Slot>"
        f"<rim:Slot name='repositoryUniqueId'><rim:ValueList><rim:Value>{repository_unique_id}</rim:Value></rim:ValueList></rim:Slot>"
        f"<rim:Name><rim:LocalizedString value={quoteattr(doc_name)}/></rim:Name>"
        f"{_author(persons, institutions)}"
        f"{classifications}"
        f"{extra_classifications}"
        f"{pid_identifier}"
        "<rim:ExternalIdentifier identificationScheme='urn:uuid:2e82c1f6-a085-4c72-9da3-8640a32e42ab' "
        f"value={quoteattr(doc_entry_uid)}/>"
        "</rim:ExtrinsicObject>"
        "</rim:RegistryObjectList>"
        "</lcm:SubmitObjectsRequest>"
        "</wsnt:Message>"
        "</wsnt:NotificationMessage>"
        "</wsnt:Notify>"
        "</soap:Body>"
        "</soap:Envelope>"
    )
    return message.encode("utf-8")


def build_subscribe_response(broker_ref="urn:uuid:abc") -> bytes:
    address = f"<wsa:Address>{broker_ref}</wsa:Address>" if broker_ref else ""
    return (
        "<soap:Envelope xmlns:soap='http://www.w3.org/2003/05/soap-envelope' "
        "xmlns:wsa='http://www.w3.org/2005/08/addressing'>"
        "<soap:Body>"
        "<wsnt:SubscribeResponse xmlns:wsnt='http://docs.oasis-open.org/wsn/b-2'>"
        f"<wsnt:SubscriptionReference>{address}</wsnt:SubscriptionReference>"
        "</wsnt:SubscribeResponse>"
        "</soap:Body>"
        "</soap:Envelope>"
    ).encode("utf-8")


@pytest.fixture()
def notify_message():
    """Factory for Notify messages; keyword arguments override the defaults."""
    return build_notify


@pytest.fixture()
def subscribe_response():
    return build_subscribe_response


@pytest.fixture()
def config():
    return DsubConfig(
        broker_url="https://broker.example.nhs.uk/dsub",
        consumer_url="https://consumer.example.nhs.uk/dsub/notify",
        pix_url="https://pix.example.nhs.uk/fhir/Patient",
    )


@pytest.fixture()
def sender():
    return FakeSoapSender()


@pytest.fixture()
def resolver():
    """Resolver that knows the default patient as 9999999999."""
    fake = FakeIdentityResolver()
    fake.register("REG.1MWU5C92M2", REGIONAL_OID, "9999999999")
    return fake


@pytest.fixture()
def store():
    return DomainEventStore()


@pytest.fixture()
def add_subscription():
    """Store a Subscription row directly, as an earlier registration would have."""

    def _add(pathway, broker_ref="urn:uuid:abc", expression="14Day^^1.2.840.114350", **kwargs):
        subscription = Subscription.register(broker_ref=broker_ref, pathway=pathway, expression=expression, **kwargs)
        current_domain.repository_for(Subscription).add(subscription)
        return subscription

    return _add
