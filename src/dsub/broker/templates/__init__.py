"""Template registry — maps outbound broker message names to template classes.

Each template knows its SOAP action and how to render the envelope bytes
from a context dict.
"""

from dsub.broker.templates.ack import AckTemplate
from dsub.broker.templates.cancel import CancelTemplate
from dsub.broker.templates.subscribe import SubscribeTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    AckTemplate.name: AckTemplate,
    SubscribeTemplate.name: SubscribeTemplate,
    CancelTemplate.name: CancelTemplate,
}


def get_template(name: str):
    """Look up a template class by message name."""
    template_cls = TEMPLATE_REGISTRY.get(name)
    if template_cls is None:
        raise ValueError(f"No template registered for broker message: {name}")
    return template_cls
