"""Readers for broker responses."""

import xml.etree.ElementTree as ET

from dsub.exceptions import ParseError


def _local(tag) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def subscription_reference(response: bytes | str) -> str:
    """Extract ``SubscribeResponse/SubscriptionReference/Address`` from a Subscribe response.

    Returns an empty string when the response carries no reference.
    """
    if not response or not response.strip():
        return ""

    try:
        root = ET.fromstring(response)
    except ET.ParseError as exc:
        raise ParseError(f"subscribe response is not well-formed: {exc}") from exc

    for element in root.iter():
        if _local(element.tag) != "SubscribeResponse":
            continue
        for reference in element:
            if _local(reference.tag) != "SubscriptionReference":
                continue
            for address in reference:
                if _local(address.tag) == "Address" and address.text:
                    return address.text.strip()
    return ""
