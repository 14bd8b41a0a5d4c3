"""
Feed Decoder: parses eurofxref XML into an Envelope.

Expected layout (namespaces vary between the ECB files, so tags are
matched by local name):

    <gesmes:Envelope>
      <gesmes:subject>Reference rates</gesmes:subject>
      <gesmes:Sender><gesmes:name>European Central Bank</gesmes:name></gesmes:Sender>
      <Cube>
        <Cube time="2024-01-15">
          <Cube currency="USD" rate="1.0945"/>
          ...
"""

import xml.etree.ElementTree as ET
from decimal import Decimal, InvalidOperation

from currency_api.core.exceptions import DecodeError
from currency_api.schemas.rate import Cube, Envelope, ExchangeRate


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _decode_exchange(element: ET.Element, date: str) -> ExchangeRate:
    currency = element.get("currency")
    raw_rate = element.get("rate")
    if not currency or raw_rate is None:
        raise DecodeError(f"Cube {date}: exchange without currency or rate")
    try:
        rate = Decimal(raw_rate.strip())
    except InvalidOperation as exc:
        raise DecodeError(f"Cube {date}: invalid rate {raw_rate!r} for {currency}") from exc
    if not rate.is_finite():
        raise DecodeError(f"Cube {date}: invalid rate {raw_rate!r} for {currency}")
    return ExchangeRate(currency=currency.strip(), rate=rate)


def decode_feed(raw: bytes) -> Envelope:
    """
    Parse raw feed bytes.

    Raises DecodeError for malformed XML or anything that does not follow
    the Envelope/Cube/Cube/Cube shape. Pure: nothing is mutated on failure.
    """
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as exc:
        raise DecodeError(f"Malformed feed XML: {exc}") from exc

    if _local(root.tag) != "Envelope":
        raise DecodeError(f"Unexpected root element <{_local(root.tag)}>")

    outer = _child(root, "Cube")
    if outer is None:
        raise DecodeError("Feed has no <Cube> element")

    subject = _child(root, "subject")
    sender = _child(root, "Sender")
    sender_name = _child(sender, "name") if sender is not None else None

    cubes = []
    for cube in _children(outer, "Cube"):
        date = cube.get("time")
        if not date:
            raise DecodeError("Date cube without a time attribute")
        exchanges = [_decode_exchange(ex, date) for ex in _children(cube, "Cube")]
        cubes.append(Cube(date=date, exchanges=exchanges))

    return Envelope(
        subject=(subject.text or "").strip() if subject is not None else "",
        sender=(sender_name.text or "").strip() if sender_name is not None else "",
        cubes=cubes,
    )
