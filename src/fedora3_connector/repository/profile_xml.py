"""
Parsing of Fedora 3 datastreamProfile documents.

The REST API answers ``GET /objects/{pid}/datastreams/{dsid}?format=xml``
with a document like::

    <datastreamProfile xmlns="http://www.fedora.info/definitions/1/0/management/"
                       pid="demo:1" dsID="DC">
      <dsLabel>Dublin Core Record</dsLabel>
      <dsVersionID>DC1.0</dsVersionID>
      <dsCreateDate>2013-01-28T19:02:09.623Z</dsCreateDate>
      <dsState>A</dsState>
      <dsMIME>text/xml</dsMIME>
      <dsControlGroup>X</dsControlGroup>
      <dsSize>341</dsSize>
      <dsLocation>demo:1+DC+DC1.0</dsLocation>
      <dsChecksumType>SHA-1</dsChecksumType>
      <dsChecksum>...</dsChecksum>
    </datastreamProfile>

Older servers omit the namespace, so elements are matched by local name.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Dict, Optional

from lxml import etree

from ..errors import ProfileParseError
from .base import DatastreamProfile

__all__ = ["parse_datastream_profile", "parse_fedora_datetime", "MANAGEMENT_NS"]

MANAGEMENT_NS = "http://www.fedora.info/definitions/1/0/management/"

# Fedora writes "none" as the checksum when checksumming is disabled
_NO_CHECKSUM = "none"

_DATETIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,6}))?(Z|[+-]\d{2}:\d{2})?$"
)

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)


def parse_fedora_datetime(value: str) -> datetime:
    """
    Parse a Fedora timestamp into an aware UTC datetime.

    Accepts ``YYYY-MM-DDTHH:MM:SS`` with an optional 1-6 digit fraction and
    an optional ``Z`` or numeric offset; a missing zone is taken as UTC.

    Raises:
        ProfileParseError: If the value is not a Fedora timestamp
    """
    match = _DATETIME_RE.match(value.strip())
    if not match:
        raise ProfileParseError(f"Invalid Fedora timestamp: {value!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    microsecond = int((fraction or "0").ljust(6, "0"))
    try:
        parsed = datetime(int(year), int(month), int(day), int(hour), int(minute), int(second), microsecond)
    except ValueError as e:
        raise ProfileParseError(f"Invalid Fedora timestamp: {value!r}: {e}") from e

    if zone in (None, "Z"):
        return parsed.replace(tzinfo=timezone.utc)
    # Numeric offsets are rare but legal in xsd:dateTime
    try:
        offset = datetime.strptime(zone.replace(":", ""), "%z").tzinfo
    except ValueError as e:
        raise ProfileParseError(f"Invalid Fedora timestamp: {value!r}: {e}") from e
    return parsed.replace(tzinfo=offset).astimezone(timezone.utc)


def parse_datastream_profile(data: bytes) -> DatastreamProfile:
    """
    Parse a datastreamProfile XML document.

    Args:
        data: Raw response body

    Returns:
        Parsed profile

    Raises:
        ProfileParseError: If the document is not well-formed or lacks required fields
    """
    try:
        root = etree.fromstring(data, _PARSER)
    except etree.XMLSyntaxError as e:
        raise ProfileParseError(f"Datastream profile is not well-formed XML: {e}") from e

    if etree.QName(root).localname != "datastreamProfile":
        raise ProfileParseError(f"Expected datastreamProfile document, got {etree.QName(root).localname}")

    fields = _child_text(root)

    pid = root.get("pid")
    dsid = root.get("dsID")
    if not pid or not dsid:
        raise ProfileParseError("Datastream profile is missing pid or dsID attribute")

    for required in ("dsMIME", "dsCreateDate", "dsSize"):
        if not fields.get(required):
            raise ProfileParseError(f"Datastream profile for {pid}/{dsid} is missing {required}")

    try:
        size = int(fields["dsSize"])
    except ValueError as e:
        raise ProfileParseError(f"Invalid dsSize for {pid}/{dsid}: {fields['dsSize']!r}") from e
    if size < 0:
        raise ProfileParseError(f"Negative dsSize for {pid}/{dsid}: {size}")

    checksum = fields.get("dsChecksum") or ""
    if checksum.lower() == _NO_CHECKSUM:
        checksum = ""

    return DatastreamProfile(
        pid=pid,
        dsid=dsid,
        mime_type=fields["dsMIME"],
        created_date=parse_fedora_datetime(fields["dsCreateDate"]),
        size=size,
        checksum_type=fields.get("dsChecksumType") or "",
        checksum=checksum,
        label=fields.get("dsLabel") or "",
        version_id=fields.get("dsVersionID"),
        state=fields.get("dsState"),
        control_group=fields.get("dsControlGroup"),
        location=fields.get("dsLocation"),
    )


def _child_text(root: etree._Element) -> Dict[str, Optional[str]]:
    """Map child local names to their stripped text (None for empty elements)."""
    fields: Dict[str, Optional[str]] = {}
    for child in root:
        if not isinstance(child.tag, str):
            continue  # comments, processing instructions
        text = child.text.strip() if child.text else ""
        fields[etree.QName(child).localname] = text or None
    return fields
