"""CCTray XML encoding of feed projects.

The output is streamed record by record and depends only on the order of the
input projects, so encoding the same sequence twice is byte-identical::

    <?xml version="1.0" encoding="utf-8"?>
    <Projects><Project name="demo" activity="Sleeping" lastBuildStatus="Success" lastBuildTime="2024-01-01T00:00:00Z"/></Projects>
"""

from __future__ import annotations

import io
import re
from typing import BinaryIO, Iterable
from xml.sax.saxutils import XMLGenerator

from ccfeed.models.feed import Project

CONTENT_TYPE = "application/xml"
ENCODING = "utf-8"

# Characters outside the XML 1.0 Char production cannot be escaped at all.
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _xml_safe(value: str) -> str:
    return _INVALID_XML_CHARS.sub("\ufffd", value)


def _project_attributes(project: Project) -> dict[str, str]:
    # insertion order is the attribute order on the wire
    return {
        "name": _xml_safe(project.name),
        "activity": project.activity.value,
        "lastBuildStatus": project.last_build_status.value,
        "lastBuildTime": project.last_build_time_text,
    }


def encode(projects: Iterable[Project], out: BinaryIO) -> None:
    """Write the CCTray document for ``projects`` to a binary sink."""
    writer = XMLGenerator(out, encoding=ENCODING, short_empty_elements=True)
    writer.startDocument()
    writer.startElement("Projects", {})
    for project in projects:
        writer.startElement("Project", _project_attributes(project))
        writer.endElement("Project")
    writer.endElement("Projects")
    writer.endDocument()


def encode_projects(projects: Iterable[Project]) -> bytes:
    """Encode into memory and return the complete document."""
    buffer = io.BytesIO()
    encode(projects, buffer)
    return buffer.getvalue()
