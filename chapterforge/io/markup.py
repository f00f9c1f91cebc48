"""Markup loading helpers shared by the container parsers.

Responsibilities:
- Read container entries as bytes and hand them to BeautifulSoup.
- Pick an XML or HTML tree builder per content document.
- Resolve container-relative resource references to normalized paths.
"""

from __future__ import annotations

import posixpath
import warnings
import zipfile
import zlib
from urllib.parse import unquote

from bs4 import BeautifulSoup, Tag, XMLParsedAsHTMLWarning

from ..errors import InvalidContainerError


def read_entry(archive: zipfile.ZipFile, path: str) -> bytes | None:
    """Return entry bytes, or `None` when the container has no such entry.

    Raises:
        InvalidContainerError: If the entry exists but cannot be decompressed.
    """

    try:
        return archive.read(path)
    except KeyError:
        return None
    except (zipfile.BadZipFile, zlib.error, NotImplementedError) as exc:
        raise InvalidContainerError(
            f"Invalid EPUB: entry `{path}` could not be read: {exc}",
        ) from exc


def load_xml(data: bytes) -> BeautifulSoup:
    """Parse an XML resource (container, OPF, NCX, PLS) with the lxml XML builder."""

    return BeautifulSoup(data, "lxml-xml")


def load_content_document(data: bytes) -> BeautifulSoup:
    """Parse an XHTML/HTML content document.

    XHTML declared as XML keeps namespaced attributes such as `ssml:ph`
    through the XML builder; everything else goes through the HTML builder.
    """

    head = data.lstrip()[:200].lower()
    xmlish = head.startswith(b"<?xml") or (b"<html" in head and b"xmlns" in head)
    if xmlish:
        return BeautifulSoup(data, "lxml-xml")
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
        return BeautifulSoup(data, "lxml")


def tag_text(tag: Tag | None) -> str:
    """Return the stripped text of a tag, or an empty string."""

    if tag is None:
        return ""
    return tag.get_text().strip()


def split_fragment(href: str) -> str:
    """Drop an in-document `#fragment` from a resource reference."""

    return href.split("#", 1)[0]


def resolve_resource_path(base_file: str, href: str) -> str:
    """Resolve `href` against the directory of `base_file` as a normalized posix path."""

    decoded = unquote(href).replace("\\", "/")
    base_dir = posixpath.dirname(base_file.replace("\\", "/"))
    combined = posixpath.join(base_dir, decoded) if base_dir else decoded
    normalized = posixpath.normpath(combined)
    return normalized.lstrip("/")
