"""Package descriptor (OPF) parsing.

Responsibilities:
- Read book metadata with fixed placeholders for absent values.
- Build the manifest and the spine reading order.
- Collect pronunciation lexicon paths and the NCX navigation path.
"""

from __future__ import annotations

import zipfile

from bs4 import BeautifulSoup, Tag

from ..errors import InvalidPackageError
from ..models.datatypes import ManifestEntry, PackageDescriptor
from .markup import load_xml, read_entry, resolve_resource_path, tag_text

DEFAULT_TITLE = "Untitled"
DEFAULT_AUTHOR = "Unknown Author"
DEFAULT_LANGUAGE = "es"

LEXICON_MEDIA_TYPE = "application/pls+xml"
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"


class PackageDescriptorParser:
    """Parse the root package descriptor named by the container."""

    def parse(self, archive: zipfile.ZipFile, descriptor_path: str) -> PackageDescriptor:
        """Parse metadata, manifest, spine and side resources.

        Raises:
            InvalidPackageError: If the descriptor is missing, has no `<package>`
                root, or declares no spine itemrefs.
        """

        data = read_entry(archive, descriptor_path)
        if data is None:
            raise InvalidPackageError(
                f"Invalid EPUB: package descriptor not found at `{descriptor_path}`.",
                hint="Check the rootfile `full-path` declared in `META-INF/container.xml`.",
            )

        soup = load_xml(data)
        package = soup.find("package")
        if not isinstance(package, Tag):
            raise InvalidPackageError(
                f"Invalid EPUB: `{descriptor_path}` has no `<package>` root element.",
            )

        manifest: dict[str, ManifestEntry] = {}
        lexicon_paths: list[str] = []
        navigation_path: str | None = None
        for item in package.find_all("item"):
            item_id = (item.get("id") or "").strip()
            href = (item.get("href") or "").strip()
            if not item_id or not href:
                continue
            media_type = (item.get("media-type") or "").strip()
            entry = ManifestEntry(
                id=item_id,
                resource_path=resolve_resource_path(descriptor_path, href),
                media_type=media_type,
            )
            manifest[item_id] = entry
            if media_type == LEXICON_MEDIA_TYPE:
                lexicon_paths.append(entry.resource_path)
            if media_type == NCX_MEDIA_TYPE or entry.resource_path.lower().endswith(".ncx"):
                navigation_path = entry.resource_path

        reading_order = self._reading_order(package)
        if not reading_order:
            raise InvalidPackageError(
                f"Invalid EPUB: `{descriptor_path}` declares no spine reading order.",
                hint="The package `<spine>` must reference at least one manifest item.",
            )

        return PackageDescriptor(
            path=descriptor_path,
            title=self._first_metadata_text(soup, "title") or DEFAULT_TITLE,
            author=self._first_metadata_text(soup, "creator") or DEFAULT_AUTHOR,
            language=self._first_metadata_text(soup, "language") or DEFAULT_LANGUAGE,
            manifest=manifest,
            reading_order=reading_order,
            lexicon_paths=tuple(lexicon_paths),
            navigation_path=navigation_path,
        )

    def _reading_order(self, package: Tag) -> tuple[str, ...]:
        """Return spine idrefs in document order."""

        spine = package.find("spine")
        if not isinstance(spine, Tag):
            return ()
        idrefs = ((itemref.get("idref") or "").strip() for itemref in spine.find_all("itemref"))
        return tuple(idref for idref in idrefs if idref)

    def _first_metadata_text(self, soup: BeautifulSoup, name: str) -> str:
        """Return the first non-blank metadata element text for a Dublin Core name."""

        metadata = soup.find("metadata")
        scope = metadata if isinstance(metadata, Tag) else soup
        for element in scope.find_all(name):
            text = tag_text(element)
            if text:
                return " ".join(text.split())
        return ""
