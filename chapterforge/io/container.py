"""Zip container access and root descriptor lookup."""

from __future__ import annotations

import io
import zipfile

from ..errors import InvalidContainerError
from .markup import load_xml, read_entry

CONTAINER_DESCRIPTOR_PATH = "META-INF/container.xml"


class ContainerReader:
    """Open EPUB containers and locate their root package descriptor."""

    def open(self, raw_bytes: bytes) -> zipfile.ZipFile:
        """Open raw bytes as an in-memory zip archive.

        Raises:
            InvalidContainerError: If the bytes are not a readable zip archive.
        """

        try:
            return zipfile.ZipFile(io.BytesIO(raw_bytes))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as exc:
            raise InvalidContainerError(
                f"Input is not a valid zip-based container: {exc}",
                hint="Upload an `.epub` file exported by an EPUB-producing tool.",
            ) from exc

    def find_rootfile_path(self, archive: zipfile.ZipFile) -> str:
        """Return the `full-path` of the first `<rootfile>` in the container descriptor.

        Raises:
            InvalidContainerError: If the descriptor is missing or names no rootfile.
        """

        data = read_entry(archive, CONTAINER_DESCRIPTOR_PATH)
        if data is None:
            raise InvalidContainerError(
                f"Invalid EPUB: `{CONTAINER_DESCRIPTOR_PATH}` not found.",
                hint="The container must declare its package in `META-INF/container.xml`.",
            )

        soup = load_xml(data)
        for rootfile in soup.find_all("rootfile"):
            full_path = (rootfile.get("full-path") or "").strip()
            if full_path:
                return full_path

        raise InvalidContainerError(
            f"Invalid EPUB: no rootfile path declared in `{CONTAINER_DESCRIPTOR_PATH}`.",
        )
