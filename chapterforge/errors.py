"""Domain exceptions for document parsing and CLI diagnostics."""

from __future__ import annotations


class PipelineStageError(RuntimeError):
    """Raised when a specific pipeline stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped pipeline error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class DocumentParseError(PipelineStageError):
    """Base class for errors crossing the `parse_document` entry point."""

    default_stage = "parse"

    def __init__(self, detail: str, hint: str | None = None) -> None:
        """Initialize a parse error bound to the subclass stage name."""

        super().__init__(stage=self.default_stage, detail=detail, hint=hint)


class InvalidContainerError(DocumentParseError):
    """Raised when bytes are not a zip container or lack `META-INF/container.xml`."""

    default_stage = "container"


class InvalidPackageError(DocumentParseError):
    """Raised when the root package descriptor is missing or unusable."""

    default_stage = "package"


class EmptyDocumentError(DocumentParseError):
    """Raised when no content document survives narrative classification."""

    default_stage = "assemble"
