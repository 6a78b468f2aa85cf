"""Errors raised while loading or comparing API documents."""


class ApiDiffError(Exception):
    """Base class for failures of a comparison run."""


class LocatedApiDiffError(ApiDiffError):
    """A failure that can name the offending namespace and type."""

    def __init__(
        self,
        operation: str,
        detail: str,
        *,
        namespace: str | None = None,
        type_name: str | None = None,
    ) -> None:
        self.operation = operation
        self.detail = detail
        self.namespace = namespace
        self.type_name = type_name
        super().__init__(self._format())

    def _format(self) -> str:
        """Render the message, prefixed with the location when known."""
        location = ".".join(p for p in (self.namespace, self.type_name) if p)
        if location:
            return f"{self.operation} failed in {location}: {self.detail}"
        return f"{self.operation} failed: {self.detail}"


class MalformedDocumentError(LocatedApiDiffError):
    """The input document is missing an expected element or attribute."""

    def __init__(self, detail: str, **kwargs: str | None) -> None:
        super().__init__("loading", detail, **kwargs)


class HierarchyMapError(LocatedApiDiffError):
    """The class hierarchy map of the target document could not be built."""

    def __init__(self, detail: str, **kwargs: str | None) -> None:
        super().__init__("hierarchy-map construction", detail, **kwargs)
