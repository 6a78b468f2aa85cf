"""Data model for a single rendered difference between two declarations."""

from dataclasses import dataclass, field

TEXT = "text"
ADDED = "added"
REMOVED = "removed"
MODIFIED = "modified"


@dataclass(frozen=True)
class DiffChunk:
    """A fragment of an ApiChange: shared text or a change marker."""

    kind: str
    old: str = ""
    new: str = ""
    breaking: bool = False


@dataclass
class ApiChange:
    """Represents the before/after rendering of one member or type.

    Chunks are appended in reading order. Text may contain newlines; the
    formatters split the change into lines with ``lines()``.
    """

    header: str
    chunks: list[DiffChunk] = field(default_factory=list)
    breaking: bool = False
    any_change: bool = False

    def append(self, text: str) -> "ApiChange":
        """Append text shared by both sides."""
        if text:
            self.chunks.append(DiffChunk(TEXT, old=text, new=text))
        return self

    def append_added(self, text: str, breaking: bool = False) -> "ApiChange":
        """Append text present only in the target."""
        self.chunks.append(DiffChunk(ADDED, new=text, breaking=breaking))
        return self._changed(breaking)

    def append_removed(self, text: str, breaking: bool = True) -> "ApiChange":
        """Append text present only in the source."""
        self.chunks.append(DiffChunk(REMOVED, old=text, breaking=breaking))
        return self._changed(breaking)

    def append_modified(self, old: str, new: str, breaking: bool = True) -> "ApiChange":
        """Append text that changed from ``old`` to ``new``."""
        self.chunks.append(DiffChunk(MODIFIED, old=old, new=new, breaking=breaking))
        return self._changed(breaking)

    def _changed(self, breaking: bool) -> "ApiChange":
        self.any_change = True
        self.breaking = self.breaking or breaking
        return self

    @property
    def source_text(self) -> str:
        """Rendering of the source side."""
        return "".join(c.old for c in self.chunks)

    @property
    def target_text(self) -> str:
        """Rendering of the target side."""
        return "".join(c.new for c in self.chunks)

    def lines(self) -> list[list[DiffChunk]]:
        """Split the chunks on newlines, keeping markers on their own line."""
        lines: list[list[DiffChunk]] = [[]]
        for chunk in self.chunks:
            old_parts = chunk.old.split("\n")
            new_parts = chunk.new.split("\n")
            if chunk.kind == TEXT:
                for i, part in enumerate(old_parts):
                    if i:
                        lines.append([])
                    if part:
                        lines[-1].append(DiffChunk(TEXT, old=part, new=part))
                continue
            # a multi-line marker is split into one marker per line
            count = max(len(old_parts), len(new_parts))
            for i in range(count):
                if i:
                    lines.append([])
                old = old_parts[i] if i < len(old_parts) else ""
                new = new_parts[i] if i < len(new_parts) else ""
                if old or new:
                    lines[-1].append(DiffChunk(chunk.kind, old, new, chunk.breaking))
        return [line for line in lines if line]
