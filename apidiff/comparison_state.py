"""Context of one comparison run, threaded through every comparer call."""

import logging
import re
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from apidiff.api_declarations import ApiDocument, TypeDeclaration
from apidiff.api_diff_error import ApiDiffError
from apidiff.class_hierarchy_map import build_class_hierarchy_map
from apidiff.comparison_events import ComparisonEvent
from apidiff.formatter import Formatter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """The namespace and (possibly nested) type currently being compared."""

    namespace: str
    type_name: str | None = None  # Outer.Inner for nested types
    base_type: str | None = None


def compile_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile ignore patterns; an invalid expression aborts the run."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            msg = f"Invalid ignore pattern {pattern!r}: {exc}"
            raise ApiDiffError(msg) from exc
    return compiled


@dataclass
class ComparisonState:
    """Mutable state of a single comparison run.

    Created once per run and never shared between runs or threads: the frame
    stack is pushed and popped as the walk enters and leaves namespaces and
    types, and the class hierarchy map is built on first use and kept until
    the state is discarded.
    """

    target: ApiDocument
    formatters: list[Formatter] = field(default_factory=list)
    ignore_new: list[re.Pattern[str]] = field(default_factory=list)
    ignore_removed: list[re.Pattern[str]] = field(default_factory=list)
    ignore_nonbreaking: bool = False
    _frames: list[Frame] = field(default_factory=list, repr=False)
    _hierarchy: dict[str, str | None] | None = field(default=None, repr=False)

    @classmethod
    def from_config(
        cls, target: ApiDocument, config: dict[str, Any], formatters: list[Formatter]
    ) -> "ComparisonState":
        """Create the state from configuration values."""
        return cls(
            target=target,
            formatters=formatters,
            ignore_new=compile_patterns(config.get("ignore_new") or []),
            ignore_removed=compile_patterns(config.get("ignore_removed") or []),
            ignore_nonbreaking=bool(config.get("ignore_nonbreaking")),
        )

    # -----------------------------
    # Events
    # -----------------------------

    def emit(self, event: ComparisonEvent) -> None:
        """Hand an event to every attached formatter, in order."""
        for formatter in self.formatters:
            formatter.handle(event)

    # -----------------------------
    # Context
    # -----------------------------

    @property
    def frame(self) -> Frame:
        """The innermost namespace or type frame."""
        if not self._frames:
            msg = "No namespace is being compared"
            raise RuntimeError(msg)
        return self._frames[-1]

    @property
    def namespace(self) -> str:
        """Name of the namespace being compared."""
        return self.frame.namespace

    @property
    def type_name(self) -> str:
        """Name of the type being compared, qualified with its declaring types."""
        return self.frame.type_name or ""

    @property
    def base_type(self) -> str | None:
        """Declared base of the type being compared."""
        return self.frame.base_type

    @property
    def qualified_type_name(self) -> str:
        """``Namespace.Type`` of the type being compared."""
        return f"{self.namespace}.{self.type_name}"

    @contextmanager
    def entering_namespace(self, name: str) -> Iterator[Frame]:
        """Enter a namespace for the duration of the block."""
        frame = Frame(namespace=name)
        self._frames.append(frame)
        try:
            yield frame
        finally:
            self._frames.pop()

    @contextmanager
    def entering_type(self, type_decl: TypeDeclaration) -> Iterator[Frame]:
        """Enter a type; inside a type, the name is qualified with its parent."""
        parent = self.frame
        name = f"{parent.type_name}.{type_decl.name}" if parent.type_name else type_decl.name
        frame = Frame(
            namespace=parent.namespace,
            type_name=name,
            base_type=type_decl.base,
        )
        self._frames.append(frame)
        try:
            yield frame
        finally:
            self._frames.pop()

    # -----------------------------
    # Configuration
    # -----------------------------

    def is_ignored_new(self, description: str) -> bool:
        """Check an addition description against the ignore-new patterns."""
        logger.debug("Possible -n value: %s", description)
        return any(p.search(description) for p in self.ignore_new)

    def is_ignored_removed(self, description: str) -> bool:
        """Check a removal description against the ignore-removed patterns."""
        logger.debug("Possible -r value: %s", description)
        return any(p.search(description) for p in self.ignore_removed)

    @property
    def class_hierarchy_map(self) -> dict[str, str | None]:
        """Base type lookup of the target document, built on first use."""
        if self._hierarchy is None:
            self._hierarchy = build_class_hierarchy_map(self.target)
        return self._hierarchy
