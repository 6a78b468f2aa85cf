from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from apidiff.compare_documents import compare_documents
from apidiff.comparison_state import ComparisonState
from apidiff.formatter import Formatter
from apidiff.load_api_document import parse_api_document
from apidiff.markdown_formatter import MarkdownFormatter
from tests._fixtures.recorder import EventRecorder


def _run(source_xml: str, target_xml: str, formatters: list[Any], config: dict[str, Any]) -> None:
    source = parse_api_document(source_xml)
    target = parse_api_document(target_xml)
    state = ComparisonState.from_config(target, config, formatters)
    compare_documents(state, source, target)


@pytest.fixture
def render() -> Callable[..., str]:
    """Compare two XML documents and return the rendered report."""

    def _render(
        source_xml: str,
        target_xml: str,
        formatter: Formatter | None = None,
        **config: Any,
    ) -> str:
        formatter = formatter or MarkdownFormatter()
        _run(source_xml, target_xml, [formatter], config)
        return formatter.getvalue()

    return _render


@pytest.fixture
def record() -> Callable[..., EventRecorder]:
    """Compare two XML documents and return the recorded event stream."""

    def _record(source_xml: str, target_xml: str, **config: Any) -> EventRecorder:
        recorder = EventRecorder()
        _run(source_xml, target_xml, [recorder], config)
        return recorder

    return _record
