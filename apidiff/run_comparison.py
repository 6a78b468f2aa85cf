"""Orchestration logic for comparing two API surface documents."""

import logging
from pathlib import Path
from typing import Any

from apidiff.api_diff_error import ApiDiffError
from apidiff.compare_documents import compare_documents
from apidiff.comparison_state import ComparisonState
from apidiff.formatter import Formatter
from apidiff.html_formatter import HtmlFormatter
from apidiff.load_api_document import load_api_document
from apidiff.load_config import load_config
from apidiff.markdown_formatter import MarkdownFormatter
from apidiff.plain_text_formatter import PlainTextFormatter

logger = logging.getLogger(__name__)

FORMATTERS: dict[str, type[Formatter]] = {
    MarkdownFormatter.name: MarkdownFormatter,
    HtmlFormatter.name: HtmlFormatter,
    PlainTextFormatter.name: PlainTextFormatter,
}


def create_formatters(formats: list[str]) -> list[Formatter]:
    """Instantiate one formatter per requested format, in order."""
    return [FORMATTERS[name]() for name in formats]


def run_comparison(
    source_path: Path,
    target_path: Path,
    config: dict[str, Any] | None = None,
) -> dict[str, str]:
    """Execute the full comparison and return one report per format.

    Any failure aborts the run without a partial report.
    """
    if config is None:
        config = load_config(None)
    try:
        source = load_api_document(source_path)
        target = load_api_document(target_path)
        formatters = create_formatters(config["formats"])
        state = ComparisonState.from_config(target, config, formatters)
        compare_documents(state, source, target, title=config.get("title") or "API diff")
    except ApiDiffError as exc:
        logger.error("Comparison of %s and %s aborted: %s", source_path, target_path, exc)
        raise SystemExit(str(exc)) from exc

    logger.info("Compared %s with %s", source_path, target_path)
    return {f.name: f.getvalue() for f in formatters}
