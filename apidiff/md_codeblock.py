"""Utility for generating Markdown code blocks."""


def md_codeblock(lang: str, lines: list[str]) -> list[str]:
    """Fence ``lines`` as a Markdown code block, followed by a blank line."""
    return [f"```{lang}", *lines, "```", ""]
