"""Extract fenced code blocks from conversation messages."""

import re

from claude_history_viewer.types import CodeSnippet, Message

CODE_BLOCK_RE = re.compile(r"```(\w*)\n?([\s\S]*?)```")


def extract_code_snippets(messages: list[Message]) -> list[CodeSnippet]:
    """Collect every fenced code block, in message order."""
    snippets = []
    for msg in messages:
        for match in CODE_BLOCK_RE.finditer(msg.text):
            snippets.append(CodeSnippet(
                language=match.group(1) or "text",
                code=match.group(2).strip(),
                role=msg.role or "",
                timestamp=msg.timestamp or "",
            ))
    return snippets
