"""Message-level types for parsed JSONL data."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class MessageType(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


DISPLAYABLE_TYPES = frozenset(t.value for t in MessageType)


@dataclass(frozen=True)
class ContentBlock:
    """One element of a content sequence, tagged by ``kind`` ("text", "tool_use", ...)."""
    kind: str
    fields: dict = field(default_factory=dict)

    @property
    def text(self) -> str:
        """String payload of a text block, "" for any other kind."""
        if self.kind != "text":
            return ""
        value = self.fields.get("text")
        return value if isinstance(value, str) else ""

    def to_dict(self) -> dict:
        return {"type": self.kind, **self.fields}


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class Blocks:
    blocks: tuple[ContentBlock, ...] = ()


MessageContent = Union[PlainText, Blocks]


def content_from_raw(raw: Any) -> MessageContent | None:
    """Build the content union from a raw ``message.content`` value.

    Returns None for anything that is neither a string nor a list.
    Non-object list items are dropped.
    """
    if isinstance(raw, str):
        return PlainText(raw)
    if isinstance(raw, list):
        blocks = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            kind = item.get("type")
            fields = {k: v for k, v in item.items() if k != "type"}
            blocks.append(ContentBlock(kind=kind if isinstance(kind, str) else "", fields=fields))
        return Blocks(tuple(blocks))
    return None


def has_text(content: MessageContent | None) -> bool:
    """True if the content resolves to non-blank text."""
    if isinstance(content, PlainText):
        return bool(content.text.strip())
    if isinstance(content, Blocks):
        return any(block.text.strip() for block in content.blocks)
    return False


def flatten_text(content: MessageContent | None) -> str:
    """String content verbatim, or every text block joined by newlines."""
    if isinstance(content, PlainText):
        return content.text
    if isinstance(content, Blocks):
        return "\n".join(
            block.fields["text"] for block in content.blocks
            if block.kind == "text" and isinstance(block.fields.get("text"), str)
        )
    return ""


@dataclass
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class Message:
    type: str
    uuid: Optional[str]
    parent_uuid: Optional[str]  # Reply back-reference, never traversed
    timestamp: Optional[str]
    session_id: Optional[str]
    role: Optional[str] = None
    content: Optional[MessageContent] = None

    @property
    def text(self) -> str:
        return flatten_text(self.content)

    def to_dict(self) -> dict:
        if isinstance(self.content, PlainText):
            content: Any = self.content.text
        elif isinstance(self.content, Blocks):
            content = [block.to_dict() for block in self.content.blocks]
        else:
            content = None
        return {
            "type": self.type,
            "uuid": self.uuid,
            "parent_uuid": self.parent_uuid,
            "timestamp": self.timestamp,
            "session_id": self.session_id,
            "message": {"role": self.role, "content": content},
        }
