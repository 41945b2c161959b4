from typing import Any

# Lexical node types rendered as separate blocks
_BLOCK_TYPES = {"paragraph", "heading", "quote", "listitem"}


def rich_text_to_plain(value: Any) -> str:
    """Flatten rich text (Lexical editor JSON) to plain text.

    Plain strings pass through unchanged. Blocks are separated by a blank
    line, line breaks inside a block become newlines.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if not isinstance(value, dict):
        return ""

    root = value.get("root", value)
    blocks: list[str] = []
    _collect_blocks(root, blocks)
    return "\n\n".join(block for block in blocks if block)


def _collect_blocks(node: dict[str, Any], blocks: list[str]) -> None:
    children = node.get("children") or []
    if node.get("type") in _BLOCK_TYPES:
        blocks.append(_inline_text(node).strip())
        return
    for child in children:
        if isinstance(child, dict):
            _collect_blocks(child, blocks)


def _inline_text(node: dict[str, Any]) -> str:
    if node.get("type") == "linebreak":
        return "\n"
    if "text" in node:
        return str(node.get("text") or "")
    return "".join(
        _inline_text(child) for child in node.get("children") or [] if isinstance(child, dict)
    )
