from typing import List


def split_lines(text: str) -> List[str]:
    """Non-empty, trimmed lines of ``text`` (handles \\n, \\r\\n and \\r endings)."""
    if not text:
        return []
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def normalize_newlines(text: str) -> str:
    """Rewrite \\r\\n and bare \\r line endings as \\n."""
    return (text or "").replace("\r\n", "\n").replace("\r", "\n")
