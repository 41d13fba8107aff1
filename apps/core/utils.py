"""Shared utilities."""
import re
import unicodedata


def normalize_text(text: str) -> str:
    """Normalize free text for comparison: lowercase, strip accents, collapse spaces."""
    text = unicodedata.normalize("NFKD", text or "")
    text = text.encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"\s+", " ", text).strip().lower()
    return text


def truncate(text: str, max_len: int = 200) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
