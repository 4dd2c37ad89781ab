import re
import unicodedata


MAX_LINE_CHARACTERS = 90

_CONTROL_RE = re.compile(r"[\x00-\x1f]")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_LATIN1_RE = re.compile(r"[^\x00-\xff]")


def text_to_pdf_hex(text: str) -> str:
    """Hex for a show-text operator using a single byte Latin-1 font.

    Anything outside Latin-1 becomes `?`.
    """
    if not text:
        return ""

    normalized = unicodedata.normalize("NFC", text)
    sanitized = _WHITESPACE_RE.sub(" ", _CONTROL_RE.sub(" ", normalized))
    safe = _NON_LATIN1_RE.sub("?", sanitized)
    return safe.encode("latin-1").hex().upper()


def _chunks(word: str, size: int) -> list[str]:
    return [word[i : i + size] for i in range(0, len(word), size)]


def wrap_text(text: str, max_length: int = MAX_LINE_CHARACTERS) -> list[str]:
    if not text:
        return []

    normalized = _WHITESPACE_RE.sub(" ", text).strip()
    if not normalized:
        return []

    max_length = max(1, max_length)
    lines: list[str] = []
    current = ""

    for word in normalized.split(" "):
        if current:
            tentative = f"{current} {word}"
            if len(tentative) <= max_length:
                current = tentative
                continue
            lines.append(current)

        if len(word) > max_length:
            # Words too long for a line are split, the tail stays open.
            *full, current = _chunks(word, max_length)
            lines.extend(full)
        else:
            current = word

    if current:
        lines.append(current)

    return lines
