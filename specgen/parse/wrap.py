"""Word-boundary line wrapping for generated comments."""

from typing import List


def wrap(text: str, width: int) -> List[str]:
    """Split text into maximal runs of whole words no longer than width.

    Words are only broken at single spaces, so " ".join(wrap(text, width))
    reproduces text exactly. A word longer than width is returned on its own.
    """
    lines: List[str] = []
    current = None
    for word in text.split(" "):
        if current is None:
            current = word
        elif len(current) + 1 + len(word) <= width:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines


def comment_block(text: str, width: int, indent: str = "") -> str:
    """Render text as wrapped "# " comment lines."""
    return "\n".join(f"{indent}# {line}".rstrip() for line in wrap(text, width))
