"""Fold hand-built token sequences with the low-level folding API.

Run this script:
    python examples/folding/fold_tokens.py
"""

from __future__ import annotations

import io

from mailfold import Folder, MIMEParam, WordEncodable, fold, fws


def show(title: str, text: str) -> None:
    """Print folded text with visible line terminators."""
    print(f"\n=== {title} ===")
    print(text.replace("\r\n", "\\r\\n\n"), end="")


def demo_priorities() -> None:
    """Lower priority markers are preferred fold points."""
    tokens = ["X-Items:", *fws(1)]
    for index in range(12):
        if index:
            tokens.extend([",", *fws(1 if index % 4 == 0 else 2)])
        tokens.append(f"item-number-{index}")
    show("priority markers", fold(*tokens))


def demo_encoded_words() -> None:
    """Non-ASCII text is split into encoded-words of at most 75 octets."""
    text = "Réunion trimestrielle: résultats, prévisions et questions ouvertes " * 2
    show("encoded-words", fold("Subject:", *fws(1), WordEncodable(text.strip(), priority=2)))


def demo_continuations() -> None:
    """Long parameters become RFC 2231 continuations."""
    name = "très-long-nom-de-fichier-" * 5 + ".pdf"
    tokens = ["Content-Disposition:", *fws(1), "attachment", ";", *fws(1), MIMEParam("filename", name)]
    show("parameter continuations", fold(*tokens))


def demo_streaming() -> None:
    """A Folder can write to any text sink in several calls."""
    out = io.StringIO()
    folder = Folder(out)
    folder.write("X-Stream:", *fws(1), "first")
    folder.write(*fws(1), "second", *fws(1), "third")
    folder.close()
    show("streaming", out.getvalue())


if __name__ == "__main__":  # pragma: no cover - manual example
    demo_priorities()
    demo_encoded_words()
    demo_continuations()
    demo_streaming()
