"""Header line folding engine.

Header renderers describe a field as a sequence of tokens: literal text,
integer fold-priority markers, and splittable fragments. The
:class:`Folder` writes that sequence to a sink as CRLF-folded lines of at
most 78 octets.

Examples:
    >>> from mailfold.folding import WordEncodable, fold, fws
    >>> fold("Subject:", *fws(1), WordEncodable("héllo", priority=2))
    'Subject: =?utf-8?q?h=C3=A9llo?=\\r\\n'
"""

from mailfold.folding.base import Foldable, FoldResult, Token, fws, octets
from mailfold.folding.folder import Folder, SupportsWrite, fold
from mailfold.folding.param import MIMEParam, dequote
from mailfold.folding.word import WordEncodable

__all__ = [
    "FoldResult",
    "Foldable",
    "Folder",
    "MIMEParam",
    "SupportsWrite",
    "Token",
    "WordEncodable",
    "dequote",
    "fold",
    "fws",
    "octets",
]
