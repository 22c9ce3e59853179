"""Multipart entities and boundary generation."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from mailfold.header import ContentType, Header
from mailfold.limits import MAX_BOUNDARY_LENGTH, MAX_LINE_LENGTH
from mailfold.logging import TRACE_LEVEL
from mailfold.mime.entity import Entity, MultipartBody

log = logging.getLogger(__name__)

#: RFC 2046 bcharsnospace.
BOUNDARY_CHARS_NO_SPACE = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ'()+_,-./:=?"

#: RFC 2046 bchars.
BOUNDARY_CHARS = BOUNDARY_CHARS_NO_SPACE + " "


def random_boundary(length: int, rng: random.Random | None = None) -> str:
    """Random RFC 2046 boundary.

    Args:
        length: Wanted length, capped at 70.
        rng: Random source, the module-level generator when None.

    Returns:
        A boundary whose last character is never a space.

    Raises:
        ValueError: If length is not positive.
    """
    if length <= 0:
        raise ValueError(f"Boundary length must be positive, got {length}")
    source = rng if rng is not None else random
    length = min(length, MAX_BOUNDARY_LENGTH)
    head = "".join(source.choice(BOUNDARY_CHARS) for _ in range(length - 1))
    return head + source.choice(BOUNDARY_CHARS_NO_SPACE)


def boundary_length(subtype: str) -> int:
    """Longest boundary keeping the quoted Content-Type on one line."""
    prefix = f"Content-Type: multipart/{subtype}; boundary="
    return min(MAX_LINE_LENGTH - len(prefix) - 2, MAX_BOUNDARY_LENGTH)


def multipart(
    subtype: str,
    parts: Sequence[Entity],
    headers: Sequence[Header] = (),
    rng: random.Random | None = None,
) -> Entity:
    """Build a ``multipart/<subtype>`` entity.

    Args:
        subtype: ``mixed``, ``alternative``, ``related`` ...
        parts: Body parts.
        headers: Fields written before Content-Type.
        rng: Random source for the boundary.

    Returns:
        The multipart entity.
    """
    boundary = random_boundary(boundary_length(subtype), rng)
    if log.isEnabledFor(TRACE_LEVEL):
        log.log(TRACE_LEVEL, "multipart/%s with %d parts, boundary %r", subtype, len(parts), boundary)
    content_type = ContentType(f"multipart/{subtype}", {"boundary": boundary})
    return Entity([*headers, content_type], MultipartBody(boundary, list(parts)))


def multipart_mixed(
    parts: Sequence[Entity], headers: Sequence[Header] = (), rng: random.Random | None = None
) -> Entity:
    """``multipart/mixed``: independent parts, typically attachments."""
    return multipart("mixed", parts, headers, rng)


def multipart_alternative(
    parts: Sequence[Entity], headers: Sequence[Header] = (), rng: random.Random | None = None
) -> Entity:
    """``multipart/alternative``: the same content in several formats."""
    return multipart("alternative", parts, headers, rng)


def multipart_related(
    parts: Sequence[Entity], headers: Sequence[Header] = (), rng: random.Random | None = None
) -> Entity:
    """``multipart/related``: a root part and the inline parts it references."""
    return multipart("related", parts, headers, rng)


__all__ = [
    "BOUNDARY_CHARS",
    "BOUNDARY_CHARS_NO_SPACE",
    "boundary_length",
    "multipart",
    "multipart_alternative",
    "multipart_mixed",
    "multipart_related",
    "random_boundary",
]
