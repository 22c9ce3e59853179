"""MIME entity tree: entities, multipart bodies and content sniffing."""

from mailfold.mime.entity import Entity, MultipartBody, text_entity
from mailfold.mime.multipart import (
    BOUNDARY_CHARS,
    BOUNDARY_CHARS_NO_SPACE,
    boundary_length,
    multipart,
    multipart_alternative,
    multipart_mixed,
    multipart_related,
    random_boundary,
)
from mailfold.mime.sniff import detect_content_type

__all__ = [
    "BOUNDARY_CHARS",
    "BOUNDARY_CHARS_NO_SPACE",
    "Entity",
    "MultipartBody",
    "boundary_length",
    "detect_content_type",
    "multipart",
    "multipart_alternative",
    "multipart_mixed",
    "multipart_related",
    "random_boundary",
    "text_entity",
]
