from __future__ import annotations

"""
Content Classification Engine.

Derives content-type tags for hierarchy nodes. Decoded content-type codes
take precedence; files without a recognized code fall back to a heuristic
based on their extension (or MIME type when the name carries none).
"""

import os
from typing import Dict, FrozenSet, Optional, Set, Tuple

from drivemap.core.registry import DEFAULT_REGISTRY, CodeDomain, CodeRegistry
from drivemap.domain.hierarchy_models import NodeKind
from drivemap.domain.item_models import DecodedName

# -----------------------------------------------------------------------------
# EXTENSION AND MIME CONSTANTS
# -----------------------------------------------------------------------------

_EXTENSION_TAGS: Dict[str, str] = {
    "pdf": "document", "doc": "document", "docx": "document", "odt": "document", "rtf": "document",
    "xls": "spreadsheet", "xlsx": "spreadsheet", "ods": "spreadsheet", "csv": "spreadsheet",
    "ppt": "presentation", "pptx": "presentation", "odp": "presentation", "key": "presentation",
    "jpg": "image", "jpeg": "image", "png": "image", "gif": "image", "webp": "image",
    "svg": "image", "bmp": "image", "tiff": "image", "heic": "image",
    "mp4": "video", "mov": "video", "webm": "video", "avi": "video", "mkv": "video", "ogv": "video",
    "mp3": "audio", "wav": "audio", "ogg": "audio", "m4a": "audio",
    "zip": "archive", "rar": "archive", "gz": "archive", "7z": "archive",
    "txt": "text", "md": "text", "json": "text", "xml": "text", "html": "text",
}

MIME_TYPE_TO_EXTENSION: Dict[str, str] = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
    "application/pdf": "pdf",
    "application/vnd.ms-excel": "xls",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/vnd.ms-powerpoint": "ppt",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
    "text/plain": "txt",
    "text/html": "html",
    "application/json": "json",
    "application/xml": "xml",
    "audio/mpeg": "mp3",
    "audio/wav": "wav",
    "audio/ogg": "ogg",
    "video/mp4": "mp4",
    "video/webm": "webm",
    "video/ogg": "ogv",
    "video/quicktime": "mov",
    "video/x-msvideo": "avi",
    "application/zip": "zip",
    "application/x-rar-compressed": "rar",
    "application/gzip": "gz",
    "application/x-7z-compressed": "7z",
}

_GOOGLE_APPS_EXTENSIONS: Tuple[Tuple[str, str], ...] = (
    ("google-apps.presentation", "pptx"),
    ("google-apps.document", "docx"),
    ("google-apps.spreadsheet", "xlsx"),
    ("google-apps.drawing", "png"),
)

_MAX_EXTENSION_LENGTH = 5

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def split_extension(name: str) -> Tuple[str, str]:
    """
    Separate a trailing file extension from a name.

    Only short alphanumeric extensions count, so labels such as
    "Campaña v1.2 final" keep their dots.

    Returns:
        Tuple[str, str]: (stem, extension without dot, lower-cased).
    """
    stem, ext = os.path.splitext(name or "")
    ext = ext[1:]
    if not stem or not ext or len(ext) > _MAX_EXTENSION_LENGTH or not ext.isalnum() or ext.isdigit():
        return name or "", ""
    return stem, ext.lower()


def extension_from_mime(mime_type: str) -> str:
    """Return the most suitable extension for a MIME type, or ""."""
    if not mime_type:
        return ""
    if mime_type in MIME_TYPE_TO_EXTENSION:
        return MIME_TYPE_TO_EXTENSION[mime_type]
    for marker, ext in _GOOGLE_APPS_EXTENSIONS:
        if marker in mime_type:
            return ext
    return ""


def tag_for_extension(extension: str) -> Optional[str]:
    return _EXTENSION_TAGS.get((extension or "").lower())


def classify(
        decoded: DecodedName,
        kind: NodeKind,
        extension: str = "",
        registry: Optional[CodeRegistry] = None,
) -> FrozenSet[str]:
    """
    Compute the content-type tags of a node.

    A recognized content-type code contributes its label (e.g. "Alup80")
    and its category (e.g. "poster"). Files without one are tagged from
    their extension. Folders without codes carry no tags.

    Args:
        decoded: Decoded name of the node.
        kind: Folder or File.
        extension: File extension (without dot).
        registry: Code tables (process default if omitted).

    Returns:
        FrozenSet[str]: Possibly empty set of tags.
    """
    registry = registry or DEFAULT_REGISTRY
    tags: Set[str] = set()

    code = decoded.content_type_code
    label = registry.lookup(CodeDomain.CONTENT_TYPE, code)
    if label:
        tags.add(label)
        category = registry.lookup(CodeDomain.CONTENT_CATEGORY, code)
        if category:
            tags.add(category)
        return frozenset(tags)

    if kind is NodeKind.FILE:
        ext_tag = tag_for_extension(extension)
        if ext_tag:
            tags.add(ext_tag)

    return frozenset(tags)
