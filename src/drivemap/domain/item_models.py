from __future__ import annotations

"""
Source Item and Decoding Data Models.

Defines the flat records supplied by the Drive listing collaborator and the
structured result of decoding an item name.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

# -----------------------------------------------------------------------------
# SOURCE RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RawItem:
    """
    One entry of a Drive-like listing snapshot.

    Attributes:
        id: Source identifier, unique within the snapshot.
        name: Unmodified item name as stored in the source.
        parent_id: Identifier of the containing item (None for a root).
        is_container: True for folders, False for files.
        position: Optional explicit sort key supplied by the source.
        mime_type: Source MIME type, used for extension fallback.
    """
    id: str
    name: str
    parent_id: Optional[str] = None
    is_container: bool = False
    position: Optional[int] = None
    mime_type: str = ""


@dataclass(frozen=True)
class TransformedLinks:
    """Direct access URLs produced by the link-transform step."""
    preview: str = ""
    download: str = ""
    embed: str = ""

# -----------------------------------------------------------------------------
# DECODING RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AssetCode:
    """
    Fully structured content file name (e.g. A-A-2503-0080-01-00-01).

    Attributes:
        client_code: Client code (first segment).
        campaign_code: Campaign code (second segment).
        year_month: YYMM publication stamp.
        file_code: 4-digit file-type code.
        language_code: 2-digit language code.
        version: 2-digit version.
        sequence: 2-digit file number.
    """
    client_code: str
    campaign_code: str
    year_month: str
    file_code: str
    language_code: str
    version: str
    sequence: str

    @property
    def year(self) -> int:
        return 2000 + int(self.year_month[:2])

    @property
    def month(self) -> int:
        return int(self.year_month[2:])


@dataclass(frozen=True)
class DecodedName:
    """
    Outcome of decoding one raw item name.

    base_name is always defined; it equals original_name when nothing was
    recognized and may be empty when the name only carried codes.
    """
    original_name: str
    base_name: str
    language_code: Optional[str] = None
    content_type_code: Optional[str] = None
    client_code: Optional[str] = None
    campaign_code: Optional[str] = None
    order: Optional[int] = None
    recognized_prefixes: FrozenSet[str] = field(default_factory=frozenset)
    recognized_suffixes: FrozenSet[str] = field(default_factory=frozenset)
    markers: FrozenSet[str] = field(default_factory=frozenset)
    duplicate_prefixes: FrozenSet[str] = field(default_factory=frozenset)
    duplicate_suffixes: FrozenSet[str] = field(default_factory=frozenset)
    asset: Optional[AssetCode] = None

    @property
    def is_recognized(self) -> bool:
        return bool(self.recognized_prefixes or self.recognized_suffixes or self.asset)

    def has_marker(self, marker: str) -> bool:
        return marker.lower() in self.markers
