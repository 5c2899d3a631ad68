from __future__ import annotations

"""
Drive Link Builder.

Produces the public URLs used by content consumers. drive_link_transform()
matches the BuildOptions.link_transform contract.
"""

from typing import Optional

from drivemap.domain.item_models import RawItem, TransformedLinks

VIEW_URL = "https://drive.google.com/file/d/{id}/view?usp=drivesdk"
IMAGE_URL = "https://lh3.googleusercontent.com/d/{id}"
DOWNLOAD_URL = "https://drive.google.com/uc?id={id}&export=download"
EMBED_URL = "https://drive.google.com/file/d/{id}/preview"


def drive_links(file_id: str, mime_type: str = "") -> TransformedLinks:
    """
    Build preview, download and embed URLs for a Drive file.

    Images preview through the image CDN; everything else through the
    Drive viewer.
    """
    preview = IMAGE_URL if (mime_type or "").startswith("image/") else VIEW_URL
    return TransformedLinks(
        preview=preview.format(id=file_id),
        download=DOWNLOAD_URL.format(id=file_id),
        embed=EMBED_URL.format(id=file_id),
    )


def drive_link_transform(item: RawItem) -> Optional[TransformedLinks]:
    if item.is_container or not item.id:
        return None
    return drive_links(item.id, item.mime_type)
