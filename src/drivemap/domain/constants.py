from __future__ import annotations

"""
Domain Constants and Static Code Tables.

Provides the static lookup tables that map short codes embedded in item
names to semantic labels, plus the word markers and limits used by the
decoder, builder and validator.
"""

from typing import Dict, Tuple

# -----------------------------------------------------------------------------
# CODE TABLES
# -----------------------------------------------------------------------------

UNKNOWN_LABEL = "Unknown"

DEFAULT_LANG_CODES: Dict[str, str] = {
    "01": "ES",
    "02": "CA",
    "03": "EN",
    "04": "FR",
    "05": "PT",
    "06": "IT",
    "07": "DE",
    "08": "EU",
    "09": "GL",
}

# File-type codes (4 digits, see A-A-2503-0080-01-00-01 naming)
DEFAULT_FILE_CODES: Dict[str, str] = {
    "0001": "Documento",
    "0002": "Presentacion",
    "0003": "Hoja de calculo",
    "0004": "A4",
    "0005": "A5",
    "0010": "Imagen",
    "0020": "Video",
    "0030": "Audio",
    "0048": "Diptico",
    "0050": "Alup50",
    "0060": "Stopper",
    "0070": "Tarjeta",
    "0080": "Alup80",
    "0100": "Formulario",
    "0129": "Story",
    "0192": "Post",
    "0200": "Plantilla",
}

# Coarse content category per file-type code
DEFAULT_CATEGORY_CODES: Dict[str, str] = {
    "0001": "document",
    "0002": "document",
    "0003": "document",
    "0004": "poster",
    "0005": "poster",
    "0010": "image",
    "0020": "video",
    "0030": "audio",
    "0048": "leaflet",
    "0050": "poster",
    "0060": "stopper",
    "0070": "card",
    "0080": "poster",
    "0100": "form",
    "0129": "digital-story",
    "0192": "digital-post",
    "0200": "template",
}

DEFAULT_CLIENT_CODES: Dict[str, str] = {
    "A": "Salon Toro",
    "B": "Marketing Salon",
    "C": "Insiders",
}

DEFAULT_CAMPAIGN_CODES: Dict[str, str] = {
    "A": "Campaña mensual",
    "B": "Campaña estacional",
    "C": "Lanzamiento",
}

# -----------------------------------------------------------------------------
# NAMING MARKERS
# -----------------------------------------------------------------------------

MARKER_TAB = "tab"
MARKER_TABS = "tabs"
MARKER_ACCORDION = "accordion"
MARKER_SECTION = "section"
MARKER_HIDDEN = "hidden"
MARKER_COPY = "copy"
MARKER_DARK = "dark"
MARKER_LIGHT = "light"

# Matched case-insensitively as "<marker>_" (prefixes) or "_<marker>" (suffixes)
DEFAULT_MARKER_PREFIXES: Tuple[str, ...] = (
    "googleSlide",
    "googleForm",
    "accordion",
    "sidebar",
    "section",
    "button",
    "client",
    "modal",
    "vimeo",
    "tabs",
    "tab",
)

DEFAULT_MARKER_SUFFIXES: Tuple[str, ...] = (
    "inactive",
    "disabled",
    "notitle",
    "hidden",
    "light",
    "night",
    "copy",
    "dark",
)

# Markers that only make sense on containers
FOLDER_ONLY_MARKERS: Tuple[str, ...] = (MARKER_TABS, MARKER_ACCORDION)

# -----------------------------------------------------------------------------
# LIMITS
# -----------------------------------------------------------------------------

DEFAULT_MAX_DEPTH = 10
DEFAULT_DELIMITERS = " -_"
DEFAULT_PREFIX_CODE_LENGTHS: Tuple[int, ...] = (4, 2)
DEFAULT_SUFFIX_CODE_LENGTHS: Tuple[int, ...] = (2, 4)
