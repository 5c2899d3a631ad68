from __future__ import annotations

"""
Name Decoder.

Parses raw item names into their semantic parts: numeric codes (content
type, language, client, campaign), order prefixes, word markers and the
remaining human-readable label. Tokenization rules live in DecoderPolicy so
they can be tuned against real file names without touching the algorithm.

Decoding is total: every input, including the empty string, yields a
DecodedName. Unrecognized names come back unchanged as their base name.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional, Pattern, Set, Tuple

from drivemap.core.registry import DEFAULT_REGISTRY, CodeDomain, CodeRegistry
from drivemap.domain import constants as const
from drivemap.domain.item_models import AssetCode, DecodedName

# -----------------------------------------------------------------------------
# TOKENIZATION POLICY
# -----------------------------------------------------------------------------

ASSET_CODE_PATTERN = (
    r"^(?P<client>[A-Za-z0-9]+)-(?P<campaign>[A-Za-z0-9]+)-(?P<year_month>\d{4})"
    r"-(?P<file>\d{4})-(?P<lang>\d{2})-(?P<version>\d{2})-(?P<sequence>\d{2})"
    r"(?:\.[A-Za-z0-9]{1,5})?$"
)


@dataclass(frozen=True)
class DecoderPolicy:
    """
    Configurable tokenization rules.

    Attributes:
        delimiters: Characters separating codes from the label.
        prefix_code_lengths: Accepted lengths of a leading numeric code.
        suffix_code_lengths: Accepted lengths of a trailing numeric code.
        prefix_domains: Domains tried, in order, for a leading code.
        suffix_domains: Domains tried, in order, for a trailing code.
        order_delimiter: A leading number followed by this is an order prefix.
        marker_prefixes: Word markers recognized as "<marker>_" at the start.
        marker_suffixes: Word markers recognized as "_<marker>" at the end.
        decode_asset_codes: Enable whole-name CLIENT-CAMPAIGN-YYMM-... codes.
    """
    delimiters: str = const.DEFAULT_DELIMITERS
    prefix_code_lengths: Tuple[int, ...] = const.DEFAULT_PREFIX_CODE_LENGTHS
    suffix_code_lengths: Tuple[int, ...] = const.DEFAULT_SUFFIX_CODE_LENGTHS
    prefix_domains: Tuple[CodeDomain, ...] = (
        CodeDomain.CONTENT_TYPE,
        CodeDomain.LANGUAGE,
        CodeDomain.CLIENT,
        CodeDomain.CAMPAIGN,
    )
    suffix_domains: Tuple[CodeDomain, ...] = (
        CodeDomain.LANGUAGE,
        CodeDomain.CONTENT_TYPE,
    )
    order_delimiter: str = "_"
    marker_prefixes: Tuple[str, ...] = const.DEFAULT_MARKER_PREFIXES
    marker_suffixes: Tuple[str, ...] = const.DEFAULT_MARKER_SUFFIXES
    decode_asset_codes: bool = True


DEFAULT_POLICY = DecoderPolicy()

_CODE_FIELDS: Dict[CodeDomain, str] = {
    CodeDomain.CONTENT_TYPE: "content_type_code",
    CodeDomain.LANGUAGE: "language_code",
    CodeDomain.CLIENT: "client_code",
    CodeDomain.CAMPAIGN: "campaign_code",
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def decode(
        raw_name: Optional[str],
        registry: Optional[CodeRegistry] = None,
        policy: Optional[DecoderPolicy] = None,
) -> DecodedName:
    """
    Decode a raw item name.

    Steps: whole-name asset code, leading order prefix or numeric code,
    leading word markers, trailing word markers, trailing numeric code.
    Whatever remains, trimmed of delimiters, is the base name.

    Args:
        raw_name: Name as stored in the source (None is treated as "").
        registry: Code tables to resolve against (process default if omitted).
        policy: Tokenization rules (DEFAULT_POLICY if omitted).

    Returns:
        DecodedName: Structured decoding; never raises.
    """
    name = raw_name if isinstance(raw_name, str) else ("" if raw_name is None else str(raw_name))
    registry = registry or DEFAULT_REGISTRY
    policy = policy or DEFAULT_POLICY

    if not name:
        return DecodedName(original_name=name, base_name="")

    rx = _compile(policy)

    if policy.decode_asset_codes:
        asset_result = _decode_asset(name, rx.asset, registry)
        if asset_result is not None:
            return asset_result

    codes: Dict[str, str] = {}
    prefixes: Set[str] = set()
    suffixes: Set[str] = set()
    markers: Set[str] = set()
    repeated_prefixes: Set[str] = set()
    repeated_suffixes: Set[str] = set()
    order: Optional[int] = None
    rest = name

    # 1. Leading numeric token: order prefix or code
    m = rx.leading_number.match(rest)
    if m:
        token, separator = m.group(1), m.group(2)
        if policy.order_delimiter and separator.startswith(policy.order_delimiter):
            order = int(token)
            prefixes.add(token)
            rest = rest[m.end():]
        elif len(token) in policy.prefix_code_lengths:
            if _record_code(token, policy.prefix_domains, registry, codes):
                prefixes.add(token)
                rest = rest[m.end():]

    # 2. Leading word markers
    if rx.marker_prefix is not None:
        m = rx.marker_prefix.match(rest)
        while m:
            marker = m.group(1).lower()
            markers.add(marker)
            _note(marker, prefixes, repeated_prefixes)
            rest = rest[m.end():]
            m = rx.marker_prefix.match(rest)

    # 3. Trailing word markers
    if rx.marker_suffix is not None:
        m = rx.marker_suffix.search(rest)
        while m:
            marker = m.group(1).lower()
            markers.add(marker)
            _note(marker, suffixes, repeated_suffixes)
            rest = rest[:m.start()]
            m = rx.marker_suffix.search(rest)

    # 4. Trailing numeric code; once a leading token was consumed it may
    # start the remainder directly, as in "0080 01".
    m = rx.trailing_number.search(rest)
    if m is None and rest != name:
        m = rx.bare_number.match(rest)
    if m and len(m.group(1)) in policy.suffix_code_lengths:
        token = m.group(1)
        if _record_code(token, policy.suffix_domains, registry, codes):
            suffixes.add(token)
            rest = rest[:m.start()]

    if not prefixes and not suffixes:
        return DecodedName(original_name=name, base_name=name)

    return DecodedName(
        original_name=name,
        base_name=rest.strip(policy.delimiters + " \t"),
        language_code=codes.get("language_code"),
        content_type_code=codes.get("content_type_code"),
        client_code=codes.get("client_code"),
        campaign_code=codes.get("campaign_code"),
        order=order,
        recognized_prefixes=frozenset(prefixes),
        recognized_suffixes=frozenset(suffixes),
        markers=frozenset(markers),
        duplicate_prefixes=frozenset(repeated_prefixes),
        duplicate_suffixes=frozenset(repeated_suffixes),
    )


def decode_asset_code(name: str, registry: Optional[CodeRegistry] = None) -> Optional[AssetCode]:
    """Parse a structured CLIENT-CAMPAIGN-YYMM-TYPE-LANG-VER-SEQ name, if it is one."""
    m = re.match(ASSET_CODE_PATTERN, name or "")
    if not m:
        return None
    registry = registry or DEFAULT_REGISTRY
    if not registry.is_known(CodeDomain.CONTENT_TYPE, m.group("file")):
        return None
    return _asset_from_match(m)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class _CompiledPolicy:
    asset: Pattern[str]
    leading_number: Pattern[str]
    trailing_number: Pattern[str]
    bare_number: Pattern[str]
    marker_prefix: Optional[Pattern[str]]
    marker_suffix: Optional[Pattern[str]]


@lru_cache(maxsize=32)
def _compile(policy: DecoderPolicy) -> _CompiledPolicy:
    """Compile the regular expressions of a policy once."""
    delims = "".join(re.escape(c) for c in policy.delimiters) or r"\s"
    return _CompiledPolicy(
        asset=re.compile(ASSET_CODE_PATTERN),
        leading_number=re.compile(rf"^(\d+)([{delims}]+|$)"),
        trailing_number=re.compile(rf"[{delims}]+(\d+)$"),
        bare_number=re.compile(r"^(\d+)$"),
        marker_prefix=_alternation(policy.marker_prefixes, "^({})_"),
        marker_suffix=_alternation(policy.marker_suffixes, "_({})$"),
    )


def _alternation(words: Tuple[str, ...], template: str) -> Optional[Pattern[str]]:
    if not words:
        return None
    ordered = sorted({w for w in words if w}, key=len, reverse=True)
    return re.compile(template.format("|".join(re.escape(w) for w in ordered)), re.IGNORECASE)


def _note(token: str, found: Set[str], repeated: Set[str]) -> None:
    if token in found:
        repeated.add(token)
    found.add(token)


def _record_code(
        token: str,
        domains: Tuple[CodeDomain, ...],
        registry: CodeRegistry,
        codes: Dict[str, str],
) -> bool:
    """Store the token under the first domain that knows it."""
    for domain in domains:
        field_name = _CODE_FIELDS.get(domain)
        if field_name is None or field_name in codes:
            continue
        if registry.is_known(domain, token):
            codes[field_name] = token
            return True
    return False


def _asset_from_match(m: "re.Match[str]") -> AssetCode:
    return AssetCode(
        client_code=m.group("client"),
        campaign_code=m.group("campaign"),
        year_month=m.group("year_month"),
        file_code=m.group("file"),
        language_code=m.group("lang"),
        version=m.group("version"),
        sequence=m.group("sequence"),
    )


def _decode_asset(name: str, pattern: Pattern[str], registry: CodeRegistry) -> Optional[DecodedName]:
    """Decode a whole-name asset code; None when the name is not one."""
    m = pattern.match(name)
    if not m or not registry.is_known(CodeDomain.CONTENT_TYPE, m.group("file")):
        return None

    asset = _asset_from_match(m)
    lang_label = registry.lookup(CodeDomain.LANGUAGE, asset.language_code)
    type_label = registry.resolve(CodeDomain.CONTENT_TYPE, asset.file_code)

    parts: List[str] = [type_label]
    if lang_label:
        parts.append(lang_label)

    suffixes = {asset.language_code} if lang_label else set()
    return DecodedName(
        original_name=name,
        base_name=" ".join(parts),
        language_code=asset.language_code if lang_label else None,
        content_type_code=asset.file_code,
        client_code=asset.client_code if registry.is_known(CodeDomain.CLIENT, asset.client_code) else None,
        campaign_code=asset.campaign_code if registry.is_known(CodeDomain.CAMPAIGN, asset.campaign_code) else None,
        recognized_prefixes=frozenset({asset.file_code}),
        recognized_suffixes=frozenset(suffixes),
        asset=asset,
    )
