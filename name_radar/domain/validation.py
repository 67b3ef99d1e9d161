"""
Business-name validation.

Checks a proposed name against basic length/character rules, reserved
government terms, well-known trademarks, and the naming rules of Indonesian
entity types (PT, CV, UD, Firma).
"""

import re
from dataclasses import dataclass, field

from name_radar.constants import (
    BRAND_RISKY_WORDS,
    ENTITY_TYPES,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    RESERVED_WORDS,
)

_INVALID_PATTERNS = (
    re.compile(r"^\d+$"),  # all numbers
    re.compile(r"^[\W_]+$"),  # only special chars
)
_LEGAL_PREFIX = re.compile(r"^(PT|CV|UD)\s+", re.IGNORECASE)


@dataclass
class NameValidation:
    """Outcome of validate_business_name()."""

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    entity_type: str | None = None
    entity_info: dict | None = None


def detect_entity_type(name: str) -> str | None:
    """
    Detect the legal entity type from a name prefix.

    Returns:
        "PT", "CV", "UD", "Firma" or None
    """
    upper = (name or "").upper().strip()
    for prefix in ("PT", "CV", "UD"):
        if upper.startswith(f"{prefix} ") or upper.startswith(f"{prefix}."):
            return prefix
    if "FIRMA" in upper:
        return "Firma"
    return None


def validate_business_name(name: str | None, entity_type: str | None = None) -> NameValidation:
    """
    Validate a business name.

    Errors make the name invalid; warnings and suggestions are advisory.

    Args:
        name: Proposed business name
        entity_type: Optional entity type key ("PT", "CV", ...) for extra rules

    Returns:
        NameValidation
    """
    validation = NameValidation(entity_type=entity_type)

    if not name or not isinstance(name, str):
        validation.is_valid = False
        validation.errors.append("Name is required and must be a string")
        return validation

    trimmed = name.strip()

    if len(trimmed) < NAME_MIN_LENGTH:
        validation.is_valid = False
        validation.errors.append(f"Name too short (minimum {NAME_MIN_LENGTH} characters)")

    if len(trimmed) > NAME_MAX_LENGTH:
        validation.warnings.append(
            f"Name is quite long ({len(trimmed)} characters). "
            "Consider shorter alternatives for better branding."
        )

    if any(pattern.match(trimmed) for pattern in _INVALID_PATTERNS):
        validation.is_valid = False
        validation.errors.append("Name contains only numbers or special characters")

    lower = trimmed.lower()
    reserved = next((w for w in RESERVED_WORDS if w in lower), None)
    if reserved:
        validation.warnings.append(
            f'Name contains reserved/restricted word: "{reserved}". This may face legal issues.'
        )

    risky = next((w for w in BRAND_RISKY_WORDS if w in lower), None)
    if risky:
        validation.warnings.append(
            f'Name contains trademark-protected term: "{risky}". High risk of legal conflicts.'
        )

    if entity_type in ENTITY_TYPES:
        validation.entity_info = ENTITY_TYPES[entity_type]
        words = trimmed.split()
        if entity_type == "PT":
            if not trimmed.upper().startswith("PT "):
                validation.suggestions.append('PT names should start with "PT " prefix')
            if len(words) < 3:
                validation.warnings.append('PT names should have at least 3 words (including "PT")')
        elif entity_type == "CV":
            if not trimmed.upper().startswith("CV "):
                validation.suggestions.append('CV names should start with "CV " prefix')
            if len(words) < 2:
                validation.warnings.append('CV names should have at least 2 words (including "CV")')

    return validation


def generate_name_variants(name: str) -> list[str]:
    """
    Spelling variants of a name worth checking alongside it.

    Strips a leading PT/CV/UD prefix, then yields the cleaned name, its
    lowercase, space-free and hyphenated forms and, for multi-word names,
    camelCase. First occurrence order, no duplicates.

    Example:
        "PT Kopi Kenangan" -> ["Kopi Kenangan", "kopi kenangan", "KopiKenangan",
                               "kopikenangan", "kopi-kenangan", "kopiKenangan"]
    """
    cleaned = _LEGAL_PREFIX.sub("", name).strip()
    words = cleaned.split()
    variants = [
        cleaned,
        cleaned.lower(),
        "".join(words),
        "".join(words).lower(),
        "-".join(words).lower(),
    ]
    if len(words) > 1:
        variants.append(words[0].lower() + "".join(w.capitalize() for w in words[1:]))
    return list(dict.fromkeys(variants))
