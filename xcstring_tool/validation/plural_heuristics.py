"""Heuristics for spotting pluralizable strings and building plural skeletons."""

import re
from collections import Counter
from typing import Dict, List, Set

from ..models.string_entry import PluralForm

PLURAL_TRIGGER_WORDS = ("items", "songs", "files")

# Integer, unsigned, long and object specifiers
PLURAL_SPECIFIER_PATTERN = re.compile(r"%[\d.]*[@dlu]")

_ONE_OTHER = [PluralForm.ONE, PluralForm.OTHER]
_OTHER_ONLY = [PluralForm.OTHER]
_SLAVIC = [PluralForm.ONE, PluralForm.FEW, PluralForm.MANY, PluralForm.OTHER]
_ALL_FORMS = [
    PluralForm.ZERO,
    PluralForm.ONE,
    PluralForm.TWO,
    PluralForm.FEW,
    PluralForm.MANY,
    PluralForm.OTHER,
]

PLURAL_FORMS_BY_LANGUAGE: Dict[str, List[PluralForm]] = {
    "en": _ONE_OTHER,
    "de": _ONE_OTHER,
    "nl": _ONE_OTHER,
    "es": _ONE_OTHER,
    "it": _ONE_OTHER,
    "fr": _OTHER_ONLY,
    "ja": _OTHER_ONLY,
    "zh": _OTHER_ONLY,
    "ru": _SLAVIC,
    "uk": _SLAVIC,
    "pl": _SLAVIC,
    "cs": _SLAVIC,
    "ar": _ALL_FORMS,
}


def looks_plural(key: str) -> bool:
    """Check whether a key is a likely candidate for plural variations."""
    if "%" not in key:
        return False
    lowered = key.lower()
    if any(word in lowered for word in PLURAL_TRIGGER_WORDS):
        return True
    return PLURAL_SPECIFIER_PATTERN.search(key) is not None


def forms_for_language(code: str) -> List[PluralForm]:
    """
    Plural categories a language needs, in canonical order.

    Only the primary subtag is looked up, so "zh-Hans" resolves like "zh".
    Unknown languages get the one/other pair.
    """
    primary = code.lower().replace("_", "-").split("-")[0]
    return list(PLURAL_FORMS_BY_LANGUAGE.get(primary, _ONE_OTHER))


def singularize(value: str) -> str:
    """Naive English singular: drop a trailing "s" unless it ends in "ss"."""
    if value.endswith("s") and not value.endswith("ss"):
        return value[:-1]
    return value


def singular_from_key(key: str) -> str:
    """Crude singular guess used when there is no "other" form to start from."""
    return key.replace("s ", " ")


def detect_duplicates_across_forms(
    plural_values: Dict[str, str], device_values: Dict[str, str]
) -> Set[str]:
    """
    Find values used by more than one variant of the same localization.

    Args:
        plural_values: Plural form -> value
        device_values: Device kind -> value

    Returns:
        The set of non-empty values that occur more than once
    """
    counts = Counter(
        value
        for value in list(plural_values.values()) + list(device_values.values())
        if value
    )
    return {value for value, count in counts.items() if count > 1}
