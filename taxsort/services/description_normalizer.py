"""Bank description normalization.

Card and ACH descriptions carry processor noise around the merchant name:
``"CHECKCARD 0115 SHELL OIL 57444 TAMPA FL"``. ``clean_description`` removes
the known prefixes and trailing codes so rule patterns can be compared
against the merchant part only.
"""

import re

from taxsort.services.default_vendors import TRANSACTION_PREFIXES, TRANSACTION_SUFFIXES

_WHITESPACE = re.compile(r"\s+")
_PREFIXES_LONGEST_FIRST = sorted(TRANSACTION_PREFIXES, key=len, reverse=True)

VENDOR_MAX_WORDS = 3


def _strip_prefix(text: str) -> str:
    """Strip the longest known prefix, if it is followed by a word boundary."""
    for prefix in _PREFIXES_LONGEST_FIRST:
        if text.startswith(prefix) and len(text) > len(prefix) and not text[len(prefix)].isalnum():
            return text[len(prefix):].strip()
    return text


def _clean_pass(text: str) -> str:
    text = _strip_prefix(text)
    for suffix in TRANSACTION_SUFFIXES:
        text = suffix.sub("", text).strip()
    return _WHITESPACE.sub(" ", text)


def clean_description(description: str | None) -> str:
    """Upper-case a description and strip bank noise.

    Passes are repeated until the text is stable, so the function is
    idempotent. A pass that would erase the whole description is discarded.
    """
    if not description:
        return ""

    text = _WHITESPACE.sub(" ", description.upper()).strip()
    while True:
        cleaned = _clean_pass(text)
        if not cleaned or cleaned == text:
            return text
        text = cleaned


def extract_vendor(description: str | None) -> str:
    """First one to three words of the cleaned description."""
    cleaned = clean_description(description)
    if not cleaned:
        return ""
    return " ".join(cleaned.split(" ")[:VENDOR_MAX_WORDS])
