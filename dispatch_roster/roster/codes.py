"""
Unit code normalization.

OCR on the roster font routinely confuses O/0 and I/l/1, and drops or
invents the hyphen between the letter prefix and the number. Codes are
canonicalized to LETTERS-DIGITS where possible.
"""

import re
from typing import Optional

# Known misreadings of a single unit code
CODE_ALIASES = {
    "DAT": "DA-1",
    "D4T": "DA-1",
    "D41": "DA-1",
    "DAI": "DA-1",
}

# Letter/digit confusions for this font. Lowercase i is included and
# non-ASCII is dropped first, so no I or O survives uppercasing and
# normalization stays idempotent.
CONFUSION_PAIRS = {
    "O": "0",
    "o": "0",
    "I": "1",
    "i": "1",
    "l": "1",
}

_NON_ASCII = re.compile(r'[^\x00-\x7F]')
_CODE_PATTERN = re.compile(r'^([A-Z]{1,3})-?(\d{1,4})$')
_NON_CODE_CHARS = re.compile(r'[^A-Z0-9\-]')
_WHITESPACE = re.compile(r'\s+')


def normalize_code(token: Optional[str]) -> str:
    """
    Canonicalize an OCR code token.

    Args:
        token: First token of a roster line, as read by OCR.

    Returns:
        "DA-1" for a known alias, "LETTERS-DIGITS" when the token fits
        the code pattern, otherwise the cleaned token unchanged.
    """
    if not token:
        return ""

    code = _NON_ASCII.sub('', token.strip())
    for wrong, correct in CONFUSION_PAIRS.items():
        code = code.replace(wrong, correct)
    code = _WHITESPACE.sub('', code.upper())
    code = _NON_CODE_CHARS.sub('', code)

    alias = CODE_ALIASES.get(code.upper())
    if alias:
        return alias

    match = _CODE_PATTERN.match(code)
    if match:
        return f"{match.group(1)}-{match.group(2)}"

    return code


def is_canonical_code(code: str) -> bool:
    """Check whether a code already has the LETTERS-DIGITS form."""
    return bool(re.fullmatch(r'[A-Z]{1,3}-\d{1,4}', code or ""))
