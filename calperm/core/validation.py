"""
Input validation helpers.
"""

import re
from email.errors import HeaderParseError
from email.headerregistry import Address

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+\'-]+@[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*\.[a-zA-Z]{2,}$')


def is_valid_email(text: str) -> bool:
    """
    Check that text is a single bare email address.

    Two checks must both pass: a structural pattern match, and a strict
    parse of the text as an RFC 5322 addr-spec that must round-trip to the
    same string.
    """
    if not text or not isinstance(text, str):
        return False

    if not EMAIL_PATTERN.match(text):
        return False

    try:
        address = Address(addr_spec=text)
    except (HeaderParseError, ValueError, IndexError):
        return False

    return address.addr_spec == text
