"""Syntactic validation of dotted-decimal IPv4 text."""

import re

_OCTET = r"([01]?\d\d?|2[0-4]\d|25[0-5])"
_IPV4_PATTERN = re.compile(rf"{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}", re.ASCII)


def is_well_formed_ipv4(text: str) -> bool:
    """Check that ``text`` is four dot-separated octets in 0-255.

    Octets may carry leading zeros up to three digits ("010.0.0.1" is
    accepted). Nothing is resolved or contacted.

    Args:
        text: Candidate address.

    Returns:
        True if well formed, False otherwise (including non-str input).
    """
    if not isinstance(text, str):
        return False
    return _IPV4_PATTERN.fullmatch(text) is not None
