"""Content-encoding negotiation."""
from typing import List, Optional, Sequence


def parse_accept_encoding(header: Optional[str]) -> List[str]:
    """
    Split an `Accept-Encoding` value into lowercase coding tokens.

    Parameters such as `;q=0.5` are dropped without being interpreted, so every
    listed coding counts as equally acceptable.
    """
    if not header:
        return []
    tokens = []
    for part in header.split(","):
        token = part.split(";", 1)[0].strip().lower()
        if token:
            tokens.append(token)
    return tokens


def negotiate_encoding(accept_encoding: Optional[str], encodings: Sequence[str]) -> Optional[str]:
    """
    Pick the first configured encoding the client lists.

    Configured order wins over client order. A bare `*` is not treated as accepting
    anything; only explicit tokens match.

    >>> negotiate_encoding("gzip, br", ["br", "gzip", "deflate"])
    'br'
    >>> negotiate_encoding("*", ["br", "gzip"]) is None
    True
    """
    accepted = set(parse_accept_encoding(accept_encoding))
    for encoding in encodings:
        if encoding in accepted:
            return encoding
    return None
