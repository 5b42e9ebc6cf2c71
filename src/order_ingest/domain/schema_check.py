"""
order_ingest.domain.schema_check

Structural drift detection for incoming order payloads.

Responsibilities:
- Scan JSON text for object key names without parsing it.
- Compare the key-name multiset of a received payload with that of the re-encoded Order.

This is intentionally a name/count check, not value equality: a payload passes when every
key it carries appears in the re-encoded form the same number of times. Keys the model
drops (misspelled, renamed, new upstream fields) make the counts diverge.
"""

from __future__ import annotations

from collections import Counter

from order_ingest.domain.order import Order, encode

_JSON_WS = " \t\r\n"


def extract_keys(text: str) -> list[str]:
    """
    Return every object key in `text`, in order of appearance.

    A key is a quoted string whose closing quote is followed, after optional JSON
    whitespace, by a colon. Backslash escapes inside strings are skipped so an escaped
    quote never closes the string.
    """

    keys: list[str] = []
    n = len(text)
    i = 0
    while i < n:
        if text[i] != '"':
            i += 1
            continue

        start = i + 1
        i = start
        while i < n and text[i] != '"':
            i += 2 if text[i] == "\\" else 1
        if i >= n:
            # Unterminated string: nothing after it can be a key.
            break
        token = text[start:i]

        j = i + 1
        while j < n and text[j] in _JSON_WS:
            j += 1
        if j < n and text[j] == ":":
            keys.append(token)
        i += 1

    return keys


def key_counts(data: bytes | str) -> Counter[str]:
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    return Counter(extract_keys(text))


def diff_keys(order: Order, original: bytes) -> tuple[set[str], set[str]]:
    """
    Return `(unexpected, miscounted)` key names for `original` against `encode(order)`.

    Both sets empty means the payload matches.
    """

    received = key_counts(original)
    modelled = key_counts(encode(order))

    unexpected = {k for k in received if k not in modelled}
    miscounted = {k for k, count in received.items() if k in modelled and modelled[k] != count}
    return unexpected, miscounted


def matches(order: Order, original: bytes) -> bool:
    unexpected, miscounted = diff_keys(order, original)
    return not unexpected and not miscounted
