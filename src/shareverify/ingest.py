"""Load share sets from JSON test-case documents.

Document layout::

    {"keys": {"n": 4, "k": 3},
     "1": {"base": "10", "value": "4"},
     "2": {"base": "2", "value": "111"},
     "3": {"operation": "sum", "values": ["5", "6"], "id": "carol"}}

Each non-"keys" member is one share: its key is the decimal x-coordinate,
``value``/``values`` are digit strings in ``base`` (2-36, default 10) and
``operation`` names the derivation turning the decoded values into y.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from shareverify.errors import IngestError, InvalidRangeError
from shareverify.models import Share, ThresholdParams

logger = logging.getLogger(__name__)

Derivation = Callable[[list[int]], int]


def _number(values: list[int]) -> int:
    if len(values) != 1:
        raise IngestError(f"'number' takes exactly one value, got {len(values)}")
    return values[0]


DERIVATIONS: dict[str, Derivation] = {
    "number": _number,
    "sum": sum,
    "multiply": math.prod,
    "gcd": lambda values: math.gcd(*values),
    "lcm": lambda values: math.lcm(*values),
}


def register_derivation(name: str, func: Derivation) -> None:
    """Make func available as an ``operation`` in share documents."""
    DERIVATIONS[name] = func


@dataclass
class ShareSet:
    """Threshold parameters and shares read from one document."""

    params: ThresholdParams
    shares: list[Share]


DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def decode_value(digits: str | int, base: int = 10) -> int:
    """Decode a digit string in base 2..36.

    Only an optional sign followed by digits of the base is accepted;
    prefixes such as ``0x``, underscores and whitespace are rejected.
    """
    if not 2 <= base <= 36:
        raise IngestError(f"Base must be in [2, 36], got {base}")
    text = str(digits)
    body = text[1:] if text[:1] in "+-" else text
    alphabet = DIGITS[:base]
    if not body or any(c not in alphabet for c in body.lower()):
        raise IngestError(f"Cannot decode {digits!r} in base {base}")
    return int(text, base)


def _parse_int(raw: Any, what: str) -> int:
    try:
        return int(str(raw))
    except ValueError as exc:
        raise IngestError(f"{what} must be an integer, got {raw!r}") from exc


def _parse_share(key: str, entry: Any) -> Share:
    if not isinstance(entry, Mapping):
        raise IngestError(f"Share {key!r} must be an object, got {type(entry).__name__}")

    x = _parse_int(key, "Share key")
    base = _parse_int(entry.get("base", 10), f"Base of share {key!r}")

    if "values" in entry:
        raw_values = entry["values"]
        if not isinstance(raw_values, list) or not raw_values:
            raise IngestError(f"Share {key!r}: 'values' must be a non-empty list")
    elif "value" in entry:
        raw_values = [entry["value"]]
    else:
        raise IngestError(f"Share {key!r} has no 'value' or 'values'")
    values = [decode_value(v, base) for v in raw_values]

    operation = entry.get("operation", "number")
    derive = DERIVATIONS.get(operation)
    if derive is None:
        raise IngestError(
            f"Share {key!r}: unknown operation {operation!r}, "
            f"expected one of {sorted(DERIVATIONS)}"
        )

    share_id = entry.get("id")
    return Share(
        y=derive(values),
        x=x,
        id=str(share_id) if share_id is not None else f"share{x}",
    )


def parse_document(doc: Mapping[str, Any]) -> ShareSet:
    """Build a ShareSet from an already-decoded JSON object."""
    keys = doc.get("keys")
    if not isinstance(keys, Mapping) or "n" not in keys or "k" not in keys:
        raise IngestError("Document needs a 'keys' object with 'n' and 'k'")
    n = _parse_int(keys["n"], "n")
    k = _parse_int(keys["k"], "k")

    shares = [_parse_share(key, entry) for key, entry in doc.items() if key != "keys"]

    if len(shares) != n:
        logger.warning("Document declares n=%d but holds %d shares", n, len(shares))
    try:
        params = ThresholdParams(n=len(shares), k=k)
    except InvalidRangeError as exc:
        raise IngestError(
            f"Threshold k={k} is invalid for {len(shares)} shares"
        ) from exc

    return ShareSet(params=params, shares=shares)


def loads(text: str) -> ShareSet:
    """Parse a share document from a JSON string."""
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise IngestError(f"Invalid JSON: {exc}") from exc
    if not isinstance(doc, Mapping):
        raise IngestError("Share document must be a JSON object")
    return parse_document(doc)


def load(path: str | Path) -> ShareSet:
    """Parse a share document from a JSON file."""
    return loads(Path(path).read_text(encoding="utf-8"))
