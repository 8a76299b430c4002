"""Encode an input record into a share token and back."""

from __future__ import annotations

import base64
import binascii
import json

from retirewise.core.inputs import InputUpdateError, merge_inputs
from retirewise.models import FinancialInputs


class ShareTokenError(ValueError):
    """Raised when a share token cannot be turned back into inputs."""


def encode_inputs(inputs: FinancialInputs) -> str:
    """Standard base64 of the UTF-8 JSON record, same as the web client's links."""
    raw = json.dumps(inputs.model_dump(mode="json"), ensure_ascii=False, separators=(",", ":"))
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_inputs(token: str) -> FinancialInputs:
    """
    Inverse of encode_inputs.

    Accepts URL-safe base64 and missing padding. The decoded object is merged
    onto the default record, so older or partial tokens still load.
    """
    cleaned = token.strip().replace("-", "+").replace("_", "/").replace(" ", "+")
    cleaned += "=" * (-len(cleaned) % 4)

    try:
        raw = base64.b64decode(cleaned, validate=True).decode("utf-8")
        data = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ShareTokenError(f"malformed share token: {exc}") from exc

    if not isinstance(data, dict):
        raise ShareTokenError("share token does not contain an input record")

    try:
        return merge_inputs(data)
    except InputUpdateError as exc:
        raise ShareTokenError(f"share token has invalid values: {exc}") from exc


__all__ = ["ShareTokenError", "decode_inputs", "encode_inputs"]
