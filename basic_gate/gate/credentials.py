"""
Credential extraction from the HTTP `Authorization` header.

Expected header shape: ``Basic <base64(userid:password)>``.

Rules:
    - Scheme and payload are split on the first space.
    - The scheme must be exactly "Basic" (case-sensitive).
    - The payload is standard, padded base64; stray characters are rejected.
    - The decoded text is split on the first colon, so passwords may contain
      colons while user ids cannot.

`get_credentials` never raises: anything unusable comes back as `EMPTY`.
"""

import base64
import binascii
from typing import NamedTuple, Optional

from ..errors import MalformedCredentials

__all__ = ["Credentials", "EMPTY", "parse_authorization", "get_credentials", "encode_basic"]

SCHEME = "Basic"


class Credentials(NamedTuple):
    user_id: str
    password: str


EMPTY = Credentials("", "")


def parse_authorization(authorization: Optional[str]) -> Credentials:
    """
    Parse a raw Authorization header value.

    Raises:
        MalformedCredentials: On a missing space, wrong scheme, invalid
            base64, non UTF-8 payload or missing colon.
    """
    if not authorization:
        raise MalformedCredentials("no authorization header")

    scheme, sep, payload = authorization.partition(" ")
    if not sep or scheme != SCHEME:
        raise MalformedCredentials("not a Basic authorization header")

    try:
        decoded = base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise MalformedCredentials("payload is not valid base64") from exc

    user_id, sep, password = decoded.partition(":")
    if not sep:
        raise MalformedCredentials("payload has no user/password separator")

    return Credentials(user_id, password)


def get_credentials(authorization: Optional[str]) -> Credentials:
    """Return the credential pair carried by `authorization`, or EMPTY."""
    try:
        return parse_authorization(authorization)
    except MalformedCredentials:
        return EMPTY


def encode_basic(user_id: str, password: str) -> str:
    """Build an Authorization header value for a credential pair."""
    token = base64.b64encode(f"{user_id}:{password}".encode("utf-8")).decode("ascii")
    return f"{SCHEME} {token}"
