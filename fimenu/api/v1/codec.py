"""
==============================================================================
Codec Endpoints
==============================================================================

Encode any JSON value into a URL token, or decode one.

==============================================================================
"""

from fastapi import APIRouter, Query

from fimenu.codec import encode_token, parse_token
from fimenu.core import exceptions
from fimenu.schemas.menu import EncodeRequest


router = APIRouter(prefix="/codec", tags=["Codec"])


@router.post("/encode")
async def encode(request: EncodeRequest):
    """Encode ``value`` as a URL-safe token."""
    try:
        token = encode_token(request.value)
    except (TypeError, ValueError) as e:
        raise exceptions.invalid_value(f"Value cannot be encoded: {e}")

    return {"success": True, "token": token}


@router.get("/decode")
async def decode(token: str = Query("", max_length=65536)):
    """
    Decode a token.

    Malformed tokens are not an error: ``value`` is null and ``valid`` false.
    A token of JSON null is valid with a null ``value``.
    """
    valid, value = parse_token(token)
    return {"success": True, "valid": valid, "value": value}
