from typing import Optional

import jwt
from app.core.config import settings
from fastapi import Header, HTTPException, status


def get_access_token(authorization: str = Header(None)) -> str:
    """Return the raw bearer token from the Authorization header."""
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You must be logged in to perform this action",
        )

    # Extract token from "Bearer <token>" format
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    return parts[1]


def decode_token(token: str) -> dict:
    if settings.SUPABASE_JWT_SECRET:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=["HS256"],
            audience="authenticated",
        )

    # Supabase already verified the token when it was issued
    return jwt.decode(
        token,
        options={"verify_signature": False},
        algorithms=["HS256"],
    )


def get_current_user_id(authorization: str = Header(None)) -> str:
    """
    Extract the user ID from a Supabase JWT.
    The frontend sends the access token in the Authorization header.
    """
    token = get_access_token(authorization)

    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: no user ID",
        )

    return user_id


def get_optional_user_id(authorization: str = Header(None)) -> Optional[str]:
    """
    Like get_current_user_id but returns None instead of raising if not authenticated.
    Used by read views that show extra state to logged in users.
    """
    if not authorization:
        return None

    try:
        return get_current_user_id(authorization)
    except HTTPException:
        return None
