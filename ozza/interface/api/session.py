"""Session cookie authentication for routes."""

from fastapi import HTTPException, status

from ozza.domain.service import JWTService
from ozza.util.jwt import JWTError, TokenPayload


def authenticate(auth_token: str | None, jwt_service: JWTService) -> TokenPayload:
    """Resolve the session cookie into its payload.

    Raises:
        HTTPException: 401 if the cookie is missing, invalid or expired
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        return jwt_service.verify_token(auth_token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
