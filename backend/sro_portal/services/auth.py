"""Bearer-token auth: decode the identity provider's JWT and resolve the account."""
import logging
from typing import Any, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from sro_portal.config import settings
from sro_portal.database import get_db
from sro_portal.models.account import Account

logger = logging.getLogger(__name__)

# auto_error=False so a missing header gets our own 401 message instead of 403
security = HTTPBearer(auto_error=False)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and verify a session token."""
    try:
        return jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE,
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Account:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")

    payload = decode_token(credentials.credentials)
    email = payload.get("email")
    if not email:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has no email claim")

    account = db.query(Account).filter(Account.email == email).first()
    if not account:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found")
    return account


def require_staff(account: Account = Depends(get_current_account)) -> Account:
    """SRO, ODSA or superadmin only."""
    if not account.is_staff:
        logger.warning("Account %s (role %s) denied staff access", account.account_id, account.role_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden: Admin roles only")
    return account
