from datetime import datetime, timedelta, timezone
import jwt
from typing import Tuple
from storefront.core.config import settings

# Login tokens are a placeholder: nothing in the service verifies them.

def now_utc() -> datetime: return datetime.now(timezone.utc)

def create_access_token(user_id: int, email: str) -> Tuple[str, datetime]:
    exp = now_utc() + timedelta(seconds=settings.ACCESS_TOKEN_EXPIRES_SECONDS)
    payload = {'sub': email, 'uid': user_id, 'exp': exp, 'type': 'access'}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM), exp
