"""Bearer credential verification.

The verifier only looks at the token itself: the claims carry everything an
:class:`Identity` needs, so verifying never touches the database.
"""
from dataclasses import dataclass
from typing import Optional
from jose import jwt, JWTError, ExpiredSignatureError
from app.config import SECRET_KEY, ALGORITHM
from app.errors import MissingCredential, Unauthenticated


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None


def extract_token(authorization: Optional[str], token_query: Optional[str]) -> Optional[str]:
    """Return token from Authorization header (Bearer ...) or token query param (compat).
    Header has precedence.
    """
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return token_query


class JwtIdentityVerifier:
    def __init__(self, secret_key=SECRET_KEY, algorithm=ALGORITHM):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def verify(self, credential: Optional[str]) -> Identity:
        if not credential or not credential.strip():
            raise MissingCredential("Missing token")
        try:
            # jwt.decode validates exp automatically
            payload = jwt.decode(credential, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise Unauthenticated("Token has expired")
        except JWTError:
            raise Unauthenticated("Invalid token")
        user_id = payload.get("sub")
        if not user_id:
            raise Unauthenticated("Invalid token: missing user")
        return Identity(user_id=user_id, email=payload.get("email"), name=payload.get("name"))
