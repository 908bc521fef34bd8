"""Verification of identity provider tokens."""

import logging

from jose import jwt, JWTError

from app.config import Settings
from app.schemas.identity import VerifiedIdentity
from app.services.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class IdentityVerifier:
    """
    Verifies bearer tokens issued by the identity provider.

    The verified ``sub`` claim is the only source of external user ids.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the verifier.

        Args:
            settings: Application settings holding the key, algorithm,
                issuer and audience
        """
        self.settings = settings

    def verify_token(self, token: str) -> VerifiedIdentity:
        """
        Verify a JWT and extract the caller identity.

        Args:
            token: JWT token string

        Returns:
            VerifiedIdentity for the token subject

        Raises:
            AuthenticationError: If the token is invalid, expired or has no subject
        """
        audience = self.settings.IDENTITY_JWT_AUDIENCE
        try:
            claims = jwt.decode(
                token,
                self.settings.IDENTITY_JWT_KEY,
                algorithms=[self.settings.IDENTITY_JWT_ALGORITHM],
                audience=audience,
                issuer=self.settings.IDENTITY_JWT_ISSUER,
                options={"verify_aud": audience is not None},
            )
        except JWTError as e:
            logger.warning(f"Rejected identity token: {e.__class__.__name__}")
            raise AuthenticationError(f"Invalid token: {str(e)}")

        subject = claims.get("sub")
        if not subject:
            raise AuthenticationError("Invalid token payload")

        return VerifiedIdentity(
            subject=str(subject),
            email=claims.get("email"),
            name=claims.get("name"),
            claims=claims,
        )
