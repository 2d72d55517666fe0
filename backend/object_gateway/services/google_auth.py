"""
Google OAuth access tokens for the push-notification (FCM v1) API.

Exchanges service-account credentials for a short-lived bearer token.
Independent of the storage gateway.

Tokens carry firebase-admin's certificate scopes (cloud-platform, firebase,
userinfo.email, ...). cloud-platform covers the FCM v1 send API, so the
narrower firebase.messaging + userinfo.email + userinfo.profile set is not
requested separately; userinfo.profile is not included.
"""
import json
import os
import logging
from typing import Optional
from firebase_admin import credentials
from google.auth import exceptions as google_exceptions

from object_gateway.exceptions import TokenLoadError

logger = logging.getLogger(__name__)


class GoogleTokenService:
    """Loads OAuth access tokens from service-account credentials."""
    
    def __init__(self, default_credentials: Optional[str] = None):
        """
        Args:
            default_credentials: Credentials used when ``load_access_token``
                is called without any (path to JSON file or JSON string)
        """
        self._default_credentials = default_credentials
    
    @staticmethod
    def _certificate(credentials_json: str) -> credentials.Certificate:
        """
        Build a service-account certificate.
        
        Supports two forms:
        1. Path to a service-account JSON file
        2. The JSON document itself as a string
        """
        if os.path.exists(credentials_json):
            source = credentials_json
        else:
            try:
                source = json.loads(credentials_json)
            except json.JSONDecodeError as e:
                raise TokenLoadError("fcm: failed to read credentials file") from e
        
        try:
            return credentials.Certificate(source)
        except (ValueError, OSError) as e:
            raise TokenLoadError(
                "fcm: failed to get JWT config for the firebase.messaging and userinfo scopes"
            ) from e
    
    def load_access_token(self, credentials_json: Optional[str] = None) -> str:
        """
        Exchange service-account credentials for an OAuth access token.
        
        Args:
            credentials_json: Path to JSON file or JSON string
                (defaults to the credentials given at construction)
            
        Returns:
            Access token string
            
        Raises:
            TokenLoadError: credentials missing, unreadable, invalid, or
                the token endpoint refused the exchange
        """
        credentials_json = credentials_json or self._default_credentials
        if not credentials_json:
            raise TokenLoadError("fcm: no credentials configured")
        
        certificate = self._certificate(credentials_json)
        
        try:
            token = certificate.get_access_token()
        except google_exceptions.GoogleAuthError as e:
            raise TokenLoadError(f"fcm: failed to fetch access token: {e}") from e
        
        logger.debug(
            f"Loaded access token for {certificate.service_account_email}",
            extra={"event": "access_token_loaded", "expiry": str(token.expiry)}
        )
        return token.access_token
