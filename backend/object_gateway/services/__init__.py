"""
External collaborators (push-notification tokens, transactional e-mail).
"""
from object_gateway.services.google_auth import GoogleTokenService
from object_gateway.services.email import MailgunEmailSender

__all__ = [
    "GoogleTokenService",
    "MailgunEmailSender",
]
