"""Transport and credential helpers for the CMS API."""

from .credentials import (
    Credential,
    CredentialProvider,
    MissingCredentialError,
    admin_credential,
    public_credential,
    resolve_credential,
)
from .transport import CmsTransport, ContentError, MalformedResponseError, TransportError

__all__ = [
    "CmsTransport",
    "ContentError",
    "Credential",
    "CredentialProvider",
    "MalformedResponseError",
    "MissingCredentialError",
    "TransportError",
    "admin_credential",
    "public_credential",
    "resolve_credential",
]
