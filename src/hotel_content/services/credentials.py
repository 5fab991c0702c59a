"""Bearer credential selection for CMS reads.

Whether a read uses the public or the elevated token is decided by the caller;
these helpers only turn configuration into providers.
"""
from __future__ import annotations

from typing import Callable, Optional, Union

from hotel_content.config.settings import Settings

CredentialProvider = Callable[[], str]
Credential = Union[str, CredentialProvider]


class MissingCredentialError(ValueError):
    """Raised when a call site asks for a token that is not configured."""


def resolve_credential(credential: Credential) -> str:
    token = credential() if callable(credential) else credential
    if not token:
        raise MissingCredentialError("No bearer token available for CMS request")
    return token


def _provider(token: Optional[str], label: str) -> CredentialProvider:
    def _get() -> str:
        if not token:
            raise MissingCredentialError(f"CMS {label} token is not configured (set CMS_{label.upper()}_TOKEN)")
        return token

    return _get


def public_credential(settings: Settings) -> CredentialProvider:
    return _provider(settings.public_token, "public")


def admin_credential(settings: Settings) -> CredentialProvider:
    return _provider(settings.admin_token, "admin")
