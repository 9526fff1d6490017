"""Credential providers and Sheets service construction."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build
from httplib2 import Http
from oauth2client import client, file, tools

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

CredentialsProvider = Callable[[], Any]


def service_account_provider(
    credentials_file: str | Path,
    scopes: Sequence[str] = SCOPES,
) -> CredentialsProvider:
    def _provide() -> Any:
        logger.debug("loading service account credentials from %s", credentials_file)
        return service_account.Credentials.from_service_account_file(str(credentials_file), scopes=list(scopes))

    return _provide


def oauth_provider(
    client_secrets_file: str | Path,
    token_file: str | Path = "token.json",
    scopes: Sequence[str] = SCOPES,
) -> CredentialsProvider:
    """Installed-app OAuth flow; the token is cached in token_file.

    The browser flow only runs when the cached token is missing or invalid.
    If you change scopes, delete the cached token file.
    """

    def _provide() -> Any:
        store = file.Storage(str(token_file))
        creds = store.get()
        if not creds or creds.invalid:
            secrets_path = Path(client_secrets_file)
            if not secrets_path.is_file():
                raise FileNotFoundError(
                    f"OAuth client secrets not found: {secrets_path}. "
                    "Create one at https://console.cloud.google.com/apis/credentials"
                )
            logger.info("running OAuth flow, token will be cached in %s", token_file)
            flow = client.flow_from_clientsecrets(str(secrets_path), " ".join(scopes))
            creds = tools.run_flow(flow, store, tools.argparser.parse_args([]))
        return creds

    return _provide


def build_service(credentials_provider: CredentialsProvider) -> Any:
    creds = credentials_provider()
    # oauth2client credentials authorize an Http; google-auth ones go in directly
    if hasattr(creds, "authorize"):
        return build("sheets", "v4", http=creds.authorize(Http()), cache_discovery=False)
    return build("sheets", "v4", credentials=creds, cache_discovery=False)
