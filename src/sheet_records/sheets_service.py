"""Factories for building SheetClient and GoogleSheet instances."""

from __future__ import annotations

import logging
from typing import Any

from sheet_records.auth import CredentialsProvider, build_service, oauth_provider, service_account_provider
from sheet_records.config import Settings
from sheet_records.grid_store import SheetClient
from sheet_records.paths import resolve_path
from sheet_records.record_view import GoogleSheet

logger = logging.getLogger(__name__)


def credentials_provider_for(settings: Settings) -> CredentialsProvider:
    credentials_file = resolve_path(settings.credentials_file)
    if settings.auth_mode == "oauth":
        return oauth_provider(credentials_file, resolve_path(settings.token_file))
    return service_account_provider(credentials_file)


def make_sheet_client(
    settings: Settings,
    *,
    service: Any | None = None,
    credentials_provider: CredentialsProvider | None = None,
) -> SheetClient:
    """Build the client once at startup and share it between sheets."""
    if service is None:
        provider = credentials_provider or credentials_provider_for(settings)
        logger.debug("building sheets service with auth_mode=%s", settings.auth_mode)
        service = build_service(provider)
    return SheetClient(service)


def open_sheet(
    client: SheetClient,
    settings: Settings,
    *,
    spreadsheet_id: str | None = None,
    sheet_name: str | None = None,
) -> GoogleSheet:
    return GoogleSheet(
        client,
        spreadsheet_id or settings.require_spreadsheet_id(),
        sheet_name or settings.sheet_name,
        settings.sheet_options(),
    )
