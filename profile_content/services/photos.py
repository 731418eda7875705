from __future__ import annotations

import logging

from ..config.loader import AppConfig, ConfigError
from ..notion.client import UpstreamError
from .profile import ApiResponse, RowSource, load_profile

logger = logging.getLogger(__name__)

"""Photo list endpoint backed by the ``photosFile`` config value."""

PHOTOS_KEY = "photosFile"
SEPARATOR = ";"


def split_photos(value: str | None) -> list[str]:
    """Split a semicolon separated URL list, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(SEPARATOR) if part.strip()]


def find_photos_value(config: dict[str, str]) -> str | None:
    # key match is case-insensitive, last matching key wins like config overwrite
    found = None
    for key, value in config.items():
        if key.lower() == PHOTOS_KEY.lower():
            found = value
    return found


def photos_response(config: AppConfig, client: RowSource | None = None) -> ApiResponse:
    """Photo URLs as a JSON list; an empty list when the fetch fails."""
    try:
        result = load_profile(config, client)
    except (ConfigError, UpstreamError) as e:
        logger.warning(f"photos unavailable: {e}")
        return ApiResponse(status=200, body=[])
    return ApiResponse(status=200, body=split_photos(find_photos_value(result.content.config)))
