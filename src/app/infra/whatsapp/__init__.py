"""Integrações auxiliares do canal WhatsApp (mídia e preview de links)."""

from app.infra.whatsapp.link_preview import LinkPreviewFetcher, parse_page_metadata
from app.infra.whatsapp.media_downloader import (
    MediaDownloadResult,
    WhatsAppMediaDownloader,
    media_extension,
)

__all__ = [
    "LinkPreviewFetcher",
    "MediaDownloadResult",
    "WhatsAppMediaDownloader",
    "media_extension",
    "parse_page_metadata",
]
