"""Downloader de mídia do WhatsApp (via bridge) para disco local."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.events import MediaContent
    from app.protocols.protocol_client import ProtocolClientProtocol

logger = logging.getLogger(__name__)

_OGG_EXTENSIONS = ("", ".ogg", ".oga")


@dataclass(frozen=True, slots=True)
class MediaDownloadResult:
    """Resultado do download de mídia."""

    path: str | None
    error: str | None = None


def media_extension(kind: str, media: MediaContent) -> str:
    """Extensão do arquivo: nome do documento, senão o MIME type.

    Áudio `codecs=opus` vira `.opus` (o MIME base `audio/ogg` sozinho daria
    `.ogg`/`.oga`).
    """
    extension = ""
    if kind == "document" and media.file_name:
        extension = os.path.splitext(media.file_name)[1]

    base_mime = media.mimetype.split(";", 1)[0].strip().lower()
    if not extension and base_mime:
        extension = mimetypes.guess_extension(base_mime) or ""

    if kind == "audio" and "codecs=opus" in media.mimetype and extension in _OGG_EXTENSIONS:
        extension = ".opus"
    return extension


class WhatsAppMediaDownloader:
    """Baixa mídia pelo bridge e grava em `media_path`.

    Args:
        client: Cliente do protocolo (download + decifragem)
        media_path: Diretório de destino
        max_size_bytes: Limite; mídia maior não é gravada
    """

    def __init__(
        self,
        *,
        client: ProtocolClientProtocol,
        media_path: str | Path,
        max_size_bytes: int,
    ) -> None:
        self._client = client
        self._media_path = Path(media_path)
        self._max_size = max_size_bytes

    def _write(self, target: Path, content: bytes) -> None:
        self._media_path.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)

    async def download(
        self,
        *,
        message_id: str,
        kind: str,
        media: MediaContent,
    ) -> MediaDownloadResult:
        """Baixa e grava a mídia; falhas viram resultado com `error`."""
        if media.file_length and media.file_length > self._max_size:
            return MediaDownloadResult(path=None, error="media_too_large")

        try:
            content = await self._client.download_media(message_id, kind, media)
        except Exception as exc:
            logger.warning(
                "whatsapp_media_download_failed",
                extra={"error_type": type(exc).__name__, "media_type": kind},
            )
            return MediaDownloadResult(path=None, error="download_failed")

        if not content:
            return MediaDownloadResult(path=None, error="empty_media")
        if len(content) > self._max_size:
            return MediaDownloadResult(path=None, error="media_too_large")

        target = self._media_path / f"{kind}-{message_id}{media_extension(kind, media)}"
        try:
            await asyncio.to_thread(self._write, target, content)
        except OSError as exc:
            logger.error(
                "whatsapp_media_write_failed",
                extra={"error_type": type(exc).__name__, "media_type": kind},
            )
            return MediaDownloadResult(path=None, error="write_failed")

        logger.debug("whatsapp_media_saved", extra={"media_type": kind, "size": len(content)})
        return MediaDownloadResult(path=str(target))
