"""Preview de links (título, descrição e imagem da página).

A página é buscada com timeout e no máximo 10 redirects; o HTML é lido com
o parser da stdlib, sem executar nada. Falha de busca = sem preview.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html.parser import HTMLParser
from urllib.parse import urljoin

import httpx

from app.domain.payloads import LinkPreview

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 10
DEFAULT_TIMEOUT_SECONDS = 15.0
# Preview só precisa do <head>
MAX_BODY_BYTES = 512 * 1024
USER_AGENT = "zap-relay-link-preview/1.0"


class _MetadataParser(HTMLParser):
    """Coleta <title> e metatags relevantes (og:*, description, twitter:image)."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.meta: dict[str, str] = {}
        self.title_parts: list[str] = []
        self._in_title = False
        self._title_done = False

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "title" and not self._title_done:
            self._in_title = True
            return
        if tag != "meta":
            return
        values = {name.lower(): (value or "") for name, value in attrs}
        key = (values.get("property") or values.get("name") or "").lower()
        content = values.get("content", "").strip()
        if key and content and key not in self.meta:
            self.meta[key] = content

    def handle_endtag(self, tag: str) -> None:
        if tag == "title" and self._in_title:
            self._in_title = False
            self._title_done = True

    def handle_data(self, data: str) -> None:
        if self._in_title:
            self.title_parts.append(data)


@dataclass(frozen=True, slots=True)
class PageMetadata:
    title: str | None = None
    description: str | None = None
    image: str | None = None


def parse_page_metadata(html: str, page_url: str) -> PageMetadata:
    """Extrai metadados; imagem relativa é resolvida contra a URL da página."""
    parser = _MetadataParser()
    parser.feed(html)
    parser.close()

    title = parser.meta.get("og:title") or " ".join("".join(parser.title_parts).split())
    description = parser.meta.get("og:description") or parser.meta.get("description")
    image = parser.meta.get("og:image") or parser.meta.get("twitter:image")
    return PageMetadata(
        title=title or None,
        description=description or None,
        image=urljoin(page_url, image) if image else None,
    )


class LinkPreviewFetcher:
    """Busca metadados de uma URL para montar o LinkPreview.

    Args:
        http_client: Cliente compartilhado (injeção facilita testes)
        timeout_seconds: Deadline total da busca
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._http = http_client
        self._timeout = timeout_seconds

    async def fetch(self, url: str) -> LinkPreview | None:
        try:
            response = await self._http.get(
                url,
                headers={"User-Agent": USER_AGENT, "Accept": "text/html"},
                timeout=self._timeout,
                follow_redirects=True,
            )
        except httpx.TooManyRedirects:
            logger.info("link_preview_failed", extra={"reason": "too_many_redirects"})
            return None
        except httpx.HTTPError as exc:
            logger.info("link_preview_failed", extra={"reason": type(exc).__name__})
            return None

        if response.status_code != httpx.codes.OK:
            logger.info(
                "link_preview_failed",
                extra={"reason": "http_status", "status_code": response.status_code},
            )
            return None

        content_type = response.headers.get("content-type", "")
        if content_type and "html" not in content_type.lower():
            logger.debug("link_preview_not_html")
            return None

        html = response.content[:MAX_BODY_BYTES].decode(
            response.encoding or "utf-8", errors="replace"
        )
        metadata = parse_page_metadata(html, str(response.url))
        if not (metadata.title or metadata.description or metadata.image):
            return None
        return LinkPreview(
            url=url,
            title=metadata.title,
            description=metadata.description,
            image=metadata.image,
        )
