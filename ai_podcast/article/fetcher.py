"""
Article fetching and text extraction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from bs4 import BeautifulSoup

from ai_podcast.errors import ArticleFetchError

logger = logging.getLogger(__name__)

USER_AGENT = "AI-Podcast/1.0"

CONTENT_SELECTORS = ("article", ".article", ".post", ".content", "main")
STRIP_TAGS = ("script", "style", "nav", "noscript")


@dataclass(frozen=True)
class Article:
    """Extracted article."""

    title: str
    text: str
    url: str = ""


class ArticleFetcher:
    """Download a web page and extract its readable text.

    Example:
        article = ArticleFetcher().fetch("https://example.com/post")
        print(article.title, len(article.text))
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = USER_AGENT,
        min_text_length: int = 100,
        max_text_length: int = 8000,
        min_paragraph_length: int = 50,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self.min_text_length = min_text_length
        self.max_text_length = max_text_length
        self.min_paragraph_length = min_paragraph_length

    def fetch(self, url: str) -> Article:
        """Fetch and extract an article.

        Raises:
            ArticleFetchError: On an invalid URL, a network error, a non-200
                status or too little text.
        """
        html = self.download(url)
        article = self.extract(html, url)
        logger.info(f"Fetched article: {article.title} ({len(article.text)} chars)")
        return article

    def download(self, url: str) -> str:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ArticleFetchError(f"invalid URL: {url!r}", url=url)

        request = Request(url, headers={"User-Agent": self.user_agent})
        logger.debug(f"GET {url}")
        try:
            with urlopen(request, timeout=self.timeout) as response:
                status = response.status
                if status != 200:
                    raise ArticleFetchError(
                        f"failed to fetch article: status code {status}",
                        url=url,
                        status=status,
                    )
                charset = response.headers.get_content_charset() or "utf-8"
                body = response.read()
        except HTTPError as e:
            raise ArticleFetchError(
                f"failed to fetch article: status code {e.code}",
                url=url,
                status=e.code,
            ) from e
        except (URLError, TimeoutError) as e:
            raise ArticleFetchError(f"failed to fetch URL: {e}", url=url) from e

        return body.decode(charset, errors="replace")

    def extract(self, html: str, url: str = "") -> Article:
        """Extract title and text from an HTML document."""
        soup = BeautifulSoup(html, "html.parser")

        title = self._title(soup)

        for node in soup.find_all(list(STRIP_TAGS)):
            node.decompose()

        paragraphs = self._paragraphs(soup)
        text = "\n\n".join(paragraphs).strip()

        if len(text) < self.min_text_length:
            raise ArticleFetchError(
                f"extracted content too short ({len(text)} chars, "
                f"minimum {self.min_text_length})",
                url=url,
            )

        if len(text) > self.max_text_length:
            text = text[:self.max_text_length] + "..."

        return Article(title=title, text=text, url=url)

    def _title(self, soup: BeautifulSoup) -> str:
        if soup.title and soup.title.get_text(strip=True):
            return soup.title.get_text(strip=True)

        site_name = soup.find("meta", attrs={"property": "og:site_name"})
        if site_name and site_name.get("content", "").strip():
            return site_name["content"].strip()

        return "Untitled Article"

    def _paragraphs(self, soup: BeautifulSoup) -> list[str]:
        selector = ", ".join(f"{container} p" for container in CONTENT_SELECTORS)
        paragraphs = [
            p.get_text(" ", strip=True) for p in soup.select(selector)
        ]
        paragraphs = [p for p in paragraphs if p]
        if paragraphs:
            return paragraphs

        # No known content container, keep only substantial paragraphs
        return [
            text
            for text in (p.get_text(" ", strip=True) for p in soup.find_all("p"))
            if len(text) > self.min_paragraph_length
        ]
