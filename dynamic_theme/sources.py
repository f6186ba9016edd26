"""Content sources: where page markup and favicons come from.

``HttpContentSource`` fetches raw HTML with httpx, so layout is unknown and
the strategies fall back to attribute sizes. ``BrowserContentSource`` reads
rendered Playwright pages and stamps each element's box and computed colors
onto the markup before serializing it.
"""

import logging
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Writes data-dt-rect / data-dt-color / data-dt-background onto every element
STAMP_SCRIPT = """
() => {
    for (const el of document.querySelectorAll('*')) {
        const rect = el.getBoundingClientRect();
        el.setAttribute('data-dt-rect',
            [rect.left, rect.top, rect.width, rect.height].map(v => Math.round(v)).join(','));
        const style = window.getComputedStyle(el);
        el.setAttribute('data-dt-color', style.color);
        el.setAttribute('data-dt-background', style.backgroundColor);
    }
    return document.documentElement.outerHTML;
}
"""

FAVICON_SCRIPT = """
() => {
    const link = document.querySelector('link[rel~="icon"]');
    return link ? link.href : new URL('/favicon.ico', location.href).href;
}
"""


def find_favicon_url(markup, page_url):
    """Absolute URL of the page's icon link, else /favicon.ico on its origin."""
    soup = BeautifulSoup(markup or "", "html.parser")
    for link in soup.find_all("link", href=True):
        rel = link.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        if "icon" in [r.lower() for r in rel]:
            return urljoin(page_url, link["href"])
    return urljoin(page_url, "/favicon.ico")


class ContentSource:
    """Interface the engine talks to. Target ids are opaque to the engine."""

    async def fetch_markup(self, target_id):
        raise NotImplementedError

    async def fetch_favicon(self, target_id):
        return None

    def release(self, target_id):
        """Called once a target's request has finished."""


class StaticContentSource(ContentSource):
    """Serve markup (and optionally favicon bytes) already held in memory."""

    def __init__(self, documents=None, favicons=None):
        self.documents = dict(documents or {})
        self.favicons = dict(favicons or {})

    async def fetch_markup(self, target_id):
        return self.documents.get(target_id, "")

    async def fetch_favicon(self, target_id):
        return self.favicons.get(target_id)


class HttpContentSource(ContentSource):
    """Fetch pages over HTTP; the target id is the page URL."""

    def __init__(self, client=None, timeout=30.0):
        self.client = client or httpx.AsyncClient(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        )
        self._pending = {}

    async def _get_page(self, url):
        try:
            response = await self.client.get(url)
        except httpx.TransportError as e:
            logger.debug("Transport error fetching %s: %s", url, e)
            return ""
        response.raise_for_status()
        return response.text

    async def fetch_markup(self, target_id):
        # Reuse the document fetched while looking for the favicon
        markup = self._pending.pop(target_id, None)
        if markup:
            return markup
        return await self._get_page(target_id)

    async def fetch_favicon(self, target_id):
        try:
            markup = await self._get_page(target_id)
        except httpx.HTTPStatusError as e:
            logger.debug("Could not load %s for favicon lookup: %s", target_id, e)
            return None
        self._pending[target_id] = markup

        icon_url = find_favicon_url(markup, target_id)
        try:
            response = await self.client.get(icon_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug("Could not download favicon %s: %s", icon_url, e)
            return None
        return response.content

    def release(self, target_id):
        self._pending.pop(target_id, None)

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()


class BrowserContentSource(ContentSource):
    """Read rendered Playwright pages registered per target id."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})

    def register(self, target_id, page):
        self.pages[target_id] = page

    def unregister(self, target_id):
        self.pages.pop(target_id, None)

    async def fetch_markup(self, target_id):
        page = self.pages.get(target_id)
        if page is None:
            logger.debug("No page registered for %s", target_id)
            return ""
        return await page.evaluate(STAMP_SCRIPT)

    async def fetch_favicon(self, target_id):
        page = self.pages.get(target_id)
        if page is None:
            return None

        icon_url = await page.evaluate(FAVICON_SCRIPT)
        response = await page.request.get(icon_url)
        if not response.ok:
            logger.debug("Favicon request %s returned %d", icon_url, response.status)
            return None
        return await response.body()
