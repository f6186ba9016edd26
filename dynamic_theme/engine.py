"""Per-target inference lifecycle: single-flight, markup timeout, bounded retry.

A trigger starts one request per target. While that request is fetching or
resolving, further triggers for the same target are dropped; a request that
is only waiting out its retry delay is cancelled and replaced. An attempt
that yields no usable color is a miss, including markup or a favicon that
does not arrive within ``markup_timeout``. Misses are retried after
``retry_delay``, up to ``max_attempts`` attempts, after which the default
color is applied.
"""

import asyncio
import enum
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Optional

from .pipeline import hostname_for, is_supported_url

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5
MARKUP_TIMEOUT = 0.5
RETRY_DELAY = 0.1

# Tab attribute changes that warrant re-inferring the color
REFRESH_ATTRIBUTES = {"busy", "progress", "image", "selected"}


class RequestState(enum.Enum):
    IDLE = "idle"
    AWAITING_MARKUP = "awaiting-markup"
    RESOLVING = "resolving"
    RETRYING = "retrying"
    APPLIED = "applied"


BUSY_STATES = (RequestState.AWAITING_MARKUP, RequestState.RESOLVING)


@dataclass
class InferenceRequest:
    target_id: Any
    url: str
    hostname: str
    retry_count: int = 0
    state: RequestState = RequestState.IDLE
    markup: Optional[str] = None
    task: Optional[asyncio.Task] = None


class InferenceEngine:
    def __init__(self, pipeline, source, sink, max_attempts=MAX_ATTEMPTS,
                 markup_timeout=MARKUP_TIMEOUT, retry_delay=RETRY_DELAY):
        self.pipeline = pipeline
        self.source = source
        self.sink = sink
        self.max_attempts = max_attempts
        self.markup_timeout = markup_timeout
        self.retry_delay = retry_delay
        self.in_flight = {}
        # Attempts made by the latest request per target
        self.attempts = Counter()

    @property
    def enabled(self):
        return self.pipeline.config.enabled

    @staticmethod
    def should_refresh(changed_attributes):
        """True when a tab attribute change should re-trigger inference."""
        return any(name in REFRESH_ATTRIBUTES for name in changed_attributes)

    def trigger(self, target_id, url):
        """Start inference for a target; must be called from a running event loop.

        Returns the request's task, or None when the engine is disabled or
        the target already has an active request.
        """
        if not self.enabled:
            return None

        current = self.in_flight.get(target_id)
        if current is not None:
            if current.state in BUSY_STATES:
                logger.debug("Inference already in progress for %s, skipping", target_id)
                return None
            if current.state is RequestState.RETRYING and current.task is not None:
                logger.debug("Superseding pending retry for %s", target_id)
                current.task.cancel()

        request = InferenceRequest(target_id, url, hostname_for(url))
        self.attempts[target_id] = 0
        # Busy from the moment it is registered so back-to-back triggers drop
        request.state = RequestState.RESOLVING
        self.in_flight[target_id] = request
        request.task = asyncio.get_running_loop().create_task(self._run(request))
        return request.task

    async def infer(self, target_id, url):
        """Trigger and wait; returns the applied ThemeColor or None."""
        task = self.trigger(target_id, url)
        if task is None:
            return None
        await asyncio.wait([task])
        if task.cancelled():
            return None
        return task.result()

    def refresh_all(self, targets):
        """Trigger every (target_id, url) pair, e.g. after a preference change."""
        tasks = []
        for target_id, url in targets:
            task = self.trigger(target_id, url)
            if task is not None:
                tasks.append(task)
        return tasks

    async def _run(self, request):
        try:
            try:
                theme = await self._resolve(request)
            except Exception:
                logger.exception("Error during color inference for %s", request.url)
                theme = self.pipeline.default_theme()
            return self._apply(request, theme)
        finally:
            if self.in_flight.get(request.target_id) is request:
                del self.in_flight[request.target_id]
                self.source.release(request.target_id)

    async def _resolve(self, request):
        if not is_supported_url(request.url):
            logger.debug("Unsupported URL %r, applying default color", request.url)
            return self.pipeline.default_theme()

        while True:
            self.attempts[request.target_id] += 1
            request.state = RequestState.RESOLVING

            resolution = await self.pipeline.resolve(
                request.hostname,
                load_markup=lambda: self._load_markup(request),
                load_favicon=lambda: self._load_favicon(request),
            )
            if resolution is not None:
                logger.debug("Resolved %s to %s via %s", request.hostname,
                             resolution.color, resolution.source)
                return self.pipeline.theme_color(resolution.color)

            # Missing markup and markup without a usable color are both misses
            request.markup = None
            request.retry_count += 1
            if request.retry_count >= self.max_attempts:
                logger.warning("No color found for %s after %d attempts",
                               request.url, self.max_attempts)
                return self.pipeline.default_theme()

            logger.debug("Retrying %s (%d/%d)", request.url,
                         request.retry_count, self.max_attempts)
            request.state = RequestState.RETRYING
            await asyncio.sleep(self.retry_delay)

    async def _load_markup(self, request):
        request.state = RequestState.AWAITING_MARKUP
        try:
            markup = await asyncio.wait_for(
                self.source.fetch_markup(request.target_id), self.markup_timeout
            )
        except asyncio.TimeoutError:
            logger.debug("Timed out waiting for markup of %s", request.target_id)
            markup = None
        request.state = RequestState.RESOLVING
        request.markup = markup or None
        return request.markup

    async def _load_favicon(self, request):
        try:
            return await asyncio.wait_for(
                self.source.fetch_favicon(request.target_id), self.markup_timeout
            )
        except asyncio.TimeoutError:
            logger.debug("Timed out waiting for favicon of %s", request.target_id)
            return None

    def _apply(self, request, theme):
        request.state = RequestState.APPLIED
        try:
            self.sink.apply(theme, request.target_id)
        except Exception:
            logger.exception("Failed to apply theme to %s", request.target_id)
        return theme
