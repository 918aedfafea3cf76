"""The fetch, decode, select and render sequence for one page."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional

from .decoder import validate_payload
from .errors import PreviewError, user_message
from .formatting import DEFAULT_LOCALE
from .page import PreviewPage
from .renderers import DEFAULT_LISTING_URL, build_cards_html, build_error_html
from .selection import DEFAULT_MAX_CARDS, select_recent_entries
from .transport import Transport

logger = logging.getLogger(__name__)

DEFAULT_JSON_URL = "assets/data/journal.json"


class PipelineState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    DECODING = "decoding"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS: Dict[PipelineState, FrozenSet[PipelineState]] = {
    PipelineState.IDLE: frozenset({PipelineState.FETCHING}),
    PipelineState.FETCHING: frozenset({PipelineState.DECODING, PipelineState.FAILED}),
    PipelineState.DECODING: frozenset({PipelineState.RENDERING, PipelineState.FAILED}),
    PipelineState.RENDERING: frozenset({PipelineState.DONE, PipelineState.FAILED}),
    PipelineState.DONE: frozenset(),
    PipelineState.FAILED: frozenset(),
}


@dataclass
class PreviewSettings:
    """Where to fetch from and how many cards to show."""

    json_url: str = DEFAULT_JSON_URL
    max_cards: int = DEFAULT_MAX_CARDS
    listing_url: str = DEFAULT_LISTING_URL
    locale: str = DEFAULT_LOCALE


@dataclass
class PreviewOutcome:
    """Terminal state of a pipeline run."""

    state: PipelineState
    rendered: int = 0
    message: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.DONE


class JournalPreview:
    """Runs the journal preview once against a located page.

    Only the fetch suspends; decoding, selection and rendering run to
    completion synchronously afterwards. Failures never escape ``run``:
    they end in the FAILED state with the placeholder replaced by the
    degraded message.
    """

    def __init__(
        self,
        page: PreviewPage,
        transport: Transport,
        settings: Optional[PreviewSettings] = None,
    ) -> None:
        self.page = page
        self.transport = transport
        self.settings = settings or PreviewSettings()
        self.state = PipelineState.IDLE

    def _advance(self, state: PipelineState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Invalid preview transition {self.state.value} -> {state.value}"
            )
        logger.debug("Journal preview %s -> %s", self.state.value, state.value)
        self.state = state

    def _fail(self, exc: BaseException) -> PreviewOutcome:
        self._advance(PipelineState.FAILED)
        message = user_message(exc)
        logger.warning("Journal preview failed: %s", exc)
        self.page.show_error(build_error_html(message, self.settings.listing_url))
        return PreviewOutcome(state=self.state, message=message, error=exc)

    async def run(self) -> PreviewOutcome:
        self._advance(PipelineState.FETCHING)
        logger.info(
            "Fetching journal entries from %s (%s transport)",
            self.settings.json_url,
            self.transport.name,
        )
        try:
            payload = await self.transport.fetch_json(self.settings.json_url)
        except PreviewError as exc:
            return self._fail(exc)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected transport failure")
            return self._fail(exc)

        self._advance(PipelineState.DECODING)
        try:
            collection = validate_payload(payload)
        except PreviewError as exc:
            return self._fail(exc)

        self._advance(PipelineState.RENDERING)
        try:
            selected = select_recent_entries(
                collection.entries, self.settings.max_cards
            )
            cards_html = build_cards_html(selected, self.settings.locale)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to render journal preview cards")
            return self._fail(exc)

        self.page.hide_placeholder()
        rendered = self.page.append_cards(cards_html)
        self._advance(PipelineState.DONE)
        logger.info("Rendered %d journal preview cards", rendered)
        return PreviewOutcome(state=self.state, rendered=rendered)
