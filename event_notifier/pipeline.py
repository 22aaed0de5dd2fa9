import logging
from concurrent.futures import Future
from typing import Dict, Iterable, Optional

from .constants import NAME_REGEXPR, STATE_REGEXPR
from .enrichment import MetadataEnricher
from .filters import NameFilter, StatusFilter
from .notifier import DebouncedNotifier
from .utils import short_id

logger = logging.getLogger(__name__)


class EventPipeline:
    """
    status filter -> enricher (assíncrono) -> name filter -> notifier.

    process() nunca bloqueia esperando o inspect: a continuação roda no
    callback do Future (na thread do pool, ou na hora em caso de cache hit).
    """

    def __init__(self, enricher: MetadataEnricher, notifier: DebouncedNotifier,
                 status_pattern: str = STATE_REGEXPR, name_pattern: str = NAME_REGEXPR):
        self.status_filter = StatusFilter(status_pattern)
        self.name_filter = NameFilter(name_pattern)
        self.enricher = enricher
        self.notifier = notifier

    def process(self, event: Dict) -> Optional[Future]:
        if self.status_filter.process(event) is None:
            return None
        logger.debug(f"Evento aceito: id={short_id(event.get('id'))} status={event.get('status')} timeNano={event.get('timeNano')}")
        future = self.enricher.enrich(event)
        future.add_done_callback(self._after_enrich)
        return future

    def _after_enrich(self, future: Future):
        try:
            event = future.result()
            if self.name_filter.process(event) is None:
                return
            self.notifier.handle(event)
        except Exception as exc:
            # falha de um evento não derruba o stream
            logger.error(f"Erro processando evento enriquecido: {exc}")

    def run(self, events: Iterable[Dict]):
        """Consome o stream até acabar; erros do próprio stream propagam (fatal)."""
        for event in events:
            self.process(event)
