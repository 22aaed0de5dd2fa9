import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, Optional

from .cache import MetadataCache
from .constants import LOOKUP_WORKERS, METADATA_CACHE_MAX, PLACEHOLDER_CONTAINER_NAME
from .utils import short_id

logger = logging.getLogger(__name__)


def placeholder_metadata(container_id: Optional[str]) -> Dict:
    return {
        'Id': container_id,
        'Name': PLACEHOLDER_CONTAINER_NAME,
        'Config': {},
        'placeholder': True,
    }


class MetadataEnricher:
    """
    Anexa metadados do container (docker inspect) ao evento, com cache por id.

    O inspect roda num pool de threads; enrich() devolve um Future que
    resolve sempre com o evento enriquecido (nunca com erro). Em caso de
    falha no inspect é anexado um placeholder com nome '/unknown'.
    """

    def __init__(self, inspector, cache: Optional[MetadataCache] = None,
                 executor: Optional[ThreadPoolExecutor] = None, max_workers: int = LOOKUP_WORKERS):
        self.inspector = inspector
        self.cache = cache if cache is not None else MetadataCache(max_size=METADATA_CACHE_MAX)
        self._own_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix='inspect')

    def enrich(self, event: Dict) -> Future:
        cid = event.get('id')
        cached = self.cache.get(cid)
        if cached is not None:
            event['container'] = cached
            self._evict_if_destroyed(event)
            future: Future = Future()
            future.set_result(event)
            return future
        # Sem deduplicação de lookups em andamento: cada evento dispara o seu.
        # A geração é lida antes do submit; um destroy no meio invalida a gravação.
        generation = self.cache.generation(cid)
        return self._executor.submit(self._lookup, event, generation)

    def _lookup(self, event: Dict, generation: int = 0) -> Dict:
        cid = event.get('id')
        try:
            metadata = self.inspector.inspect_container(cid)
        except Exception as exc:
            logger.warning(f"Falha no inspect do container {short_id(cid)} (status={event.get('status')}): {exc}")
            event['container'] = placeholder_metadata(cid)
        else:
            if not self.cache.set_if_generation(cid, metadata, generation):
                logger.debug(f"Container {short_id(cid)} removido durante o inspect, metadados não cacheados")
            event['container'] = metadata
        self._evict_if_destroyed(event)
        return event

    def _evict_if_destroyed(self, event: Dict):
        # destroy: o próximo evento com o mesmo id começa com cache frio
        if event.get('status') == 'destroy':
            self.cache.pop(event.get('id'))
            logger.debug(f"Cache de metadados invalidado para {short_id(event.get('id'))}")

    def cache_size(self) -> int:
        return len(self.cache)

    def shutdown(self, wait: bool = True):
        if self._own_executor:
            self._executor.shutdown(wait=wait)
