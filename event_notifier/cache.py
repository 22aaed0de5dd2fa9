import threading
from typing import Dict, Optional


class MetadataCache:
    """
    Cache limitado de metadados por container id (resultado do docker inspect).

    Cada remoção incrementa a geração do id; um lookup iniciado antes da
    remoção não consegue mais gravar (set_if_generation).
    """

    def __init__(self, max_size: int = 5000):
        self.max_size = max(1, max_size)
        self._store: Dict[str, Dict] = {}
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    def _evict_if_needed(self):
        # dict preserva ordem de inserção: os primeiros são os mais antigos
        while len(self._store) > self.max_size:
            oldest = next(iter(self._store))
            self._store.pop(oldest, None)
        while len(self._generations) > self.max_size:
            oldest = next(iter(self._generations))
            self._generations.pop(oldest, None)

    def get(self, key: str) -> Optional[Dict]:
        with self._lock:
            return self._store.get(key)

    def generation(self, key: str) -> int:
        with self._lock:
            return self._generations.get(key, 0)

    def set(self, key: str, value: Dict):
        with self._lock:
            self._put(key, value)

    def set_if_generation(self, key: str, value: Dict, generation: int) -> bool:
        with self._lock:
            if self._generations.get(key, 0) != generation:
                return False
            self._put(key, value)
            return True

    def _put(self, key: str, value: Dict):
        # última escrita vence (lookups concorrentes do mesmo id)
        self._store.pop(key, None)
        self._store[key] = value
        self._evict_if_needed()

    def pop(self, key: str) -> Optional[Dict]:
        with self._lock:
            generation = self._generations.pop(key, 0) + 1
            self._generations[key] = generation
            self._evict_if_needed()
            return self._store.pop(key, None)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
