import logging
from typing import Dict, Iterator, Optional

import docker

from .utils import short_id

logger = logging.getLogger(__name__)


class DockerClient:
    """Acesso ao Docker Engine (socket local ou DOCKER_HOST) via docker SDK."""

    def __init__(self, client: Optional[docker.DockerClient] = None):
        self._client = client or docker.from_env()
        self._api = self._client.api

    # ---------- Public API ----------

    def version(self) -> Dict:
        return self._client.version()

    def inspect_container(self, container_id: str) -> Dict:
        """Retorna o docker inspect do container. Levanta docker.errors.NotFound se sumiu."""
        logger.debug(f"docker inspect {short_id(container_id)}")
        return self._api.inspect_container(container_id)

    def events(self) -> Iterator[bytes]:
        """Stream cru (bytes) da API de eventos; a decodificação fica no event_source."""
        return self._api.events(decode=False)

    def close(self):
        try:
            self._client.close()
        except Exception as exc:
            logger.debug(f"Falha ao fechar o client docker: {exc}")
