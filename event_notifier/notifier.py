import logging
import threading
from typing import Callable, Dict, List, Optional

from .constants import AWS_REGION, DEBOUNCE_MS, DOCKER_HOSTNAME, SLACK_CHANNEL
from .formatters import build_notification
from .utils import event_time_nano, short_id

logger = logging.getLogger(__name__)


class DebouncedNotifier:
    """
    Agrupa rajadas de eventos por container id numa única notificação.

    Estados por id: idle (sem registro) -> pending (registro + timer armado)
    -> idle após o envio. Cada evento do id rearma o timer (janela de
    silêncio); o evento representativo é o de maior timeNano (empate: o
    mais recente a chegar vence).

    Cada timer armado recebe um token; um timer que já foi substituído
    encontra outro token no registro e não envia nada.
    """

    def __init__(self, sender, debounce_ms: int = DEBOUNCE_MS, hostname: str = DOCKER_HOSTNAME,
                 region: str = AWS_REGION, channel: str = SLACK_CHANNEL,
                 timer_factory: Callable = threading.Timer):
        self.sender = sender
        self.debounce_seconds = max(0, debounce_ms) / 1000.0
        self.hostname = hostname
        self.region = region
        self.channel = channel
        self._timer_factory = timer_factory
        # container_id -> {'event', 'timer', 'token'}
        self._records: Dict[str, Dict] = {}
        self._lock = threading.Lock()

    def handle(self, event: Dict) -> None:
        cid = event.get('id')
        with self._lock:
            record = self._records.get(cid)
            if record is None:
                record = {'event': event, 'timer': None, 'token': None}
                self._records[cid] = record

            if event_time_nano(event) >= event_time_nano(record['event']):
                record['event'] = event
            else:
                logger.debug(
                    f"Evento fora de ordem para {short_id(cid)} ({event.get('status')}, "
                    f"timeNano={event.get('timeNano')}); mantendo {record['event'].get('status')}"
                )

            # Rearma a janela de silêncio
            if record['timer'] is not None:
                record['timer'].cancel()
            token = object()
            timer = self._timer_factory(self.debounce_seconds, self._fire, args=(cid, token))
            timer.daemon = True
            record['timer'] = timer
            record['token'] = token
            timer.start()

        logger.debug(f"Notificação agendada para {short_id(cid)} em {self.debounce_seconds:.3f}s (status={event.get('status')})")

    def _fire(self, cid: str, token: object) -> None:
        with self._lock:
            record = self._records.get(cid)
            if record is None or record['token'] is not token:
                # timer substituído por um evento mais novo
                return
            del self._records[cid]
            event = record['event']

        self._dispatch(event)

    def _dispatch(self, event: Dict) -> None:
        try:
            notification = build_notification(event, self.hostname, self.region, self.channel)
            logger.info(f"Enviando notificação: {notification['username']}")
            self.sender.send(notification)
        except Exception as exc:
            logger.error(f"Erro ao enviar notificação do container {short_id(event.get('id'))}: {exc}")

    def pending_ids(self) -> List[str]:
        with self._lock:
            return list(self._records.keys())

    def pending_event(self, cid: str) -> Optional[Dict]:
        with self._lock:
            record = self._records.get(cid)
            return record['event'] if record else None
