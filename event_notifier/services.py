import logging
from typing import Dict, Optional

import requests
import urllib3

from .constants import (
    WEBHOOK_FORMAT,
    WEBHOOK_TIMEOUT_SECONDS,
    WEBHOOK_URL,
    WEBHOOK_VERIFY_TLS,
)
from .formatters import build_discord_payload, build_slack_payload

logger = logging.getLogger(__name__)

_PAYLOAD_BUILDERS = {
    'slack': build_slack_payload,
    'discord': build_discord_payload,
}


class WebhookSender:
    """Envio best-effort para o webhook do chat: sem retry, erros só vão para o log."""

    def __init__(self, url: Optional[str] = None, webhook_format: Optional[str] = None,
                 timeout: int = WEBHOOK_TIMEOUT_SECONDS, verify_tls: bool = WEBHOOK_VERIFY_TLS):
        self.url = url or WEBHOOK_URL
        self.webhook_format = (webhook_format or WEBHOOK_FORMAT).lower()
        if self.webhook_format not in _PAYLOAD_BUILDERS:
            raise RuntimeError(f"WEBHOOK_FORMAT inválido: {self.webhook_format!r}")
        self.timeout = timeout
        self.verify_tls = verify_tls

        # Suprime avisos de HTTPS inseguro quando a verificação TLS está desativada
        if not self.verify_tls:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
            logger.debug("Avisos de InsecureRequestWarning desabilitados (WEBHOOK_VERIFY_TLS=false)")

    def build_payload(self, notification: Dict) -> Dict:
        return _PAYLOAD_BUILDERS[self.webhook_format](notification)

    def send(self, notification: Dict) -> Optional[requests.Response]:
        payload = self.build_payload(notification)
        try:
            resp = requests.post(self.url, json=payload, timeout=self.timeout, verify=self.verify_tls)
        except requests.RequestException as exc:
            logger.error(f"Falha ao enviar notificação ({notification.get('username')}): {exc}")
            return None

        if resp.status_code >= 400:
            logger.error(f"Webhook respondeu {resp.status_code}: {resp.text[:500]}")
        else:
            logger.debug(f"Webhook response: {resp.status_code}")
        return resp
