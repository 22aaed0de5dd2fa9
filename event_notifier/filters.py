import logging
import re
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class _RegexFilter:
    field_label = "value"

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._regexp = re.compile(pattern)

    def _value(self, event: Dict) -> str:
        raise NotImplementedError

    def process(self, event: Dict) -> Optional[Dict]:
        value = self._value(event)
        if self._regexp.search(value):
            return event
        logger.debug(f"Evento descartado ({self.field_label}={value!r} não casa com {self.pattern!r}) id={event.get('id')}")
        return None


class StatusFilter(_RegexFilter):
    """Mantém apenas eventos cujo status casa com a regex configurada."""

    field_label = "status"

    def _value(self, event: Dict) -> str:
        return str(event.get('status') or '')


class NameFilter(_RegexFilter):
    """
    Mantém apenas eventos cujo container.Name casa com a regex.
    Deve rodar depois do enriquecimento (evento cru não tem nome).
    """

    field_label = "name"

    def _value(self, event: Dict) -> str:
        container = event.get('container') or {}
        return str(container.get('Name') or '')
