import codecs
import json
import logging
from typing import Dict, Iterable, Iterator, Optional, Union

from .utils import pick_first_nonempty

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()

# acima disso o resto pendente é forçado a ressincronizar
MAX_PENDING_CHARS = 1024 * 1024

_LITERALS = ('true', 'false', 'null', '-Infinity')
_NUMBER_CHARS = '0123456789.eE+-'


def normalize_event(raw) -> Optional[Dict]:
    """
    Garante os campos legados (id, status, from) usados pelo pipeline.
    A API do Docker >= 1.44 só envia Type/Action/Actor; eventos que não
    são de container são descartados.
    """
    if not isinstance(raw, dict):
        return None
    event_type = raw.get('Type')
    if event_type and event_type != 'container':
        return None

    actor = raw.get('Actor') or {}
    attributes = actor.get('Attributes') or {}
    event = dict(raw)
    event['id'] = pick_first_nonempty(raw.get('id'), actor.get('ID'))
    event['status'] = pick_first_nonempty(raw.get('status'), raw.get('Action'))
    event['from'] = pick_first_nonempty(raw.get('from'), attributes.get('image'))
    if not event['id'] or not event['status']:
        logger.debug(f"Evento sem id/status ignorado: {raw}")
        return None
    return event


def _is_incomplete(err: json.JSONDecodeError, buffer: str) -> bool:
    """O erro só indica que o objeto ainda não chegou inteiro."""
    if err.pos >= len(buffer):
        return True
    if err.msg.startswith('Unterminated string'):
        return True
    # número ou literal cortado no fim do chunk ("1.", "tru", "-")
    tail = buffer[err.pos:]
    if not tail.strip(_NUMBER_CHARS):
        return True
    return any(lit.startswith(tail) for lit in _LITERALS)


def _resync(buffer: str, pos: int) -> int:
    """Próximo ponto onde um objeto pode começar: quebra de linha ou '{'."""
    candidates = [i for i in (buffer.find('\n', pos + 1), buffer.find('{', pos + 1)) if i != -1]
    return min(candidates) if candidates else len(buffer)


def _split_objects(buffer: str, final: bool = False):
    """
    Extrai objetos JSON completos do início do buffer. Retorna (objetos, resto).
    Com final=True nada fica pendente: o que não decodifica é descartado.
    """
    objects = []
    pos = 0
    length = len(buffer)
    while True:
        while pos < length and buffer[pos].isspace():
            pos += 1
        if pos >= length:
            return objects, ''
        try:
            obj, end = _decoder.raw_decode(buffer, pos)
        except json.JSONDecodeError as err:
            if not final and _is_incomplete(err, buffer):
                return objects, buffer[pos:]
            resume = _resync(buffer, pos)
            logger.warning(f"Evento malformado descartado: {buffer[pos:resume][:200]!r}")
            pos = resume
            continue
        objects.append(obj)
        pos = end


def _normalized(objects) -> Iterator[Dict]:
    for obj in objects:
        event = normalize_event(obj)
        if event is None:
            if not isinstance(obj, dict):
                logger.warning(f"Valor JSON não-objeto descartado: {obj!r}")
            continue
        yield event


def decode_event_stream(chunks: Iterable[Union[bytes, str]]) -> Iterator[Dict]:
    """
    Decodifica um stream (bytes ou str) de objetos JSON separados por
    quebra de linha ou simplesmente concatenados. Objetos podem ocupar
    várias linhas e chegar cortados em qualquer ponto.
    """
    buffer = ''
    # chunk pode cortar um caractere multibyte ao meio
    utf8 = codecs.getincrementaldecoder('utf-8')(errors='replace')
    for chunk in chunks:
        buffer += utf8.decode(chunk) if isinstance(chunk, bytes) else chunk
        objects, buffer = _split_objects(buffer)
        if len(buffer) > MAX_PENDING_CHARS:
            logger.warning(f"Dados pendentes acima de {MAX_PENDING_CHARS} caracteres, ressincronizando")
            more, buffer = _split_objects(buffer, final=True)
            objects.extend(more)
        yield from _normalized(objects)

    buffer += utf8.decode(b'', final=True)
    if buffer.strip():
        logger.warning(f"Fim do stream com dados pendentes: {buffer[:200]!r}")
        objects, _ = _split_objects(buffer, final=True)
        yield from _normalized(objects)
