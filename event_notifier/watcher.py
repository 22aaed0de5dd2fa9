import logging
from typing import Optional

from .constants import (
    AWS_REGION,
    DEBOUNCE_MS,
    DOCKER_HOSTNAME,
    LOOKUP_WORKERS,
    METADATA_CACHE_MAX,
    NAME_REGEXPR,
    SLACK_CHANNEL,
    STATE_REGEXPR,
)
from .cache import MetadataCache
from .docker_client import DockerClient
from .enrichment import MetadataEnricher
from .event_source import decode_event_stream
from .notifier import DebouncedNotifier
from .pipeline import EventPipeline
from .services import WebhookSender

logger = logging.getLogger(__name__)


class EventStreamClosed(RuntimeError):
    """O stream de eventos do Docker terminou (sem reconexão automática)."""


def build_pipeline(docker_client: DockerClient, sender: Optional[WebhookSender] = None) -> EventPipeline:
    enricher = MetadataEnricher(
        docker_client,
        cache=MetadataCache(max_size=METADATA_CACHE_MAX),
        max_workers=LOOKUP_WORKERS,
    )
    notifier = DebouncedNotifier(
        sender or WebhookSender(),
        debounce_ms=DEBOUNCE_MS,
        hostname=DOCKER_HOSTNAME,
        region=AWS_REGION,
        channel=SLACK_CHANNEL,
    )
    return EventPipeline(enricher, notifier, status_pattern=STATE_REGEXPR, name_pattern=NAME_REGEXPR)


def run_watcher(docker_client: DockerClient, pipeline: EventPipeline):
    """Bloqueia consumindo eventos. Só retorna levantando exceção (stream caiu ou terminou)."""
    version = docker_client.version()
    logger.info(f"Docker Engine {version.get('Version')} (API {version.get('ApiVersion')}, {version.get('Os')}/{version.get('Arch')})")
    logger.info(
        f"Observando eventos (status={pipeline.status_filter.pattern!r}, "
        f"name={pipeline.name_filter.pattern!r}, debounce={pipeline.notifier.debounce_seconds:.3f}s)"
    )
    pipeline.run(decode_event_stream(docker_client.events()))
    raise EventStreamClosed("Stream de eventos do Docker encerrado")
