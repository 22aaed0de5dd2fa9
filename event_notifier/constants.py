import os
import re

# Configurações globais de ambiente
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"
APP_PORT = int(os.getenv("APP_PORT", "5001"))
HEALTH_SERVER_ENABLED = os.getenv("HEALTH_SERVER_ENABLED", "true").lower() == "true"

# Filtros do pipeline
STATE_REGEXPR = os.getenv("STATE_REGEXPR", "^(die|start)$")
NAME_REGEXPR = os.getenv("NAME_REGEXPR", ".*")

# Webhook (Slack por padrão, Discord como alternativa)
SLACK_WEBHOOK_URL = os.getenv("SLACK_WEBHOOK_URL")
DISCORD_WEBHOOK_URL = os.getenv("DISCORD_WEBHOOK_URL")
WEBHOOK_URL = SLACK_WEBHOOK_URL or DISCORD_WEBHOOK_URL
_default_format = "discord" if (DISCORD_WEBHOOK_URL and not SLACK_WEBHOOK_URL) else "slack"
WEBHOOK_FORMAT = os.getenv("WEBHOOK_FORMAT", _default_format).strip().lower()
WEBHOOK_TIMEOUT_SECONDS = int(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "5"))
WEBHOOK_VERIFY_TLS = os.getenv("WEBHOOK_VERIFY_TLS", "true").lower() == "true"
SLACK_CHANNEL = os.getenv("SLACK_CHANNEL", "")

# Identificação do host/região exibida na mensagem
AWS_REGION = os.getenv("AWS_REGION", "UNKNOWN")
DOCKER_HOSTNAME = os.getenv("DOCKER_HOSTNAME", "UNKNOWN")

# Histerese: janela de silêncio antes de enviar (ms)
DEBOUNCE_MS = int(os.getenv("DEBOUNCE_MS", "5000"))

# Cache de metadados (docker inspect) e pool de consultas
METADATA_CACHE_MAX = int(os.getenv("METADATA_CACHE_MAX", "5000"))
LOOKUP_WORKERS = int(os.getenv("LOOKUP_WORKERS", "8"))

SUPPORTED_WEBHOOK_FORMATS = ("slack", "discord")

# Nome usado quando o container já sumiu antes do inspect
PLACEHOLDER_CONTAINER_NAME = "/unknown"

# Templates por status do evento Docker
EVENT_INFO = {
    "die": {"past_tense": "died", "emoji": ":warning:", "color": "#FF0000"},
    "start": {"past_tense": "started", "emoji": ":trophy:", "color": "#00FF00"},
    "stop": {"past_tense": "stopped", "emoji": ":octagonal_sign:", "color": "#FFA500"},
    "restart": {"past_tense": "restarted", "emoji": ":arrows_counterclockwise:", "color": "#FFFF00"},
    "kill": {"past_tense": "killed", "emoji": ":skull:", "color": "#FF0000"},
    "oom": {"past_tense": "ran out of memory", "emoji": ":boom:", "color": "#8B0000"},
    "pause": {"past_tense": "paused", "emoji": ":double_vertical_bar:", "color": "#808080"},
    "unpause": {"past_tense": "unpaused", "emoji": ":arrow_forward:", "color": "#00FF00"},
    "destroy": {"past_tense": "destroyed", "emoji": ":wastebasket:", "color": "#808080"},
}

# Discord não interpreta os shortcodes do Slack em webhooks: usa o caractere
DISCORD_EMOJI = {
    ":warning:": "⚠️",
    ":trophy:": "\U0001f3c6",
    ":octagonal_sign:": "\U0001f6d1",
    ":arrows_counterclockwise:": "\U0001f504",
    ":skull:": "\U0001f480",
    ":boom:": "\U0001f4a5",
    ":double_vertical_bar:": "⏸️",
    ":arrow_forward:": "▶️",
    ":wastebasket:": "\U0001f5d1️",
}


def check_required_config(webhook_url=None, webhook_format=None, patterns=None):
    """
    Valida a configuração de inicialização. Qualquer erro aqui é fatal.
    Levanta RuntimeError (webhook/formato) ou re.error (regex inválida).
    """
    url = WEBHOOK_URL if webhook_url is None else webhook_url
    fmt = WEBHOOK_FORMAT if webhook_format is None else webhook_format
    if not url:
        raise RuntimeError("SLACK_WEBHOOK_URL (ou DISCORD_WEBHOOK_URL) não configurado")
    if fmt not in SUPPORTED_WEBHOOK_FORMATS:
        raise RuntimeError(f"WEBHOOK_FORMAT inválido: {fmt!r} (use {', '.join(SUPPORTED_WEBHOOK_FORMATS)})")
    for pattern in (patterns if patterns is not None else (STATE_REGEXPR, NAME_REGEXPR)):
        re.compile(pattern)
