from datetime import datetime, timezone


def pick_first_nonempty(*candidates):
    """Primeiro candidato que não é None nem string em branco, sem espaços nas pontas."""
    for c in candidates:
        if c is None:
            continue
        value = str(c).strip()
        if value:
            return value
    return None


def parse_time_nano(value) -> int:
    """Converte timeNano (int ou string numérica) em int; inválido vira 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0


def event_time_nano(event) -> int:
    # Eventos antigos da API só trazem 'time' (segundos)
    if event.get('timeNano') is not None:
        return parse_time_nano(event.get('timeNano'))
    return parse_time_nano(event.get('time')) * 1_000_000_000


def short_id(container_id) -> str:
    return str(container_id or 'unknown')[:12]


def utc_now_iso(now=None) -> str:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f"{now.microsecond // 1000:03d}Z"


def hex_color_to_int(color):
    """'#FF0000' -> 16711680 (formato de cor do Discord)."""
    if not color:
        return None
    try:
        return int(str(color).lstrip('#'), 16)
    except ValueError:
        return None
