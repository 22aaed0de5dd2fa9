from typing import Dict

from .constants import DISCORD_EMOJI, EVENT_INFO
from .utils import hex_color_to_int, pick_first_nonempty, utc_now_iso


def resolve_event_info(status):
    """Template de exibição por status; status desconhecido usa o texto cru, sem emoji/cor."""
    info = EVENT_INFO.get(status) or {}
    return {
        'past_tense': info.get('past_tense') or str(status or ''),
        'emoji': info.get('emoji'),
        'color': info.get('color'),
    }


def build_notification(event: Dict, hostname: str, region: str, channel: str = '', now=None) -> Dict:
    info = resolve_event_info(event.get('status'))
    container = event.get('container') or {}
    # Name do docker inspect já vem com a barra inicial ('/nginx')
    name = container.get('Name') or ''
    display_name = f"docker{name}"
    status_text = info['past_tense']
    host = hostname or 'UNKNOWN'
    image = pick_first_nonempty(event.get('from'), (container.get('Config') or {}).get('Image')) or 'N/A'

    return {
        'username': f"[{host}] {display_name} container {status_text.upper()}",
        'icon_emoji': info['emoji'],
        'color': info['color'],
        'channel': channel or '',
        'text': f"{display_name} container {status_text} on {host}",
        'fields': {
            'Timestamp': utc_now_iso(now),
            'Region': (region or 'UNKNOWN').upper(),
            'Container': display_name,
            'Image': image,
        },
    }


def build_slack_payload(notification: Dict) -> Dict:
    payload = {
        'username': notification['username'],
        'channel': notification.get('channel') or '',
        'text': '',
        'attachments': [
            {
                'fallback': notification['text'],
                'fields': [
                    {'title': title, 'value': value, 'short': True}
                    for title, value in notification['fields'].items()
                ],
            }
        ],
    }
    if notification.get('icon_emoji'):
        payload['icon_emoji'] = notification['icon_emoji']
    if notification.get('color'):
        payload['attachments'][0]['color'] = notification['color']
    return payload


def build_discord_payload(notification: Dict) -> Dict:
    # shortcode sem equivalente conhecido é omitido
    emoji = DISCORD_EMOJI.get(notification.get('icon_emoji') or '')
    content = f"{emoji} {notification['text']}" if emoji else notification['text']
    embed = {
        'title': notification['username'],
        'fields': [
            {'name': name, 'value': str(value), 'inline': True}
            for name, value in notification['fields'].items()
        ],
    }
    color = hex_color_to_int(notification.get('color'))
    if color is not None:
        embed['color'] = color
    return {
        'content': content,
        'embeds': [embed],
    }
