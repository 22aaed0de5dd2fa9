#!/usr/bin/env python3
import unittest
from unittest.mock import Mock, patch

import requests

from event_notifier.services import WebhookSender

NOTIFICATION = {
    'username': '[h] docker/web container DIED',
    'icon_emoji': ':warning:',
    'color': '#FF0000',
    'channel': '',
    'text': 'docker/web container died on h',
    'fields': {'Timestamp': '2024-01-01T00:00:00.000Z', 'Region': 'R', 'Container': 'docker/web', 'Image': 'web:1'},
}


class TestWebhookSender(unittest.TestCase):
    @patch('event_notifier.services.requests.post')
    def test_posts_slack_payload(self, mock_post):
        mock_post.return_value = Mock(status_code=200, text='ok')
        sender = WebhookSender(url='https://hooks.example/T/B/X', webhook_format='slack', timeout=3)
        resp = sender.send(NOTIFICATION)

        self.assertEqual(resp.status_code, 200)
        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], 'https://hooks.example/T/B/X')
        self.assertEqual(kwargs['timeout'], 3)
        self.assertEqual(kwargs['json']['attachments'][0]['fallback'], NOTIFICATION['text'])

    @patch('event_notifier.services.requests.post')
    def test_posts_discord_payload(self, mock_post):
        mock_post.return_value = Mock(status_code=204, text='')
        sender = WebhookSender(url='https://discord.example/api/webhooks/1/x', webhook_format='discord')
        sender.send(NOTIFICATION)
        payload = mock_post.call_args.kwargs['json']
        self.assertIn('embeds', payload)
        self.assertEqual(payload['embeds'][0]['color'], 0xFF0000)

    @patch('event_notifier.services.requests.post')
    def test_transport_error_is_logged_and_swallowed(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("boom")
        sender = WebhookSender(url='https://hooks.example/x', webhook_format='slack')
        with self.assertLogs('event_notifier.services', level='ERROR'):
            self.assertIsNone(sender.send(NOTIFICATION))

    @patch('event_notifier.services.requests.post')
    def test_http_error_status_is_logged(self, mock_post):
        mock_post.return_value = Mock(status_code=500, text='internal error')
        sender = WebhookSender(url='https://hooks.example/x', webhook_format='slack')
        with self.assertLogs('event_notifier.services', level='ERROR'):
            resp = sender.send(NOTIFICATION)
        self.assertEqual(resp.status_code, 500)

    def test_unknown_format_rejected(self):
        with self.assertRaises(RuntimeError):
            WebhookSender(url='https://hooks.example/x', webhook_format='teams')

    @patch('event_notifier.services.urllib3.disable_warnings')
    def test_insecure_tls_disables_warnings(self, mock_disable):
        WebhookSender(url='https://hooks.example/x', webhook_format='slack', verify_tls=False)
        mock_disable.assert_called_once()


if __name__ == '__main__':
    unittest.main()
