#!/usr/bin/env python3
import json
import re
import unittest
from unittest.mock import Mock, patch

from event_notifier.constants import check_required_config
from event_notifier.controller import create_app
from event_notifier.docker_client import DockerClient
from event_notifier.watcher import EventStreamClosed, build_pipeline, run_watcher


def _raw_events(*events):
    return [(json.dumps(e) + '\n').encode('utf-8') for e in events]


class TestRunWatcher(unittest.TestCase):
    def setUp(self):
        self.docker_client = Mock()
        self.docker_client.version.return_value = {'Version': '24.0.7', 'ApiVersion': '1.43', 'Os': 'linux', 'Arch': 'amd64'}
        self.docker_client.inspect_container.return_value = {'Id': 'c1', 'Name': '/web'}

    def test_feeds_pipeline_and_fails_when_stream_ends(self):
        self.docker_client.events.return_value = iter(_raw_events(
            {'Type': 'container', 'Action': 'start', 'Actor': {'ID': 'c1', 'Attributes': {'image': 'nginx'}}, 'timeNano': 1},
            {'Type': 'network', 'Action': 'connect', 'Actor': {'ID': 'n1'}},
        ))
        pipeline = Mock()
        pipeline.status_filter.pattern = '.*'
        pipeline.name_filter.pattern = '.*'
        pipeline.notifier.debounce_seconds = 5.0
        pipeline.run.side_effect = lambda events: [pipeline.process(e) for e in events]

        with self.assertRaises(EventStreamClosed):
            run_watcher(self.docker_client, pipeline)

        pipeline.process.assert_called_once()
        event = pipeline.process.call_args.args[0]
        self.assertEqual((event['id'], event['status'], event['from']), ('c1', 'start', 'nginx'))

    def test_stream_error_propagates(self):
        def broken_stream():
            yield _raw_events({'status': 'start', 'id': 'c1', 'timeNano': 1})[0]
            raise ConnectionError("socket closed")

        self.docker_client.events.return_value = broken_stream()
        pipeline = build_pipeline(self.docker_client, sender=Mock())
        try:
            with self.assertRaises(ConnectionError):
                run_watcher(self.docker_client, pipeline)
        finally:
            pipeline.enricher.shutdown()


class TestDockerClient(unittest.TestCase):
    def test_delegates_to_low_level_api(self):
        sdk = Mock()
        sdk.api.inspect_container.return_value = {'Id': 'c1', 'Name': '/web'}
        sdk.api.events.return_value = iter([b'{}\n'])
        client = DockerClient(client=sdk)

        self.assertEqual(client.inspect_container('c1')['Name'], '/web')
        sdk.api.inspect_container.assert_called_once_with('c1')
        self.assertEqual(list(client.events()), [b'{}\n'])
        sdk.api.events.assert_called_once_with(decode=False)

        client.close()
        sdk.close.assert_called_once()


class TestHealthApp(unittest.TestCase):
    def test_health_and_pending(self):
        pipeline = Mock()
        pipeline.enricher.cache_size.return_value = 3
        pipeline.notifier.pending_ids.return_value = ['abc', 'def']
        client = create_app(pipeline).test_client()

        resp = client.get('/health')
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        self.assertEqual(body['status'], 'ok')
        self.assertEqual(body['cached_containers'], 3)
        self.assertEqual(body['pending_notifications'], 2)

        resp = client.get('/pending')
        self.assertEqual(resp.get_json(), {'pending': ['abc', 'def']})


class TestRequiredConfig(unittest.TestCase):
    def test_missing_webhook_is_fatal(self):
        with patch('event_notifier.constants.WEBHOOK_URL', None):
            with self.assertRaises(RuntimeError):
                check_required_config()

    def test_invalid_regex_is_fatal(self):
        with self.assertRaises(re.error):
            check_required_config(webhook_url='https://hooks.example/x', webhook_format='slack', patterns=['(die'])

    def test_unknown_format_is_fatal(self):
        with self.assertRaises(RuntimeError):
            check_required_config(webhook_url='https://hooks.example/x', webhook_format='teams')

    def test_valid_config(self):
        check_required_config(webhook_url='https://hooks.example/x', webhook_format='discord', patterns=['^(die|start)$', '.*'])


if __name__ == '__main__':
    unittest.main()
