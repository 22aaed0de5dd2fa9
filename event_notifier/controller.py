from flask import Flask

from .pipeline import EventPipeline


def create_app(pipeline: EventPipeline):
    app = Flask(__name__)

    @app.route('/health', methods=['GET'])
    def health():
        return {
            'status': 'ok',
            'service': 'docker-event-notifier',
            'cached_containers': pipeline.enricher.cache_size(),
            'pending_notifications': len(pipeline.notifier.pending_ids()),
        }, 200

    @app.route('/pending', methods=['GET'])
    def pending():
        return {'pending': pipeline.notifier.pending_ids()}, 200

    return app
