import logging
import sys
import threading

from event_notifier.constants import APP_PORT, DEBUG_MODE, HEALTH_SERVER_ENABLED, check_required_config
from event_notifier.controller import create_app
from event_notifier.docker_client import DockerClient
from event_notifier.watcher import build_pipeline, run_watcher


def main():
    logging.basicConfig(
        level=logging.DEBUG if DEBUG_MODE else logging.INFO,
        format='[%(levelname)s] %(name)s: %(message)s',
    )
    docker_client = None
    try:
        check_required_config()
        docker_client = DockerClient()
        pipeline = build_pipeline(docker_client)

        if HEALTH_SERVER_ENABLED:
            app = create_app(pipeline)
            # daemon: notificações pendentes e o health morrem junto com o processo
            threading.Thread(
                target=app.run,
                kwargs={'host': '0.0.0.0', 'port': APP_PORT, 'debug': False, 'use_reloader': False},
                daemon=True,
            ).start()

        run_watcher(docker_client, pipeline)
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    finally:
        if docker_client is not None:
            docker_client.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
