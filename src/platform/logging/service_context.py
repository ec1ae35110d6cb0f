"""
Service context shown in every log line.

Identifies the process as `service@environment:pid` so that logs from several
API workers sharing the same database can be told apart.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'event-spot-sales')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostname when running under docker/k8s, PID otherwise
    worker_id = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{worker_id}'
