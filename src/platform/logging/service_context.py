"""
Service context extraction for logging.

Identifies the process that emitted a log line: service name, deployment
environment and a short instance id (container id when available, PID otherwise).
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'bus-seating')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # HOSTNAME is the container id under docker/k8s
    instance_id = os.getenv('HOSTNAME', '')[:8] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance_id}'
