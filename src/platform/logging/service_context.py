"""Identifies the running process in every log line."""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'ticket-reservation')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostname when running under docker/k8s, PID otherwise
    instance = os.getenv('HOSTNAME', '')[:12] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
