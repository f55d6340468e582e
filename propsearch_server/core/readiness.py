"""
Readiness probe for the Elasticsearch inference endpoint.

Advisory only: a failed probe is logged and never stops the server.
"""
import logging
from typing import Optional

from ..retrievers.base import SearchBackend
from .config import INFERENCE_TIMEOUT_SECONDS

logger = logging.getLogger("propsearch")

PROBE_BODY = {"task_type": "sparse_embedding", "input": "wake up"}


async def check_endpoint(
    backend: SearchBackend,
    endpoint_id: str,
    timeout_seconds: int = INFERENCE_TIMEOUT_SECONDS,
) -> bool:
    """
    Send one inference request with a server-side timeout.

    Returns True on success, False on any error. No retries.
    """
    logger.info(f"Checking inference endpoint {endpoint_id} with {timeout_seconds}s timeout...")
    try:
        await backend.infer(endpoint_id, PROBE_BODY, timeout_seconds=timeout_seconds)
    except Exception as e:
        logger.warning(f"Failed to connect to inference endpoint: {e}")
        return False
    logger.info(f"Inference endpoint is ready: {endpoint_id}")
    return True


async def probe_inference_endpoint(
    backend: SearchBackend,
    endpoint_id: Optional[str],
    timeout_seconds: int = INFERENCE_TIMEOUT_SECONDS,
) -> bool:
    """Startup wrapper around check_endpoint; never raises."""
    if not endpoint_id:
        logger.info("No inference endpoint configured; skipping readiness check")
        return False
    try:
        ready = await check_endpoint(backend, endpoint_id, timeout_seconds)
    except Exception as e:
        logger.error(f"Error checking inference endpoint: {e}")
        return False
    if not ready:
        logger.error(f"Inference endpoint {endpoint_id} is not available after timeout")
    return ready
