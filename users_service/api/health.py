# users_service/api/health.py

import asyncio
import logging
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.engine import Engine

from users_service.core.repository import RepositoryError, ping
from users_service.database import get_db_engine


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/_internal/health")
async def health_check(request: Request, engine: Engine = Depends(get_db_engine)):
    """
    Liveness probe for the orchestrator: 200 when the database answers in time, 502 otherwise.
    Uses its own deadline, independent of the caller.
    """
    timeout = request.app.state.ping_timeout
    try:
        # asyncio.to_thread lets wait_for return on timeout without joining the worker
        await asyncio.wait_for(asyncio.to_thread(ping, engine), timeout=timeout)
    except RepositoryError as e:
        logger.error("Health check ERROR: %s", e.detail)
        return Response(status_code=status.HTTP_502_BAD_GATEWAY)
    except asyncio.TimeoutError:
        logger.error("Health check ERROR: no database response within %ss", timeout)
        return Response(status_code=status.HTTP_502_BAD_GATEWAY)

    logger.debug("Health check OK")
    return Response(status_code=status.HTTP_200_OK)
