import logging

from fastapi import APIRouter, Depends
from redis.exceptions import RedisError
from sqlalchemy.orm import Session

from ..db import database_ok, get_db
from ..infra.redis_client import get_redis

router = APIRouter()
logger = logging.getLogger("recipeshare.ready")


@router.get("/ready")
async def ready(db: Session = Depends(get_db)):
    db_ok = database_ok(db)
    redis_ok = False
    try:
        r = await get_redis()
        await r.ping()
        redis_ok = True
    except (RedisError, OSError) as e:
        logger.warning(f"Redis not reachable: {e}")
    return {"ok": db_ok and redis_ok, "db_ok": db_ok, "redis_ok": redis_ok}
