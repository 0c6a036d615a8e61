import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.database import get_db, ping

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/check")
def health_check(db: Database = Depends(get_db)):
    db_status = "ok"

    try:
        ping(db)
    except PyMongoError:
        logger.exception("Database ping failed")
        db_status = "failed"

    return {
        "status": "ok",
        "database": db_status,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
