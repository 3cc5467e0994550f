# fairgroup/api/routers/admin.py
"""
Admin utilities: create or reset the roster session tables.
"""
import logging

from fastapi import APIRouter, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from fairgroup.infrastructure import models  # noqa: F401  (registers tables on Base)
from fairgroup.infrastructure.db.session import Base, engine

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/init_db", summary="Create all tables in DB")
def init_db():
    """
    Ensure missing tables exist. Existing tables and rows are left alone.
    """
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.exception("init_db failed")
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "ok", "message": "Database initialized"}


@router.post("/reset_db", summary="Drop and recreate all tables")
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.warning("Database reset: all roster sessions dropped")
    return {"status": "ok", "message": "Database reset"}
