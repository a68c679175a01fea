"""
Site settings

A single document holding the SMTP account used for notifications and the
address they are sent to. Nothing here checks that the credentials work.
"""
from fastapi import APIRouter, Depends
from pymongo import ReturnDocument
from pymongo.database import Database

from auth import ADMIN, require
from database import get_db, now, serialize
from schemas import Settings

DEFAULTS = {"email_user": None, "email_pass": None, "notification_email": None}


def load_settings(database: Database) -> dict:
    doc = database["settings"].find_one({})
    if doc is None:
        stamp = now()
        database["settings"].insert_one({**DEFAULTS, "created_at": stamp, "updated_at": stamp})
        doc = database["settings"].find_one({})
    return serialize(doc)


def settings_router(level: str = ADMIN) -> APIRouter:
    router = APIRouter(prefix="/settings", tags=["settings"], dependencies=require(level))

    @router.get("")
    def get_settings(database: Database = Depends(get_db)):
        return load_settings(database)

    @router.post("")
    def save_settings(payload: Settings, database: Database = Depends(get_db)):
        stamp = now()
        doc = database["settings"].find_one_and_update(
            {},
            {"$set": {**payload.model_dump(exclude_unset=True), "updated_at": stamp},
             "$setOnInsert": {"created_at": stamp}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return serialize(doc)

    return router
