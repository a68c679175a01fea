"""
Contact inbox

Anyone may post a message through the contact form; reading, marking and
deleting them is reserved for admins.
"""
import logging
from typing import Optional

from bson import ObjectId
from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException
from pymongo import ReturnDocument
from pymongo.database import Database

from auth import ADMIN, PUBLIC, require
from database import create_document, get_db, get_documents, now, oid, serialize
from mailer import notify_new_message
from schemas import Message, MessageUpdate

logger = logging.getLogger(__name__)


def messages_router(read: str = ADMIN, create: str = PUBLIC) -> APIRouter:
    router = APIRouter(prefix="/messages", tags=["messages"])

    @router.post("", status_code=201, dependencies=require(create))
    def create_message(payload: Message, background: BackgroundTasks, database: Database = Depends(get_db)):
        data = payload.model_dump()
        data["is_read"] = False
        _id = create_document(database, "message", data)
        doc = serialize(database["message"].find_one({"_id": ObjectId(_id)}))
        background.add_task(notify_new_message, database, doc)
        return doc

    @router.get("", dependencies=require(read))
    def list_messages(database: Database = Depends(get_db)):
        return get_documents(database, "message", sort=[("created_at", -1)])

    @router.get("/{message_id}", dependencies=require(read))
    def get_message(message_id: str, database: Database = Depends(get_db)):
        doc = database["message"].find_one({"_id": oid(message_id, "Message")})
        if not doc:
            raise HTTPException(status_code=404, detail="Message not found")
        return serialize(doc)

    @router.put("/{message_id}", dependencies=require(read))
    def update_message(
        message_id: str,
        payload: Optional[MessageUpdate] = Body(None),
        database: Database = Depends(get_db),
    ):
        """Set is_read when given, otherwise flip it."""
        _id = oid(message_id, "Message")
        doc = database["message"].find_one({"_id": _id})
        if not doc:
            raise HTTPException(status_code=404, detail="Message not found")
        if payload is not None and payload.is_read is not None:
            is_read = payload.is_read
        else:
            is_read = not doc.get("is_read", False)
        doc = database["message"].find_one_and_update(
            {"_id": _id},
            {"$set": {"is_read": is_read, "updated_at": now()}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise HTTPException(status_code=404, detail="Message not found")
        return serialize(doc)

    @router.delete("", dependencies=require(read))
    def delete_all_messages(database: Database = Depends(get_db)):
        res = database["message"].delete_many({})
        logger.info("Deleted %d messages", res.deleted_count)
        return {"message": "All messages removed", "deleted": res.deleted_count}

    @router.delete("/{message_id}", dependencies=require(read))
    def delete_message(message_id: str, database: Database = Depends(get_db)):
        res = database["message"].delete_one({"_id": oid(message_id, "Message")})
        if res.deleted_count == 0:
            raise HTTPException(status_code=404, detail="Message not found")
        return {"message": "Message removed", "id": message_id}

    return router
