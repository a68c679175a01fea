import logging

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException
from pymongo import ReturnDocument
from pymongo.database import Database

from auth import ADMIN, get_current_user, hash_password, public_user, require
from database import create_document, get_db, now, oid
from schemas import User, UserUpdate

logger = logging.getLogger(__name__)


def email_taken(database: Database, email: str, exclude=None) -> bool:
    query = {"email": email}
    if exclude is not None:
        query["_id"] = {"$ne": exclude}
    return database["user"].find_one(query) is not None


def users_router(level: str = ADMIN) -> APIRouter:
    router = APIRouter(prefix="/users", tags=["users"], dependencies=require(level))

    @router.get("")
    def list_users(database: Database = Depends(get_db)):
        return [public_user(d) for d in database["user"].find({})]

    @router.get("/{user_id}")
    def get_user(user_id: str, database: Database = Depends(get_db)):
        doc = database["user"].find_one({"_id": oid(user_id, "User")})
        if not doc:
            raise HTTPException(status_code=404, detail="User not found")
        return public_user(doc)

    @router.post("", status_code=201)
    def create_user(payload: User, database: Database = Depends(get_db)):
        data = payload.model_dump()
        data["email"] = data["email"].lower()
        if email_taken(database, data["email"]):
            raise HTTPException(status_code=400, detail="User already exists")
        data["password"] = hash_password(data["password"])
        _id = create_document(database, "user", data)
        logger.info("Created user %s with role %s", _id, data["role"])
        return public_user(database["user"].find_one({"_id": ObjectId(_id)}))

    @router.put("/{user_id}")
    def update_user(
        user_id: str,
        payload: UserUpdate,
        current: dict = Depends(get_current_user),
        database: Database = Depends(get_db),
    ):
        _id = oid(user_id, "User")
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if user_id == current["id"] and (
            changes.get("role", current["role"]) != current["role"] or changes.get("is_active") is False
        ):
            raise HTTPException(status_code=400, detail="You cannot demote or deactivate your own account")
        if "email" in changes:
            changes["email"] = changes["email"].lower()
            if email_taken(database, changes["email"], exclude=_id):
                raise HTTPException(status_code=400, detail="Email already in use")
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])
        changes["updated_at"] = now()
        doc = database["user"].find_one_and_update(
            {"_id": _id}, {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        if not doc:
            raise HTTPException(status_code=404, detail="User not found")
        return public_user(doc)

    @router.delete("/{user_id}")
    def delete_user(user_id: str, current: dict = Depends(get_current_user), database: Database = Depends(get_db)):
        if user_id == current["id"]:
            raise HTTPException(status_code=400, detail="You cannot delete your own account")
        res = database["user"].delete_one({"_id": oid(user_id, "User")})
        if res.deleted_count == 0:
            raise HTTPException(status_code=404, detail="User not found")
        logger.info("Deleted user %s", user_id)
        return {"message": "User removed", "id": user_id}

    return router
