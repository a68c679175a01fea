"""
Generic resource routers

One factory builds list/get/create/update/delete endpoints for a collection.
The access level for reads and writes comes from the policy table in main.py.
"""
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, get_args

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.database import Database

from auth import AUTH, PUBLIC, require
from database import create_document, get_db, get_documents, now, oid, serialize

logger = logging.getLogger(__name__)

Populate = Callable[[Database, Dict[str, Any]], Dict[str, Any]]


def non_nullable_fields(schema: Type[BaseModel]) -> frozenset:
    """Fields of a create schema that may not be stored as None."""
    return frozenset(
        name for name, field in schema.model_fields.items()
        if type(None) not in get_args(field.annotation)
    )


def populate_category(database: Database, doc: Dict[str, Any]) -> Dict[str, Any]:
    """Replace a project's category id with the category document, or None."""
    ref = doc.get("category")
    if not ref:
        return doc
    category = None
    try:
        category = database["category"].find_one({"_id": ObjectId(ref)})
    except (InvalidId, TypeError):
        pass
    doc["category"] = serialize(category)
    return doc


def crud_router(
    path: str,
    collection: str,
    schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    label: str,
    read: str = PUBLIC,
    write: str = AUTH,
    populate: Optional[Populate] = None,
    filters: Iterable[str] = (),
    sort: Optional[List] = None,
) -> APIRouter:
    router = APIRouter(prefix=f"/{path}", tags=[path])
    filters = tuple(filters)
    not_null = non_nullable_fields(schema)

    def _out(database: Database, doc: Dict[str, Any]) -> Dict[str, Any]:
        doc = serialize(doc)
        if populate:
            doc = populate(database, doc)
        return doc

    @router.get("", dependencies=require(read))
    def list_items(request: Request, database: Database = Depends(get_db)):
        query = {k: v for k, v in request.query_params.items() if k in filters}
        items = get_documents(database, collection, query, sort=sort)
        if populate:
            items = [populate(database, it) for it in items]
        return items

    @router.get("/{item_id}", dependencies=require(read))
    def get_item(item_id: str, database: Database = Depends(get_db)):
        doc = database[collection].find_one({"_id": oid(item_id, label)})
        if not doc:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return _out(database, doc)

    @router.post("", status_code=201, dependencies=require(write))
    def create_item(payload: schema, database: Database = Depends(get_db)):
        _id = create_document(database, collection, payload)
        logger.info("Created %s %s", collection, _id)
        return _out(database, database[collection].find_one({"_id": ObjectId(_id)}))

    @router.put("/{item_id}", dependencies=require(write))
    def update_item(item_id: str, payload: update_schema, database: Database = Depends(get_db)):
        changes = payload.model_dump(exclude_unset=True)
        nulled = sorted(k for k, v in changes.items() if v is None and k in not_null)
        if nulled:
            raise HTTPException(status_code=400, detail=f"{', '.join(nulled)}: may not be null")
        changes["updated_at"] = now()
        doc = database[collection].find_one_and_update(
            {"_id": oid(item_id, label)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return _out(database, doc)

    @router.delete("/{item_id}", dependencies=require(write))
    def delete_item(item_id: str, database: Database = Depends(get_db)):
        res = database[collection].delete_one({"_id": oid(item_id, label)})
        if res.deleted_count == 0:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        logger.info("Deleted %s %s", collection, item_id)
        return {"message": f"{label} removed", "id": item_id}

    return router
