import os
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from jose import JWTError, jwt
from passlib.context import CryptContext
from pymongo.database import Database

from database import get_db, oid, serialize
from schemas import LoginRequest

logger = logging.getLogger(__name__)

# =====================
# Auth / Security Setup
# =====================
SECRET_KEY = os.getenv("JWT_SECRET", "super-secret-key-change")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 30))

# Use pbkdf2_sha256 to avoid external bcrypt dependency issues
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

INVALID_CREDENTIALS = "Invalid email or password"

# Access levels for the policy table in main.py
PUBLIC = "public"
AUTH = "auth"
ADMIN = "admin"

# Verified against when the email is unknown so both failure paths cost the same
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


def public_user(doc: Dict[str, Any]) -> Dict[str, Any]:
    user = serialize(doc)
    user.pop("password", None)
    return user


def authenticate(database: Database, email: str, password: str) -> Dict[str, Any]:
    """Return the account for a valid email/password pair.

    Unknown email, wrong password and deactivated account all raise the same
    401 so callers cannot tell which one happened.
    """
    doc = database["user"].find_one({"email": email.strip().lower()})
    if not doc:
        verify_password(password, _DUMMY_HASH)
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)
    if not verify_password(password, doc.get("password", _DUMMY_HASH)) or not doc.get("is_active", True):
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)
    return doc


def get_current_user(authorization: Optional[str] = Header(None), database: Database = Depends(get_db)):
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Not authorized, no token")
    token = authorization.split(" ", 1)[1].strip()
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise HTTPException(status_code=401, detail="Not authorized, token failed")
    user_id = payload.get("id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authorized, token failed")
    try:
        doc = database["user"].find_one({"_id": oid(user_id)})
    except HTTPException:
        doc = None
    if not doc or not doc.get("is_active", True):
        raise HTTPException(status_code=401, detail="Not authorized, account unavailable")
    return {"id": str(doc["_id"]), "role": doc.get("role", "employee"), "email": doc.get("email")}


def require_auth(user: dict = Depends(get_current_user)):
    return user


def require_admin(user: dict = Depends(require_auth)):
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Not authorized as an admin")
    return user


_GUARDS = {AUTH: require_auth, ADMIN: require_admin}


def require(level: str) -> list:
    """Route dependencies enforcing one access level."""
    if level == PUBLIC:
        return []
    return [Depends(_GUARDS[level])]


# ======
# Routes
# ======
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(data: LoginRequest, database: Database = Depends(get_db)):
    try:
        doc = authenticate(database, data.email, data.password)
    except HTTPException:
        logger.info("Failed login attempt")
        raise
    token = create_access_token({"id": str(doc["_id"]), "role": doc.get("role", "employee")})
    return {"token": token, "token_type": "bearer", "user": public_user(doc)}


@router.get("/me")
def me(user: dict = Depends(require_auth), database: Database = Depends(get_db)):
    doc = database["user"].find_one({"_id": oid(user["id"])})
    return public_user(doc)
