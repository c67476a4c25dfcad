# backend/Auth/security.py
import os
import secrets
from datetime import timedelta
from passlib.context import CryptContext
from dotenv import load_dotenv
load_dotenv()
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

PEPPER = os.getenv("PEPPER", "")      # extra geheim
SESSION_TTL = timedelta(days=int(os.getenv("SESSION_TTL_DAYS", "7")))
TOKEN_BYTES = 32                      # 256 bits
MIN_PASSWORD_LENGTH = 6

def hash_password(password: str) -> str:
    return pwd_context.hash(password + PEPPER)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain + PEPPER, hashed)

def new_session_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)
