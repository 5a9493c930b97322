import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from phpass_verify.auth_utils import (
    MAX_PASSWORD_LENGTH,
    hash_password,
    identify_hash,
    needs_rehash,
    verify_password,
)
from phpass_verify.config import Settings, get_settings
from phpass_verify.errors import PasswordTooLongError, PHPassError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class VerifyRequest(BaseModel):
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_LENGTH)
    hash: str = Field(min_length=1)
    upgrade: bool = False


class VerifyResponse(BaseModel):
    match: bool
    scheme: str
    needs_rehash: bool
    new_hash: str | None = None


def _upgraded_hash(password: str) -> str | None:
    try:
        return hash_password(password)
    except ValueError as e:
        logger.warning("Could not upgrade matched credential: %s", e)
        return None


@router.post("/verify", response_model=VerifyResponse)
def verify(body: VerifyRequest, settings: Settings = Depends(get_settings)) -> VerifyResponse:
    scheme = identify_hash(body.hash)
    try:
        match = verify_password(body.password, body.hash, settings.max_count_log2)
    except (PHPassError, PasswordTooLongError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        # bcrypt rejects corrupt hashes with a plain ValueError
        logger.info("Unusable %s hash: %s", scheme, e)
        raise HTTPException(status_code=400, detail=f"Invalid {scheme} hash")

    rehash = needs_rehash(body.hash)
    new_hash = None
    if body.upgrade and match and rehash:
        new_hash = _upgraded_hash(body.password)
    logger.info("Verified %s credential: match=%s", scheme, match)
    return VerifyResponse(match=match, scheme=scheme, needs_rehash=rehash, new_hash=new_hash)
