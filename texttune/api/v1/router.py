from fastapi import APIRouter

from texttune.api.v1 import transform

router = APIRouter()
router.include_router(transform.router, tags=["transform"])
