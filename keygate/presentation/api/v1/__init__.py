from fastapi import APIRouter

from . import auth, client, keys, user

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(keys.router, tags=["keys"])
router.include_router(user.router, tags=["user"])
router.include_router(client.router, tags=["client"])
