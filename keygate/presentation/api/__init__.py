from fastapi import APIRouter

from . import system, v1

# 既存クライアント互換のため、v1のルートはパスプレフィックスなしで公開する
api_router = APIRouter()
api_router.include_router(v1.router)
api_router.include_router(system.router, prefix="/system")
