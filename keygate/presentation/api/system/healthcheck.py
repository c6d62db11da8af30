from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response, status

from ....core.config import Settings
from ....core.logging import get_logger
from ....domain.exceptions import DomainError
from ....infrastructure.store import Query, SqlStoreClient
from ...schemas.system import HealthCheckResponse, StoreStatus
from ..deps import get_app_settings, get_store_client

router = APIRouter()
logger = get_logger(__name__)


@router.get("/", response_model=HealthCheckResponse)
async def healthcheck(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_app_settings),
    store: SqlStoreClient = Depends(get_store_client),
) -> HealthCheckResponse:
    """
    ヘルスチェックエンドポイント

    - ストア到達性（SELECT 1）
    - アプリケーションuptime
    - 環境情報を返す

    ストアが設定済みで到達できない場合は503 Service Unavailableを返す
    """
    start_time = getattr(request.app.state, "start_time", None)
    uptime_seconds = 0.0
    if start_time:
        uptime_seconds = (datetime.now(timezone.utc) - start_time).total_seconds()

    store_status = StoreStatus(status="healthy", connection=True)
    overall_status = "ok"

    if settings.has_store:
        try:
            await store.execute(Query("SELECT 1"))
        except DomainError as e:
            logger.error(f"Store health check failed: {e.message}")
            store_status = StoreStatus(
                status="unhealthy", connection=False, error=e.message
            )
            overall_status = "unhealthy"
    else:
        store_status = StoreStatus(
            status="healthy", connection=False, error="Store disabled"
        )

    if overall_status == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthCheckResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=uptime_seconds,
        store=store_status,
        environment=settings.ENV_MODE,
    )
