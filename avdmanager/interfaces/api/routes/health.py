from fastapi import APIRouter

from avdmanager.utils import now_in_app_timezone

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": now_in_app_timezone().isoformat()}
