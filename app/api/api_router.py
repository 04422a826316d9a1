from fastapi import APIRouter

from app.api import api_healthcheck, api_run, api_session

router = APIRouter()

router.include_router(api_healthcheck.router, tags=["health-check"], prefix="/healthcheck")
router.include_router(api_session.router, tags=["session"], prefix="/sessions")
router.include_router(api_run.router, tags=["comparison-run"], prefix="/runs")
