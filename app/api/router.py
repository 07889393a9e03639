from fastapi import APIRouter
from api.routes.system import router as system_router
from api.routes.deadletter import router as deadletter_router
from api.routes.metrics import router as metrics_router

api_router = APIRouter()

api_router.include_router(system_router)
api_router.include_router(deadletter_router)
api_router.include_router(metrics_router)
