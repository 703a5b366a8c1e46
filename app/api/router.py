from fastapi import APIRouter

from app.api.routes import contact, health, inbound

api_router = APIRouter(prefix="/api")

# Public routes
api_router.include_router(contact.router)
api_router.include_router(inbound.router)
api_router.include_router(health.router)
