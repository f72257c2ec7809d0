from fastapi import FastAPI

from asset_registry.api.routes.health import router as health_router
from asset_registry.api.routes.assets import router as assets_router


app = FastAPI(title="Asset Registry API", version="0.1.0")

app.include_router(health_router)
app.include_router(assets_router)
