import logging

from fastapi import FastAPI
from app.core.config import settings
from app.integrations.sheets.client import SheetsClient
from app.services.admission_form import AdmissionFormController

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Student Admission Form", version="0.1.0")

@app.on_event("startup")
async def startup() -> None:
    controller = AdmissionFormController(SheetsClient(settings))
    app.state.admission_form = controller
    app.state.initial_probe = controller.start()

@app.get("/health")
async def health():
    return {"status": "ok", "env": settings.app_env}

from app.api.admission_routes import router as admission_router
app.include_router(admission_router)
