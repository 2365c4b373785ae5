from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from app.models.admission import UnknownFieldError
from app.services.admission_form import AdmissionFormController, FormLockedError

router = APIRouter(prefix="/admissions", tags=["admissions"])


class FieldUpdate(BaseModel):
    field: str
    value: str


def get_form_controller(request: Request) -> AdmissionFormController:
    return request.app.state.admission_form


@router.get("/form")
async def read_form(form: AdmissionFormController = Depends(get_form_controller)):
    return form.snapshot()


@router.patch("/form")
async def update_form_field(payload: FieldUpdate, form: AdmissionFormController = Depends(get_form_controller)):
    try:
        form.update_field(payload.field, payload.value)
    except UnknownFieldError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except FormLockedError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return form.snapshot()


@router.post("/form/submit")
async def submit_form(form: AdmissionFormController = Depends(get_form_controller)):
    if form.is_submitting:
        raise HTTPException(status_code=409, detail="A submission is already in progress")
    result = await form.submit()
    return {
        "result": result.model_dump(mode="json") if result else None,
        "form": form.snapshot(),
    }


@router.delete("/form/notification")
async def dismiss_notification(form: AdmissionFormController = Depends(get_form_controller)):
    form.dismiss_notification()
    return form.snapshot()


@router.post("/form/reset")
async def reset_form(form: AdmissionFormController = Depends(get_form_controller)):
    form.reset()
    return form.snapshot()


@router.get("/connection")
async def connection(form: AdmissionFormController = Depends(get_form_controller)):
    """
    Connection status plus configuration wiring:
    - which credentials are present (never their values)
    - which auth scheme and mode the client runs with
    """
    return {
        "status": form.connection_status.value,
        "probing": form.is_probing,
        "config": form.client.wiring(),
    }


@router.post("/connection/probe")
async def probe_connection(form: AdmissionFormController = Depends(get_form_controller)):
    status = await form.refresh_connection()
    return {
        "status": form.connection_status.value,
        "probed": status is not None,
        "probing": form.is_probing,
    }
