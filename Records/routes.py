# backend/Records/routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from Auth.auth import get_current_user_id, role_required
from Auth.database import get_session
from Records import storage
from Records.errors import not_found, storage_call
from Records.export import XLSX_MEDIA_TYPE, table_to_xlsx
from Records.models import Alert, Case, Communication, Duty, Personnel
from Records.schemas import (
    AlertCreate, AlertRead, AlertUpdate,
    CaseCreate, CaseRead, CaseStatus, CaseUpdate,
    CommunicationCreate, CommunicationRead, CommunicationUpdate,
    DashboardStats,
    DutyCreate, DutyRead, DutyUpdate,
    DutyStatusUpdate,
    Message,
    PersonnelCreate, PersonnelRead, PersonnelUpdate,
)

# every record route sits behind the session gate
gate = [Depends(get_current_user_id)]


def _new(payload) -> dict:
    # unsent optional fields fall back to the table defaults
    return payload.model_dump(exclude_none=True)


# ─── PERSONNEL ──────────────────────────────────────────────────────────────
personnel_router = APIRouter(prefix="/api/personnel", tags=["Personnel"], dependencies=gate)


@personnel_router.get("", response_model=List[PersonnelRead])
def list_personnel(db=Depends(get_session)):
    with storage_call("fetch personnel"):
        return storage.get_all_personnel(db)


@personnel_router.get("/on-duty", response_model=List[PersonnelRead])
def on_duty_personnel(db=Depends(get_session)):
    with storage_call("fetch on-duty personnel"):
        return storage.get_on_duty_personnel(db)


@personnel_router.get("/{personnel_id}", response_model=PersonnelRead)
def get_personnel(personnel_id: int, db=Depends(get_session)):
    with storage_call("fetch personnel"):
        person = storage.get_personnel_by_id(db, personnel_id)
    if person is None:
        raise not_found("Personnel")
    return person


@personnel_router.get("/{personnel_id}/duties", response_model=List[DutyRead])
def personnel_duties(personnel_id: int, db=Depends(get_session)):
    with storage_call("fetch duties"):
        return storage.get_duties_by_personnel(db, personnel_id)


@personnel_router.post("", response_model=PersonnelRead)
def create_personnel(payload: PersonnelCreate, db=Depends(get_session)):
    with storage_call("create personnel", conflict="Badge number already exists"):
        return storage.create_personnel(db, _new(payload))


@personnel_router.put("/{personnel_id}", response_model=PersonnelRead)
def update_personnel(personnel_id: int, payload: PersonnelUpdate, db=Depends(get_session)):
    with storage_call("update personnel", conflict="Badge number already exists"):
        person = storage.update_personnel(db, personnel_id, payload.changes())
    if person is None:
        raise not_found("Personnel")
    return person


@personnel_router.put("/{personnel_id}/duty-status", response_model=PersonnelRead)
def update_duty_status(personnel_id: int, payload: DutyStatusUpdate, db=Depends(get_session)):
    with storage_call("update duty status"):
        # location only changes when the body mentions it
        extra = {"location": payload.location} if "location" in payload.model_fields_set else {}
        person = storage.update_personnel_duty_status(db, personnel_id, payload.is_on_duty, **extra)
    if person is None:
        raise not_found("Personnel")
    return person


@personnel_router.delete("/{personnel_id}", response_model=Message)
def delete_personnel(personnel_id: int, db=Depends(get_session)):
    with storage_call("delete personnel", conflict="Personnel is still referenced"):
        deleted = storage.delete_personnel(db, personnel_id)
    if not deleted:
        raise not_found("Personnel")
    return {"message": "Personnel deleted successfully"}


# ─── CASES ──────────────────────────────────────────────────────────────────
cases_router = APIRouter(prefix="/api/cases", tags=["Cases"], dependencies=gate)


@cases_router.get("", response_model=List[CaseRead])
def list_cases(
    status: Optional[CaseStatus] = None,
    search: Optional[str] = Query(default=None, min_length=1),
    db=Depends(get_session),
):
    with storage_call("fetch cases"):
        if search:
            cases = storage.search_cases(db, search)
            return [c for c in cases if status is None or c.status == status]
        if status:
            return storage.get_cases_by_status(db, status)
        return storage.get_all_cases(db)


@cases_router.get("/recent", response_model=List[CaseRead])
def recent_cases(limit: int = Query(default=10, ge=1, le=100), db=Depends(get_session)):
    with storage_call("fetch recent cases"):
        return storage.get_recent_cases(db, limit)


@cases_router.get("/{case_id}", response_model=CaseRead)
def get_case(case_id: int, db=Depends(get_session)):
    with storage_call("fetch case"):
        case = storage.get_case_by_id(db, case_id)
    if case is None:
        raise not_found("Case")
    return case


@cases_router.post("", response_model=CaseRead)
def create_case(payload: CaseCreate, db=Depends(get_session)):
    with storage_call("create case", conflict="Case number already exists"):
        return storage.create_case(db, _new(payload))


@cases_router.put("/{case_id}", response_model=CaseRead)
def update_case(case_id: int, payload: CaseUpdate, db=Depends(get_session)):
    with storage_call("update case", conflict="Case number already exists"):
        case = storage.update_case(db, case_id, payload.changes())
    if case is None:
        raise not_found("Case")
    return case


@cases_router.delete("/{case_id}", response_model=Message)
def delete_case(case_id: int, db=Depends(get_session)):
    with storage_call("delete case"):
        deleted = storage.delete_case(db, case_id)
    if not deleted:
        raise not_found("Case")
    return {"message": "Case deleted successfully"}


# ─── DUTIES ─────────────────────────────────────────────────────────────────
duties_router = APIRouter(prefix="/api/duties", tags=["Duties"], dependencies=gate)


@duties_router.get("", response_model=List[DutyRead])
def list_duties(db=Depends(get_session)):
    with storage_call("fetch duties"):
        return storage.get_all_duties(db)


@duties_router.get("/pending", response_model=List[DutyRead])
def pending_duties(db=Depends(get_session)):
    with storage_call("fetch pending duties"):
        return storage.get_pending_duties(db)


@duties_router.get("/{duty_id}", response_model=DutyRead)
def get_duty(duty_id: int, db=Depends(get_session)):
    with storage_call("fetch duty"):
        duty = storage.get_duty_by_id(db, duty_id)
    if duty is None:
        raise not_found("Duty")
    return duty


@duties_router.post("", response_model=DutyRead)
def create_duty(payload: DutyCreate, db=Depends(get_session)):
    with storage_call("create duty"):
        return storage.create_duty(db, _new(payload))


@duties_router.put("/{duty_id}", response_model=DutyRead)
def update_duty(duty_id: int, payload: DutyUpdate, db=Depends(get_session)):
    with storage_call("update duty"):
        duty = storage.update_duty(db, duty_id, payload.changes())
    if duty is None:
        raise not_found("Duty")
    return duty


@duties_router.delete("/{duty_id}", response_model=Message)
def delete_duty(duty_id: int, db=Depends(get_session)):
    with storage_call("delete duty"):
        deleted = storage.delete_duty(db, duty_id)
    if not deleted:
        raise not_found("Duty")
    return {"message": "Duty deleted successfully"}


# ─── ALERTS ─────────────────────────────────────────────────────────────────
alerts_router = APIRouter(prefix="/api/alerts", tags=["Alerts"], dependencies=gate)


@alerts_router.get("", response_model=List[AlertRead])
def list_alerts(db=Depends(get_session)):
    with storage_call("fetch alerts"):
        return storage.get_all_alerts(db)


@alerts_router.get("/active", response_model=List[AlertRead])
def active_alerts(db=Depends(get_session)):
    with storage_call("fetch active alerts"):
        return storage.get_active_alerts(db)


@alerts_router.get("/{alert_id}", response_model=AlertRead)
def get_alert(alert_id: int, db=Depends(get_session)):
    with storage_call("fetch alert"):
        alert = storage.get_alert_by_id(db, alert_id)
    if alert is None:
        raise not_found("Alert")
    return alert


@alerts_router.post("", response_model=AlertRead)
def create_alert(payload: AlertCreate, db=Depends(get_session)):
    with storage_call("create alert"):
        return storage.create_alert(db, _new(payload))


@alerts_router.put("/{alert_id}", response_model=AlertRead)
def update_alert(alert_id: int, payload: AlertUpdate, db=Depends(get_session)):
    with storage_call("update alert"):
        alert = storage.update_alert(db, alert_id, payload.changes())
    if alert is None:
        raise not_found("Alert")
    return alert


@alerts_router.delete("/{alert_id}", response_model=Message)
def delete_alert(alert_id: int, db=Depends(get_session)):
    with storage_call("delete alert"):
        deleted = storage.delete_alert(db, alert_id)
    if not deleted:
        raise not_found("Alert")
    return {"message": "Alert deleted successfully"}


# ─── COMMUNICATIONS ─────────────────────────────────────────────────────────
communications_router = APIRouter(
    prefix="/api/communications", tags=["Communications"], dependencies=gate
)


@communications_router.get("", response_model=List[CommunicationRead])
def list_communications(db=Depends(get_session)):
    with storage_call("fetch communications"):
        return storage.get_all_communications(db)


@communications_router.get("/{communication_id}", response_model=CommunicationRead)
def get_communication(communication_id: int, db=Depends(get_session)):
    with storage_call("fetch communication"):
        communication = storage.get_communication_by_id(db, communication_id)
    if communication is None:
        raise not_found("Communication")
    return communication


@communications_router.post("", response_model=CommunicationRead)
def create_communication(payload: CommunicationCreate, db=Depends(get_session)):
    with storage_call("create communication"):
        return storage.create_communication(db, _new(payload))


@communications_router.put("/{communication_id}", response_model=CommunicationRead)
def update_communication(communication_id: int, payload: CommunicationUpdate, db=Depends(get_session)):
    with storage_call("update communication"):
        communication = storage.update_communication(db, communication_id, payload.changes())
    if communication is None:
        raise not_found("Communication")
    return communication


@communications_router.delete("/{communication_id}", response_model=Message)
def delete_communication(communication_id: int, db=Depends(get_session)):
    with storage_call("delete communication"):
        deleted = storage.delete_communication(db, communication_id)
    if not deleted:
        raise not_found("Communication")
    return {"message": "Communication deleted successfully"}


# ─── DASHBOARD & EXPORT ─────────────────────────────────────────────────────
dashboard_router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"], dependencies=gate)


@dashboard_router.get("/stats", response_model=DashboardStats)
def dashboard_stats(db=Depends(get_session)):
    with storage_call("fetch dashboard stats"):
        return storage.get_dashboard_stats(db)


EXPORTABLE = {
    "personnel": (Personnel, storage.get_all_personnel),
    "cases": (Case, storage.get_all_cases),
    "duties": (Duty, storage.get_all_duties),
    "alerts": (Alert, storage.get_all_alerts),
    "communications": (Communication, storage.get_all_communications),
}

export_router = APIRouter(prefix="/api/export", tags=["Export"], dependencies=gate)


@export_router.get("/{table}")
def export_table(
    table: str,
    db=Depends(get_session),
    _=Depends(role_required("supervisor", "admin", "commander")),
):
    if table not in EXPORTABLE:
        raise HTTPException(404, f"Unknown table '{table}'")
    model, fetch = EXPORTABLE[table]

    with storage_call(f"export {table}"):
        rows = fetch(db)
    buf = table_to_xlsx(rows, model, sheet_name=table)

    headers = {"Content-Disposition": f'attachment; filename="{table}.xlsx"'}
    return StreamingResponse(buf, media_type=XLSX_MEDIA_TYPE, headers=headers)


routers = [
    personnel_router,
    cases_router,
    duties_router,
    alerts_router,
    communications_router,
    dashboard_router,
    export_router,
]
