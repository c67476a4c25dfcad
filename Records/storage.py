# backend/Records/storage.py
"""
Record store: one set of repository functions per table.

Every function takes the request's SQLModel `Session`. Writes commit
immediately, one statement per call; an IntegrityError rolls the session
back and propagates to the caller.
"""
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, select

from Auth.models import User, utcnow
from Records.models import Alert, Case, Communication, Duty, Personnel

T = TypeVar("T", bound=SQLModel)

KEEP = object()          # "leave this column as it is"

ACTIVE_CASE_STATUSES = ("open", "under_investigation")


# -- generic helpers -------------------------------------------------------

def _commit(db: Session, row: T) -> T:
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(row)
    return row


def _all(db: Session, model: Type[T]) -> List[T]:
    return list(db.exec(select(model).order_by(model.created_at.desc(), model.id.desc())).all())


def _create(db: Session, model: Type[T], data: Dict[str, Any]) -> T:
    return _commit(db, model(**data))


def _update(db: Session, model: Type[T], row_id, data: Dict[str, Any]) -> Optional[T]:
    row = db.get(model, row_id)
    if row is None:
        return None
    for key, value in data.items():
        setattr(row, key, value)
    if hasattr(row, "updated_at"):
        row.updated_at = utcnow()
    return _commit(db, row)


def _delete(db: Session, model: Type[T], row_id) -> bool:
    row = db.get(model, row_id)
    if row is None:
        return False
    db.delete(row)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    return True


def _escape_like(text: str) -> str:
    # % and _ in user input are literal characters, not wildcards
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _count(db: Session, model: Type[SQLModel], *where) -> int:
    stmt = select(func.count()).select_from(model)
    if where:
        stmt = stmt.where(*where)
    return db.exec(stmt).one()


# -- users -----------------------------------------------------------------

def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.exec(select(User).where(User.email == email)).first()


def create_user(db: Session, data: Dict[str, Any]) -> User:
    return _create(db, User, data)


def update_user(db: Session, user_id: str, data: Dict[str, Any]) -> Optional[User]:
    return _update(db, User, user_id, data)


# -- personnel -------------------------------------------------------------

def get_all_personnel(db: Session) -> List[Personnel]:
    return _all(db, Personnel)


def get_personnel_by_id(db: Session, personnel_id: int) -> Optional[Personnel]:
    return db.get(Personnel, personnel_id)


def create_personnel(db: Session, data: Dict[str, Any]) -> Personnel:
    return _create(db, Personnel, data)


def update_personnel(db: Session, personnel_id: int, data: Dict[str, Any]) -> Optional[Personnel]:
    return _update(db, Personnel, personnel_id, data)


def delete_personnel(db: Session, personnel_id: int) -> bool:
    return _delete(db, Personnel, personnel_id)


def get_on_duty_personnel(db: Session) -> List[Personnel]:
    return list(db.exec(select(Personnel).where(Personnel.is_on_duty == True)).all())  # noqa: E712


def update_personnel_duty_status(
    db: Session, personnel_id: int, is_on_duty: bool, location: Any = KEEP
) -> Optional[Personnel]:
    """Pass `location=None` to clear it; leave it out to keep the current one."""
    changes: Dict[str, Any] = {"is_on_duty": is_on_duty}
    if location is not KEEP:
        changes["current_location"] = location
    return _update(db, Personnel, personnel_id, changes)


# -- cases -----------------------------------------------------------------

def get_all_cases(db: Session) -> List[Case]:
    return _all(db, Case)


def get_case_by_id(db: Session, case_id: int) -> Optional[Case]:
    return db.get(Case, case_id)


def create_case(db: Session, data: Dict[str, Any]) -> Case:
    return _create(db, Case, data)


def update_case(db: Session, case_id: int, data: Dict[str, Any]) -> Optional[Case]:
    return _update(db, Case, case_id, data)


def delete_case(db: Session, case_id: int) -> bool:
    return _delete(db, Case, case_id)


def get_recent_cases(db: Session, limit: int = 10) -> List[Case]:
    stmt = select(Case).order_by(Case.created_at.desc(), Case.id.desc()).limit(limit)
    return list(db.exec(stmt).all())


def get_cases_by_status(db: Session, status: str) -> List[Case]:
    return list(db.exec(select(Case).where(Case.status == status)).all())


def search_cases(db: Session, query: str) -> List[Case]:
    pattern = f"%{_escape_like(query.lower())}%"
    stmt = select(Case).where(
        or_(
            func.lower(Case.case_number).like(pattern, escape="\\"),
            func.lower(Case.title).like(pattern, escape="\\"),
            func.lower(Case.description).like(pattern, escape="\\"),
        )
    )
    return list(db.exec(stmt).all())


# -- duties ----------------------------------------------------------------

def get_all_duties(db: Session) -> List[Duty]:
    return _all(db, Duty)


def get_duty_by_id(db: Session, duty_id: int) -> Optional[Duty]:
    return db.get(Duty, duty_id)


def create_duty(db: Session, data: Dict[str, Any]) -> Duty:
    return _create(db, Duty, data)


def update_duty(db: Session, duty_id: int, data: Dict[str, Any]) -> Optional[Duty]:
    return _update(db, Duty, duty_id, data)


def delete_duty(db: Session, duty_id: int) -> bool:
    return _delete(db, Duty, duty_id)


def get_duties_by_personnel(db: Session, personnel_id: int) -> List[Duty]:
    return list(db.exec(select(Duty).where(Duty.assigned_to == personnel_id)).all())


def get_pending_duties(db: Session) -> List[Duty]:
    return list(db.exec(select(Duty).where(Duty.status == "pending")).all())


# -- alerts ----------------------------------------------------------------

def get_all_alerts(db: Session) -> List[Alert]:
    return _all(db, Alert)


def get_alert_by_id(db: Session, alert_id: int) -> Optional[Alert]:
    return db.get(Alert, alert_id)


def create_alert(db: Session, data: Dict[str, Any]) -> Alert:
    return _create(db, Alert, data)


def update_alert(db: Session, alert_id: int, data: Dict[str, Any]) -> Optional[Alert]:
    return _update(db, Alert, alert_id, data)


def delete_alert(db: Session, alert_id: int) -> bool:
    return _delete(db, Alert, alert_id)


def get_active_alerts(db: Session) -> List[Alert]:
    return list(db.exec(select(Alert).where(Alert.is_read == False)).all())  # noqa: E712


# -- communications --------------------------------------------------------

def get_all_communications(db: Session) -> List[Communication]:
    return _all(db, Communication)


def get_communication_by_id(db: Session, communication_id: int) -> Optional[Communication]:
    return db.get(Communication, communication_id)


def create_communication(db: Session, data: Dict[str, Any]) -> Communication:
    return _create(db, Communication, data)


def update_communication(db: Session, communication_id: int, data: Dict[str, Any]) -> Optional[Communication]:
    return _update(db, Communication, communication_id, data)


def delete_communication(db: Session, communication_id: int) -> bool:
    return _delete(db, Communication, communication_id)


# -- dashboard -------------------------------------------------------------

def get_dashboard_stats(db: Session) -> Dict[str, int]:
    return {
        "total_personnel": _count(db, Personnel),
        "active_cases": _count(db, Case, Case.status.in_(ACTIVE_CASE_STATUSES)),
        "pending_duties": _count(db, Duty, Duty.status == "pending"),
        "active_alerts": _count(db, Alert, Alert.is_read == False),  # noqa: E712
    }
