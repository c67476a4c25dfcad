# backend/Records/seed.py
"""
District sample data: three accounts with matching personnel records, a
couple of cases, duties, alerts and one circular. Rows whose unique key
already exists are left alone, so seeding twice is harmless.
"""
import logging
import os
from datetime import timedelta
from typing import Dict

from dotenv import load_dotenv
from sqlmodel import Session, select

from Auth.models import User, utcnow
from Auth.security import hash_password
from Records.models import Alert, Case, Communication, Duty, Personnel

load_dotenv()
logger = logging.getLogger(__name__)

SEED_PASSWORD = os.getenv("SEED_PASSWORD", "password123")

USERS = [
    {"id": "commander", "email": "commander@police.gov.gh", "first_name": "John", "last_name": "Doe", "role": "commander"},
    {"id": "supervisor", "email": "supervisor@police.gov.gh", "first_name": "Jane", "last_name": "Smith", "role": "supervisor"},
    {"id": "officer", "email": "officer@police.gov.gh", "first_name": "Robert", "last_name": "Johnson", "role": "personnel"},
]

PERSONNEL = [
    {"user_id": "commander", "badge_number": "CMD001", "first_name": "John", "last_name": "Doe",
     "rank": "Commander", "unit": "Command", "phone": "+233-20-123-4567",
     "email": "commander@police.gov.gh", "is_on_duty": True, "current_location": "Command Center"},
    {"user_id": "supervisor", "badge_number": "SUP001", "first_name": "Jane", "last_name": "Smith",
     "rank": "Inspector", "unit": "Patrol", "phone": "+233-20-234-5678",
     "email": "supervisor@police.gov.gh", "is_on_duty": True, "current_location": "Main Street Patrol"},
    {"user_id": "officer", "badge_number": "OFF001", "first_name": "Robert", "last_name": "Johnson",
     "rank": "Constable", "unit": "Investigation", "phone": "+233-20-345-6789",
     "email": "officer@police.gov.gh", "is_on_duty": False, "current_location": None},
]


def seed(db: Session) -> Dict[str, int]:
    """Insert the sample set; returns how many rows were added per table."""
    added = {"users": 0, "personnel": 0, "cases": 0, "duties": 0, "alerts": 0, "communications": 0}
    now = utcnow()

    # seed key -> real id; an account that already exists under its email keeps its own id
    user_ids = {}
    for u in USERS:
        user = db.get(User, u["id"]) or db.exec(select(User).where(User.email == u["email"])).first()
        if user is None:
            user = User(**u, password=hash_password(SEED_PASSWORD))
            db.add(user)
            added["users"] += 1
        user_ids[u["id"]] = user.id
    db.commit()
    commander = user_ids["commander"]

    badge_to_id = {}
    for p in PERSONNEL:
        person = db.exec(select(Personnel).where(Personnel.badge_number == p["badge_number"])).first()
        if person is None:
            person = Personnel(**{**p, "user_id": user_ids[p["user_id"]]})
            db.add(person)
            db.commit()
            db.refresh(person)
            added["personnel"] += 1
        badge_to_id[p["badge_number"]] = person.id

    cases = [
        {"case_number": "CASE-2024-001", "title": "Theft at Market Square",
         "description": "Reported theft of goods from market vendor", "type": "theft",
         "status": "open", "priority": "medium", "assigned_to": badge_to_id["OFF001"],
         "reported_by": "Market Vendor Association", "reported_at": now},
        {"case_number": "CASE-2024-002", "title": "Vehicle Accident on Main Road",
         "description": "Two-vehicle collision requiring investigation", "type": "traffic_accident",
         "status": "under_investigation", "priority": "high", "assigned_to": badge_to_id["SUP001"],
         "reported_by": "Traffic Division", "reported_at": now - timedelta(days=1)},
    ]
    for c in cases:
        if db.exec(select(Case).where(Case.case_number == c["case_number"])).first():
            continue
        db.add(Case(**c))
        added["cases"] += 1

    start = (now + timedelta(days=1)).replace(hour=8, minute=0, second=0, microsecond=0)
    end = start.replace(hour=16)
    duties = [
        {"title": "Morning Patrol - Market Area",
         "description": "Regular patrol of market area during morning hours",
         "assigned_to": badge_to_id["SUP001"], "location": "Market Square",
         "start_time": start, "end_time": end, "created_by": commander},
        {"title": "Traffic Control - Main Junction", "description": "Traffic control during peak hours",
         "assigned_to": badge_to_id["OFF001"], "location": "Main Road Junction",
         "start_time": start + timedelta(hours=2), "end_time": end + timedelta(hours=2),
         "created_by": commander},
    ]
    for d in duties:
        if db.exec(select(Duty).where(Duty.title == d["title"])).first():
            continue
        db.add(Duty(**d))
        added["duties"] += 1

    alerts = [
        {"title": "Security Alert", "message": "Increased security measures in effect for market area",
         "type": "warning", "priority": "medium", "sent_by": commander,
         "recipients": ["supervisor", "officer"]},
        {"title": "Weather Advisory",
         "message": "Heavy rain expected this evening. Exercise caution on patrols.",
         "type": "info", "priority": "low", "sent_by": commander,
         "recipients": ["supervisor", "officer"]},
    ]
    for a in alerts:
        if db.exec(select(Alert).where(Alert.title == a["title"])).first():
            continue
        db.add(Alert(**a))
        added["alerts"] += 1

    circular = {"type": "circular", "subject": "New Security Protocols",
                "message": "All personnel are required to follow updated security protocols effective immediately.",
                "sender": commander, "recipients": ["supervisor", "officer"],
                "status": "sent", "sent_at": now}
    if not db.exec(select(Communication).where(Communication.subject == circular["subject"])).first():
        db.add(Communication(**circular))
        added["communications"] += 1

    db.commit()
    logger.info("Seed complete: %s", added)
    return added
