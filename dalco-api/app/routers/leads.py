from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.lead import LeadCreate, LeadCreated, LeadList
from app.services.lead_service import create_lead, list_leads

router = APIRouter(prefix="/api/leads", tags=["leads"])


@router.get("", response_model=LeadList)
def get_leads(db: Session = Depends(get_db)):
    return LeadList(success=True, data=list_leads(db))


@router.post("", response_model=LeadCreated, status_code=201)
def post_lead(body: LeadCreate, db: Session = Depends(get_db)):
    lead_id = create_lead(db, body.model_dump(exclude_none=True))
    return LeadCreated(success=True, id=str(lead_id))
