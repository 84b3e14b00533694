"""Service provider directory routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from flourish.database import get_db
from flourish.models.service import ProviderCategory, ServiceProvider
from flourish.schemas.service import ProviderCreate, ProviderOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=ProviderOut, status_code=status.HTTP_201_CREATED)
def create_provider(payload: ProviderCreate, db: Session = Depends(get_db)):
    provider = ServiceProvider(**payload.model_dump())
    db.add(provider)
    db.commit()
    db.refresh(provider)
    logger.info("Created service provider %s (%s)", provider.id, provider.name)
    return provider


@router.get("/", response_model=list[ProviderOut])
def list_providers(
    category: Optional[ProviderCategory] = Query(None),
    available: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    """List providers, optionally by category and availability."""
    query = db.query(ServiceProvider)
    if category:
        query = query.filter(ServiceProvider.category == category)
    if available is not None:
        query = query.filter(ServiceProvider.available.is_(available))
    return query.order_by(ServiceProvider.name).all()


@router.get("/{provider_id}", response_model=ProviderOut)
def get_provider(provider_id: str, db: Session = Depends(get_db)):
    provider = db.query(ServiceProvider).filter(ServiceProvider.id == provider_id).first()
    if not provider:
        raise HTTPException(status_code=404, detail="Service provider not found")
    return provider
