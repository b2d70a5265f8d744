from fastapi import APIRouter, Depends, Path
from typing import List

from inventory_api.schemas.api_schemas import (
    PurchaseCreate,
    PurchaseRecord,
    PurchaseResponse,
    InsertResponse,
)
from inventory_api.dependencies import get_current_user, get_purchase_service
from inventory_api.application.authorization import AuthenticatedUser
from inventory_api.application.purchase_service import PurchaseService

router = APIRouter()


@router.post("/my-Purchase/{model_id}", response_model=PurchaseResponse, status_code=201)
def purchase_model(
    model_id: str = Path(..., title="The ID of the model to purchase"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: PurchaseService = Depends(get_purchase_service),
):
    """
    Purchase a model. Each caller can purchase a given model once.
    """
    result = service.purchase(model_id, user)
    return PurchaseResponse(
        modelId=result["model_id"],
        purchaseId=result["purchase_id"],
        purchasedBy=result["purchased_by"],
    )


@router.post("/my-Purchase", response_model=InsertResponse, status_code=201)
def record_purchase(
    purchase: PurchaseCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: PurchaseService = Depends(get_purchase_service),
):
    """
    Record a purchase ledger entry for the caller without changing the model.
    """
    purchase_id = service.record(purchase.modelId, user)
    return InsertResponse(insertedId=purchase_id)


@router.get("/my-Purchase", response_model=List[PurchaseRecord])
def get_my_purchases(
    user: AuthenticatedUser = Depends(get_current_user),
    service: PurchaseService = Depends(get_purchase_service),
):
    """
    Purchase ledger of the authenticated caller, newest first.
    """
    return service.list_for(user)
