from fastapi import APIRouter, Depends, Path, Query
from typing import List, Optional

from inventory_api.schemas.api_schemas import (
    ModelCreate,
    ModelUpdate,
    ModelRecord,
    InsertResponse,
    UpdateResponse,
    DeleteResponse,
)
from inventory_api.dependencies import get_current_user, get_model_service
from inventory_api.application.authorization import AuthenticatedUser
from inventory_api.application.model_service import ModelService

router = APIRouter()


@router.get("/models", response_model=List[ModelRecord])
def get_all_models(service: ModelService = Depends(get_model_service)):
    """
    Retrieve all listed models.
    """
    return service.list_models()


@router.get("/recent-model", response_model=List[ModelRecord])
def get_recent_models(service: ModelService = Depends(get_model_service)):
    """
    The most recently created models, newest first.
    """
    return service.recent_models()


@router.get("/findmodels", response_model=List[ModelRecord])
def find_models(
    search: Optional[str] = Query(None, description="Substring matched against name, framework and dataset"),
    framework: Optional[str] = Query(None, description="Comma-separated frameworks, e.g. TensorFlow,PyTorch"),
    service: ModelService = Depends(get_model_service),
):
    """
    Search and filter models. Without parameters every model is returned.
    """
    return service.find_models(search=search, framework=framework)


@router.get("/search", response_model=List[ModelRecord])
def search_models(
    search: Optional[str] = Query(None, description="Substring of the model name"),
    service: ModelService = Depends(get_model_service),
):
    """
    Case-insensitive search on model name.
    """
    return service.search_by_name(search)


@router.get("/my-models", response_model=List[ModelRecord])
def get_my_models(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ModelService = Depends(get_model_service),
):
    """
    Models listed by the authenticated caller.
    """
    return service.models_owned_by(user)


@router.get("/my-purchased-models", response_model=List[ModelRecord])
def get_my_purchased_models(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ModelService = Depends(get_model_service),
):
    """
    Models the authenticated caller has purchased.
    """
    return service.models_purchased_by(user)


@router.get("/models/{model_id}", response_model=ModelRecord)
def get_model(
    model_id: str = Path(..., title="The ID of the model to retrieve"),
    service: ModelService = Depends(get_model_service),
):
    """
    Get a model by ID.
    """
    return service.get_model(model_id)


@router.post("/models", response_model=InsertResponse, status_code=201)
def create_model(
    model_data: ModelCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ModelService = Depends(get_model_service),
):
    """
    List a new model owned by the caller.
    """
    model_id = service.create_model(model_data.model_dump(exclude_none=True), user)
    return InsertResponse(insertedId=model_id)


@router.patch("/models/{model_id}", response_model=UpdateResponse)
def update_model(
    model_data: ModelUpdate,
    model_id: str = Path(..., title="The ID of the model to update"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ModelService = Depends(get_model_service),
):
    """
    Update a model. Only the owner may update; owner, purchasers and ID cannot change.
    """
    result = service.update_model(model_id, model_data.model_dump(exclude_unset=True), user)
    return UpdateResponse(matchedCount=result["matched"], modifiedCount=result["modified"])


@router.delete("/models/{model_id}", response_model=DeleteResponse)
def delete_model(
    model_id: str = Path(..., title="The ID of the model to delete"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ModelService = Depends(get_model_service),
):
    """
    Delete a model. Only the owner may delete.
    """
    deleted = service.delete_model(model_id, user)
    return DeleteResponse(deletedCount=deleted)
