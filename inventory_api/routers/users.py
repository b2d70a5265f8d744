from fastapi import APIRouter, Depends, Path

from inventory_api.schemas.api_schemas import UserCreate, UserRegisterResponse, ProfileResponse
from inventory_api.dependencies import get_user_service
from inventory_api.application.user_service import UserService

router = APIRouter()


@router.post("/users", response_model=UserRegisterResponse)
def register_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service),
):
    """
    Register a user. Registering an existing email again changes nothing.
    """
    result = service.register(user_data.model_dump())
    if not result["created"]:
        return UserRegisterResponse(message="User already exists", insertedId=None)
    return UserRegisterResponse(message="User created", insertedId=result["inserted_id"])


@router.get("/profile/{email}", response_model=ProfileResponse)
def get_profile(
    email: str = Path(..., title="Email of the user"),
    service: UserService = Depends(get_user_service),
):
    """
    Public profile of a user.
    """
    return service.profile(email)
