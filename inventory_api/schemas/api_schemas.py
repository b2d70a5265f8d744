"""
API Request/Response Schemas using Pydantic.

Structure of HTTP requests and responses for the model inventory API.
Field names are camelCase to match the stored documents.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime


# Model schemas
class ModelCreate(BaseModel):
    name: str = Field(..., description="Display name of the model", min_length=1, max_length=255)
    framework: str = Field(..., description="ML framework (e.g., TensorFlow, PyTorch)", min_length=1, max_length=100)
    dataset: str = Field(..., description="Dataset the model was trained on", min_length=1, max_length=255)
    description: str = Field("", description="Optional description", max_length=5000)
    useCase: Optional[str] = Field(None, description="Intended use case", max_length=255)
    image: Optional[str] = Field(None, description="URL of a cover image", max_length=2048)


class ModelUpdate(BaseModel):
    """Partial update. Unknown fields are accepted; protected ones are dropped server-side."""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    framework: Optional[str] = Field(None, min_length=1, max_length=100)
    dataset: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    useCase: Optional[str] = Field(None, max_length=255)
    image: Optional[str] = Field(None, max_length=2048)


class ModelRecord(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., alias="_id", description="Unique identifier for the model")
    name: Optional[str] = None
    framework: Optional[str] = None
    dataset: Optional[str] = None
    description: Optional[str] = None
    useCase: Optional[str] = None
    image: Optional[str] = None
    createdAt: Optional[datetime] = None
    createdBy: Optional[str] = Field(None, description="Email of the owner")
    purchasedBy: List[str] = Field(default_factory=list, description="Emails of purchasers")
    purchased: int = Field(0, description="Number of purchases")
    updatedAt: Optional[datetime] = None


class DashboardModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: Optional[str] = None
    framework: Optional[str] = None
    createdAt: Optional[datetime] = None
    purchasedBy: List[str] = Field(default_factory=list)
    downloads: int = Field(..., description="Length of the purchaser list")


class InsertResponse(BaseModel):
    acknowledged: bool = Field(default=True)
    insertedId: Optional[str] = Field(None, description="ID of the created record")


class UpdateResponse(BaseModel):
    acknowledged: bool = Field(default=True)
    matchedCount: int
    modifiedCount: int


class DeleteResponse(BaseModel):
    acknowledged: bool = Field(default=True)
    deletedCount: int


# Purchase schemas
class PurchaseCreate(BaseModel):
    modelId: str = Field(..., description="ID of the purchased model")


class PurchaseRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    modelId: str
    modelName: Optional[str] = None
    framework: Optional[str] = None
    dataset: Optional[str] = None
    createdBy: Optional[str] = Field(None, description="Owner of the purchased model")
    purchasedBy: str
    purchasedAt: datetime


class PurchaseResponse(BaseModel):
    message: str = "Model purchased successfully"
    modelId: str
    purchaseId: str
    purchasedBy: str


# User schemas
class UserCreate(BaseModel):
    email: str = Field(..., description="Email address", min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field("", description="Display name", max_length=255)
    photoURL: Optional[str] = Field(None, description="Profile photo URL", max_length=2048)
    role: str = Field("user", description="Role of the user", max_length=50)


class UserRegisterResponse(BaseModel):
    message: str
    insertedId: Optional[str] = None


class ProfileResponse(BaseModel):
    email: str
    name: Optional[str] = None
    photoURL: Optional[str] = None
    role: str = "user"
    modelCount: int = Field(0, description="Number of models listed by the user")


# Dashboard schemas
class DashboardStatsResponse(BaseModel):
    totalModels: int
    totalUsers: int
    totalDownloads: int
