"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user
from src.models.user import User
from src.schemas.category import CategoryResponse
from src.services.categories import list_categories

router = APIRouter(prefix="/api/v1", tags=["categories"])


@router.get("/categories", response_model=list[CategoryResponse])
def get_categories(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get the fixed set of expense categories."""
    return list_categories()
