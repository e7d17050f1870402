"""Support router."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from crew_api.dependencies import get_support_service
from crew_api.models.domain.inquiry import Inquiry
from crew_api.models.domain.user import CurrentUser
from crew_api.models.dto.support import InquiryCreate
from crew_api.security.auth import get_current_user
from crew_api.services.support_service import SupportService

router = APIRouter()


@router.post("/inquiries", response_model=Inquiry, status_code=status.HTTP_201_CREATED)
async def submit_inquiry(
    data: InquiryCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    support_service: Annotated[SupportService, Depends(get_support_service)],
) -> Inquiry:
    """Send a support request."""
    return await support_service.submit(Inquiry(**data.model_dump()))
