"""Support inquiry repository."""

from crew_api.models.orm.inquiry import InquiryORM
from crew_api.repositories.base import BaseRepository


class InquiryRepository(BaseRepository[InquiryORM]):
    """Repository for support inquiries."""

    model = InquiryORM
