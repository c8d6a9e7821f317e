"""
Inquiry log - persists support interactions and serves customer history.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select

from support_bot.config import settings
from support_bot.core.support.models import PastInquiry
from support_bot.db.models import Inquiry
from support_bot.db.sqlite import Database, db

logger = logging.getLogger(__name__)


@dataclass
class InquiryRecord:
    """Data for a new inquiry log entry."""
    user_id: str
    user_name: str
    user_message: str
    reply: str
    order_number: Optional[str] = None
    category: Optional[str] = None
    requires_human_review: bool = False
    platform: str = "Telegram"


class InquiryRepository:
    """Inquiry log backed by the SQL database."""

    def __init__(self, database: Database | None = None, limit: int | None = None):
        self.database = database or db
        self.limit = limit or settings.history_limit

    async def append_inquiry_record(self, record: InquiryRecord) -> None:
        """Store a handled inquiry. Errors propagate to the caller."""
        async with self.database.session() as session:
            session.add(
                Inquiry(
                    user_id=record.user_id,
                    user_name=record.user_name,
                    user_message=record.user_message,
                    reply=record.reply,
                    order_number=record.order_number,
                    category=record.category,
                    requires_human_review=record.requires_human_review,
                    platform=record.platform,
                )
            )
        logger.debug(f"Inquiry from {record.user_id} saved")

    async def query_inquiry_history(self, user_id: str) -> list[PastInquiry]:
        """Most recent inquiries of a user, newest first; empty on failure."""
        try:
            async with self.database.session() as session:
                result = await session.execute(
                    select(Inquiry)
                    .where(Inquiry.user_id == user_id)
                    .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
                    .limit(self.limit)
                )
                rows = result.scalars().all()
        except Exception as e:
            logger.error(f"Inquiry history query failed for {user_id}: {e}", exc_info=True)
            return []

        return [
            PastInquiry(
                user_message=row.user_message,
                reply=row.reply,
                created_at=row.created_at,
                category=row.category,
            )
            for row in rows
        ]
