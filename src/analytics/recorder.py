import logging
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.analytics.context import RequestContext
from src.database import get_db
from src.exceptions import RecordingError
from src.models import AnalyticsEvent

logger = logging.getLogger(__name__)


class UsageEventRecorder:
    """Append-only writer for usage events.

    Recording is a side channel: a failed write is rolled back and logged,
    and the caller never sees it.
    """

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        event_type: str,
        event_data: Optional[Dict[str, Any]],
        context: Optional[RequestContext] = None
    ) -> None:
        context = context or RequestContext()
        try:
            self._write(event_type, event_data, context)
        except RecordingError as e:
            logger.error("Analytics error for %s: %s", event_type, e.message, exc_info=e.cause)

    def _write(self, event_type: str, event_data: Optional[Dict[str, Any]], context: RequestContext) -> None:
        try:
            payload = jsonable_encoder(event_data or {})
        except (TypeError, ValueError) as e:
            raise RecordingError(f"Unserializable event data: {e}", cause=e) from e

        event = AnalyticsEvent(
            event_type=event_type,
            event_data=payload,
            page_url=context.page_url,
            user_ip=context.user_ip,
            user_agent=context.user_agent,
            session_id=context.session_id
        )
        try:
            self.db.add(event)
            self.db.commit()
        except (SQLAlchemyError, TypeError, ValueError) as e:
            self.db.rollback()
            raise RecordingError(str(e), cause=e) from e


def get_usage_recorder(db: Session = Depends(get_db)) -> UsageEventRecorder:
    return UsageEventRecorder(db)
