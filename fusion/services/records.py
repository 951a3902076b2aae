"""Use cases that persist records and read them back as history."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Union
from uuid import uuid4

from .. import models
from ..entities import CustomRecord, FusedRecord, HistoryRecord
from ..normalizer import utcnow_iso
from ..schemas import CustomRecordRequest


logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class RecordServiceError(RuntimeError):
    """Raised when a record cannot be stored or read."""


@dataclass(frozen=True)
class HistoryPage:
    data: List[HistoryRecord]
    page: int
    limit: int
    has_more: bool

    def pagination(self) -> dict:
        return {"page": self.page, "limit": self.limit, "has_more": self.has_more}


class GetFusedDataService:
    """Fuse a record and store it in the history."""

    def __init__(self, fusion_service: Any, session_factory: Optional[models.SessionFactory] = None) -> None:
        self._fusion = fusion_service
        self._session_factory = session_factory

    def execute(self) -> FusedRecord:
        record = self._fusion.fuse_star_wars_with_weather()
        try:
            with models.session_scope(self._session_factory) as session:
                models.save_fused_record(session, record)
        except Exception as exc:  # noqa: BLE001 - driver specific errors
            logger.error("Failed to store fused record %s", record.id, exc_info=exc)
            raise RecordServiceError("failed to store fused record") from exc
        return record


class StoreCustomDataService:
    def __init__(
        self,
        session_factory: Optional[models.SessionFactory] = None,
        *,
        now: Callable[[], str] = utcnow_iso,
        id_factory: Callable[[], str] = lambda: str(uuid4()),
    ) -> None:
        self._session_factory = session_factory
        self._now = now
        self._id_factory = id_factory

    def execute(self, request: Union[CustomRecordRequest, Mapping[str, Any]]) -> CustomRecord:
        """Validate ``request`` and store it as a new custom record.

        Raises :class:`pydantic.ValidationError` for malformed payloads and
        :class:`RecordServiceError` when the record cannot be stored.
        """
        if not isinstance(request, CustomRecordRequest):
            request = CustomRecordRequest.model_validate(request)
        record = CustomRecord(
            id=self._id_factory(),
            title=request.title,
            description=request.description,
            data=dict(request.data),
            created_at=self._now(),
        )
        try:
            with models.session_scope(self._session_factory) as session:
                models.save_custom_record(session, record)
        except Exception as exc:  # noqa: BLE001 - driver specific errors
            logger.error("Failed to store custom record %s", record.id, exc_info=exc)
            raise RecordServiceError("failed to store custom record") from exc
        return record


class GetHistoryService:
    def __init__(self, session_factory: Optional[models.SessionFactory] = None) -> None:
        self._session_factory = session_factory

    def execute(self, page: int = 1, limit: int = 10) -> HistoryPage:
        if page < 1 or limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValueError(f"page must be >= 1 and limit between 1 and {MAX_PAGE_SIZE}")
        try:
            with models.session_scope(self._session_factory) as session:
                data = models.list_history(session, page=page, limit=limit)
        except Exception as exc:  # noqa: BLE001 - driver specific errors
            logger.error("Failed to read history", exc_info=exc)
            raise RecordServiceError("failed to read history") from exc
        return HistoryPage(data=data, page=page, limit=limit, has_more=len(data) == limit)


__all__ = [
    "GetFusedDataService",
    "GetHistoryService",
    "HistoryPage",
    "MAX_PAGE_SIZE",
    "RecordServiceError",
    "StoreCustomDataService",
]
