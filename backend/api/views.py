"""REST API views for fused records, custom records and history."""
from __future__ import annotations

import logging
from functools import lru_cache

from django.conf import settings
from django.core.cache import caches
from pydantic import ValidationError
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from fusion import models
from fusion.cache import FusionCache
from fusion.providers.base import RequestConfig
from fusion.providers.openmeteo import OpenMeteoClient
from fusion.providers.swapi import SwapiClient
from fusion.services.fusion import FusionError, FusionService
from fusion.services.records import (
    MAX_PAGE_SIZE,
    GetFusedDataService,
    GetHistoryService,
    RecordServiceError,
    StoreCustomDataService,
)


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_fusion_service() -> FusionService:
    request_config = RequestConfig(timeout=settings.HTTP_TIMEOUT_SECONDS)
    return FusionService(
        registry=SwapiClient(base_url=settings.SWAPI_BASE_URL, request_config=request_config),
        conditions=OpenMeteoClient(base_url=settings.OPENMETEO_BASE_URL, request_config=request_config),
        cache=FusionCache(caches[settings.FUSION_CACHE_ALIAS]),
        ttl_minutes=settings.FUSION_CACHE_TTL_MINUTES,
    )


@lru_cache(maxsize=1)
def get_record_session_factory() -> models.SessionFactory:
    models.configure_engine(settings.DATABASE_URL)
    return models.get_session_factory()


def _failure(error: str, message: str, status_code: int) -> Response:
    return Response({"success": False, "error": error, "message": message}, status=status_code)


class FusedDataView(APIView):
    """Fuse a character, its homeworld and the weather there."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the fused record for today, storing it in the history."""
        service = GetFusedDataService(get_fusion_service(), get_record_session_factory())
        try:
            record = service.execute()
        except (FusionError, RecordServiceError) as exc:
            logger.error("Fused data request failed: %s", exc)
            return _failure("Internal server error", "Failed to fetch fused data", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {"success": True, "data": record.as_dict(), "message": "Fused data fetched successfully"},
            status=status.HTTP_200_OK,
        )


class StoreCustomDataView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):  # noqa: D401
        """Store an arbitrary JSON payload with a title and description."""
        try:
            payload = request.data
        except ParseError:
            return _failure("Invalid JSON", "The request body must be valid JSON", status.HTTP_400_BAD_REQUEST)

        service = StoreCustomDataService(get_record_session_factory())
        try:
            record = service.execute(payload)
        except ValidationError as exc:
            fields = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
            detail = ", ".join(fields) if fields else "title, description, data"
            return _failure("Missing or invalid fields", f"Invalid fields: {detail}", status.HTTP_400_BAD_REQUEST)
        except RecordServiceError as exc:
            logger.error("Custom data request failed: %s", exc)
            return _failure("Internal server error", "Failed to store custom data", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {"success": True, "data": record.as_dict(), "message": "Custom data stored successfully"},
            status=status.HTTP_201_CREATED,
        )


class HistoryView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return one page of stored records, newest first."""
        try:
            page = int(request.query_params.get("page", "1"))
        except ValueError:
            page = 0
        if page < 1:
            return _failure("Invalid page", "page must be an integer greater than 0", status.HTTP_400_BAD_REQUEST)
        try:
            limit = int(request.query_params.get("limit", "10"))
        except ValueError:
            limit = 0
        if not 1 <= limit <= MAX_PAGE_SIZE:
            return _failure(
                "Invalid limit",
                f"limit must be an integer between 1 and {MAX_PAGE_SIZE}",
                status.HTTP_400_BAD_REQUEST,
            )

        service = GetHistoryService(get_record_session_factory())
        try:
            result = service.execute(page=page, limit=limit)
        except RecordServiceError as exc:
            logger.error("History request failed: %s", exc)
            return _failure("Internal server error", "Failed to fetch history", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {
                "success": True,
                "data": [item.as_dict() for item in result.data],
                "pagination": result.pagination(),
                "message": "History fetched successfully",
            },
            status=status.HTTP_200_OK,
        )
