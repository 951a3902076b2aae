"""Management command to fuse data using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api import views
from fusion.services.fusion import FusionError
from fusion.services.records import GetFusedDataService, RecordServiceError


class Command(BaseCommand):
    help = "Fuse a random character with the weather on its homeworld"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--no-store", action="store_true", help="Do not add the record to the history")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        try:
            if options.get("no_store"):
                record = views.get_fusion_service().fuse_star_wars_with_weather()
            else:
                record = GetFusedDataService(views.get_fusion_service(), views.get_record_session_factory()).execute()
        except FusionError as exc:
            raise CommandError(f"Fusion failed: {exc}") from exc
        except RecordServiceError as exc:
            raise CommandError("Fused record could not be stored") from exc

        self.stdout.write(json.dumps(record.as_dict()))
