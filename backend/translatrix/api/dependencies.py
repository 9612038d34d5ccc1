"""API dependencies.

The translation service and report generator are built once per process
from settings; tests swap them through ``app.dependency_overrides``.
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from translatrix.config import Settings, settings
from translatrix.core.report import ReportGenerator
from translatrix.core.translation.service import TranslationService

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    return settings


@lru_cache
def _build_translation_service() -> TranslationService:
    logger.info("Building translation service from settings")
    return TranslationService.from_settings(settings)


def get_translation_service() -> TranslationService:
    return _build_translation_service()


def get_report_generator() -> ReportGenerator:
    return ReportGenerator()


SettingsDep = Annotated[Settings, Depends(get_settings)]
TranslationServiceDep = Annotated[TranslationService, Depends(get_translation_service)]
ReportGeneratorDep = Annotated[ReportGenerator, Depends(get_report_generator)]
