"""Translation API routes."""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile

from translatrix.api.dependencies import SettingsDep, TranslationServiceDep
from translatrix.core.errors import FileTooLargeError, MissingInputError
from translatrix.models.schemas import TextTranslationRequest, TranslationResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/translate", response_model=TranslationResponse)
async def translate_document(
    service: TranslationServiceDep,
    app_settings: SettingsDep,
    file: Optional[UploadFile] = File(None),
    source_lang: str = Form("spanish", alias="sourceLang"),
    target_lang: str = Form("english", alias="targetLang"),
):
    """Translate an uploaded document (image, PDF, DOCX, text or JSON)."""
    if file is None or not file.filename:
        raise MissingInputError("No file uploaded")

    # Early rejection from the declared size; the saved size is checked too
    if file.size and file.size > app_settings.max_upload_size_bytes:
        raise FileTooLargeError(
            "File too large",
            details=f"Maximum size is {app_settings.max_upload_size_mb}MB",
        )

    data = await service.translate_upload(
        file.file,
        filename=file.filename,
        media_type=file.content_type,
        source_lang=source_lang,
        target_lang=target_lang,
    )
    return TranslationResponse(data=data)


@router.post("/translate-text", response_model=TranslationResponse)
async def translate_text(body: TextTranslationRequest, service: TranslationServiceDep):
    """Translate plain text without uploading a file."""
    data = await service.translate_text(body.text, body.source_lang, body.target_lang)
    return TranslationResponse(data=data)
