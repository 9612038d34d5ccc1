"""Report API routes."""

import asyncio
import time

from fastapi import APIRouter
from fastapi.responses import Response

from translatrix.api.dependencies import ReportGeneratorDep
from translatrix.core.errors import MissingInputError
from translatrix.models.schemas import ReportRequest

router = APIRouter()


@router.post("/generate-pdf")
async def generate_pdf(body: ReportRequest, generator: ReportGeneratorDep):
    """Render translated text as a downloadable PDF report."""
    if not body.translated_text.strip():
        raise MissingInputError("No translated text provided")

    loop = asyncio.get_running_loop()
    pdf = await loop.run_in_executor(
        None,
        generator.generate,
        body.translated_text,
        body.file_name,
        body.source_lang,
        body.target_lang,
        body.metadata,
    )

    filename = f"translation_report_{int(time.time() * 1000)}.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
