"""Prompt templates for the LLM translation adapters.

Wording is configuration: adapters only rely on the placeholders
``{source_language}``, ``{target_language}``, ``{filename}`` and ``{text}``.
"""

import base64
from typing import Any, Dict, List

from .models import FilePayload, Message, PromptBundle, TranslationRequest

SYSTEM_PROMPT = (
    "You are a professional document translator. Output only the translation, "
    "with no commentary before or after it."
)

# Vision adapters receive the document itself
VISION_PROMPT = (
    "Translate the complete document '{filename}' from {source_language} to "
    "{target_language}.\n\n"
    "Rules:\n"
    "1. Translate all text: every heading, paragraph, table cell, label and caption.\n"
    "2. Keep the structure: headings as '#'/'##', tables as '| a | b |' rows, lists as lists.\n"
    "3. Keep numbers, codes, dates, URLs, email addresses and proper nouns unchanged.\n"
    "4. Do not summarize or skip content.\n\n"
    "Translate the entire document now:"
)

# Text adapters receive extracted text
TEXT_PROMPT = (
    "Translate the following {source_language} text to {target_language}. "
    "Preserve paragraph breaks, headings and tables. Keep numbers, codes and "
    "URLs unchanged.\n\n"
    "Text:\n{text}"
)

LANGUAGE_DETECTION_PROMPT = (
    "Identify the language of the text below. Answer with exactly one word from "
    "this list: {choices}. If it is none of them, answer with the language's "
    "English name.\n\nText:\n{text}"
)


def _data_url(payload: FilePayload) -> str:
    encoded = base64.b64encode(payload.content).decode("ascii")
    return f"data:{payload.media_type};base64,{encoded}"


def document_part(payload: FilePayload) -> Dict[str, Any]:
    """Build the multimodal content part carrying the uploaded document."""
    if payload.is_image:
        return {"type": "image_url", "image_url": {"url": _data_url(payload)}}
    return {"type": "file", "file": {"file_data": _data_url(payload)}}


def build_vision_prompt(request: TranslationRequest, max_tokens: int) -> PromptBundle:
    """Prompt asking a vision model to read and translate the document."""
    instructions = VISION_PROMPT.format(
        filename=request.payload.filename,
        source_language=request.source_language.display_name,
        target_language=request.target_language.display_name,
    )
    content: List[Dict[str, Any]] = [
        document_part(request.payload),
        {"type": "text", "text": instructions},
    ]
    return PromptBundle(
        messages=[
            Message(role="system", content=SYSTEM_PROMPT),
            Message(role="user", content=content),
        ],
        temperature=0.1,
        max_tokens=max_tokens,
        mode="vision",
    )


def build_text_prompt(request: TranslationRequest, source_text: str, max_tokens: int) -> PromptBundle:
    """Prompt asking a text model to translate extracted text."""
    return PromptBundle(
        messages=[
            Message(role="system", content=SYSTEM_PROMPT),
            Message(
                role="user",
                content=TEXT_PROMPT.format(
                    source_language=request.source_language.display_name,
                    target_language=request.target_language.display_name,
                    text=source_text,
                ),
            ),
        ],
        temperature=0.3,
        max_tokens=max_tokens,
        mode="text",
    )


def build_detection_prompt(sample: str, choices: List[str]) -> PromptBundle:
    return PromptBundle(
        messages=[
            Message(
                role="user",
                content=LANGUAGE_DETECTION_PROMPT.format(choices=", ".join(choices), text=sample),
            )
        ],
        temperature=0.0,
        max_tokens=10,
        mode="detect",
    )
