"""
API routes for Translator Gateway.
"""

import json
from typing import Dict, Type, TypeVar

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from .schemas import (
    BreakSentenceRequest,
    BreakSentenceResponse,
    DetectRequest,
    DetectResponse,
    DictionaryLookupRequest,
    DictionaryLookupResponse,
    TranslateRequest,
    TranslateResponse,
    TransliterateRequest,
    TransliterateResponse,
    field_errors,
)
from ..gateway.base import BaseTranslatorGateway
from ..utils.sanitize import sanitize_input

router = APIRouter()

ENDPOINTS = [
    "/languages",
    "/translate",
    "/transliterate",
    "/detect",
    "/breaksentence",
    "/dictionarylookup",
]

ModelT = TypeVar("ModelT", bound=BaseModel)


# Dependency injection functions
async def get_gateway(request: Request) -> BaseTranslatorGateway:
    """Get translator gateway from app state."""
    return request.app.state.gateway


def json_body(model: Type[ModelT]):
    """Build a dependency that parses and validates the JSON body as ``model``.

    Errors are reported against the camelCase field names clients send.
    """
    aliases = {name: field.alias or name for name, field in model.model_fields.items()}

    async def dependency(request: Request) -> ModelT:
        raw = await request.body()
        try:
            payload = json.loads(raw) if raw else {}
        except ValueError:
            raise RequestValidationError([{
                "type": "json_invalid",
                "loc": ("body",),
                "msg": "Malformed JSON body",
                "input": None,
            }])

        try:
            return model.model_validate(payload)
        except ValidationError as e:
            errors = field_errors(e, aliases)
            for error in errors:
                error["loc"] = ("body",) + error["loc"]
            raise RequestValidationError(errors)

    return dependency


@router.get("/languages", response_model=Dict[str, str])
async def list_languages(
    gateway: BaseTranslatorGateway = Depends(get_gateway),
):
    """List supported languages as a code to name mapping."""
    return await gateway.list_languages()


@router.post("/translate", response_model=TranslateResponse)
async def translate(
    payload: TranslateRequest = Depends(json_body(TranslateRequest)),
    gateway: BaseTranslatorGateway = Depends(get_gateway),
):
    """Translate text. Text and both language codes are sanitized."""
    translated = await gateway.translate(
        text=sanitize_input(payload.text),
        to_language=sanitize_input(payload.target_language),
        from_language=sanitize_input(payload.source_language),
    )
    return TranslateResponse(translated_text=translated)


@router.post("/transliterate", response_model=TransliterateResponse)
async def transliterate(
    payload: TransliterateRequest = Depends(json_body(TransliterateRequest)),
    gateway: BaseTranslatorGateway = Depends(get_gateway),
):
    """Convert text between scripts. Fields are forwarded as given."""
    transliterated = await gateway.transliterate(
        text=payload.text,
        language=payload.language,
        from_script=payload.from_script,
        to_script=payload.to_script,
    )
    return TransliterateResponse(transliterated_text=transliterated)


@router.post("/detect", response_model=DetectResponse)
async def detect(
    payload: DetectRequest = Depends(json_body(DetectRequest)),
    gateway: BaseTranslatorGateway = Depends(get_gateway),
):
    """Detect the language of the sanitized text."""
    detected = await gateway.detect(text=sanitize_input(payload.text))
    return DetectResponse(detected_language=detected)


@router.post("/breaksentence", response_model=BreakSentenceResponse)
async def break_sentence(
    payload: BreakSentenceRequest = Depends(json_body(BreakSentenceRequest)),
    gateway: BaseTranslatorGateway = Depends(get_gateway),
):
    """Return sentence lengths for the text."""
    sentences = await gateway.break_sentence(text=payload.text, language=payload.language)
    return BreakSentenceResponse(sentences=sentences)


@router.post("/dictionarylookup", response_model=DictionaryLookupResponse)
async def dictionary_lookup(
    payload: DictionaryLookupRequest = Depends(json_body(DictionaryLookupRequest)),
    gateway: BaseTranslatorGateway = Depends(get_gateway),
):
    """Look up dictionary entries for a word or phrase."""
    entries = await gateway.dictionary_lookup(text=payload.text, language=payload.language)
    return DictionaryLookupResponse(dictionary_entries=entries)
