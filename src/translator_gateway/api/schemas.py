"""
Request and response models for the translator endpoints.

Field names are camelCase on the wire. Validation messages are attached to
each field so that a 400 response tells the caller exactly what to fix.
"""

import re
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic_core import PydanticCustomError

RE_ALPHA = re.compile(r"[A-Za-z]+")


def _as_string(value: Any) -> str:
    """String form used by the emptiness and length rules."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _reject(error_type: str, violations: List[str]) -> None:
    # Every failed rule of the field is kept; field_errors() expands them.
    if violations:
        raise PydanticCustomError(error_type, violations[0], {"violations": violations})


def _check_text(value: Any) -> Any:
    violations = []
    if not isinstance(value, str):
        violations.append("Text must be a string")
    if not _as_string(value):
        violations.append("Text is required")
    _reject("text", violations)
    return value


def _language_code(label: str) -> BeforeValidator:
    def check(value: Any) -> Any:
        violations = []
        if not isinstance(value, str) or not RE_ALPHA.fullmatch(value):
            violations.append(f"{label} must be a valid language code")
        if not 2 <= len(_as_string(value)) <= 5:
            violations.append(f"{label} code length is invalid")
        _reject("language_code", violations)
        return value
    return BeforeValidator(check)


def _script(message: str) -> BeforeValidator:
    def check(value: Any) -> Any:
        if not isinstance(value, str):
            raise PydanticCustomError("string_type", message)
        return value
    return BeforeValidator(check)


Text = Annotated[str, BeforeValidator(_check_text)]
LanguageCode = Annotated[str, _language_code("Language")]
TargetLanguageCode = Annotated[str, _language_code("Target language")]
SourceLanguageCode = Annotated[str, _language_code("Source language")]
FromScript = Annotated[str, _script("Source script is required")]
ToScript = Annotated[str, _script("Target script is required")]


def field_errors(exc: ValidationError, aliases: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
    """
    Flatten a ValidationError into one entry per violated rule.

    Args:
        exc: Error raised by a request model
        aliases: Field name to wire name mapping applied to each ``loc``

    Returns:
        Dicts with ``type``, ``loc``, ``msg`` and ``input``
    """
    aliases = aliases or {}
    errors = []
    for error in exc.errors():
        loc = tuple(aliases.get(part, part) for part in error["loc"])
        ctx = error.get("ctx") or {}
        for message in ctx.get("violations") or [error["msg"]]:
            errors.append({
                "type": error["type"],
                "loc": loc,
                "msg": message,
                "input": error.get("input"),
            })
    return errors


def _required() -> Any:
    # Missing fields go through the field validator so they get its message.
    return Field(default=None, validate_default=True)


class RequestModel(BaseModel):
    """Base for request bodies."""
    model_config = ConfigDict(populate_by_name=True)


class ResponseModel(BaseModel):
    """Base for response bodies."""
    model_config = ConfigDict(populate_by_name=True)


class TranslateRequest(RequestModel):
    text: Text = _required()
    target_language: TargetLanguageCode = Field(
        default=None, validate_default=True, alias="targetLanguage"
    )
    source_language: SourceLanguageCode = Field(default="en", alias="sourceLanguage")


class TransliterateRequest(RequestModel):
    text: Text = _required()
    language: LanguageCode = _required()
    from_script: FromScript = Field(default=None, validate_default=True, alias="fromScript")
    to_script: ToScript = Field(default=None, validate_default=True, alias="toScript")


class DetectRequest(RequestModel):
    text: Text = _required()


class BreakSentenceRequest(RequestModel):
    text: Text = _required()
    language: LanguageCode = _required()


class DictionaryLookupRequest(RequestModel):
    text: Text = _required()
    language: LanguageCode = _required()


class TranslateResponse(ResponseModel):
    translated_text: str = Field(alias="translatedText")


class TransliterateResponse(ResponseModel):
    transliterated_text: str = Field(alias="transliteratedText")


class DetectResponse(ResponseModel):
    detected_language: str = Field(alias="detectedLanguage")


class BreakSentenceResponse(ResponseModel):
    sentences: List[int]


class DictionaryLookupResponse(ResponseModel):
    dictionary_entries: List[Dict[str, Any]] = Field(alias="dictionaryEntries")
