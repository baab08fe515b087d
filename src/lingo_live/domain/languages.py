"""Supported speech and translation languages."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Language:
    """Locale tag with its human-readable name."""

    code: str
    name: str


class LanguageCode(Enum):
    """Enum of supported languages (single source of truth)."""

    EN_US = Language("en-US", "English (US)")
    ES_ES = Language("es-ES", "Spanish")
    FR_FR = Language("fr-FR", "French")
    DE_DE = Language("de-DE", "German")
    IT_IT = Language("it-IT", "Italian")
    JA_JP = Language("ja-JP", "Japanese")
    KO_KR = Language("ko-KR", "Korean")
    PT_BR = Language("pt-BR", "Portuguese")
    RU_RU = Language("ru-RU", "Russian")
    ZH_CN = Language("zh-CN", "Chinese (Mandarin)")
    AR_SA = Language("ar-SA", "Arabic")
    HI_IN = Language("hi-IN", "Hindi")


DEFAULT_SOURCE_LANGUAGE = LanguageCode.EN_US.value.code
DEFAULT_TARGET_LANGUAGE = LanguageCode.ES_ES.value.code


def supported_languages() -> dict[str, str]:
    """Return a code to display name mapping."""
    return {entry.value.code: entry.value.name for entry in LanguageCode}


def is_supported(code: str) -> bool:
    """Return true when the locale tag is a supported language."""
    return code in supported_languages()


def language_name(code: str) -> str:
    """Return the display name for a code, or the code itself when unknown."""
    return supported_languages().get(code, code)
