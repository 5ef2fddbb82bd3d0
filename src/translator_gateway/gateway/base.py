"""
Base gateway interface for upstream translation services.
"""

import abc
from typing import Dict, List, Optional, Any


class UpstreamError(Exception):
    """Any failure reaching the translator or reading its response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def dictionary_target(language: str) -> str:
    """Pick the target language for a dictionary lookup.

    English words are looked up against Spanish; any other language is
    looked up against itself.
    """
    return "es" if language == "en" else language


class BaseTranslatorGateway(abc.ABC):
    """Base class for translator gateways.

    Each operation performs at most one upstream call and raises
    ``UpstreamError`` on any failure.
    """

    @abc.abstractmethod
    async def list_languages(self) -> Dict[str, str]:
        """
        List supported translation languages.

        Returns:
            Mapping of language code to display name
        """
        pass

    @abc.abstractmethod
    async def translate(self, text: str, to_language: str, from_language: str = "en") -> str:
        """
        Translate text.

        Args:
            text: Text to translate
            to_language: Target language code
            from_language: Source language code

        Returns:
            Translated text
        """
        pass

    @abc.abstractmethod
    async def transliterate(self, text: str, language: str, from_script: str, to_script: str) -> str:
        """
        Convert text from one script to another.

        Args:
            text: Text to convert
            language: Language of the text
            from_script: Script of the input text
            to_script: Script to convert to

        Returns:
            Transliterated text
        """
        pass

    @abc.abstractmethod
    async def detect(self, text: str) -> str:
        """
        Detect the language of a text.

        Returns:
            Detected language code
        """
        pass

    @abc.abstractmethod
    async def break_sentence(self, text: str, language: str) -> List[int]:
        """
        Split text into sentences.

        Args:
            text: Text to split
            language: Validated code of the text; not sent upstream

        Returns:
            Length of each sentence, in characters
        """
        pass

    @abc.abstractmethod
    async def dictionary_lookup(self, text: str, language: str) -> List[Dict[str, Any]]:
        """
        Look up alternative translations of a word or phrase.

        Args:
            text: Word or phrase to look up
            language: Language of the text

        Returns:
            Dictionary translation entries
        """
        pass

    async def shutdown(self) -> None:
        """Release resources held by the gateway."""
        pass
