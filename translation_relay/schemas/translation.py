from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TranslateTextRequest(CamelModel):
    """
    Body of `POST /api/translate-text`.

    Attributes:
        text: Text to translate.
        target_language: Language tag of the translation (`targetLanguage`),
            defaulted from settings when absent.
    """

    text: str = ""
    target_language: str | None = None


class TranslateTextResponse(CamelModel):
    success: bool = True
    original_text: str
    translation: str
    target_language: str


class TranslateAudioResponse(CamelModel):
    success: bool = True
    transcript: str
    translation: str
    original_language: str
    target_language: str
