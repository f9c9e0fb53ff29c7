"""AI service tools: OCR, translation, language detection and speech recognition."""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from ..client import ClientGetter
from ..utils import READ_ONLY, safe_call


def register_ai_tools(mcp: FastMCP, get_client: ClientGetter) -> None:
    # lark_ai_ocr_image
    @mcp.tool(
        name="lark_ai_ocr_image",
        description="Recognize text from an image using OCR",
        annotations=READ_ONLY,
        meta={"category": "ai", "safety_level": "safe"},
    )
    async def ocr_image(
        image_key: Annotated[
            str | None, Field(description="Base64-encoded image or Feishu image key")
        ] = None,
        image_url: Annotated[str | None, Field(description="Image URL to recognize")] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/optical_char_recognition/v1/image/basic_recognize",
                body={"image": image_key, "url": image_url},
            )
        )

    # lark_ai_translate_text
    @mcp.tool(
        name="lark_ai_translate_text",
        description="Translate text between languages",
        annotations=READ_ONLY,
        meta={"category": "ai", "safety_level": "safe"},
    )
    async def translate_text(
        source_language: Annotated[
            str, Field(description="Source language code (zh, en, ja, etc.)")
        ],
        target_language: Annotated[str, Field(description="Target language code")],
        text: Annotated[str, Field(description="Text to translate")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/translation/v1/text/translate",
                body={
                    "source_language": source_language,
                    "target_language": target_language,
                    "text": text,
                },
            )
        )

    # lark_ai_detect_language
    @mcp.tool(
        name="lark_ai_detect_language",
        description="Detect the language of a given text",
        annotations=READ_ONLY,
        meta={"category": "ai", "safety_level": "safe"},
    )
    async def detect_language(
        text: Annotated[str, Field(description="Text to detect language for")],
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST", "/open-apis/translation/v1/text/detect", body={"text": text}
            )
        )

    # lark_ai_speech_to_text
    @mcp.tool(
        name="lark_ai_speech_to_text",
        description="Transcribe audio to text (file-based recognition)",
        annotations=READ_ONLY,
        meta={"category": "ai", "safety_level": "safe"},
    )
    async def speech_to_text(
        speech_key: Annotated[str, Field(description="Feishu file key of the audio resource")],
        format: Annotated[
            str | None, Field(description="Audio format (e.g. pcm, wav, mp3, ogg)")
        ] = None,
    ):
        return await safe_call(
            lambda: get_client().request(
                "POST",
                "/open-apis/speech_to_text/v1/speech/file_recognize",
                body={"speech": {"speech_key": speech_key}, "config": {"format": format}},
            )
        )
