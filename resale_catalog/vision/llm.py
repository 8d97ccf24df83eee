"""Vision model configuration: supports OpenAI and Gemini."""

from typing import Optional

from resale_catalog.config import Settings, get_settings

TEMPERATURE = 0.3
MAX_OUTPUT_TOKENS = 1000


def get_vision_llm(settings: Optional[Settings] = None):
    """Get the configured multimodal chat model, JSON output, no retries."""
    settings = settings or get_settings()

    if settings.VISION_PROVIDER == "gemini":
        from langchain_google_genai import ChatGoogleGenerativeAI
        return ChatGoogleGenerativeAI(
            google_api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            temperature=TEMPERATURE,
            max_output_tokens=MAX_OUTPUT_TOKENS,
            timeout=settings.VISION_TIMEOUT_SECONDS,
            max_retries=0,
            response_mime_type="application/json",
        )

    from langchain_openai import ChatOpenAI
    llm = ChatOpenAI(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        temperature=TEMPERATURE,
        max_tokens=MAX_OUTPUT_TOKENS,
        timeout=settings.VISION_TIMEOUT_SECONDS,
        max_retries=0,
    )
    return llm.bind(response_format={"type": "json_object"})
