"""Vision Analysis Client: one multimodal request per product.

`analyze` never raises: any failure (file I/O, network, timeout, malformed
or incomplete JSON) is logged and converted into AnalysisResult.fallback().
"""

import base64
import json
import mimetypes
import re
from typing import Any, Callable, List, Optional, Protocol

import structlog
from fastapi.concurrency import run_in_threadpool
from langchain_core.messages import HumanMessage

from resale_catalog.domain.schemas.analysis import AnalysisResult
from resale_catalog.infrastructure.storage import FileStorage
from resale_catalog.vision.llm import get_vision_llm
from resale_catalog.vision.prompts import CONNECTION_CHECK_PROMPT, PRODUCT_ANALYSIS_PROMPT

logger = structlog.get_logger(__name__)

_FENCE = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$", re.IGNORECASE)


class VisionAnalyzer(Protocol):
    async def analyze(self, product_id: str, image_filenames: List[str]) -> AnalysisResult:
        ...


def _message_text(content: Any) -> str:
    """Chat models return either a string or a list of content parts."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    raise ValueError(f"Unsupported response content type: {type(content).__name__}")


def parse_analysis(content: Any) -> AnalysisResult:
    """Parse and validate a model reply. Raises on anything unusable."""
    text = _FENCE.sub("", _message_text(content)).strip()
    if not text:
        raise ValueError("Empty response from vision model")
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Vision model response is not a JSON object")
    return AnalysisResult.model_validate(data)


class VisionAnalysisClient:
    """Sends a product's images plus the fixed prompt to the vision model."""

    def __init__(
        self,
        storage: FileStorage,
        llm: Optional[Any] = None,
        llm_factory: Callable[[], Any] = get_vision_llm,
    ):
        self.storage = storage
        self._llm = llm
        self._llm_factory = llm_factory

    def _get_llm(self):
        # Built on first use so a missing API key degrades per call instead of at startup
        if self._llm is None:
            self._llm = self._llm_factory()
        return self._llm

    def _image_block(self, filename: str) -> dict:
        mime_type = mimetypes.guess_type(filename)[0] or "image/jpeg"
        encoded = base64.b64encode(self.storage.read(filename)).decode("ascii")
        return {
            "type": "image_url",
            "image_url": {"url": f"data:{mime_type};base64,{encoded}", "detail": "high"},
        }

    def build_message(self, image_filenames: List[str]) -> HumanMessage:
        content: List[Any] = [{"type": "text", "text": PRODUCT_ANALYSIS_PROMPT}]
        content.extend(self._image_block(name) for name in image_filenames)
        return HumanMessage(content=content)

    async def analyze(self, product_id: str, image_filenames: List[str]) -> AnalysisResult:
        try:
            message = await run_in_threadpool(self.build_message, image_filenames)
            response = await self._get_llm().ainvoke([message])
            result = parse_analysis(response.content)
        except Exception as e:
            logger.warning(
                "Vision analysis failed, using fallback result",
                product_id=product_id,
                image_count=len(image_filenames),
                error=str(e),
                error_type=type(e).__name__,
            )
            return AnalysisResult.fallback()

        logger.info(
            "Vision analysis completed",
            product_id=product_id,
            level=result.level,
            candidate_titles=len(result.title),
        )
        return result

    async def check_connection(self) -> bool:
        try:
            response = await self._get_llm().ainvoke([HumanMessage(content=CONNECTION_CHECK_PROMPT)])
            return bool(_message_text(response.content).strip())
        except Exception as e:
            logger.warning("Vision model connection check failed", error=str(e))
            return False
