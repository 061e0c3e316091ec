from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from app.ai.exceptions import AnalysisParseError, ProviderError
from app.ai.factory import get_text_generator
from app.ai.prompts import ANALYSIS_PROMPT
from app.ai.types import TextGenerator
from app.core.config import DEFAULT_GEMINI_MODELS, Settings
from app.services.analysis_parsing import backfill_analysis_fields, extract_json_object
from app.services.mock_analysis import generate_mock_analysis

logger = logging.getLogger(__name__)

AI_ANALYSIS_PREFIX = "AI Analysis: "
AI_ANALYSIS_PLACEHOLDER = "Generated comprehensive resume review."
AI_EXCERPT_MAX_CHARS = 500
ENHANCED_FALLBACK_SUFFIX = " (Enhanced analysis based on industry standards)"
GENERIC_FILENAME = "resume"

MockFactory = Callable[[str], dict[str, Any]]


class AnalysisResolver:
    """Turns the upstream text service into an always-valid analysis result.

    Models are tried one after another in preference order. The first model
    that answers at all wins, even when its answer has to be patched with
    mock data.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        models: Sequence[str] = DEFAULT_GEMINI_MODELS,
        generator: TextGenerator | None = None,
        mock_factory: MockFactory = generate_mock_analysis,
        log_text_max_chars: int = 200,
    ):
        self._api_key = (api_key or "").strip() or None
        self._models = tuple(models)
        self._generator = generator
        self._mock_factory = mock_factory
        self._log_text_max_chars = log_text_max_chars

    @classmethod
    def from_settings(cls, cfg: Settings) -> "AnalysisResolver":
        return cls(
            cfg.gemini_api_key,
            models=cfg.gemini_models,
            generator=get_text_generator(cfg),
            log_text_max_chars=cfg.log_text_max_chars,
        )

    @property
    def upstream_configured(self) -> bool:
        return self._api_key is not None

    async def resolve(self, filename: str) -> dict[str, Any]:
        try:
            return await self._resolve(filename)
        except Exception as exc:  # noqa: BLE001 - callers always get a result
            logger.exception("analysis_resolve_failed file=%s: %s", filename, exc)
            return self._mock_factory(GENERIC_FILENAME)

    async def _resolve(self, filename: str) -> dict[str, Any]:
        if not self.upstream_configured:
            logger.info("analysis_mock_only reason=no_api_key file=%s", filename)
            return self._mock_factory(filename)
        if self._generator is None:
            raise RuntimeError("Upstream credential is set but no text generator is configured.")

        for model in self._models:
            logger.info("analysis_model_attempt model=%s", model)
            try:
                text = await self._generator.generate(model, ANALYSIS_PROMPT)
            except ProviderError as exc:
                logger.warning("analysis_model_failed model=%s status=%s: %s", model, exc.status_code, exc)
                continue
            except Exception as exc:  # noqa: BLE001 - any model failure moves to the next model
                logger.warning("analysis_model_failed model=%s error=%s: %s", model, type(exc).__name__, exc)
                continue

            logger.info("analysis_model_succeeded model=%s text_len=%s", model, len(text or ""))
            return self._from_text(text, filename, model)

        logger.warning("analysis_all_models_failed models=%s", ",".join(self._models))
        result = self._mock_factory(filename)
        result["aiAnalysis"] += ENHANCED_FALLBACK_SUFFIX
        return result

    def _from_text(self, text: str | None, filename: str, model: str) -> dict[str, Any]:
        try:
            if text is None:
                raise AnalysisParseError("Response carried no text candidate.")
            parsed = extract_json_object(text)
            if parsed is None:
                raise AnalysisParseError("No JSON found in response.")
        except AnalysisParseError as exc:
            excerpt = (text or "")[: self._log_text_max_chars]
            logger.warning("analysis_parse_failed model=%s: %s excerpt=%r", model, exc, excerpt)
            result = self._mock_factory(filename)
            result["aiAnalysis"] = AI_ANALYSIS_PREFIX + ((text or "")[:AI_EXCERPT_MAX_CHARS] or AI_ANALYSIS_PLACEHOLDER)
            return result

        return backfill_analysis_fields(parsed, self._mock_factory(""))
