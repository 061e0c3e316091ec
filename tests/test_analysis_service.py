import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.ai.exceptions import ProviderError  # noqa: E402
from app.ai.prompts import ANALYSIS_PROMPT  # noqa: E402
from app.schemas.analysis import ANALYSIS_FIELDS  # noqa: E402
from app.services.analysis_service import (  # noqa: E402
    ENHANCED_FALLBACK_SUFFIX,
    AnalysisResolver,
)

MODELS = ("model-a", "model-b", "model-c")


def fixed_mock(filename: str) -> dict:
    return {
        "overallScore": 80,
        "atsScore": 75,
        "keywordsScore": 83,
        "readabilityScore": 87,
        "missingKeywords": ["React", "AWS"],
        "suggestions": [{"title": "Mock", "description": "Mock suggestion."}],
        "aiAnalysis": f"Analysis of {filename}: mock.",
    }


class ScriptedGenerator:
    """Replays one outcome per model: a string, None, or an exception to raise."""

    def __init__(self, outcomes: dict):
        self.outcomes = outcomes
        self.calls: list[tuple[str, str]] = []

    async def generate(self, model: str, prompt: str):
        self.calls.append((model, prompt))
        outcome = self.outcomes.get(model, ProviderError("unknown model", model=model, status_code=404))
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class AnalysisResolverTests(unittest.IsolatedAsyncioTestCase):
    def _resolver(self, outcomes: dict, api_key: str | None = "test-key") -> tuple[AnalysisResolver, ScriptedGenerator]:
        generator = ScriptedGenerator(outcomes)
        resolver = AnalysisResolver(api_key, models=MODELS, generator=generator, mock_factory=fixed_mock)
        return resolver, generator

    async def test_without_credential_returns_mock_and_skips_upstream(self):
        resolver, generator = self._resolver({"model-a": "{}"}, api_key=None)
        result = await resolver.resolve("resume.pdf")
        self.assertEqual(result, fixed_mock("resume.pdf"))
        self.assertEqual(generator.calls, [])
        self.assertFalse(resolver.upstream_configured)

    async def test_default_mock_generator_keeps_score_ranges(self):
        resolver = AnalysisResolver(None)
        for _ in range(20):
            result = await resolver.resolve("resume.pdf")
            self.assertEqual(tuple(result.keys()), ANALYSIS_FIELDS)
            self.assertTrue(75 <= result["overallScore"] <= 94)
            self.assertEqual(result["readabilityScore"], result["overallScore"] + 7)

    async def test_falls_through_failed_models_in_order(self):
        payload = {
            "overallScore": 66,
            "atsScore": 60,
            "keywordsScore": 58,
            "readabilityScore": 71,
            "missingKeywords": ["Go"],
            "suggestions": [{"title": "Trim", "description": "Keep it to one page."}],
            "aiAnalysis": "Needs work.",
        }
        resolver, generator = self._resolver(
            {
                "model-a": ProviderError("quota exceeded", model="model-a", status_code=429),
                "model-b": "```json\n" + json.dumps(payload) + "\n```",
                "model-c": json.dumps({"overallScore": 1}),
            }
        )
        result = await resolver.resolve("resume.pdf")
        self.assertEqual(result, payload)
        self.assertEqual([model for model, _ in generator.calls], ["model-a", "model-b"])
        self.assertTrue(all(prompt == ANALYSIS_PROMPT for _, prompt in generator.calls))

    async def test_partial_json_is_backfilled(self):
        resolver, _ = self._resolver({"model-a": 'Result: {"overallScore": 90, "aiAnalysis": "Strong."}'})
        result = await resolver.resolve("resume.pdf")
        self.assertEqual(result["overallScore"], 90)
        self.assertEqual(result["atsScore"], 85)
        self.assertEqual(result["keywordsScore"], 93)
        self.assertEqual(result["readabilityScore"], 95)
        self.assertEqual(result["aiAnalysis"], "Strong.")
        self.assertEqual(result["missingKeywords"], ["React", "AWS"])

    async def test_free_text_response_becomes_marked_mock(self):
        text = "This resume is great. " * 50
        resolver, generator = self._resolver({"model-a": text, "model-b": "{}"})
        result = await resolver.resolve("resume.pdf")
        self.assertTrue(result["aiAnalysis"].startswith("AI Analysis: "))
        self.assertEqual(result["aiAnalysis"], "AI Analysis: " + text[:500])
        self.assertEqual(result["overallScore"], 80)
        self.assertEqual(len(generator.calls), 1)

    async def test_malformed_json_becomes_marked_mock(self):
        resolver, _ = self._resolver({"model-a": '{"overallScore": 80,,}'})
        result = await resolver.resolve("resume.pdf")
        self.assertEqual(result["aiAnalysis"], 'AI Analysis: {"overallScore": 80,,}')

    async def test_missing_text_uses_placeholder(self):
        resolver, _ = self._resolver({"model-a": None})
        result = await resolver.resolve("resume.pdf")
        self.assertEqual(result["aiAnalysis"], "AI Analysis: Generated comprehensive resume review.")

    async def test_all_models_failing_returns_enhanced_fallback(self):
        resolver, generator = self._resolver({})
        result = await resolver.resolve("resume.pdf")
        self.assertTrue(result["aiAnalysis"].endswith(ENHANCED_FALLBACK_SUFFIX))
        self.assertTrue(result["aiAnalysis"].startswith("Analysis of resume.pdf: "))
        self.assertEqual([model for model, _ in generator.calls], list(MODELS))

    async def test_non_provider_error_moves_to_next_model(self):
        resolver, generator = self._resolver(
            {
                "model-a": ValueError("bad request url"),
                "model-b": '{"overallScore": 70}',
            }
        )
        result = await resolver.resolve("resume.pdf")
        self.assertEqual([model for model, _ in generator.calls], ["model-a", "model-b"])
        self.assertEqual(result["overallScore"], 70)
        self.assertEqual(result["atsScore"], 65)
        self.assertEqual(result["aiAnalysis"], "Analysis of : mock.")

    async def test_mixed_model_errors_end_in_enhanced_fallback(self):
        resolver, generator = self._resolver(
            {
                "model-a": RuntimeError("boom"),
                "model-b": ProviderError("quota exceeded", model="model-b", status_code=429),
                "model-c": KeyError("candidates"),
            }
        )
        result = await resolver.resolve("resume.pdf")
        self.assertEqual(len(generator.calls), 3)
        self.assertEqual(result["aiAnalysis"], "Analysis of resume.pdf: mock." + ENHANCED_FALLBACK_SUFFIX)

    async def test_failing_mock_factory_falls_back_to_generic_mock(self):
        calls: list[str] = []

        def flaky_mock(filename: str) -> dict:
            calls.append(filename)
            if filename != "resume":
                raise RuntimeError("template error")
            return fixed_mock(filename)

        resolver = AnalysisResolver(None, models=MODELS, mock_factory=flaky_mock)
        result = await resolver.resolve("resume.pdf")
        self.assertEqual(result, fixed_mock("resume"))
        self.assertEqual(calls, ["resume.pdf", "resume"])

    async def test_credential_without_generator_returns_generic_mock(self):
        resolver = AnalysisResolver("test-key", models=MODELS, generator=None, mock_factory=fixed_mock)
        result = await resolver.resolve("resume.pdf")
        self.assertEqual(result, fixed_mock("resume"))


if __name__ == "__main__":
    unittest.main()
