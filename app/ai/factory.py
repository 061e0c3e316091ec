from app.ai.config import load_generation_config
from app.ai.providers.gemini_provider import GeminiProvider
from app.ai.types import TextGenerator
from app.core.config import Settings


def get_text_generator(cfg: Settings) -> TextGenerator | None:
    if not cfg.gemini_api_key:
        return None
    return GeminiProvider(api_key=cfg.gemini_api_key, config=load_generation_config(cfg))
