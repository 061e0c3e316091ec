from dataclasses import dataclass

from app.core.config import Settings


@dataclass(frozen=True)
class GenerationConfig:
    base_url: str
    timeout_s: float
    temperature: float
    max_output_tokens: int


def load_generation_config(cfg: Settings) -> GenerationConfig:
    return GenerationConfig(
        base_url=cfg.gemini_base_url,
        timeout_s=cfg.gemini_timeout_s,
        temperature=cfg.gemini_temperature,
        max_output_tokens=cfg.gemini_max_output_tokens,
    )
