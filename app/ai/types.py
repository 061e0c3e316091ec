from typing import Protocol


class TextGenerator(Protocol):
    async def generate(self, model: str, prompt: str) -> str | None: ...
