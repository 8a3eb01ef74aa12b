"""Text-generation collaborators for the generative plan path.

`TextGenerator.generate(prompt) -> str` is the only contract the adapter
relies on. `GeminiTextGenerator` implements it with google-generativeai;
every failure (network, auth, timeout, empty response) surfaces as a
`GenerationError`.
"""

from typing import Optional

import google.generativeai as genai

from core import config
from core.exceptions import GenerationError
from core.logger import get_logger

logger = get_logger("services.text_generator")


class TextGenerator:
    """Interface for anything that turns a prompt into raw text."""

    def generate(self, prompt: str) -> str:
        raise NotImplementedError


class GeminiTextGenerator(TextGenerator):
    """Gemini-backed generator with a per-call timeout and a single attempt."""

    def __init__(self, api_key: str, model_name: str = config.GEMINI_MODEL,
                 timeout: float = config.GENERATION_TIMEOUT_SECONDS,
                 temperature: float = 0.4, max_output_tokens: int = 8192):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.model = genai.GenerativeModel(model_name)
        self.timeout = timeout
        self.generation_config = genai.types.GenerationConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )

    def generate(self, prompt: str) -> str:
        logger.debug("Sending %s-char prompt to %s", len(prompt), self.model_name)
        try:
            response = self.model.generate_content(
                prompt,
                generation_config=self.generation_config,
                request_options={"timeout": self.timeout},
            )
            text = response.text
        except Exception as exc:
            raise GenerationError(f"Text generation failed: {exc}", cause=exc) from exc
        if not text or not text.strip():
            raise GenerationError("Text generator returned an empty response")
        return text


def get_text_generator() -> Optional[TextGenerator]:
    """Return the configured generator, or None when the generative path is off."""
    if not config.USE_GENERATIVE_PLANS:
        logger.info("Generative plans disabled by configuration")
        return None
    if not config.GEMINI_API_KEY:
        logger.info("No Gemini API key configured; using deterministic plans only")
        return None
    return GeminiTextGenerator(config.GEMINI_API_KEY)
