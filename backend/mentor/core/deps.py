import logging
import os
from functools import lru_cache
from supabase import create_client, Client
from openai import OpenAI
from mentor.core.config import Settings, get_settings

_prompt_logger = logging.getLogger("mentor.llm_prompts")

_GEMINI_MODEL = "gemini-2.5-flash"


@lru_cache
def get_supabase_client() -> Client:
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_service_key:
        raise RuntimeError("Supabase settings missing")
    return create_client(settings.supabase_url, settings.supabase_service_key)


# ── Gemini adapter: OpenAI chat.completions surface ─────────────────────────
# AIService only ever calls client.chat.completions.create(...), so evaluation
# code is identical for both providers.

class _Message:
    def __init__(self, content: str):
        self.content = content


class _Choice:
    def __init__(self, content: str):
        self.message = _Message(content)


class _Completion:
    def __init__(self, text: str):
        self.choices = [_Choice(text)]


class _GeminiCompletions:
    def __init__(self, api_key: str):
        self._api_key = api_key

    def create(
        self,
        model=None,
        messages=None,
        temperature=0.3,
        max_tokens=None,
        **kwargs,
    ):
        from google import genai
        from google.genai import types

        system_text = "\n\n".join(
            m["content"] for m in (messages or []) if m.get("role") == "system"
        ) or None
        user_text = "\n\n".join(
            m["content"] for m in (messages or []) if m.get("role") != "system"
        )

        if os.environ.get("DEBUG_LLM_PROMPTS", "").lower() in ("1", "true"):
            _prompt_logger.warning(
                "gemini prompt\n── SYSTEM ──\n%s\n── USER ──\n%s\n── temp=%s max_tokens=%s",
                system_text or "(none)",
                user_text,
                temperature,
                max_tokens or 500,
            )

        client = genai.Client(api_key=self._api_key)
        config = types.GenerateContentConfig(
            system_instruction=system_text,
            temperature=temperature,
            max_output_tokens=max_tokens or 500,
            response_mime_type="application/json",
        )
        response = client.models.generate_content(
            model=_GEMINI_MODEL,
            contents=user_text,
            config=config,
        )
        return _Completion(response.text or "")


class _GeminiChat:
    def __init__(self, api_key: str):
        self.completions = _GeminiCompletions(api_key)


class GeminiClientAdapter:
    def __init__(self, api_key: str):
        self.chat = _GeminiChat(api_key)


def get_llm_client(settings: Settings | None = None):
    """Return the active LLM client based on llm_provider setting."""
    if settings is None:
        settings = get_settings()
    if settings.llm_provider == "gemini":
        return GeminiClientAdapter(api_key=settings.gemini_api_key)
    return OpenAI(api_key=settings.openai_api_key)
