from mentor.core.config import get_settings
from mentor.core.deps import get_llm_client


class AIService:
    def __init__(self, client=None, model: str | None = None):
        settings = get_settings()
        self.client = client or get_llm_client(settings)
        self.model = model or settings.openai_model_evaluate

    def generate_completion(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 500,
        json_mode: bool = True,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

        return response.choices[0].message.content or ""
