import logging

from promptvideo.config import settings
from promptvideo.services.http_clients import get_openai_client

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a creative assistant that enhances video generation prompts. "
    "Make the prompt more detailed and descriptive for better video generation results. "
    "Focus on visual elements, lighting, atmosphere, and actions. "
    "Keep the enhanced prompt concise but rich in detail."
)

USER_TEMPLATE = 'Enhance this video generation prompt: "{prompt}"'


def enhance_prompt(prompt: str) -> str:
    """Rewrite ``prompt`` into a more visually descriptive video prompt.

    Never raises: any failure (missing key, network error, malformed or
    empty completion) is logged and the original prompt is returned so
    video generation can still go ahead.
    """
    try:
        client = get_openai_client()
        response = client.chat.completions.create(
            model=settings.openai_model,
            messages=[
                {"role": "system", "content": SYSTEM_INSTRUCTION},
                {"role": "user", "content": USER_TEMPLATE.format(prompt=prompt)},
            ],
            max_tokens=settings.enhance_max_tokens,
        )
        enhanced = (response.choices[0].message.content or "").strip()
    except Exception:
        logger.warning("Prompt enhancement failed, using original prompt", exc_info=True)
        return prompt

    if not enhanced:
        logger.warning("Prompt enhancement returned empty output, using original prompt")
        return prompt
    return enhanced
