import logging
from dataclasses import dataclass

from promptvideo.services import pixverse_service, prompt_enhancer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOutcome:
    video_url: str
    enhanced_prompt: str


def generate_video(prompt: str) -> GenerationOutcome:
    """Enhance ``prompt``, submit it to Pixverse and block until the video URL is ready.

    Upstream and timeout errors from Pixverse propagate to the caller.
    """
    enhanced_prompt = prompt_enhancer.enhance_prompt(prompt)
    logger.info("Enhanced prompt: %s", enhanced_prompt)

    job = pixverse_service.submit_video(enhanced_prompt)
    logger.info("Video generation started with ID: %s", job.id)

    video_url = pixverse_service.wait_for_video(job.id)
    logger.info("Video URL: %s", video_url)

    return GenerationOutcome(video_url=video_url, enhanced_prompt=enhanced_prompt)
