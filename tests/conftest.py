"""Shared fixtures: settings without real credentials and canned Gemini payloads."""

import json

import httpx
import pytest

from autowriter.config import Settings
from autowriter.models.generation import GenerationRequest
from autowriter.services.gemini_service import ModelTier


def gemini_payload(text: str, finish_reason: str = "STOP") -> dict:
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": finish_reason,
            }
        ]
    }


def gemini_response(text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=gemini_payload(text))


ARTICLE_JSON = json.dumps(
    {
        "refinedTags": ["coffee", "history", "culture"],
        "titleSelection": ["The Bean That Built Cities", "Brewing Empires", "A Cup of History"],
        "subtitleSelection": ["How coffee shaped trade", "From Ethiopia to Europe", "A global ritual"],
        "content": "## The Bean\n\nCoffee travelled from the highlands of Ethiopia to every port.",
    }
)


def outline_json(count: int, numbers=None) -> str:
    numbers = numbers or list(range(1, count + 1))
    return json.dumps(
        {
            "titleSelection": ["The Signal", "Night Watch", "Static"],
            "synopsis": "An astronomer hears something that should not be there.",
            "outline": [
                {"chapterNumber": n, "title": f"Part {i + 1}", "subtitle": f"Events of part {i + 1}"}
                for i, n in enumerate(numbers[:count])
            ],
        }
    )


class FakeGenerator:
    """Stands in for GeminiClient; answers from a queue of texts or exceptions."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls: list[tuple[str, str, ModelTier]] = []

    async def generate(self, prompt: str, api_key: str, tier: ModelTier = ModelTier.FAST) -> str:
        self.calls.append((prompt, api_key, tier))
        answer = self.answers.pop(0) if len(self.answers) > 1 else self.answers[0]
        if isinstance(answer, BaseException):
            raise answer
        return answer


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def test_settings():
    return Settings(
        gemini_api_key="",
        gemini_base_url="https://gemini.test/v1beta",
        fast_timeout_seconds=5.0,
        pro_timeout_seconds=5.0,
        max_retries=3,
        retry_base_delay_seconds=1.0,
    )


@pytest.fixture
def sleep():
    return SleepRecorder()


@pytest.fixture
def article_request():
    return GenerationRequest(
        topic="The history of coffee",
        author_style="Bill Bryson",
        content_type="article",
        language="english",
        tags=["coffee", "history"],
    )


@pytest.fixture
def novel_request():
    return GenerationRequest(
        topic="A signal from deep space",
        author_style="Arthur C. Clarke",
        content_type="novel",
        chapter_count=3,
        language="english",
    )

