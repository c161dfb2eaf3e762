"""Tests for request and result models."""

import pytest
from pydantic import ValidationError

from autowriter.models.gemini import GeminiResponse
from autowriter.models.generation import MAX_CHAPTERS, ArticleResult, GenerationRequest


BASE = {"topic": "Tides", "authorStyle": "Rachel Carson", "language": "english"}


class TestGenerationRequest:
    def test_camel_case_payload(self):
        request = GenerationRequest.model_validate({**BASE, "contentType": "article", "mainIdea": "Moon pull"})

        assert request.content_type == "article"
        assert request.author_style == "Rachel Carson"
        assert request.main_idea == "Moon pull"

    def test_novel_requires_chapter_count(self):
        with pytest.raises(ValidationError, match="chapterCount is required for novel type"):
            GenerationRequest.model_validate({**BASE, "contentType": "novel"})

    @pytest.mark.parametrize("count", [0, MAX_CHAPTERS + 1])
    def test_chapter_count_bounds(self, count):
        with pytest.raises(ValidationError):
            GenerationRequest.model_validate({**BASE, "contentType": "novel", "chapterCount": count})

    def test_unknown_content_type_is_rejected(self):
        with pytest.raises(ValidationError):
            GenerationRequest.model_validate({**BASE, "contentType": "poem"})

    def test_blank_topic_is_rejected(self):
        with pytest.raises(ValidationError):
            GenerationRequest.model_validate({**BASE, "topic": "   ", "contentType": "article"})


class TestArticleResult:
    RESULT = {"refinedTags": ["sea"], "titleSelection": ["Tides"], "subtitleSelection": ["Moon and water"]}

    def test_content_is_kept_verbatim(self):
        content = "\n  ## Tides\n\n    indented code\n"

        result = ArticleResult.model_validate({**self.RESULT, "content": content})

        assert result.content == content

    def test_blank_content_is_rejected(self):
        with pytest.raises(ValidationError):
            ArticleResult.model_validate({**self.RESULT, "content": " \n\t "})

    def test_empty_title_list_is_rejected(self):
        with pytest.raises(ValidationError):
            ArticleResult.model_validate({**self.RESULT, "titleSelection": [], "content": "Text"})


class TestGeminiResponse:
    def test_unknown_fields_are_ignored(self):
        payload = {
            "candidates": [
                {
                    "content": {"parts": [{"text": "hi"}], "role": "model"},
                    "finishReason": "STOP",
                    "safetyRatings": [],
                }
            ],
            "usageMetadata": {"totalTokenCount": 3},
        }

        response = GeminiResponse.model_validate(payload)

        assert response.candidates[0].text == "hi"
        assert not response.candidates[0].is_blocked

    def test_candidate_without_content_has_empty_text(self):
        response = GeminiResponse.model_validate({"candidates": [{"finishReason": "RECITATION"}]})

        assert response.candidates[0].text == ""
        assert response.candidates[0].is_blocked
