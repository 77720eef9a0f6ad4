import json

import httpx
import pytest

from conftest import FakeGenerator, make_pet, make_user
from pawconnect.services.gemini import GeminiRecommendationGenerator, fallback_recommendations
from pawconnect.services.recommendations import RecommendationService, health_tips_from


@pytest.fixture
def pet(storage):
    owner = make_user(storage)
    return make_pet(storage, owner.id)


class TestRecommendationService:
    def test_unknown_pet(self, storage, generator):
        service = RecommendationService(storage, generator)
        assert service.get_or_generate(404) is None
        assert generator.calls == []

    def test_first_call_generates_and_caches(self, storage, generator, pet):
        service = RecommendationService(storage, generator)

        first = service.get_or_generate(pet.id)
        second = service.get_or_generate(pet.id)

        assert len(generator.calls) == 1
        assert generator.calls[0] == ("Rex", "Beagle", 3, "Male", "Dog")
        assert first == second
        assert storage.get_pet(pet.id).ai_recommendations["breeding_advice"]["optimal_age"] == "call 1"

    def test_regenerate_flag_replaces_document(self, storage, generator, pet):
        service = RecommendationService(storage, generator)
        service.get_or_generate(pet.id)

        document = service.get_or_generate(pet.id, regenerate=True)

        assert len(generator.calls) == 2
        assert document.breeding_advice.optimal_age == "call 2"
        assert storage.get_pet(pet.id).ai_recommendations["breeding_advice"]["optimal_age"] == "call 2"

    def test_always_regenerate_ignores_cache(self, storage, generator, pet):
        service = RecommendationService(storage, generator, always_regenerate=True)
        service.get_or_generate(pet.id)
        service.get_or_generate(pet.id)

        assert len(generator.calls) == 2

    def test_malformed_cache_is_regenerated(self, storage, generator, pet):
        storage.update_pet(pet.id, {"ai_recommendations": {"training_plan": "nope"}})

        document = RecommendationService(storage, generator).get_or_generate(pet.id)

        assert document.breeding_advice.optimal_age == "call 1"

    def test_failing_generator_falls_back(self, storage, pet):
        document = RecommendationService(storage, FakeGenerator(fail=True)).get_or_generate(pet.id)

        assert document == fallback_recommendations()
        assert storage.get_pet(pet.id).ai_recommendations is not None

    def test_enrich_new_pet_sets_health_tips_and_diet(self, storage, generator, pet):
        enriched = RecommendationService(storage, generator).enrich_new_pet(pet.id)

        assert len(enriched.health_tips) == 5
        assert enriched.health_tips[0] == "Training: sit, stay, come, down"
        assert enriched.diet_recommendations == "High-quality protein; Age-appropriate portions"
        assert enriched.ai_recommendations is not None


def test_health_tips_cover_each_section():
    tips = health_tips_from(fallback_recommendations())
    assert [t.split(":")[0] for t in tips] == [
        "Training",
        "Exercise",
        "Nutrition",
        "Health monitoring",
        "Breeding age",
    ]


def _gemini_reply(document: dict) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": json.dumps(document)}]}}]}


class TestGeminiGenerator:
    def test_parses_structured_reply(self):
        expected = fallback_recommendations()
        expected.care_guidelines.exercise_requirements = "Two long walks"
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_gemini_reply(expected.model_dump()))

        generator = GeminiRecommendationGenerator(
            api_key="test-key", base_url="https://gemini.test/v1beta/", transport=httpx.MockTransport(handler)
        )
        document = generator.generate("Rex", "Beagle", 3, "Male")

        assert document == expected
        assert seen["url"] == "https://gemini.test/v1beta/models/gemini-2.5-pro:generateContent"
        assert seen["key"] == "test-key"
        assert seen["body"]["generationConfig"]["responseMimeType"] == "application/json"
        assert "Beagle" in seen["body"]["contents"][0]["parts"][0]["text"]

    def test_missing_key_uses_fallback_without_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        generator = GeminiRecommendationGenerator(api_key="", transport=httpx.MockTransport(handler))
        assert generator.generate("Rex", "Beagle", 3, "Male") == fallback_recommendations()

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, json={"error": "boom"}),
            httpx.Response(200, json={"candidates": []}),
            httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "not json"}]}}]}),
            httpx.Response(200, json=_gemini_reply({"training_plan": {}})),
        ],
    )
    def test_bad_replies_fall_back(self, response):
        generator = GeminiRecommendationGenerator(
            api_key="test-key", transport=httpx.MockTransport(lambda request: response)
        )
        assert generator.generate("Rex", "Beagle", 3, "Male") == fallback_recommendations()
