"""Module: gemini."""

import logging

import httpx
from pydantic import ValidationError

from pawconnect.core.config import settings
from pawconnect.schemas.recommendation import (
    BreedingAdvice,
    CareGuidelines,
    MedicalRecommendations,
    RecommendationDocument,
    TrainingPlan,
)

logger = logging.getLogger(__name__)


def _string_list() -> dict:
    return {"type": "ARRAY", "items": {"type": "STRING"}}


# Structured-output schema sent with every request (Gemini OpenAPI subset).
RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "training_plan": {
            "type": "OBJECT",
            "properties": {
                "basic_commands": _string_list(),
                "weekly_schedule": _string_list(),
                "tips": _string_list(),
            },
            "required": ["basic_commands", "weekly_schedule", "tips"],
        },
        "breeding_advice": {
            "type": "OBJECT",
            "properties": {
                "optimal_age": {"type": "STRING"},
                "health_screening": _string_list(),
                "considerations": _string_list(),
            },
            "required": ["optimal_age", "health_screening", "considerations"],
        },
        "care_guidelines": {
            "type": "OBJECT",
            "properties": {
                "daily_routine": _string_list(),
                "nutrition_tips": _string_list(),
                "exercise_requirements": {"type": "STRING"},
                "health_monitoring": _string_list(),
            },
            "required": ["daily_routine", "nutrition_tips", "exercise_requirements", "health_monitoring"],
        },
        "medical_recommendations": {
            "type": "OBJECT",
            "properties": {
                "vaccination_schedule": _string_list(),
                "common_health_issues": _string_list(),
                "preventive_care": _string_list(),
            },
            "required": ["vaccination_schedule", "common_health_issues", "preventive_care"],
        },
    },
    "required": ["training_plan", "breeding_advice", "care_guidelines", "medical_recommendations"],
}


def fallback_recommendations() -> RecommendationDocument:
    """Generic document returned whenever the model cannot be reached or parsed."""
    return RecommendationDocument(
        training_plan=TrainingPlan(
            basic_commands=["sit", "stay", "come", "down"],
            weekly_schedule=["Daily 10-15 minute sessions", "Focus on one command per week"],
            tips=["Use positive reinforcement", "Keep sessions short and fun"],
        ),
        breeding_advice=BreedingAdvice(
            optimal_age="2-3 years old",
            health_screening=["Hip dysplasia", "Eye examination", "Genetic testing"],
            considerations=["Breed-specific health issues", "Temperament evaluation"],
        ),
        care_guidelines=CareGuidelines(
            daily_routine=["Morning walk", "Feeding schedule", "Evening playtime"],
            nutrition_tips=["High-quality protein", "Age-appropriate portions"],
            exercise_requirements="30-60 minutes daily",
            health_monitoring=["Weight checks", "Dental health", "Coat condition"],
        ),
        medical_recommendations=MedicalRecommendations(
            vaccination_schedule=["Core vaccines at 6-8 weeks", "Booster shots", "Annual check-ups"],
            common_health_issues=["Joint problems", "Dental issues", "Skin conditions"],
            preventive_care=["Regular vet visits", "Parasite prevention", "Dental care"],
        ),
    )


def build_prompt(name: str, breed: str, age: int, gender: str, species: str) -> str:
    return (
        f"Generate comprehensive care recommendations for a {age}-year-old {gender} {breed} "
        f"{species} named {name}.\n\n"
        "Please provide detailed, practical advice in the following areas:\n"
        "1. Training plan: basic commands appropriate for this breed and age, a weekly "
        "training schedule and breed-specific training tips.\n"
        "2. Breeding advice (if applicable): optimal breeding age, health screenings needed "
        "and important considerations for this breed.\n"
        "3. Daily care guidelines: daily routine, nutrition tips specific to breed and age, "
        "exercise requirements and a health monitoring checklist.\n"
        "4. Medical recommendations: vaccination schedule, common health issues for this "
        "breed and preventive care measures.\n\n"
        "Answer with JSON matching the provided response schema."
    )


class GeminiRecommendationGenerator:
    """
    Calls the Gemini generateContent REST endpoint and validates the JSON reply
    into a RecommendationDocument.

    generate() never raises: every failure is logged and answered with
    fallback_recommendations().
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-pro",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def generate(self, name: str, breed: str, age: int, gender: str, species: str = "dog") -> RecommendationDocument:
        if not self.api_key:
            logger.warning("GEMINI_API_KEY not configured, using fallback recommendations for %s", name)
            return fallback_recommendations()

        try:
            return self._request(build_prompt(name, breed, age, gender, species))
        except (httpx.HTTPError, ValidationError, ValueError, LookupError, TypeError) as exc:
            logger.error("Failed to generate pet care recommendations for %s: %s", name, exc, exc_info=True)
            return fallback_recommendations()

    def _request(self, prompt: str) -> RecommendationDocument:
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            r = client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key},
                json=payload,
            )
            r.raise_for_status()
            data = r.json()

        raw_json = data["candidates"][0]["content"]["parts"][0].get("text")
        if not raw_json:
            raise ValueError("Empty response from Gemini API")

        return RecommendationDocument.model_validate_json(raw_json)


def get_generator() -> GeminiRecommendationGenerator:
    return GeminiRecommendationGenerator(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.gemini_timeout_seconds,
    )
