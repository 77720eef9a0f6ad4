"""Pet-care recommendations cached on the pet record."""

import logging
from typing import Protocol

from pydantic import ValidationError

from pawconnect.schemas import Pet, RecommendationDocument
from pawconnect.services.gemini import fallback_recommendations
from pawconnect.storage import Storage

logger = logging.getLogger(__name__)


class RecommendationGenerator(Protocol):
    def generate(self, name: str, breed: str, age: int, gender: str, species: str = "dog") -> RecommendationDocument: ...


def health_tips_from(document: RecommendationDocument) -> list[str]:
    return [
        f"Training: {', '.join(document.training_plan.basic_commands)}",
        f"Exercise: {document.care_guidelines.exercise_requirements}",
        f"Nutrition: {', '.join(document.care_guidelines.nutrition_tips)}",
        f"Health monitoring: {', '.join(document.medical_recommendations.common_health_issues)}",
        f"Breeding age: {document.breeding_advice.optimal_age}",
    ]


class RecommendationService:
    """
    Stores the generator's document on Pet.ai_recommendations and serves it
    from there on later reads, unless regeneration is forced globally
    (always_regenerate) or per call.
    """

    def __init__(self, storage: Storage, generator: RecommendationGenerator, always_regenerate: bool = False):
        self.storage = storage
        self.generator = generator
        self.always_regenerate = always_regenerate

    def get_or_generate(self, pet_id: int, regenerate: bool = False) -> RecommendationDocument | None:
        pet = self.storage.get_pet(pet_id)
        if pet is None:
            return None

        if pet.ai_recommendations and not (regenerate or self.always_regenerate):
            try:
                return RecommendationDocument.model_validate(pet.ai_recommendations)
            except ValidationError:
                logger.warning("Stored recommendations for pet %s are malformed, regenerating", pet_id)

        document = self._generate(pet)
        self.storage.update_pet(pet_id, {"ai_recommendations": document.model_dump(mode="json")})
        return document

    def enrich_new_pet(self, pet_id: int) -> Pet | None:
        """Attach recommendations plus the derived health tips and diet line to a pet."""
        document = self.get_or_generate(pet_id)
        if document is None:
            return None

        return self.storage.update_pet(
            pet_id,
            {
                "health_tips": health_tips_from(document),
                "diet_recommendations": "; ".join(document.care_guidelines.nutrition_tips),
            },
        )

    def _generate(self, pet: Pet) -> RecommendationDocument:
        try:
            return self.generator.generate(
                name=pet.name,
                breed=pet.breed,
                age=pet.age,
                gender=pet.gender,
                species=pet.species or "dog",
            )
        except Exception:
            # Generators other than Gemini may still raise.
            logger.error("Recommendation generator failed for pet %s", pet.id, exc_info=True)
            return fallback_recommendations()
