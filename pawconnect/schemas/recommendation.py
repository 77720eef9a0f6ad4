"""Module: recommendation schemas."""

from pydantic import BaseModel


class TrainingPlan(BaseModel):
    basic_commands: list[str]
    weekly_schedule: list[str]
    tips: list[str]


class BreedingAdvice(BaseModel):
    optimal_age: str
    health_screening: list[str]
    considerations: list[str]


class CareGuidelines(BaseModel):
    daily_routine: list[str]
    nutrition_tips: list[str]
    exercise_requirements: str
    health_monitoring: list[str]


class MedicalRecommendations(BaseModel):
    vaccination_schedule: list[str]
    common_health_issues: list[str]
    preventive_care: list[str]


# Generated care document stored as JSON on Pet.ai_recommendations.
class RecommendationDocument(BaseModel):
    training_plan: TrainingPlan
    breeding_advice: BreedingAdvice
    care_guidelines: CareGuidelines
    medical_recommendations: MedicalRecommendations
