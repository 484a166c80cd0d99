"""Schemas for AI-generated roadmaps, suggestions, career paths and mentor chat."""

from datetime import datetime
from typing import List, Literal, Optional

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator

from .roadmaps import RoadmapNode
from .usage import UsageStatus


class _Embedded(BaseModel):
    """Base for entries embedded in the user document."""

    id: PydanticObjectId = Field(default_factory=PydanticObjectId)
    created_at: datetime = Field(default_factory=datetime.utcnow)


# Roadmap generation
class GenerateRoadmapRequest(BaseModel):
    input: str = Field(..., min_length=1, description="Topic to learn")
    timeframe: str = Field(..., min_length=1)
    level: str = Field(..., min_length=1)
    context_info: Optional[str] = Field(None, alias="contextInfo")

    model_config = ConfigDict(populate_by_name=True)


class GeneratedRoadmap(_Embedded):
    title: str
    roadmap: RoadmapNode


class GenerateRoadmapResponse(BaseModel):
    roadmap: RoadmapNode
    roadmap_id: PydanticObjectId = Field(..., serialization_alias="roadmapId")
    usage_info: UsageStatus = Field(..., serialization_alias="usageInfo")
    ai_feedback: str = Field("", serialization_alias="aiFeedback")

    model_config = ConfigDict(populate_by_name=True)


# AI suggestions
class SuggestionAnswers(BaseModel):
    """Questionnaire answers the suggestion prompt is built from."""

    career_goals: str = Field(..., min_length=1, alias="careerGoals")
    experience: str = Field(..., min_length=1)
    learning_style: str = Field(..., min_length=1, alias="learningStyle")
    time_commitment: str = Field(..., min_length=1, alias="timeCommitment")
    current_knowledge: List[str] = Field(default_factory=list, alias="currentKnowledge")
    preference: str = ""

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("current_knowledge", mode="before")
    @classmethod
    def _split_knowledge(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class SuggestionRequest(BaseModel):
    answers: SuggestionAnswers


class SavedSuggestion(_Embedded):
    answers: SuggestionAnswers
    roadmap: str


class SuggestionResponse(BaseModel):
    roadmap: str
    suggestion_id: PydanticObjectId = Field(..., serialization_alias="suggestionId")
    usage_info: UsageStatus = Field(..., serialization_alias="usageInfo")

    model_config = ConfigDict(populate_by_name=True)


# Career track
class CareerPathInputs(BaseModel):
    current_skills: List[str] = Field(default_factory=list, alias="currentSkills")
    career_goal: str = Field("", alias="careerGoal")
    hours_per_week: str = Field("10-20", alias="hoursPerWeek")
    career_stage: str = Field("", alias="careerStage")
    education_level: str = Field("", alias="educationLevel")
    currently_studying: str = Field("No", alias="currentlyStudying")
    graduation_year: str = Field("", alias="graduationYear")
    major: str = ""
    work_experience: str = Field("", alias="workExperience")
    previous_industry: str = Field("", alias="previousIndustry")
    previous_role: str = Field("", alias="previousRole")
    current_company: str = Field("", alias="currentCompany")
    current_role: str = Field("", alias="currentRole")
    years_of_experience: str = Field("", alias="yearsOfExperience")
    internship_experience: str = Field("", alias="internshipExperience")
    job_search_status: str = Field("", alias="jobSearchStatus")
    current_industry: str = Field("", alias="currentIndustry")
    promotion_timeframe: str = Field("", alias="promotionTimeframe")
    switch_reason: str = Field("", alias="switchReason")
    tech_education: str = Field("", alias="techEducation")
    goal_timeframe: str = Field("", alias="goalTimeframe")
    learning_preference: str = Field("", alias="learningPreference")

    model_config = ConfigDict(populate_by_name=True)

    def missing_required(self) -> Optional[str]:
        """Return the first missing required field message, if any."""
        if not self.current_skills:
            return "At least one skill is required"
        if not self.career_goal:
            return "Career goal is required"
        if not self.career_stage:
            return "Career stage is required"
        if not self.education_level:
            return "Education level is required"
        return None


class CareerStep(BaseModel):
    title: str = Field(..., min_length=1)
    time_to_achieve: int = Field(..., ge=0, alias="timeToAchieve")
    required_skills: List[str] = Field(..., alias="requiredSkills")
    description: str = Field(..., min_length=1)
    learning_resources: List[str] = Field(..., alias="learningResources")
    ai_feedback: Optional[str] = Field(None, alias="aiFeedback")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("time_to_achieve", mode="before")
    @classmethod
    def _reject_non_numbers(cls, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("timeToAchieve must be a number of months")
        return value


class CareerPlan(RootModel[List[CareerStep]]):
    """Validated career path as returned by the model: a non-empty list of steps."""

    root: List[CareerStep] = Field(..., min_length=1)

    @property
    def steps(self) -> List[CareerStep]:
        return self.root

    @model_validator(mode="after")
    def _first_step_has_feedback(self) -> "CareerPlan":
        if not self.root[0].ai_feedback:
            raise ValueError("First step must include aiFeedback")
        return self


class SavedCareerPath(_Embedded):
    inputs: CareerPathInputs
    career_path: List[CareerStep]


class CareerPathResponse(BaseModel):
    career_path: List[CareerStep] = Field(..., serialization_alias="careerPath")
    career_path_id: PydanticObjectId = Field(..., serialization_alias="careerPathId")
    message: str = "Career path generated successfully"

    model_config = ConfigDict(populate_by_name=True)


# Mentor chat
class ChatMessage(BaseModel):
    type: Literal["user", "ai"] = "user"
    content: str


class MentorChatRequest(BaseModel):
    message: str = ""
    conversation_history: List[ChatMessage] = Field(default_factory=list, alias="conversationHistory")

    model_config = ConfigDict(populate_by_name=True)


class MentorChatResponse(BaseModel):
    success: bool = True
    response: str
    usage: UsageStatus
