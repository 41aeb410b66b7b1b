"""
Record schemas for console edits.

Each managed table has a pydantic model. `validate_record` reports every
violation with a JSON-pointer style field path so the console can highlight it.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, StrictBool, StrictInt, ValidationError

NonEmptyStr = Annotated[str, Field(min_length=1, strict=True)]
Text = Annotated[str, Field(strict=True)]
LinkId = Annotated[str, Field(strict=True, pattern=r"^[A-Za-z0-9-]{1,64}$")]


class SkillSet(BaseModel):
    id: NonEmptyStr
    name: NonEmptyStr
    skills: Annotated[List[NonEmptyStr], Field(min_length=1)]


class DeveloperRecord(BaseModel):
    """The single developer profile."""

    id: NonEmptyStr
    name: NonEmptyStr
    title: NonEmptyStr
    bio: NonEmptyStr
    email: EmailStr
    website: Optional[HttpUrl] = None
    github: Optional[HttpUrl] = None
    linkedin: Optional[HttpUrl] = None
    telegram: Optional[Text] = None
    location: Optional[Text] = None
    yearsOfExperience: Optional[Annotated[StrictInt, Field(ge=0)]] = None
    isActive: Optional[StrictBool] = None
    skillSets: List[SkillSet]

    model_config = ConfigDict(extra="allow")


class ArchitectureEntry(BaseModel):
    name: NonEmptyStr
    details: NonEmptyStr


class TechnicalShowcase(BaseModel):
    title: NonEmptyStr
    description: NonEmptyStr
    highlights: List[Text]


class ProjectRecord(BaseModel):
    """A portfolio project owned by the developer."""

    id: NonEmptyStr
    title: NonEmptyStr
    description: NonEmptyStr
    status: Literal["Active", "Completed", "Planned"]
    developerId: NonEmptyStr
    highlights: List[Text] = []
    tech: List[Text] = []
    techStack: List[Text] = []
    githubUrl: Optional[HttpUrl] = None
    liveUrl: Optional[HttpUrl] = None
    imageUrl: Optional[Text] = None
    startDate: Optional[Text] = None
    endDate: Optional[Text] = None
    featured: Optional[StrictBool] = None
    order: Optional[StrictInt] = None
    architecture: List[ArchitectureEntry] = []
    technicalShowcases: List[TechnicalShowcase] = []

    model_config = ConfigDict(extra="allow")


class ConversationMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: Text
    timestamp: StrictInt


class RecruiterRecord(BaseModel):
    """A recruiter profile, keyed by visitor link id."""

    linkId: LinkId
    companyName: NonEmptyStr
    recruiterName: NonEmptyStr
    context: Optional[Text] = None
    greeting: Optional[Text] = None
    message: Optional[Text] = None
    requiredSkills: List[Text] = []
    preferredSkills: List[Text] = []
    skills: List[Text] = []
    jobTitle: Optional[Text] = None
    jobDescription: Optional[Text] = None
    companyIndustry: Optional[Text] = None
    companySize: Optional[Text] = None
    conversationHistory: List[ConversationMessage] = []
    conversationStartedAt: Optional[StrictInt] = None
    lastInteractionAt: Optional[StrictInt] = None
    createdAt: Optional[StrictInt] = None
    updatedAt: Optional[StrictInt] = None

    model_config = ConfigDict(extra="allow")


RECORD_MODELS: Dict[str, Type[BaseModel]] = {
    "developer": DeveloperRecord,
    "projects": ProjectRecord,
    "recruiters": RecruiterRecord,
}


def _pointer(loc: tuple) -> str:
    return "/" + "/".join(str(part) for part in loc)


def validate_record(data_type: str, data: Any) -> Dict[str, Any]:
    """
    Validate a record against the schema for its table.

    Returns:
        {"valid": bool, "errors": [{"field", "message", "value"}]}
    """
    model = RECORD_MODELS.get(data_type)
    if model is None:
        return {
            "valid": False,
            "errors": [
                {
                    "field": "schema",
                    "message": f"No schema configured for data type: {data_type}",
                    "value": data_type,
                }
            ],
        }

    try:
        model.model_validate(data)
    except ValidationError as e:
        return {
            "valid": False,
            "errors": [
                {"field": _pointer(error["loc"]), "message": error["msg"], "value": error.get("input")}
                for error in e.errors()
            ],
        }
    return {"valid": True, "errors": []}
