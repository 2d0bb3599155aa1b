from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys while keeping snake_case attributes.

    Numbers are accepted for text fields, e.g. a publication year of 2023.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


# Envelope
class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


# CV modules
class CVModule(str, Enum):
    basic_info = "basicInfo"
    education = "education"
    working = "working"
    project = "project"
    publications = "publications"
    leadership = "leadership"
    skills = "skills"


LIST_MODULES = frozenset({
    CVModule.education,
    CVModule.working,
    CVModule.project,
    CVModule.publications,
    CVModule.leadership,
})

# Basic info leads the document; the rest follow the order they were submitted in
EXPORT_LEADING_MODULE = CVModule.basic_info


class BasicInfo(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None


class EducationItem(CamelModel):
    degree: Optional[str] = None
    school: Optional[str] = None
    major: Optional[str] = None
    period: Optional[str] = None
    location: Optional[str] = None
    gpa: Optional[str] = None
    honors: List[str] = []
    relevant_coursework: List[str] = []
    status: Optional[str] = None


class WorkingItem(CamelModel):
    company: Optional[str] = None
    position: Optional[str] = None
    period: Optional[str] = None
    location: Optional[str] = None
    responsibilities: List[str] = []
    achievements: List[str] = []


class ProjectItem(CamelModel):
    name: Optional[str] = None
    period: Optional[str] = None
    role: Optional[str] = None
    description: List[str] = []
    technologies: List[str] = []


class PublicationItem(CamelModel):
    title: Optional[str] = None
    authors: List[str] = []
    journal: Optional[str] = None
    year: Optional[str] = None
    doi: Optional[str] = None
    status: Optional[str] = None


class LeadershipItem(CamelModel):
    title: Optional[str] = None
    organization: Optional[str] = None
    period: Optional[str] = None
    location: Optional[str] = None
    description: List[str] = []


class EducationModule(CamelModel):
    items: List[EducationItem] = []


class WorkingModule(CamelModel):
    items: List[WorkingItem] = []


class ProjectModule(CamelModel):
    items: List[ProjectItem] = []


class PublicationsModule(CamelModel):
    items: List[PublicationItem] = []


class LeadershipModule(CamelModel):
    items: List[LeadershipItem] = []


class SkillsModule(CamelModel):
    languages: Optional[str] = None
    skills: Optional[str] = None
    interests: Optional[str] = None


MODULE_MODELS = {
    CVModule.basic_info: BasicInfo,
    CVModule.education: EducationModule,
    CVModule.working: WorkingModule,
    CVModule.project: ProjectModule,
    CVModule.publications: PublicationsModule,
    CVModule.leadership: LeadershipModule,
    CVModule.skills: SkillsModule,
}


class MissingField(CamelModel):
    field: str
    message: str


class CompletenessCheck(CamelModel):
    is_complete: bool
    missing_fields: List[MissingField] = []
    suggestions: List[str] = []


class ExtractionResult(CamelModel):
    data: Any
    completeness: CompletenessCheck
    tokens_used: int = 0


# Request bodies. Text fields are optional here so handlers can answer with
# their own messages instead of a generic validation error.
class RegisterRequest(CamelModel):
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None
    captcha_id: Optional[str] = None
    captcha_code: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
    captcha_id: Optional[str] = None
    captcha_code: Optional[str] = None


class UpdateUserRequest(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None
    new_password: Optional[str] = None


class ExtractModuleRequest(CamelModel):
    module_type: CVModule
    raw_text: Optional[str] = None
    language: str = "en"


class CheckCompletenessRequest(CamelModel):
    module_type: CVModule
    data: Any = None
    language: str = "en"


class GenerateDocumentRequest(CamelModel):
    modules: Dict[CVModule, Any] = Field(default_factory=dict)
    language: str = "en"


class PolishMode(str, Enum):
    without_job = "without-job"
    with_job = "with-job"


class PolishRequest(CamelModel):
    mode: PolishMode = PolishMode.without_job
    output_language: str = "en"
    bullet_points: int = Field(3, ge=2, le=5)
    project_description: Optional[str] = None
    target_job_description: Optional[str] = None
    special_requirements: Optional[str] = None


class CoverLetterRequest(CamelModel):
    job_description: Optional[str] = None
    resume_content: Optional[str] = None
    special_requirements: Optional[str] = None
    language: str = "en"


class ModifyCoverLetterRequest(CamelModel):
    job_description: Optional[str] = None
    resume_content: Optional[str] = None
    current_cover_letter: Optional[str] = None
    modification_requirement: Optional[str] = None
    language: str = "en"


# Responses
class UserPublic(CamelModel):
    id: str
    email: str
    username: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserStats(CamelModel):
    projects_polished: int = 0
    cvs_edited: int = 0
    cover_letters_generated: int = 0
    total_tokens_used: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class AuthPayload(CamelModel):
    token: str
    user: UserPublic


class CaptchaPayload(CamelModel):
    captcha_id: str
    captcha_image: str
