"""
Turns CV module data into a flat list of layout instructions.

The Word and PDF renderers both walk the same list, so the two documents stay
in step. Distances are expressed in twips (1/20 pt), the unit Word uses.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ..schemas import (
    CVModule,
    EXPORT_LEADING_MODULE,
    MODULE_MODELS,
    BasicInfo,
    EducationModule,
    LeadershipModule,
    ProjectModule,
    PublicationsModule,
    SkillsModule,
    WorkingModule,
)

NAME_SIZE = 13
BODY_SIZE = 9.5
PAGE_MARGIN_TWIPS = 1440

SECTION_LABELS = {
    "en": {
        CVModule.basic_info: "BASIC INFORMATION",
        CVModule.education: "EDUCATION",
        CVModule.working: "WORKING EXPERIENCE",
        CVModule.project: "PROJECT EXPERIENCE",
        CVModule.publications: "PAPER PUBLICATION",
        CVModule.leadership: "LEADERSHIP EXPERIENCE/ OTHER ACHIEVEMENTS",
        CVModule.skills: "LANGUAGES, SKILLS & INTERESTS",
    },
    "zh": {
        CVModule.basic_info: "基本信息",
        CVModule.education: "教育背景",
        CVModule.working: "工作经历",
        CVModule.project: "项目经历",
        CVModule.publications: "论文发表",
        CVModule.leadership: "其他/领导经验",
        CVModule.skills: "技能",
    },
}

INLINE_LABELS = {
    "en": {"gpa": "GPA: ", "honors": "Honors: ", "coursework": "Relevant coursework: ",
           "technologies": "Technologies: "},
    "zh": {"gpa": "GPA: ", "honors": "荣誉: ", "coursework": "相关课程: ", "technologies": "技术栈: "},
}


@dataclass
class CenteredLine:
    text: str
    size: float = BODY_SIZE
    bold: bool = False
    space_after: int = 100


@dataclass
class Heading:
    text: str
    space_before: int = 400


@dataclass
class TwoColumnLine:
    left: str
    right: str = ""
    left_bold: bool = True
    right_bold: bool = False
    space_after: int = 100


@dataclass
class BulletLine:
    text: str
    indent: int = 400
    hanging: int = 120
    space_after: int = 50


@dataclass
class PlainLine:
    text: str
    space_after: int = 100


@dataclass
class Spacer:
    height: int = 150


Instruction = Union[CenteredLine, Heading, TwoColumnLine, BulletLine, PlainLine, Spacer]


def _clean(values: List[str]) -> List[str]:
    return [v for v in values if v and v.strip()]


def _basic_info(data: BasicInfo) -> List[Instruction]:
    out: List[Instruction] = []
    if data.name:
        out.append(CenteredLine(data.name, size=NAME_SIZE, bold=True))
    contact = _clean([data.phone, data.email])
    if contact:
        out.append(CenteredLine(" | ".join(contact)))
    links = []
    if data.linkedin:
        links.append(f"LinkedIn: {data.linkedin}")
    if data.github:
        links.append(f"GitHub: {data.github}")
    if links:
        out.append(CenteredLine(" | ".join(links), space_after=200))
    out.append(Spacer(300))
    return out


def _education(data: EducationModule, labels: Dict[str, str]) -> List[Instruction]:
    out: List[Instruction] = []
    for item in data.items:
        out.append(TwoColumnLine(item.school or "", item.location or "", right_bold=True))
        out.append(TwoColumnLine(item.degree or "", item.period or ""))
        if item.major:
            out.append(PlainLine(item.major))
        if item.gpa:
            out.append(BulletLine(f"• {labels['gpa']}{item.gpa}", indent=360, space_after=100))
        honors = _clean(item.honors)
        if honors:
            out.append(BulletLine(f"• {labels['honors']}{', '.join(honors)}", indent=360, space_after=100))
        coursework = _clean(item.relevant_coursework)
        if coursework:
            out.append(BulletLine(f"• {labels['coursework']}{', '.join(coursework)}", indent=360, space_after=100))
        out.append(Spacer())
    return out


def _working(data: WorkingModule, labels: Dict[str, str]) -> List[Instruction]:
    out: List[Instruction] = []
    for item in data.items:
        out.append(TwoColumnLine(item.company or "", item.location or ""))
        out.append(TwoColumnLine(item.position or "", item.period or ""))
        for line in _clean(item.responsibilities) + _clean(item.achievements):
            out.append(BulletLine(f"• {line}"))
        out.append(Spacer())
    return out


def _project(data: ProjectModule, labels: Dict[str, str]) -> List[Instruction]:
    out: List[Instruction] = []
    for item in data.items:
        out.append(TwoColumnLine(item.name or "", item.period or ""))
        if item.role:
            out.append(PlainLine(item.role))
        for line in _clean(item.description):
            out.append(BulletLine(f"• {line}"))
        technologies = _clean(item.technologies)
        if technologies:
            out.append(PlainLine(f"{labels['technologies']}{', '.join(technologies)}"))
        out.append(Spacer())
    return out


def _publications(data: PublicationsModule, labels: Dict[str, str]) -> List[Instruction]:
    out: List[Instruction] = []
    for item in data.items:
        out.append(TwoColumnLine(item.title or "", item.year or ""))
        details = []
        authors = _clean(item.authors)
        if authors:
            details.append(", ".join(authors))
        details.extend(_clean([item.journal, item.year]))
        if details:
            out.append(PlainLine(" • ".join(details)))
        extra = []
        if item.doi:
            extra.append(f"DOI: {item.doi}")
        if item.status:
            extra.append(item.status)
        if extra:
            out.append(PlainLine(" • ".join(extra)))
        out.append(Spacer())
    return out


def _leadership(data: LeadershipModule, labels: Dict[str, str]) -> List[Instruction]:
    out: List[Instruction] = []
    for item in data.items:
        out.append(TwoColumnLine(item.organization or "", item.location or ""))
        out.append(TwoColumnLine(item.title or "", item.period or ""))
        for line in _clean(item.description):
            out.append(BulletLine(f"• {line}"))
        out.append(Spacer())
    return out


def _skills(data: SkillsModule, labels: Dict[str, str]) -> List[Instruction]:
    return [
        BulletLine(f"• {text}", space_after=100)
        for text in _clean([data.languages, data.skills, data.interests])
    ]


SECTION_BUILDERS = {
    CVModule.education: _education,
    CVModule.working: _working,
    CVModule.project: _project,
    CVModule.publications: _publications,
    CVModule.leadership: _leadership,
    CVModule.skills: _skills,
}


def build_layout(modules: Dict[CVModule, Any], language: str = "en") -> List[Instruction]:
    """
    Lays out the submitted modules: basic info first when present, the others
    in submission order. Empty modules are skipped.

    Raises ``pydantic.ValidationError`` (a ``ValueError``) when a module's
    data has the wrong shape.
    """
    lang = "zh" if language == "zh" else "en"
    section_labels = SECTION_LABELS[lang]
    inline_labels = INLINE_LABELS[lang]

    instructions: List[Instruction] = []

    leading: Optional[Any] = modules.get(EXPORT_LEADING_MODULE)
    if leading:
        instructions.extend(_basic_info(BasicInfo.model_validate(leading)))

    for module, data in modules.items():
        if module == EXPORT_LEADING_MODULE or not data:
            continue
        parsed = MODULE_MODELS[module].model_validate(data)
        instructions.append(Heading(section_labels[module]))
        instructions.extend(SECTION_BUILDERS[module](parsed, inline_labels))
        instructions.append(Spacer(200))

    return instructions
