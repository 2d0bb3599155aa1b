"""
Required-field checks for structured CV module data.

Validation never raises: anything that does not have the expected shape
(non-object data, a missing or non-list ``items``, non-object entries) is
reported as a missing field so the client can show it next to the form.
"""
from typing import Any, Dict, List, Tuple

from ..schemas import CVModule, CompletenessCheck, MissingField

# (field, is_list, en message, zh message)
Rule = Tuple[str, bool, str, str]

OBJECT_RULES: Dict[CVModule, List[Rule]] = {
    CVModule.basic_info: [
        ("name", False, "Name is required", "姓名是必需的"),
        ("phone", False, "Phone is required", "电话是必需的"),
        ("email", False, "Email is required", "邮件是必需的"),
    ],
    CVModule.skills: [
        ("languages", False, "Languages is required", "语言是必需的"),
        ("skills", False, "Skills is required", "技能是必需的"),
        ("interests", False, "Interests is required", "兴趣是必需的"),
    ],
}

ITEM_RULES: Dict[CVModule, List[Rule]] = {
    CVModule.education: [
        ("degree", False, "Degree is required", "学位是必需的"),
        ("school", False, "School is required", "学校是必需的"),
        ("major", False, "Major is required", "专业是必需的"),
        ("period", False, "Period is required", "时间是必需的"),
        ("location", False, "Location is required", "地点是必需的"),
    ],
    CVModule.working: [
        ("company", False, "Company is required", "公司是必需的"),
        ("position", False, "Position is required", "职位是必需的"),
        ("period", False, "Period is required", "时间是必需的"),
        ("location", False, "Location is required", "地点是必需的"),
        ("responsibilities", True, "At least one responsibility is required", "至少需要一条职责描述"),
    ],
    CVModule.project: [
        ("name", False, "Project name is required", "项目名称是必需的"),
        ("period", False, "Period is required", "时间是必需的"),
        ("description", True, "At least one description is required", "至少需要一条项目描述"),
    ],
    CVModule.publications: [
        ("title", False, "Title is required", "论文标题是必需的"),
        ("authors", True, "At least one author is required", "至少需要一位作者"),
        ("year", False, "Year is required", "年份是必需的"),
    ],
    CVModule.leadership: [
        ("title", False, "Title is required", "职位/活动名称是必需的"),
        ("organization", False, "Organization is required", "组织是必需的"),
        ("period", False, "Period is required", "时间是必需的"),
        ("description", True, "At least one description is required", "至少需要一条描述"),
    ],
}

EMPTY_ITEMS_MESSAGES = {
    CVModule.education: ("At least one education record is required", "至少需要一条教育背景记录"),
    CVModule.working: ("At least one work experience record is required", "至少需要一条工作经历记录"),
    CVModule.project: ("At least one project record is required", "至少需要一条项目经历记录"),
    CVModule.publications: ("At least one publication record is required", "至少需要一条论文记录"),
    CVModule.leadership: ("At least one leadership record is required", "至少需要一条领导经验记录"),
}


def _has_text(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    # Numbers such as a year given as 2023 count as present
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _has_entries(value: Any) -> bool:
    return isinstance(value, list) and any(_has_text(v) for v in value)


def _check_fields(obj: Dict[str, Any], rules: List[Rule], prefix: str, zh: bool) -> List[MissingField]:
    missing = []
    for field, is_list, en_msg, zh_msg in rules:
        value = obj.get(field)
        present = _has_entries(value) if is_list else _has_text(value)
        if not present:
            missing.append(MissingField(field=f"{prefix}{field}", message=zh_msg if zh else en_msg))
    return missing


def validate_module(module: CVModule, data: Any, language: str = "en") -> CompletenessCheck:
    """Checks required fields of one module and reports what is missing."""
    zh = language == "zh"
    missing: List[MissingField] = []

    if module in OBJECT_RULES:
        obj = data if isinstance(data, dict) else {}
        missing.extend(_check_fields(obj, OBJECT_RULES[module], "", zh))
    else:
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list) or not items:
            en_msg, zh_msg = EMPTY_ITEMS_MESSAGES[module]
            missing.append(MissingField(field="items", message=zh_msg if zh else en_msg))
        else:
            for index, item in enumerate(items):
                entry = item if isinstance(item, dict) else {}
                missing.extend(_check_fields(entry, ITEM_RULES[module], f"items[{index}].", zh))

    return CompletenessCheck(is_complete=not missing, missing_fields=missing, suggestions=[])
