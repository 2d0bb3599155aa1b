"""
Module-specific prompt templates for structured CV extraction.

Each template documents the exact JSON shape expected back from the model.
List-shaped modules also explain the ``---`` convention: every block of raw
text separated by a line of three dashes is a separate entry of ``items``.
"""
import json

from ..schemas import CVModule, LIST_MODULES

SYSTEM_PROMPT = {
    "en": (
        "You are a professional CV information extraction assistant. Please extract structured "
        "information from the user's text and return it strictly in JSON format."
    ),
    "zh": "你是一个专业的简历信息提取助手。请从用户提供的文本中提取结构化信息，并严格按照JSON格式返回。",
}

JSON_SCHEMAS = {
    CVModule.basic_info: {
        "name": "string (required)",
        "phone": "string (required)",
        "email": "string (required)",
        "linkedin": "string (optional)",
        "github": "string (optional)",
    },
    CVModule.education: {
        "items": [{
            "degree": "string (required)",
            "school": "string (required)",
            "major": "string (required)",
            "period": "string (required, format: YYYY-MM to YYYY-MM or Sep YYYY - Jul YYYY)",
            "location": "string (required)",
            "gpa": "string (optional, can be CGPA, GPA, or similar format like 3.83/4.00)",
            "honors": ["string (optional array, e.g., Dean's List, Scholarship)"],
            "relevantCoursework": ["string (optional array, list of course names)"],
            "status": "string (optional, e.g., anticipated, completed)",
        }],
    },
    CVModule.working: {
        "items": [{
            "company": "string (required)",
            "position": "string (required)",
            "period": "string (required)",
            "location": "string (required)",
            "responsibilities": ["string (required, at least 1)"],
            "achievements": ["string (optional array)"],
        }],
    },
    CVModule.project: {
        "items": [{
            "name": "string (required)",
            "period": "string (required)",
            "role": "string (optional)",
            "description": ["string (required, at least 1)"],
            "technologies": ["string (optional array)"],
        }],
    },
    CVModule.publications: {
        "items": [{
            "title": "string (required)",
            "authors": ["string (required array)"],
            "journal": "string (optional)",
            "year": "string (required)",
            "doi": "string (optional)",
            "status": "string (optional: published/submitted/in-preparation)",
        }],
    },
    CVModule.leadership: {
        "items": [{
            "title": "string (required)",
            "organization": "string (required)",
            "period": "string (required)",
            "location": "string (optional)",
            "description": ["string (required, at least 1)"],
        }],
    },
    CVModule.skills: {
        "languages": "string (required)",
        "skills": "string (required)",
        "interests": "string (required)",
    },
}

# (entry noun, plural noun, field rules) per list module and language
_LIST_MODULE_TEXT = {
    CVModule.education: {
        "en": (
            "education background", "education entries",
            "Required fields: degree (e.g., Bachelor of Science), school (school name), major (major field, "
            "may contain multiple majors connected with & or and), period (time period, format as Sep YYYY - "
            "Jul YYYY or YYYY-MM to YYYY-MM, if it contains status like [anticipated], extract to status "
            "field), location (city or country). Optional fields: gpa (GPA or CGPA, keep original format like "
            "3.83/4.00), honors (array of honors like Dean's List, Scholarship, etc.), relevantCoursework "
            "(array of course names, extract from \"Relevant coursework\" or similar descriptions), status "
            "(e.g., anticipated, completed, if period contains [anticipated] etc., extract here).\n\n"
            "Note:\n- The text may contain tab alignment, please ignore formatting and extract content only",
        ),
        "zh": (
            "教育背景", "教育经历",
            "必需字段：degree（学位，如Bachelor of Science）、school（学校名称）、major（专业，可能包含多个专业用&或and"
            "连接）、period（时间，格式化为Sep YYYY - Jul YYYY或YYYY-MM to YYYY-MM，如果包含[anticipated]等状态信息，"
            "请提取到status字段）、location（地点，如城市或国家）。可选字段：gpa（GPA或CGPA，保留原始格式如3.83/4.00）、"
            "honors（荣誉奖项数组，如Dean's List、Scholarship等）、relevantCoursework（相关课程数组）、"
            "status（状态，如anticipated、completed等）。\n\n注意：\n- 文本可能包含制表符对齐，请忽略格式，只提取内容",
        ),
    },
    CVModule.working: {
        "en": (
            "working experience", "work experiences",
            "Required fields: company, position, period, location, responsibilities (array, at least 1). "
            "Optional fields: achievements (array).",
        ),
        "zh": (
            "工作经历", "工作经历",
            "必需字段：company（公司）、position（职位）、period（时间）、location（地点）、responsibilities"
            "（职责数组，至少1条）。可选字段：achievements（成就数组）。",
        ),
    },
    CVModule.project: {
        "en": (
            "project experience", "project experiences",
            "Required fields: name, period, description (array, at least 1). "
            "Optional fields: role, technologies (array).",
        ),
        "zh": (
            "项目经历", "项目经历",
            "必需字段：name（项目名称）、period（时间）、description（描述数组，至少1条）。"
            "可选字段：role（角色）、technologies（技术栈数组）。",
        ),
    },
    CVModule.publications: {
        "en": (
            "paper publication", "publications",
            "Required fields: title, authors (array), year. Optional fields: journal, doi, status.",
        ),
        "zh": (
            "论文发表", "论文",
            "必需字段：title（论文标题）、authors（作者数组）、year（年份）。可选字段：journal（期刊/会议）、doi（DOI）、status（状态）。",
        ),
    },
    CVModule.leadership: {
        "en": (
            "leadership experience", "leadership experiences",
            "Required fields: title, organization, period, description (array, at least 1). "
            "Optional fields: location.",
        ),
        "zh": (
            "领导经验", "领导经验",
            "必需字段：title（职位/活动名称）、organization（组织）、period（时间）、description（描述数组，至少1条）。"
            "可选字段：location（地点）。",
        ),
    },
}

_BASIC_INFO_TEXT = {
    "en": (
        "Please extract basic information from the following text and return in JSON format:\n\n{raw}\n\n"
        "Required fields: name (full name, may contain both English and Chinese), phone (phone number, may "
        "contain spaces or separators, e.g., \"5950 4201\" or \"+86 138-0000-0000\"), email (email address). "
        "Optional fields: linkedin (LinkedIn URL, may contain www. prefix), github (GitHub URL, may contain "
        "https:// prefix).\n\nNote:\n"
        "1. Name may contain commas, parentheses, etc., please preserve the full name\n"
        "2. Phone number may contain spaces, hyphens, or other separators, please preserve the original format\n"
        "3. Email address should be extracted completely\n"
        "4. LinkedIn and GitHub links may or may not contain protocol prefix (http:// or https://) and www. "
        "prefix, please extract the complete link\n"
        "5. Text may use \"|\" or other separators to separate different information, please identify correctly"
    ),
    "zh": (
        "请从以下文本中提取基本信息，返回JSON格式：\n\n{raw}\n\n"
        "必需字段：name（姓名，可能包含中英文）、phone（电话号码，可能包含空格或分隔符，如\"5950 4201\"或"
        "\"+86 138-0000-0000\"）、email（邮箱地址）。可选字段：linkedin（LinkedIn链接，可能包含www.前缀）、"
        "github（GitHub链接，可能包含https://前缀）。\n\n注意：\n"
        "1. 姓名可能包含逗号、括号等，请完整保留\n"
        "2. 电话号码可能包含空格、连字符等分隔符，请保留原始格式\n"
        "3. 邮箱地址请完整提取\n"
        "4. LinkedIn和GitHub链接可能包含或不包含协议前缀（http://或https://）和www.前缀，请提取完整链接\n"
        "5. 文本可能使用\"|\"或其他分隔符分隔不同信息，请正确识别"
    ),
}

_SKILLS_TEXT = {
    "en": (
        "Please extract skills information from the following text and return in JSON format:\n\n{raw}\n\n"
        "Please refine the information into three aspects:\n"
        "1. languages: Refine all language-related information into a text description\n"
        "2. skills: Refine all skill-related information (such as programming languages, tools, frameworks, "
        "etc.) into a text description\n"
        "3. interests: Refine all interest-related information into a text description\n\n"
        "Each field should be a complete text description, no need to use bullet points or list format."
    ),
    "zh": (
        "请从以下文本中提取技能信息，返回JSON格式：\n\n{raw}\n\n请将信息提炼成三个方面：\n"
        "1. languages（语言）：提炼所有语言相关的信息，整合成一段文字描述\n"
        "2. skills（技能）：提炼所有技能相关的信息（如编程语言、工具、框架等），整合成一段文字描述\n"
        "3. interests（兴趣）：提炼所有兴趣相关的信息，整合成一段文字描述\n\n"
        "每个字段应该是一段完整的文字描述，不需要使用bullet points或列表格式。"
    ),
}


def _list_module_prompt(module: CVModule, raw_text: str, lang: str) -> str:
    noun, plural, field_rules = _LIST_MODULE_TEXT[module][lang]
    if lang == "zh":
        return (
            f"请从以下文本中提取{noun}信息，返回JSON格式：\n\n{raw_text}\n\n"
            "重要提示：\n"
            f"1. 如果文本中包含\"---\"分隔符，这表示多个独立的{plural}，每个\"---\"分隔的部分应该提取为items数组中的一个独立对象。\n"
            f"2. 如果文本中没有\"---\"分隔符，但包含多条{noun}信息（例如多行、多个段落），也应该提取为多个items。\n"
            f"3. 如果文本中只有一条{noun}信息，items数组应包含一个对象。\n\n"
            f"{field_rules}\n\n"
            f"注意：每条{noun}必须包含所有必需字段，不能为空字符串。如果某个字段在文本中找不到，请仔细检查文本内容，不要返回空字符串。"
        )
    return (
        f"Please extract {noun} information from the following text and return in JSON format:\n\n{raw_text}\n\n"
        "Important Notes:\n"
        f"1. If the text contains \"---\" separators, this indicates multiple independent {plural}. Each section "
        "separated by \"---\" should be extracted as a separate object in the items array.\n"
        f"2. If the text does not contain \"---\" separators but contains multiple {plural} (e.g., multiple "
        "lines, multiple paragraphs), they should also be extracted as multiple items.\n"
        f"3. If the text contains only one entry, the items array should contain one object.\n\n"
        f"{field_rules}\n\n"
        "Each entry must contain all required fields, cannot be empty strings. If a field cannot be found in "
        "the text, please carefully check the text content, do not return empty strings."
    )


def _format_instructions(module: CVModule, json_schema: str, lang: str) -> str:
    if lang == "zh":
        text = (
            "\n\n请严格按照以下JSON格式返回，只返回JSON对象，不要添加任何markdown代码块标记、说明文字或其他内容：\n"
            f"{json_schema}\n\n重要：\n1. 直接返回JSON对象，不要使用```json或```标记\n"
        )
        if module in LIST_MODULES:
            text += (
                "2. 必须包含items数组，且items数组不能为空\n"
                "3. 如果文本中有多条记录，items数组应包含所有记录\n"
                "4. 如果文本中只有一条记录，items数组也应包含这一条记录"
            )
        else:
            text += "2. 必须包含所有必需字段"
        return text

    text = (
        "\n\nPlease return strictly in the following JSON format, only the JSON object without any markdown "
        f"code blocks, explanations, or other content:\n{json_schema}\n\nImportant:\n"
        "1. Return the JSON object directly, do not use ```json or ``` markers\n"
    )
    if module in LIST_MODULES:
        text += (
            "2. Must include an items array, and the items array must not be empty\n"
            "3. If there are multiple records in the text, the items array should contain all records\n"
            "4. If there is only one record in the text, the items array should still contain that one record"
        )
    else:
        text += "2. Must include all required fields"
    return text


def build_extraction_prompt(module: CVModule, raw_text: str, language: str = "en"):
    """Returns ``(system_prompt, user_prompt)`` for one module."""
    lang = "zh" if language == "zh" else "en"

    if module == CVModule.basic_info:
        user_prompt = _BASIC_INFO_TEXT[lang].format(raw=raw_text)
    elif module == CVModule.skills:
        user_prompt = _SKILLS_TEXT[lang].format(raw=raw_text)
    else:
        user_prompt = _list_module_prompt(module, raw_text, lang)

    json_schema = json.dumps(JSON_SCHEMAS[module], indent=2, ensure_ascii=False)
    user_prompt += _format_instructions(module, json_schema, lang)

    return SYSTEM_PROMPT[lang], user_prompt
