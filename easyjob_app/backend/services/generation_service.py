"""
Free-text generation tasks: project polishing and cover letters.
"""
import logging
from typing import Optional

from ..config.settings import get_settings
from .llm_service import LLMGateway, LLMResult

logger = logging.getLogger(__name__)


def _is_zh(language: Optional[str]) -> bool:
    return language == "zh"


def build_polish_prompts(
    description: str,
    target_job_description: Optional[str] = None,
    output_language: str = "en",
    bullet_points: int = 3,
    special_requirements: Optional[str] = None,
):
    zh = _is_zh(output_language)

    if zh:
        system_prompt = "你是一个专业的项目描述润色助手。请根据用户提供的信息，润色项目描述并按照指定格式输出。"
        user_prompt = "请根据以下信息润色项目描述，并按照指定格式输出：\n\n"
    else:
        system_prompt = (
            "You are a professional project description polishing assistant. Please polish the "
            "project description based on the user's information and output in the specified format."
        )
        user_prompt = "Please polish the following project description and output in the specified format:\n\n"

    if special_requirements and special_requirements.strip():
        user_prompt += (
            f"特别要求：{special_requirements}\n\n" if zh
            else f"Special Requirements: {special_requirements}\n\n"
        )

    user_prompt += f"项目描述：\n{description}\n\n" if zh else f"Project Description:\n{description}\n\n"

    if target_job_description and target_job_description.strip():
        user_prompt += (
            f"目标职位描述：\n{target_job_description}\n\n" if zh
            else f"Target Job Description:\n{target_job_description}\n\n"
        )

    n = bullet_points
    if zh:
        user_prompt += (
            f"请严格按照以下结构化格式输出（使用{n}个要点，最后一个要点要总结锻炼的技能、能力和产出）：\n\n"
            "**项目名称：** [项目标题]\n\n"
            "**项目时间：** [项目时间日期]\n\n"
            "**用户角色：** [用户角色，如果适用]\n\n"
            "**项目要点：**\n"
            "- [要点1]\n"
            "- [要点2]\n"
            "- ...\n"
            f"- [要点{n}：总结锻炼了什么技能、什么能力、有什么产出]\n\n"
            "重要：必须使用上述格式，每个部分都要有明确的标签（**项目名称：**、**项目时间：**、"
            "**用户角色：**、**项目要点：**），要点使用 - 符号开头。"
        )
    else:
        user_prompt += (
            f"Please output strictly in the following structured format (use {n} bullet points, "
            "the last one should summarize skills, abilities, and outputs):\n\n"
            "**Project Name:** [Project Title]\n\n"
            "**Project Period:** [Project Date/Time]\n\n"
            "**User Role:** [User Role, if applicable]\n\n"
            "**Project Highlights:**\n"
            "- [Point 1]\n"
            "- [Point 2]\n"
            "- ...\n"
            f"- [Point {n}: Summary of skills developed, abilities gained, and outputs/deliverables]\n\n"
            "Important: You must use the above format with clear labels (**Project Name:**, "
            "**Project Period:**, **User Role:**, **Project Highlights:**), and use - symbol for bullet points."
        )

    return system_prompt, user_prompt


def polish_project_description(
    gateway: LLMGateway,
    description: str,
    target_job_description: Optional[str] = None,
    output_language: str = "en",
    bullet_points: int = 3,
    special_requirements: Optional[str] = None,
) -> LLMResult:
    system_prompt, user_prompt = build_polish_prompts(
        description,
        target_job_description=target_job_description,
        output_language=output_language,
        bullet_points=bullet_points,
        special_requirements=special_requirements,
    )
    logger.info("Polishing project description (%d bullet points)", bullet_points)
    return gateway.complete(system_prompt, user_prompt, get_settings().llm_generation_temperature)


def build_cover_letter_prompts(
    job_description: str,
    resume_content: str,
    language: str = "en",
    special_requirements: Optional[str] = None,
):
    zh = _is_zh(language)

    if zh:
        system_prompt = "你是一个专业的求职信撰写助手。请根据用户提供的简历、职位描述和特殊要求，撰写一份专业、有针对性的求职信。"
        user_prompt = (
            "请根据以下信息撰写一份专业的求职信：\n\n"
            f"简历内容：\n{resume_content}\n\n"
            f"职位描述：\n{job_description}\n\n"
        )
    else:
        system_prompt = (
            "You are a professional cover letter writing assistant. Please write a professional and "
            "targeted cover letter based on the user's resume, job description, and special requirements."
        )
        user_prompt = (
            "Please write a professional cover letter based on the following information:\n\n"
            f"Resume Content:\n{resume_content}\n\n"
            f"Job Description:\n{job_description}\n\n"
        )

    if special_requirements and special_requirements.strip():
        user_prompt += (
            f"特殊要求：\n{special_requirements}\n\n" if zh
            else f"Special Requirements:\n{special_requirements}\n\n"
        )

    user_prompt += (
        "请撰写一份专业、有针对性的求职信，突出简历与职位描述的匹配点，并体现对目标公司的了解和兴趣。" if zh
        else "Please write a professional and targeted cover letter that highlights the match between the "
             "resume and job description, and demonstrates understanding and interest in the target company."
    )
    return system_prompt, user_prompt


def generate_cover_letter(
    gateway: LLMGateway,
    job_description: str,
    resume_content: str,
    language: str = "en",
    special_requirements: Optional[str] = None,
) -> LLMResult:
    system_prompt, user_prompt = build_cover_letter_prompts(
        job_description, resume_content, language=language, special_requirements=special_requirements
    )
    logger.info("Generating cover letter (language=%s)", language)
    return gateway.complete(system_prompt, user_prompt, get_settings().llm_generation_temperature)


def build_modify_cover_letter_prompts(
    job_description: str,
    resume_content: str,
    current_cover_letter: str,
    modification_requirement: str,
    language: str = "en",
):
    if _is_zh(language):
        system_prompt = "你是一个专业的求职信修改助手。请根据用户提供的修改要求，对现有的求职信进行修改，保持专业性和针对性。"
        user_prompt = (
            "请根据以下信息修改求职信：\n\n"
            f"简历内容：\n{resume_content}\n\n"
            f"职位描述：\n{job_description}\n\n"
            f"当前求职信：\n{current_cover_letter}\n\n"
            f"修改要求：\n{modification_requirement}\n\n"
            "请根据修改要求对求职信进行修改，保持专业性和针对性，确保修改后的求职信符合要求。"
        )
    else:
        system_prompt = (
            "You are a professional cover letter modification assistant. Please modify the existing "
            "cover letter according to the user's modification requirements while maintaining "
            "professionalism and relevance."
        )
        user_prompt = (
            "Please modify the cover letter based on the following information:\n\n"
            f"Resume Content:\n{resume_content}\n\n"
            f"Job Description:\n{job_description}\n\n"
            f"Current Cover Letter:\n{current_cover_letter}\n\n"
            f"Modification Requirement:\n{modification_requirement}\n\n"
            "Please modify the cover letter according to the modification requirements while maintaining "
            "professionalism and relevance, ensuring the modified cover letter meets the requirements."
        )
    return system_prompt, user_prompt


def modify_cover_letter(
    gateway: LLMGateway,
    job_description: str,
    resume_content: str,
    current_cover_letter: str,
    modification_requirement: str,
    language: str = "en",
) -> LLMResult:
    system_prompt, user_prompt = build_modify_cover_letter_prompts(
        job_description, resume_content, current_cover_letter, modification_requirement, language=language
    )
    logger.info("Modifying cover letter (language=%s)", language)
    return gateway.complete(system_prompt, user_prompt, get_settings().llm_generation_temperature)
