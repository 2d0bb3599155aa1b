"""
User-facing messages for the account endpoints, in English and Chinese.
"""
from typing import Optional

from fastapi import Request

MESSAGES = {
    "fields_required": ("Please fill in all required fields", "请填写所有必填字段"),
    "invalid_email": ("Please provide a valid email address", "请提供有效的邮箱地址"),
    "username_length": ("Username must be between 2 and 20 characters", "用户名长度应在2-20个字符之间"),
    "password_length": ("Password must be at least 6 characters", "密码长度至少为6个字符"),
    "password_too_long": ("Password must be at most 72 bytes", "密码长度不能超过72字节"),
    "password_mismatch": ("Passwords do not match", "两次输入的密码不一致"),
    "captcha_invalid": ("Captcha is incorrect or has expired", "验证码错误或已过期"),
    "email_taken": ("This email has already been used", "该邮箱已被注册"),
    "username_taken": ("This username has already been used", "该用户名已被使用"),
    "login_failed": ("Incorrect email or password", "邮箱或密码错误"),
    "token_missing": ("No authentication token provided, please log in", "未提供认证token，请先登录"),
    "token_invalid": ("Invalid token, please log in again", "无效的token，请重新登录"),
    "user_not_found": ("User not found", "用户不存在"),
    "nothing_to_update": ("Please provide the fields to update", "请提供要更新的字段"),
    "current_password_required": ("Please provide your current password", "请提供当前密码"),
    "new_password_length": ("New password must be at least 6 characters", "新密码长度至少为6个字符"),
    "current_password_wrong": ("Current password is incorrect", "当前密码错误"),
    "registration_failed": ("Registration failed, please try again later", "注册失败，请稍后重试"),
    "captcha_failed": ("Failed to generate captcha", "生成验证码失败"),
}


def language_from_header(accept_language: Optional[str]) -> str:
    if accept_language and accept_language.strip().lower().startswith("zh"):
        return "zh"
    return "en"


def request_language(request: Request) -> str:
    return language_from_header(request.headers.get("accept-language"))


def get_message(key: str, language: str = "en") -> str:
    en, zh = MESSAGES[key]
    return zh if language == "zh" else en
