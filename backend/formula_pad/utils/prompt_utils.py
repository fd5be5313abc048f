"""
手写公式转 LaTeX 的提示词
---------------------------------
功能：
- 提供系统提示词，指导多模态大模型把图片中的手写公式转写为纯 LaTeX；
- 约束输出格式：不得包裹 `\\[...\\]`、`$...$` 等定界符，不得附带解释或 Markdown；
- 约定错误信号：无法识别时，回复必须以字面量 `ERROR:` 开头，后接指定语言的说明。

使用说明：
- `latex_transcription_system_prompt(language)` 返回英文系统提示，`language` 仅影响错误说明的语言；
- 服务端不解析 `ERROR:`，原样透传给前端，由前端拆分出错误说明。
"""

from __future__ import annotations

ERROR_MARKER = "ERROR:"


def latex_transcription_system_prompt(language: str) -> str:
    """返回系统提示词。

    - language: 错误说明所使用的语言，如 "english"、"japanese"；
    - 返回：完整的系统提示字符串。
    """
    return (
        "You are a machine that converts images of handwritten mathematical "
        "equations into LaTeX.\n"
        "Rules:\n"
        "- Output ONLY the LaTeX source of the equation in the image.\n"
        "- Do NOT wrap the output in delimiters such as \\[...\\], \\(...\\), "
        "$...$ or $$...$$.\n"
        "- Do NOT use Markdown code fences and do NOT add any explanation.\n"
        f"- If the image cannot be converted to LaTeX, reply with a line that "
        f"starts with the literal token {ERROR_MARKER} followed by a short "
        f"explanation written in {language}."
    )


def split_error(reply: str) -> tuple[str, str | None]:
    """按 `ERROR:` 约定拆分模型回复。

    返回 `(latex, error)`：
    - 以 `ERROR:` 开头：latex 为空串，error 为标记之后的全部文字（可能为空串）；
    - 否则：latex 为原文，error 为 None。
    """
    if reply.startswith(ERROR_MARKER):
        return "", reply[len(ERROR_MARKER):]
    return reply, None
