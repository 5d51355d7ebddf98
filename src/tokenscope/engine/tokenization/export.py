# tokenscope/engine/tokenization/export.py

from typing import Optional
from tokenscope.schemas.tokenizer_schemas import DisplayMode, ExportFormat, ResultSet, TokenizeMode

def format_export(
    result: ResultSet,
    display_mode: DisplayMode = DisplayMode.BADGES,
    export_format: ExportFormat = ExportFormat.IDS,
) -> Optional[str]:
    """
    把结果集转换成可复制的文本。纯函数，不写剪贴板。
    结果为空时返回 None（调用方应视为不可复制）。

    - decode 模式：原样返回解码文本
    - encode + IDS：每行一个 id，可以直接粘贴回 decode 模式
    - encode + ANNOTATED：每行 "text -> id"，Numbered 模式额外带 "n. " 序号
    """
    if result.is_empty:
        return None

    if result.mode == TokenizeMode.DECODE:
        return result.text

    if ExportFormat(export_format) == ExportFormat.IDS:
        return "\n".join(str(token.id) for token in result.tokens)

    if DisplayMode(display_mode) == DisplayMode.NUMBERED:
        lines = [f"{i}. {token.text} -> {token.id}" for i, token in enumerate(result.tokens, start=1)]
    else:
        lines = [f"{token.text} -> {token.id}" for token in result.tokens]
    return "\n".join(lines)
