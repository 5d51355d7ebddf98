# tokenscope/engine/tokenization/main.py

import re
import logging
from typing import List, Optional
from tokenscope.engine.tokenizer import BaseTokenizer, TokenizerManager, tokenizer_manager
from tokenscope.schemas.tokenizer_schemas import ResultSet, Token, TokenizeMode
from .base import ErrorSink

logger = logging.getLogger(__name__)

_ID_SEPARATOR = re.compile(r"[\s,]+")
_ID_PATTERN = re.compile(r"\d+")

def parse_token_ids(text: str) -> List[int]:
    """
    按空白和/或逗号切分，保留能解析为非负整数的片段，顺序不变。
    非数字片段直接丢弃，不影响其余 id。
    """
    ids = []
    for piece in _ID_SEPARATOR.split(text):
        if _ID_PATTERN.fullmatch(piece):
            ids.append(int(piece))
    return ids


class TokenizationEngine:
    """
    纯粹的、无状态的分词引擎。
    compute() 是 (settled_input, model, mode) 的纯函数，永远返回完整的 ResultSet；
    provider 抛出的任何异常都在这里被吃掉并上报给 error_sink，结果重置为空。
    """
    def __init__(self, manager: Optional[TokenizerManager] = None, error_sink: Optional[ErrorSink] = None):
        self.manager = manager or tokenizer_manager
        self.error_sink = error_sink

    def compute(self, settled_input: str, model: str, mode: TokenizeMode) -> ResultSet:
        mode = TokenizeMode(mode)
        # Idle: 空白输入不触碰 provider
        if not settled_input or not settled_input.strip():
            return ResultSet.empty(mode, model)

        try:
            if mode == TokenizeMode.ENCODE:
                return self._encode(settled_input, model)
            return self._decode(settled_input, model)
        except Exception as e:
            self._report(e, model, mode)
            return ResultSet.empty(mode, model)

    def _encode(self, text: str, model: str) -> ResultSet:
        tokenizer = self.manager.resolve(model)
        ids = tokenizer.encode(text)
        fragments = self._fragments(tokenizer, text, ids)
        tokens = [Token(text=fragment, id=token_id) for fragment, token_id in zip(fragments, ids)]
        return ResultSet(mode=TokenizeMode.ENCODE, model=model, tokens=tokens)

    def _fragments(self, tokenizer: BaseTokenizer, text: str, ids: List[int]) -> List[str]:
        if tokenizer.degraded:
            # 降级 tokenizer 的 id 只是位置，片段就是切分出来的词
            split = getattr(tokenizer, "split", None)
            return split(text) if split else text.split()
        return [tokenizer.decode([token_id]) for token_id in ids]

    def _decode(self, text: str, model: str) -> ResultSet:
        ids = parse_token_ids(text)
        if not ids:
            return ResultSet.empty(TokenizeMode.DECODE, model)

        tokenizer = self.manager.resolve(model)
        if tokenizer.degraded:
            return ResultSet.empty(TokenizeMode.DECODE, model)

        return ResultSet(mode=TokenizeMode.DECODE, model=model, text=tokenizer.decode(ids))

    def _report(self, error: Exception, model: str, mode: TokenizeMode):
        logger.error(f"Error tokenizing input ({mode.value}, model={model}): {error}", exc_info=error)
        if self.error_sink:
            try:
                self.error_sink(error, model, mode)
            except Exception as sink_error:
                logger.error(f"Error sink raised: {sink_error}", exc_info=True)
