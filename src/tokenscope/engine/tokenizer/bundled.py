# tokenscope/engine/tokenizer/bundled.py

import logging
from typing import List, Optional
import tiktoken

from .base import DecodeUnsupportedError, TokenizerError

logger = logging.getLogger(__name__)

class TiktokenTokenizer:
    """
    基于 OpenAI tiktoken 的实现。
    encoding 在第一次使用时才加载：resolve 阶段不会因为模型未知而抛错，
    失败推迟到 encode/decode，由引擎统一兜底。
    """
    degraded = False

    def __init__(self, model_name: str, fallback_encoding: Optional[str] = None):
        self.model = model_name
        self.fallback_encoding = fallback_encoding
        self._encoding = None

    @property
    def encoding(self) -> "tiktoken.Encoding":
        if self._encoding is None:
            try:
                self._encoding = tiktoken.encoding_for_model(self.model)
            except KeyError:
                if not self.fallback_encoding:
                    raise
                logger.warning(f"Model '{self.model}' not found in tiktoken. Falling back to '{self.fallback_encoding}'.")
                self._encoding = tiktoken.get_encoding(self.fallback_encoding)
        return self._encoding

    def encode(self, text: str) -> List[int]:
        # 用户输入里可能出现 "<|endoftext|>" 之类的字面量，按普通文本处理
        return self.encoding.encode(text, disallowed_special=())

    def decode(self, tokens: List[int]) -> str:
        # 旧版 tiktoken 遇到词表外的 id 会 panic（BaseException），必须在进入 Rust 之前拦住
        limit = self.encoding.max_token_value
        unknown = [t for t in tokens if t < 0 or t > limit]
        if unknown:
            raise TokenizerError(f"Token ids {unknown[:5]} are outside the vocabulary of '{self.model}' (max {limit}).")
        return self.encoding.decode(tokens)

    def count(self, text: str) -> int:
        if not text:
            return 0
        return len(self.encode(text))

class WhitespaceTokenizer:
    """
    [兜底策略] 没有本地 tokenizer 的模型按空白切分。
    id 是本次调用内的位置序号（从 0 开始），不是稳定词表，所以不支持 decode。
    """
    degraded = True

    def __init__(self, model_name: str):
        self.model = model_name

    def split(self, text: str) -> List[str]:
        # 首尾空白不产生空片段："  hi " -> ["hi"]，而不是 ["", "hi", ""]
        return text.split()

    def encode(self, text: str) -> List[int]:
        return list(range(len(self.split(text))))

    def decode(self, tokens: List[int]) -> str:
        raise DecodeUnsupportedError(f"Model '{self.model}' has no vocabulary; decode is unsupported.")

    def count(self, text: str) -> int:
        if not text:
            return 0
        return len(self.split(text))
