# tokenscope/engine/tokenizer/base.py

from typing import Callable, List, Protocol

class BaseTokenizer(Protocol):
    """
    Tokenizer 的统一协议接口。
    degraded=True 表示没有真实词表，id 只是位置序号。
    """
    model: str
    degraded: bool

    def encode(self, text: str) -> List[int]:
        """将文本转换为 Token ID 列表"""
        ...

    def decode(self, tokens: List[int]) -> str:
        """将 Token ID 列表转换回文本"""
        ...

    def count(self, text: str) -> int:
        """快速计算文本的 Token 数量"""
        ...

class DegradedTokenizer(BaseTokenizer, Protocol):
    """
    没有词表的降级 tokenizer。
    split() 返回与 encode() 的位置 id 一一对应的片段；未实现时引擎按空白切分。
    """
    def split(self, text: str) -> List[str]:
        ...

# 定义构造函数类型：接收 model_name，返回实例
TokenizerFactory = Callable[[str], BaseTokenizer]

# --- 异常 ---

class TokenizerError(Exception):
    """Tokenizer 层所有错误的基类"""
    pass

class DecodeUnsupportedError(TokenizerError, NotImplementedError):
    """降级 tokenizer 没有词表，无法 decode"""
    pass
