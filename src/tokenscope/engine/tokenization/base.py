# tokenscope/engine/tokenization/base.py

from typing import Callable, Protocol
from tokenscope.schemas.tokenizer_schemas import SessionSnapshot, TokenizeMode

# 观测接收器：引擎捕获到 provider 异常后调用，不面向用户
ErrorSink = Callable[[Exception, str, TokenizeMode], None]

# 会话状态变化的监听者
SessionListener = Callable[[SessionSnapshot], None]

class ClipboardWriter(Protocol):
    """
    宿主平台的剪贴板写入能力。
    由调用方注入；写入失败时直接抛出异常。
    """
    async def write_text(self, text: str) -> None:
        ...
