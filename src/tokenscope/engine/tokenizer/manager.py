# tokenscope/engine/tokenizer/manager.py

import logging
from collections import OrderedDict
from typing import Dict, Optional
from tokenscope.core.config import settings
from tokenscope.constants.model_constants import SUPPORTED_MODEL_FAMILIES
from .base import BaseTokenizer, TokenizerFactory
from .bundled import TiktokenTokenizer, WhitespaceTokenizer

logger = logging.getLogger(__name__)

class TokenizerManager:
    """
    Tokenizer 管理器，负责按模型家族前缀路由和缓存。
    resolve() 对任何字符串都不会抛错：匹配不到家族时返回降级的 WhitespaceTokenizer。

    model_id 来自客户端输入，缓存必须有上限：只缓存匹配到家族的实例（LRU，最多 cache_size 个），
    降级实例构造代价几乎为零，不进缓存。
    """
    def __init__(self, fallback_encoding: Optional[str] = None, register_defaults: bool = True, cache_size: int = 64):
        if cache_size < 1:
            raise ValueError("cache_size must be at least 1")
        self.cache_size = cache_size
        self._cache: "OrderedDict[str, BaseTokenizer]" = OrderedDict()
        self._factories: Dict[str, TokenizerFactory] = {}
        self._default_factory: TokenizerFactory = WhitespaceTokenizer

        if register_defaults:
            # OpenAI Family
            for prefix in SUPPORTED_MODEL_FAMILIES:
                self.register_family(prefix, lambda m: TiktokenTokenizer(m, fallback_encoding=fallback_encoding))

    def register_family(self, prefix: str, factory: TokenizerFactory):
        """
        允许上层注册新的 Tokenizer 实现。
        prefix: 模型标识前缀 (gpt, ...)，大小写不敏感
        """
        self._factories[prefix.lower()] = factory
        # 路由规则变了，之前缓存的实例可能已经不对
        self._cache.clear()

    def _match_family(self, model_id: str) -> Optional[str]:
        key = model_id.lower()
        matches = [p for p in self._factories if key.startswith(p)]
        if not matches:
            return None
        # 最长前缀优先
        return max(matches, key=len)

    def is_supported(self, model_id) -> bool:
        if not isinstance(model_id, str):
            return False
        return self._match_family(model_id) is not None

    def resolve(self, model_id) -> BaseTokenizer:
        """
        获取 model_id 对应的 Tokenizer 实例。
        """
        if not isinstance(model_id, str):
            model_id = "" if model_id is None else str(model_id)

        if model_id in self._cache:
            self._cache.move_to_end(model_id)
            return self._cache[model_id]

        family = self._match_family(model_id)
        factory = self._factories[family] if family else None

        # 兜底
        if not factory:
            logger.debug(f"No tokenizer family matches '{model_id}', using whitespace fallback.")
            return self._default_factory(model_id)

        try:
            tokenizer = factory(model_id)
        except Exception as e:
            logger.error(f"Failed to instantiate tokenizer for {model_id}: {e}. Using whitespace fallback.")
            return WhitespaceTokenizer(model_id)

        self._cache[model_id] = tokenizer
        if len(self._cache) > self.cache_size:
            # 淘汰最久未使用的实例
            self._cache.popitem(last=False)
        return tokenizer

    def count_tokens(self, text: str, model_id: str) -> int:
        """便捷方法"""
        return self.resolve(model_id).count(text)

# 全局单例
tokenizer_manager = TokenizerManager(fallback_encoding=settings.TIKTOKEN_FALLBACK_ENCODING)
