# tests/conftest.py

import re
from typing import Dict, List
import pytest
from httpx import AsyncClient, ASGITransport
from tokenscope.main import app
from tokenscope.api.dependencies import get_tokenizer_manager
from tokenscope.engine.tokenizer import TokenizerManager
from tokenscope.engine.tokenization import TokenizationEngine

# ==============================================================================
# 1. Fake Provider
# ==============================================================================

class FakeTokenizer:
    """
    一个确定性的假 tokenizer：每个片段是 "前导空白 + 非空白串"，
    按首次出现的顺序分配 id。把 decode 出来的片段拼接起来就是原文。
    """
    degraded = False
    _PIECE = re.compile(r"\s*\S+|\s+")

    def __init__(self, model_name: str):
        self.model = model_name
        self.vocab: Dict[str, int] = {}
        self.inverse: Dict[int, str] = {}

    def encode(self, text: str) -> List[int]:
        ids = []
        for piece in self._PIECE.findall(text):
            if piece not in self.vocab:
                token_id = len(self.vocab)
                self.vocab[piece] = token_id
                self.inverse[token_id] = piece
            ids.append(self.vocab[piece])
        return ids

    def decode(self, tokens: List[int]) -> str:
        # 未知 id 抛 KeyError，模拟 provider 内部错误
        return "".join(self.inverse[t] for t in tokens)

    def count(self, text: str) -> int:
        return len(self.encode(text)) if text else 0


def make_fake_manager() -> TokenizerManager:
    manager = TokenizerManager(register_defaults=False)
    manager.register_family("gpt", FakeTokenizer)
    return manager

# ==============================================================================
# 2. Fixtures
# ==============================================================================

@pytest.fixture
def fake_manager() -> TokenizerManager:
    return make_fake_manager()

@pytest.fixture
def engine(fake_manager) -> TokenizationEngine:
    return TokenizationEngine(fake_manager)

@pytest.fixture
def override_manager(fake_manager):
    """让 API 层使用假的 provider，避免 tiktoken 下载词表"""
    app.dependency_overrides[get_tokenizer_manager] = lambda: fake_manager
    yield fake_manager
    app.dependency_overrides.pop(get_tokenizer_manager, None)

@pytest.fixture
async def client(override_manager):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
