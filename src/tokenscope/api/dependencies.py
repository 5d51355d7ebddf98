# tokenscope/api/dependencies.py

from fastapi import Depends
from tokenscope.engine.tokenizer import TokenizerManager, tokenizer_manager
from tokenscope.services.tokenizer_service import TokenizerService

def get_tokenizer_manager() -> TokenizerManager:
    """测试中通过 app.dependency_overrides 替换为假的 provider"""
    return tokenizer_manager

def get_tokenizer_service(manager: TokenizerManager = Depends(get_tokenizer_manager)) -> TokenizerService:
    return TokenizerService(manager)

TokenizerServiceDep = Depends(get_tokenizer_service)
TokenizerManagerDep = Depends(get_tokenizer_manager)
