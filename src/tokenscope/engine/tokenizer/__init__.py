# tokenscope/engine/tokenizer/__init__.py
from .base import BaseTokenizer, DegradedTokenizer, TokenizerFactory, TokenizerError, DecodeUnsupportedError
from .bundled import TiktokenTokenizer, WhitespaceTokenizer
from .manager import TokenizerManager, tokenizer_manager
