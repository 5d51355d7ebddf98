# tokenscope/engine/tokenization/__init__.py
from .main import TokenizationEngine, parse_token_ids
from .export import format_export
from .session import TokenizerSession
from .base import ClipboardWriter, ErrorSink, SessionListener
