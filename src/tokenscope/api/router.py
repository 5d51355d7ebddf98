# tokenscope/api/router.py

from fastapi import APIRouter
from tokenscope.api.v1 import tokenizer
from tokenscope.api.websocket import tokenizer_ws

# The main router for API v1
router = APIRouter(prefix="/api/v1")

# ===================================================================
# Tokenizer Routes
# ===================================================================

router.include_router(tokenizer.router, prefix="/tokenizer", tags=["Tokenizer"])

# Live tokenization session (mounted at the application root, /ws/tokenizer)
ws_router = APIRouter()
ws_router.include_router(tokenizer_ws.router, prefix="/ws")
