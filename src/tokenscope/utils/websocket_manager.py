# tokenscope/utils/websocket_manager.py

import logging
from typing import List, Dict, Any, Optional
from fastapi import WebSocket
from pydantic import BaseModel

logger = logging.getLogger(__name__)

# --- 1. 标准协议定义 ---

class WSPacket(BaseModel):
    """
    客户端请求包。
    request_id: 仅用于前端UI定位，后端原样返回，不用于逻辑控制。
    """
    action: str
    data: Dict[str, Any] = {}
    request_id: Optional[str] = None

class WSEvent(BaseModel):
    """服务端响应包"""
    event: str
    data: Any = None
    request_id: Optional[str] = None # 原样返回客户端传来的ID

    def to_text(self) -> str:
        return self.model_dump_json(exclude_none=True)

# --- 2. 连接管理器 ---

class WSConnectionManager:
    """
    管理 WebSocket 连接，每个连接对应一个分词会话。
    """
    def __init__(self):
        # 维护所有活跃连接
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"WS Connected. Total: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
        logger.info(f"WS Disconnected. Total: {len(self.active_connections)}")

    async def send_personal_message(self, message: WSEvent, websocket: WebSocket):
        """发送结构化消息给特定连接"""
        try:
            await websocket.send_text(message.to_text())
        except RuntimeError:
            # 连接可能已关闭
            pass

# 全局单例
ws_manager = WSConnectionManager()
