# tokenscope/api/websocket/tokenizer_ws.py

import asyncio
import logging
from typing import Optional
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from tokenscope.api.dependencies import TokenizerManagerDep
from tokenscope.api.websocket.base import BaseWebSocketHandler
from tokenscope.engine.tokenizer import TokenizerManager
from tokenscope.engine.tokenization import TokenizationEngine, TokenizerSession
from tokenscope.schemas.tokenizer_schemas import DisplayMode, ExportFormat, SessionSnapshot, TokenizeMode
from tokenscope.utils.async_generator import AsyncGeneratorManager
from tokenscope.utils.websocket_manager import WSEvent, WSPacket

logger = logging.getLogger(__name__)

router = APIRouter()

class WebSocketClipboard:
    """
    服务端没有系统剪贴板：把要复制的文本发给客户端，由浏览器写入。
    发送失败直接抛出，由会话记录并保持 copied=False。
    """
    def __init__(self, websocket: WebSocket, request_id: Optional[str] = None):
        self.websocket = websocket
        self.request_id = request_id

    async def write_text(self, text: str) -> None:
        packet = WSEvent(event="clipboard", data={"text": text}, request_id=self.request_id)
        await self.websocket.send_text(packet.to_text())


class TokenizerWebSocketHandler(BaseWebSocketHandler):
    """
    每个连接一个 TokenizerSession。
    状态变化（包括定时器触发的 settle / copied 复位）先进 outbox，
    再由单独的发送任务按顺序写回客户端。
    """
    def __init__(self, websocket: WebSocket, manager: TokenizerManager, model: Optional[str] = None):
        super().__init__(websocket)
        self.session = TokenizerSession(engine=TokenizationEngine(manager), model=model)
        self.outbox = AsyncGeneratorManager()
        self._sender: Optional[asyncio.Task] = None

    async def on_connect(self):
        self.session.subscribe(self._on_state)
        self._sender = asyncio.create_task(self._drain_outbox())
        self._on_state(self.session.snapshot())

    def _on_state(self, snapshot: SessionSnapshot):
        if self.outbox.closed:
            return
        self.outbox.put_nowait(WSEvent(event="state", data=snapshot.model_dump(mode="json")))

    async def _drain_outbox(self):
        async for event in self.outbox:
            try:
                await self.websocket.send_text(event.to_text())
            except (RuntimeError, WebSocketDisconnect):
                # 连接已关闭，剩余事件没有意义
                break

    async def on_disconnect(self):
        self.session.close()
        self.outbox.close()
        if self._sender:
            await self._sender

    # --- Actions ---

    async def action_input(self, packet: WSPacket):
        self.session.set_input(str(packet.data.get("text", "")))

    async def action_set_model(self, packet: WSPacket):
        model = packet.data.get("model")
        if not isinstance(model, str) or not model:
            await self.reply_error(packet.request_id, "Field 'model' is required.")
            return
        self.session.set_model(model)

    async def action_set_mode(self, packet: WSPacket):
        self.session.set_mode(TokenizeMode(packet.data.get("mode")))

    async def action_set_display_mode(self, packet: WSPacket):
        self.session.set_display_mode(DisplayMode(packet.data.get("display_mode")))

    async def action_toggle_indices(self, packet: WSPacket):
        self.session.toggle_indices()

    async def action_copy(self, packet: WSPacket):
        export_format = ExportFormat(packet.data.get("export_format", ExportFormat.IDS.value))
        if not self.session.can_copy:
            await self.reply_error(packet.request_id, "Nothing to copy.")
            return
        await self.session.copy(WebSocketClipboard(self.websocket, packet.request_id), export_format)


@router.websocket("/tokenizer")
async def tokenizer_session(
    websocket: WebSocket,
    model: Optional[str] = None,
    manager: TokenizerManager = TokenizerManagerDep,
):
    handler = TokenizerWebSocketHandler(websocket, manager, model=model)
    await handler.run()
