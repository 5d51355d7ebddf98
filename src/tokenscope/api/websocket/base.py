# tokenscope/api/websocket/base.py

import logging
import json
from typing import Any, Optional
from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from tokenscope.utils.websocket_manager import ws_manager, WSPacket, WSEvent

logger = logging.getLogger(__name__)

class BaseWebSocketHandler:
    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    async def run(self):
        """主事件循环"""
        await ws_manager.connect(self.websocket)
        try:
            await self.on_connect()
            while True:
                text = await self.websocket.receive_text()
                await self._dispatch(text)
        except WebSocketDisconnect:
            logger.info("WS Disconnect")
        except Exception as e:
            logger.error(f"WS Loop Error: {e}", exc_info=True)
        finally:
            await self.on_disconnect() # 钩子：允许子类清理任务
            ws_manager.disconnect(self.websocket)

    async def _dispatch(self, text: str):
        """动态路由分发"""
        try:
            payload = json.loads(text)
            packet = WSPacket(**payload)
        except (ValueError, TypeError, ValidationError) as e:
            await self.reply_error(None, f"Protocol Error: {e}")
            return

        # 约定：action="set_model" -> 路由到 self.action_set_model(packet)
        method_name = f"action_{packet.action}"
        if hasattr(self, method_name):
            handler = getattr(self, method_name)
            try:
                await handler(packet)
            except Exception as e:
                logger.error(f"Action '{packet.action}' failed: {e}", exc_info=True)
                await self.reply_error(packet.request_id, str(e))
        else:
            await self.reply_error(packet.request_id, f"Unknown action: {packet.action}")

    async def send(self, event: str, data: Any = None, request_id: Optional[str] = None):
        """发送辅助方法"""
        packet = WSEvent(event=event, data=data, request_id=request_id)
        await ws_manager.send_personal_message(packet, self.websocket)

    async def reply_error(self, request_id: Optional[str], message: str):
        await self.send("error", {"message": message}, request_id)

    async def on_connect(self):
        """子类覆盖此方法进行初始化"""
        pass

    async def on_disconnect(self):
        """子类覆盖此方法进行清理"""
        pass

    # --- 通用 Action ---
    async def action_ping(self, packet: WSPacket):
        await self.send("pong", "pong", packet.request_id)
