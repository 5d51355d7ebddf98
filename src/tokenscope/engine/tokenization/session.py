# tokenscope/engine/tokenization/session.py

import asyncio
import logging
from typing import Callable, List, Optional
from tokenscope.core.config import settings
from tokenscope.engine.utils.debounce import DebounceGate
from tokenscope.schemas.tokenizer_schemas import (
    DisplayMode, ExportFormat, ResultSet, SessionSnapshot, TokenizeMode
)
from .base import ClipboardWriter, SessionListener
from .export import format_export
from .main import TokenizationEngine

logger = logging.getLogger(__name__)

class TokenizerSession:
    """
    一个用户的实时分词会话。

    - raw_input 每次按键都变，但只会喂给 DebounceGate；
    - settled_input 只在 gate 触发时更新；
    - 结果集始终是 (settled_input, active_model, active_mode) 的纯函数，
      任一项变化都整体重算一次并原子替换。
    所有操作都在事件循环线程上执行。
    """
    def __init__(
        self,
        engine: Optional[TokenizationEngine] = None,
        model: Optional[str] = None,
        mode: TokenizeMode = TokenizeMode.ENCODE,
        debounce_seconds: Optional[float] = None,
        copied_seconds: Optional[float] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.engine = engine or TokenizationEngine()
        self.raw_input = ""
        self.settled_input = ""
        self.active_model = model or settings.DEFAULT_MODEL
        self.active_mode = TokenizeMode(mode)
        self.display_mode = DisplayMode.BADGES
        self.show_indices = False
        self.copied = False
        self.recompute_count = 0

        self._loop = loop
        self._copied_seconds = settings.COPIED_INDICATOR_SECONDS if copied_seconds is None else copied_seconds
        self._copied_handle: Optional[asyncio.TimerHandle] = None
        self._gate: DebounceGate[str] = DebounceGate(
            settings.DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds, self._on_settled, loop=loop
        )
        self._listeners: List[SessionListener] = []
        self._closed = False
        self.result: ResultSet = ResultSet.empty(self.active_mode, self.active_model)

    # --- 订阅 ---

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """注册状态监听者，返回取消订阅的函数"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify(self):
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Session listener failed: {e}", exc_info=True)

    # --- 状态 ---

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def can_copy(self) -> bool:
        return not self.result.is_empty

    @property
    def input_pending(self) -> bool:
        return self._gate.pending

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            raw_input=self.raw_input,
            settled_input=self.settled_input,
            active_model=self.active_model,
            active_mode=self.active_mode,
            display_mode=self.display_mode,
            # Numbered 模式下序号总是显示，索引开关无意义
            show_indices=self.show_indices and self.display_mode == DisplayMode.BADGES,
            copied=self.copied,
            can_copy=self.can_copy,
            result=self.result,
        )

    def _ensure_open(self):
        if self._closed:
            raise RuntimeError("Tokenizer session is closed")

    # --- 触发重算的事件 ---

    def set_input(self, text: str):
        self._ensure_open()
        self.raw_input = text
        self._gate.push(text)

    def _on_settled(self, value: str):
        self.settled_input = value
        self._recompute()

    def set_model(self, model: str):
        self._ensure_open()
        if model == self.active_model:
            return
        self.active_model = model
        self._recompute()

    def set_mode(self, mode: TokenizeMode):
        self._ensure_open()
        mode = TokenizeMode(mode)
        if mode == self.active_mode:
            return
        self.active_mode = mode
        self._recompute()

    def _recompute(self):
        # 整体替换，不复用上一次的结果
        self.result = self.engine.compute(self.settled_input, self.active_model, self.active_mode)
        self.recompute_count += 1
        self._notify()

    # --- 纯展示状态，不触发重算 ---

    def set_display_mode(self, display_mode: DisplayMode):
        self._ensure_open()
        self.display_mode = DisplayMode(display_mode)
        self._notify()

    def set_show_indices(self, show: bool):
        self._ensure_open()
        self.show_indices = bool(show)
        self._notify()

    def toggle_indices(self):
        self.set_show_indices(not self.show_indices)

    # --- 导出 / 复制 ---

    def export(self, export_format: ExportFormat = ExportFormat.IDS) -> Optional[str]:
        return format_export(self.result, self.display_mode, export_format)

    async def copy(self, clipboard: ClipboardWriter, export_format: ExportFormat = ExportFormat.IDS) -> bool:
        """
        把当前结果写入剪贴板。结果为空时什么都不做。
        成功后 copied 标记保持 copied_seconds 秒；失败只记日志，不向上抛。
        """
        self._ensure_open()
        content = self.export(export_format)
        if content is None:
            return False

        try:
            await clipboard.write_text(content)
        except Exception as e:
            logger.warning(f"Failed to copy tokens: {e}")
            return False

        if self._closed:
            return True
        self._set_copied()
        return True

    def _set_copied(self):
        if self._copied_handle is not None:
            self._copied_handle.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._copied_handle = loop.call_later(self._copied_seconds, self._reset_copied)
        self.copied = True
        self._notify()

    def _reset_copied(self):
        self._copied_handle = None
        self.copied = False
        self._notify()

    # --- 生命周期 ---

    def close(self):
        """取消所有挂起的定时器；之后不会再发出任何状态"""
        if self._closed:
            return
        self._closed = True
        self._gate.close()
        if self._copied_handle is not None:
            self._copied_handle.cancel()
            self._copied_handle = None
        self._listeners.clear()
