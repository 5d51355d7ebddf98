# tokenscope/engine/utils/debounce.py

import asyncio
import logging
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

class DebounceGate(Generic[T]):
    """
    把连续的输入变化合并成一次 "settled" 事件。

    每次 push() 都会取消尚未触发的定时器并重新计时；只有静默满 delay 秒后，
    最后一次 push 的值才会交给 on_settle。close() 之后不会再有任何回调。
    运行在事件循环线程上，不使用额外线程。
    """
    def __init__(
        self,
        delay: float,
        on_settle: Callable[[T], None],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        if delay <= 0:
            raise ValueError("delay must be positive")
        self.delay = delay
        self._on_settle = on_settle
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._value: Optional[T] = None
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def push(self, value: T) -> None:
        """记录最新值并重新开始计时"""
        if self._closed:
            raise RuntimeError("Cannot push into a closed debounce gate")
        self._value = value
        self.cancel()
        self._handle = self._get_loop().call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """取消尚未触发的定时器（值保留，但不会被发出）"""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def close(self) -> None:
        self.cancel()
        self._closed = True

    def _fire(self) -> None:
        self._handle = None
        if self._closed:
            return
        self._emit()

    def _emit(self) -> None:
        value = self._value
        try:
            self._on_settle(value)
        except Exception as e:
            # 回调运行在事件循环的定时器里，异常不能向上抛
            logger.error(f"Debounce settle callback failed: {e}", exc_info=True)
