# tokenscope/utils/async_generator.py

import asyncio

class AsyncGeneratorManager:
    """
    同步生产、异步消费的队列。

    会话监听者运行在事件循环的定时器回调里（同步），
    只能 put_nowait；发送任务用 async for 把事件依次写到 WebSocket。
    close() 放入哨兵，消费者读到哨兵后迭代结束。
    """
    def __init__(self, maxsize: int = 0):
        self._queue = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self._exhausted = False
        self._sentinel = object()

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self):
        return self

    async def __anext__(self):
        return await self.get()

    async def get(self):
        if self._exhausted:
            raise StopAsyncIteration

        value = await self._queue.get()
        self._queue.task_done()

        if value is self._sentinel:
            self._exhausted = True
            raise StopAsyncIteration

        return value

    def put_nowait(self, value):
        # 单线程模型下，不 await 就不会发生切换
        if self._closed:
            raise RuntimeError("Cannot put into a closed generator")
        self._queue.put_nowait(value)

    def close(self):
        """同步关闭：尽力放入哨兵，队列满时丢弃最旧的数据给哨兵腾位置"""
        if self._closed:
            return

        self._closed = True
        while True:
            try:
                self._queue.put_nowait(self._sentinel)
                break
            except asyncio.QueueFull:
                # 必须牺牲一个旧数据来终止迭代，否则消费者会卡死。
                try:
                    self._queue.get_nowait()
                    self._queue.task_done()
                except asyncio.QueueEmpty:
                    continue
