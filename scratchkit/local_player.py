"""A player driven from the console, for trying games out locally."""

import asyncio
import logging
import sys
import threading

from scratchkit.randutil import rand_num

log = logging.getLogger(__name__)

PLAYER_ID_LIMIT = 9999

# One console prompt at a time, whichever player is asked.
_console_lock = threading.Lock()


class LocalPlayer:
    """A player whose messages are logged and whose moves are typed in."""

    def __init__(self, name, stdin=None, prompt_stream=None):
        self.id = rand_num(PLAYER_ID_LIMIT)
        self.name = name
        self._stdin = stdin
        self._prompt_stream = prompt_stream
        self._closed = False

    @property
    def closed(self):
        return self._closed

    async def send(self, data):
        """Log a message sent to this player."""
        if self._closed:
            raise ConnectionError(f"player {self.id} is closed")
        text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
        log.info("对玩家[%d]发出消息：%s", self.id, text)

    async def receive(self):
        """Prompt on the console and return the typed line as bytes."""
        if self._closed:
            raise ConnectionError(f"player {self.id} is closed")
        return await asyncio.to_thread(self._read)

    def close(self):
        """Stop the player; later sends and receives fail."""
        self._closed = True

    def _read(self):
        stdin = sys.stdin if self._stdin is None else self._stdin
        prompt = sys.stderr if self._prompt_stream is None else self._prompt_stream
        with _console_lock:
            prompt.write(f"请对玩家[{self.id}]进行操作\n")
            prompt.flush()
            line = stdin.readline()
            if not line:
                raise EOFError(f"no more input for player {self.id}")
            prompt.write("输入结束\n")
            prompt.flush()
        return line.rstrip("\r\n").encode("utf-8")