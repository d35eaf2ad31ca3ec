"""Game rooms that gather players and run a three-card game between them."""

import asyncio
import json
import logging
import time

from scratchkit.randutil import rand_num
from scratchkit.session import SessionError, W3cSession

log = logging.getLogger(__name__)

MSGTYPE_HUB_SESSION = "HUB_SESSION"
HUB_ID_LIMIT = 9999
HUB_LIFETIME = 2 * 60 * 60

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


class HubError(Exception):
    """Raised when a room operation is not allowed or fails."""


def gen_hub_session_msg(hub, msg):
    """The room state: owner and seated players, with a notice."""
    players = {
        str(player_id): {"id": hub.players[player_id].id, "name": hub.players[player_id].name}
        for player_id in sorted(hub.players, key=str)
    }
    payload = {
        "type": MSGTYPE_HUB_SESSION,
        "msg": msg,
        "data": {"owner": hub.owner, "players": players},
    }
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    for char, escape in _HTML_ESCAPES:
        text = text.replace(char, escape)
    return text.encode("utf-8")


class Hub:
    """A room owned by one user in which a game is played."""

    def __init__(self, hub_id, owner, registry=None):
        self.id = hub_id
        self.owner = owner
        self.players = {}
        self.is_started = False
        self.closed = False
        self.session = W3cSession(self._call_player, self._receive_player, self._player_name)
        self._registry = registry
        self._game = None
        self._cancelled = False

    def register(self, player):
        """Seat a player in the room."""
        if self.is_started:
            raise HubError("游戏已开始！")
        self.players[player.id] = player

    def unregister(self, player_id):
        """Remove a player from the room; unknown players are ignored."""
        if self.is_started:
            raise HubError("游戏已开始！")
        self.players.pop(player_id, None)

    async def start(self):
        """Play a whole game with the seated players; a no-op if one is running."""
        if self.is_started:
            return
        self.is_started = True
        self._cancelled = False
        players = [player.id for player in self.players.values()]
        self._game = asyncio.ensure_future(self.session.run(players))
        try:
            await self._game
        except asyncio.CancelledError:
            if not self._cancelled:
                raise
            log.error("游戏被取消")
            raise HubError("开局失败：游戏被取消") from None
        except SessionError as exc:
            raise HubError(f"开局失败：{exc}") from exc
        finally:
            self.is_started = False
            self._game = None

    def close(self, force):
        """Close the room and its players; a running game stops only if forced."""
        if self.is_started and not force:
            return
        for player in list(self.players.values()):
            try:
                player.close()
            except Exception as exc:
                log.error("关闭玩家[%s]失败：%s", player.id, exc)
        if self._registry is not None:
            self._registry._discard(self.id)
        if self._game is not None and not self._game.done():
            self._cancelled = True
            self._game.cancel()
        self.closed = True

    async def broadcast_hub_session(self, msg):
        """Send the room state with a notice to every player."""
        data = gen_hub_session_msg(self, msg)
        for player_id in list(self.players):
            try:
                await self._call_player(player_id, data)
            except Exception as exc:
                log.error("向玩家[%s]发送消息失败：%s", player_id, exc)

    async def info_player_relink_session(self, player_id):
        """Send a reconnecting player the game state, if a game is running."""
        if not self.is_started:
            return
        await self.session.info_player_session(player_id)

    async def _call_player(self, player_id, msg):
        player = self.players.get(player_id)
        if player is None:
            raise HubError(f"接收数据错误：未找到玩家[{player_id}]")
        await player.send(msg)

    async def _receive_player(self, player_id):
        player = self.players.get(player_id)
        if player is None:
            raise HubError(f"接收数据错误：未找到玩家[{player_id}]")
        return await player.receive()

    def _player_name(self, player_id):
        player = self.players.get(player_id)
        return "" if player is None else player.name


class HubRegistry:
    """Open rooms by id; a room expires after its lifetime."""

    def __init__(self, lifetime=HUB_LIFETIME, clock=time.monotonic):
        self._lifetime = lifetime
        self._clock = clock
        self._hubs = {}
        self._created = {}

    def create_hub(self, owner):
        """Open a new room with a random free id."""
        self._purge()
        if len(self._hubs) >= HUB_ID_LIMIT:
            raise HubError("房间数量已满！")
        hub_id = rand_num(HUB_ID_LIMIT)
        while hub_id in self._hubs:
            hub_id = rand_num(HUB_ID_LIMIT)
        hub = Hub(hub_id, owner, registry=self)
        self._hubs[hub_id] = hub
        self._created[hub_id] = self._clock()
        return hub

    def get_hub(self, hub_id):
        """The open room with this id, or None."""
        self._purge()
        return self._hubs.get(hub_id)

    def _discard(self, hub_id):
        self._hubs.pop(hub_id, None)
        self._created.pop(hub_id, None)

    def _purge(self):
        now = self._clock()
        expired = [
            hub_id
            for hub_id, created in self._created.items()
            if now - created >= self._lifetime
        ]
        for hub_id in expired:
            self._discard(hub_id)