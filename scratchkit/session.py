"""A full three-card game: several rounds, readiness and settlement."""

import asyncio
import logging

from scratchkit.cards import DealError, Deck
from scratchkit.round import ActionError, RoundSession, to_action
from scratchkit.w3c_messages import (
    gen_info_msg,
    gen_relink_session_msg,
    gen_seq_msg,
    gen_w3c_result_msg,
    gen_w3c_session_msg,
)

log = logging.getLogger(__name__)

# Each player deals this many rounds in one game.
BASE_ROUND = 3
# Pause before the final result is announced, in seconds.
RESULT_DELAY = 1.0


class SessionError(Exception):
    """Raised when a game cannot be started or played."""


class W3cSession:
    """A game of several rounds between the same players."""

    result_delay = RESULT_DELAY

    def __init__(self, caller, receiver, get_player_name):
        self.caller = caller
        self.receiver = receiver
        self.get_player_name = get_player_name
        self.players = []
        self.deck = None
        self.round = 0
        self.score_map = {}
        self.ready_info = {}
        self.round_session = RoundSession(caller, receiver, get_player_name)

    def setup(self, players):
        """Reset scores and readiness for a new game."""
        players = list(players)
        if len(players) <= 1:
            raise SessionError("人数不够开局")
        self.players = players
        self.ready_info = {player_id: False for player_id in players}
        self.score_map = {player_id: 0 for player_id in players}
        self.round = 1
        self.deck = Deck()
        self.round_session = RoundSession(
            self.caller, self.receiver, self.get_player_name
        )

    async def run(self, players):
        """Play every round of the game and announce the result."""
        try:
            self.setup(players)
        except SessionError as exc:
            raise SessionError(f"初始化开局信息失败：{exc}") from exc

        await self.broadcast_session()
        for round_no in range(1, len(self.players) * BASE_ROUND + 1):
            self.round = round_no
            await self.wait_ready()
            await self.broadcast_msg("游戏开始！")

            try:
                winner = await self.play(round_no)
            except DealError as exc:
                raise SessionError(f"开局失败：{exc}") from exc

            self.settle(winner)
            await self.broadcast_session()

        await asyncio.sleep(self.result_delay)
        await self.broadcast_result()

    async def wait_ready(self):
        """Wait until every player who is not ready sends a ready action."""
        pending = [pid for pid in self.players if not self.ready_info.get(pid)]
        await asyncio.gather(*(self._await_ready(pid) for pid in pending))

    async def _await_ready(self, player_id):
        while True:
            try:
                data = await self.receiver(player_id)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                log.error("等待玩家准备时，接收操作错误：%s", exc)
                continue

            try:
                action = to_action(data)
            except ActionError as exc:
                log.error("解析玩家操作消息错误：%s", exc)
                continue

            if not action.is_w3c_ready():
                log.error("玩家操作错误，需要进行准备操作！")
                continue

            self.ready_info[player_id] = True
            await self.broadcast_session()
            return

    async def play(self, round_no):
        """Seat the players for this round, deal and play it; return the winner."""
        count = len(self.players)
        shift = round_no % count
        seats = [0] * count
        for index, player_id in enumerate(self.players):
            seats[(index + shift) % count] = player_id

        self.deck.cut_the_deck()
        return await self.round_session.run(self.deck, seats)

    async def info_player(self, player_id, msg):
        """Send a raw text message to one player."""
        await self._notify(player_id, msg.encode("utf-8"))

    async def broadcast_msg(self, msg):
        """Send a text notice to every player."""
        data = gen_info_msg(msg)
        for player_id in self.players:
            await self._notify(player_id, data)

    async def broadcast_seq(self, players):
        """Send the seating order to the seated players."""
        data = gen_seq_msg(players)
        for player_id in players:
            await self._notify(player_id, data)

    async def broadcast_session(self):
        """Send scores, round and readiness to every player."""
        data = gen_w3c_session_msg(self)
        for player_id in self.players:
            await self._notify(player_id, data)

    async def info_player_session(self, player_id):
        """Send a reconnecting player the full state of the game."""
        await self._notify(player_id, gen_relink_session_msg(self, player_id))

    async def broadcast_result(self):
        """Send the final scores to every player."""
        data = gen_w3c_result_msg(self)
        for player_id in self.players:
            await self._notify(player_id, data)

    def settle(self, winner):
        """Move the round's stakes to the winner and clear readiness."""
        pot = 0
        for player_id, info in self.round_session.pinfo.items():
            pot += info.score
            self.score_map[player_id] = self.score_map.get(player_id, 0) - info.score
        self.score_map[winner] = self.score_map.get(winner, 0) + pot

        for player_id in self.ready_info:
            self.ready_info[player_id] = False

    async def _notify(self, player_id, data):
        try:
            await self.caller(player_id, data)
        except Exception as exc:
            log.error("向玩家[%s]发送消息失败：%s", player_id, exc)