"""One round of the three-card game: player actions and the betting loop."""

import asyncio
import json
import logging
from dataclasses import dataclass
from enum import Enum

from scratchkit.cards import compare
from scratchkit.w3c_messages import (
    gen_action_view_msg,
    gen_info_msg,
    gen_round_session_msg,
    gen_view_log_msg,
)

log = logging.getLogger(__name__)

# Ante unit; the blind pays BASE times the number of players.
BASE = 1


class ActionType(str, Enum):
    """Actions a player can send."""

    W3C_ACTION_READY = "W3C_ACTION_READY"
    ACTION_IN = "ACTION_IN"
    ACTION_OUT = "ACTION_OUT"
    ACTION_VIEW = "ACTION_VIEW"
    ACTION_SHOW = "ACTION_SHOW"


class ActionError(Exception):
    """Raised for an action that cannot be parsed or is not allowed."""


@dataclass
class PlayInfo:
    """A player's state within one round."""

    score: int = 0
    is_viewed: bool = False
    is_out: bool = False

    def to_json(self):
        return {"score": self.score, "is_viewed": self.is_viewed, "is_out": self.is_out}


@dataclass
class Action:
    """One move sent by a player."""

    action_type: str = ""
    bet: int = 0
    show_id: int = 0

    def is_continued(self):
        """True when the same player keeps the turn after this action."""
        return self.action_type == ActionType.ACTION_VIEW

    def is_show(self):
        return self.action_type == ActionType.ACTION_SHOW

    def is_w3c_ready(self):
        return self.action_type == ActionType.W3C_ACTION_READY

    def _check_bet(self, session, pinfo):
        multiplier = 1 if pinfo.is_viewed else 2
        if multiplier * self.bet < session.max_bet:
            raise ActionError("下注必须大于当前最大注码！")
        return multiplier

    async def apply(self, session):
        """Carry out the action for the session's current player."""
        kind = self.action_type
        if kind == ActionType.ACTION_IN:
            pinfo = session.current_pinfo
            if pinfo.is_out:
                raise ActionError("已经出局的玩家不能进行下注！")
            multiplier = self._check_bet(session, pinfo)
            pinfo.score += self.bet
            session.max_bet = self.bet * multiplier

        elif kind == ActionType.ACTION_OUT:
            session.current_pinfo.is_out = True

        elif kind == ActionType.ACTION_VIEW:
            session.current_pinfo.is_viewed = True
            player = session.current_player
            await session._notify(player, gen_action_view_msg(session.hand_cards[player]))

        elif kind == ActionType.ACTION_SHOW:
            current = session.current_player
            if current == self.show_id:
                raise ActionError("不能开自己的牌！")
            pinfo1 = session.current_pinfo
            pinfo2 = session.pinfo.get(self.show_id)
            if pinfo2 is None:
                raise ActionError("错误：未找到该玩家！")
            if pinfo1.is_out or pinfo2.is_out:
                raise ActionError("已经出局的玩家不能(被)开牌！")
            self._check_bet(session, pinfo1)
            pinfo1.score += self.bet

            h1 = session.hand_cards[current]
            h2 = session.hand_cards.get(self.show_id)
            if h2 is None or not h2.version:
                raise ActionError("错误：未找到该玩家底牌！")

            session.view_log.setdefault(current, []).append(self.show_id)
            if compare(h1, h2):
                pinfo2.is_out = True
                session.view_log.setdefault(self.show_id, []).append(current)
            else:
                pinfo1.is_out = True

        session.plog.append(self.log_line(session))

    def log_line(self, session):
        """The table log entry describing this action."""
        name = session.get_player_name
        line = f"玩家[{name(session.players[session.current])}]"
        kind = self.action_type
        if kind == ActionType.ACTION_IN:
            line = f"{line}【跟注】：【{self.bet}】"
        elif kind == ActionType.ACTION_OUT:
            line = f"{line}【弃牌】"
        elif kind == ActionType.ACTION_VIEW:
            line = f"{line}进行了【看牌】"
        elif kind == ActionType.ACTION_SHOW:
            out_id = session.current_player if session.current_pinfo.is_out else self.show_id
            line = f"{line}【开牌】玩家[{name(self.show_id)}]：玩家[{name(out_id)}]出局"
        return line


def _int_field(payload, key):
    value = payload.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ActionError(f"解析操作消息错误：field {key!r} must be an integer")
    return value


def to_action(data):
    """Parse a JSON action message."""
    try:
        payload = json.loads(data)
    except (ValueError, TypeError) as exc:
        raise ActionError(f"解析操作消息错误：{exc}") from exc
    if payload is None:
        return Action()
    if not isinstance(payload, dict):
        raise ActionError("解析操作消息错误：expected a JSON object")
    action_type = payload.get("action_type")
    if action_type is None:
        action_type = ""
    if not isinstance(action_type, str):
        raise ActionError("解析操作消息错误：field 'action_type' must be a string")
    return Action(
        action_type=action_type,
        bet=_int_field(payload, "bet"),
        show_id=_int_field(payload, "show_id"),
    )


class RoundSession:
    """One deal: the blind, the betting turns and the showdown."""

    def __init__(self, caller, receiver, get_player_name):
        self.caller = caller
        self.receiver = receiver
        self.get_player_name = get_player_name
        self.players = []
        self.hand_cards = {}
        self.max_bet = 0
        self.pinfo = {}
        self.plog = []
        self.is_start = False
        self.view_log = {}
        self.current = 0

    @property
    def current_player(self):
        return self.players[self.current]

    @property
    def current_pinfo(self):
        return self.pinfo[self.players[self.current]]

    def setup(self, deck, players):
        """Reset the round and deal a hand to every player, in seat order."""
        self.players = list(players)
        self.hand_cards = {}
        self.pinfo = {}
        self.plog = []
        self.view_log = {}
        self.current = 0
        self.max_bet = BASE * 2
        for player_id in self.players:
            self.hand_cards[player_id] = deck.deal()
            self.pinfo[player_id] = PlayInfo()

    async def run(self, deck, players):
        """Play the round to its end and return the winner's id."""
        self.setup(deck, players)
        self.is_start = True
        self._blind()

        show_winner = False
        while True:
            await self.broadcast_session()

            try:
                data = await self._wait_action()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                log.error("接收玩家操作消息错误：%s", exc)
                continue

            try:
                action = to_action(data)
            except ActionError as exc:
                log.error("解析玩家操作消息错误：%s", exc)
                continue

            try:
                await action.apply(self)
            except ActionError as exc:
                await self._notify(self.current_player, gen_info_msg(str(exc)))
                continue

            if action.is_continued():
                continue

            if not self.advance():
                show_winner = action.is_show()
                break

        await self.broadcast_session()
        await self._showdown(show_winner)
        return self.current_player

    async def broadcast_session(self):
        """Send the table state to every player."""
        msg = gen_round_session_msg(self)
        for player_id in self.players:
            await self._notify(player_id, msg)

    async def broadcast_info(self, msg):
        """Send a text notice to every player."""
        data = gen_info_msg(msg)
        for player_id in self.players:
            await self._notify(player_id, data)

    def advance(self):
        """Move the turn to the next player still in.

        Returns False when at most one player remains; the turn then rests
        on that player, the winner.
        """
        found = False
        count = len(self.players)
        start = self.current
        for step in range(1, count + 1):
            index = (start + step) % count
            if not self.pinfo[self.players[index]].is_out:
                if not found:
                    found = True
                    self.current = index
                    continue
                return True
        return False

    async def _notify(self, player_id, msg):
        try:
            await self.caller(player_id, msg)
        except Exception as exc:
            log.error("向玩家[%s]发送消息失败：%s", player_id, exc)

    def _blind(self):
        count = len(self.players)
        index = (self.current + 1) % count
        self.pinfo[self.players[index]].score += count * BASE
        name = self.get_player_name(self.players[index])
        self.plog.append(f"玩家[{name}]下庄：【{count * BASE}】")

    async def _wait_action(self):
        await self.broadcast_info(
            f"轮到玩家[{self.get_player_name(self.current_player)}]操作"
        )
        return await self.receiver(self.current_player)

    async def _showdown(self, show_winner):
        winner = self.current_player
        for player_id in self.players:
            visible = {player_id: self.hand_cards[player_id]}
            if show_winner:
                visible[winner] = self.hand_cards[winner]
            for other in self.view_log.get(player_id, []):
                visible[other] = self.hand_cards[other]
            await self._notify(player_id, gen_view_log_msg(winner, visible))