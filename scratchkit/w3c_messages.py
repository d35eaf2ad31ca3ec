"""JSON messages sent to players during a three-card game."""

import json
from enum import Enum

from scratchkit.cards import HandCard

EMPTY_HAND = HandCard(cards=(0, 0, 0))

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


class MsgType(str, Enum):
    """Kinds of message a player can receive."""

    INFO = "INFO"
    ROUND_SESSION = "ROUND_SESSION"
    ACTION_VIEW = "ACTION_VIEW"
    VIEW_LOG = "VIEW_LOG"
    SEQ = "SEQ"
    W3C_SESSION = "W3C_SESSION"
    W3C_RESULT = "W3C_RESULT"
    RELINK_SESSION = "RELINK_SESSION"


def _encode(payload):
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    for char, escape in _HTML_ESCAPES:
        text = text.replace(char, escape)
    return text.encode("utf-8")


def _keyed(mapping, convert=None):
    """Encode an int-keyed mapping as a JSON object with keys sorted as text."""
    if mapping is None:
        return None
    return {
        str(key): convert(mapping[key]) if convert else mapping[key]
        for key in sorted(mapping, key=str)
    }


def _as_list(items):
    return None if items is None else list(items)


def _hand_json(card):
    return card.to_json()


def _pinfo_json(info):
    return info.to_json()


def _w3c_data(session, with_players=True):
    return {
        "score_map": _keyed(session.score_map),
        "round": session.round,
        "ready_info": _keyed(session.ready_info) if with_players else None,
        "seq": _as_list(session.players) if with_players else None,
    }


def gen_info_msg(msg):
    """A plain text notice."""
    return _encode({"type": MsgType.INFO.value, "msg": msg})


def gen_seq_msg(seq):
    """The seating order of a round."""
    return _encode({"type": MsgType.SEQ.value, "data": {"seq": _as_list(seq)}})


def gen_w3c_session_msg(session):
    """Scores, round number, readiness and seating of the whole game."""
    return _encode({"type": MsgType.W3C_SESSION.value, "data": _w3c_data(session)})


def gen_w3c_result_msg(session):
    """Final scores and round number of the game."""
    return _encode(
        {"type": MsgType.W3C_RESULT.value, "data": _w3c_data(session, with_players=False)}
    )


def gen_round_session_msg(round_session):
    """The table state of the current round."""
    return _encode(
        {
            "type": MsgType.ROUND_SESSION.value,
            "data": {
                "pinfo": _keyed(round_session.pinfo, _pinfo_json),
                "plog": _as_list(round_session.plog),
                "max_bet": round_session.max_bet,
                "current_player": round_session.players[round_session.current],
            },
        }
    )


def gen_relink_session_msg(session, player_id):
    """Everything a reconnecting player needs to resume the game."""
    rs = session.round_session
    hand_card = EMPTY_HAND
    current_player = 0
    if rs.is_start:
        if rs.pinfo[player_id].is_viewed:
            hand_card = rs.hand_cards[player_id]
        current_player = rs.players[rs.current]

    return _encode(
        {
            "type": MsgType.RELINK_SESSION.value,
            "w3c_data": _w3c_data(session),
            "rs_data": {
                "pinfo": _keyed(rs.pinfo, _pinfo_json),
                "plog": _as_list(rs.plog),
                "max_bet": rs.max_bet,
                "current_player": current_player,
            },
            "hand_card": hand_card.to_json(),
        }
    )


def gen_view_log_msg(winner, hand_cards):
    """The hands a player may see at showdown, with the winner."""
    return _encode(
        {
            "type": MsgType.VIEW_LOG.value,
            "data": {"hand_cards": _keyed(hand_cards, _hand_json), "winner": winner},
        }
    )


def gen_action_view_msg(card):
    """A player's own hand, sent when they look at it."""
    return _encode(
        {"type": MsgType.ACTION_VIEW.value, "data": {"hand_card": card.to_json()}}
    )