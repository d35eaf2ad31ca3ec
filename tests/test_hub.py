import asyncio
import json

import pytest

from scratchkit.hub import HubError, HubRegistry, Hub, gen_hub_session_msg

READY = b'{"action_type":"W3C_ACTION_READY"}'
OUT = b'{"action_type":"ACTION_OUT"}'


class FakePlayer:
    def __init__(self, player_id, name, reply=None):
        self.id = player_id
        self.name = name
        self.sent = []
        self.closed = False
        self.reply = reply

    async def send(self, data):
        self.sent.append(json.loads(data))

    async def receive(self):
        if self.reply is None:
            await asyncio.Event().wait()
        return self.reply(self)

    def close(self):
        self.closed = True


def auto_reply(hub):
    def reply(player):
        if not hub.session.ready_info.get(player.id):
            return READY
        return OUT

    return reply


def test_hub_session_wire_bytes():
    hub = Hub(1, 7)
    assert gen_hub_session_msg(hub, "hi") == (
        b'{"type":"HUB_SESSION","msg":"hi","data":{"owner":7,"players":{}}}'
    )


def test_hub_session_players_sorted_as_text():
    hub = Hub(1, 7)
    hub.register(FakePlayer(9, "a"))
    hub.register(FakePlayer(10, "b"))
    message = json.loads(gen_hub_session_msg(hub, "x"))
    assert list(message["data"]["players"]) == ["10", "9"]
    assert message["data"]["players"]["10"] == {"id": 10, "name": "b"}


def test_registry_create_and_get():
    registry = HubRegistry()
    hub = registry.create_hub(5)
    assert registry.get_hub(hub.id) is hub
    assert hub.owner == 5
    assert 0 <= hub.id < 9999
    assert registry.get_hub(hub.id + 1) is None


def test_registry_expires_hubs():
    now = [0.0]
    registry = HubRegistry(lifetime=10, clock=lambda: now[0])
    hub = registry.create_hub(1)
    now[0] = 9
    assert registry.get_hub(hub.id) is hub
    now[0] = 11
    assert registry.get_hub(hub.id) is None


def test_register_and_unregister():
    hub = Hub(1, 1)
    hub.register(FakePlayer(1, "a"))
    hub.register(FakePlayer(2, "b"))
    hub.unregister(1)
    hub.unregister(42)
    assert list(hub.players) == [2]


def test_register_after_start_fails():
    hub = Hub(1, 1)
    hub.is_started = True
    with pytest.raises(HubError):
        hub.register(FakePlayer(1, "a"))
    with pytest.raises(HubError):
        hub.unregister(1)


def test_close_respects_running_game():
    registry = HubRegistry()
    hub = registry.create_hub(1)
    player = FakePlayer(1, "a")
    hub.register(player)
    hub.is_started = True
    hub.close(False)
    assert registry.get_hub(hub.id) is hub
    assert player.closed is False
    hub.close(True)
    assert registry.get_hub(hub.id) is None
    assert player.closed is True


@pytest.mark.asyncio
async def test_start_with_one_player_fails():
    hub = Hub(1, 1)
    hub.register(FakePlayer(1, "a"))
    with pytest.raises(HubError):
        await hub.start()
    assert hub.is_started is False


@pytest.mark.asyncio
async def test_start_plays_full_game():
    hub = Hub(1, 1)
    hub.session.result_delay = 0
    players = [FakePlayer(1, "a", auto_reply(hub)), FakePlayer(2, "b", auto_reply(hub))]
    for player in players:
        hub.register(player)
    await hub.start()
    assert hub.is_started is False
    for player in players:
        assert player.sent[-1]["type"] == "W3C_RESULT"
    assert sum(hub.session.score_map.values()) == 0


@pytest.mark.asyncio
async def test_forced_close_cancels_game():
    registry = HubRegistry()
    hub = registry.create_hub(1)
    hub.register(FakePlayer(1, "a"))
    hub.register(FakePlayer(2, "b"))
    task = asyncio.ensure_future(hub.start())
    await asyncio.sleep(0.01)
    assert hub.is_started is True
    hub.close(True)
    with pytest.raises(HubError):
        await task
    assert hub.is_started is False
    assert registry.get_hub(hub.id) is None


@pytest.mark.asyncio
async def test_broadcast_hub_session():
    hub = Hub(1, 3)
    players = [FakePlayer(1, "a"), FakePlayer(2, "b")]
    for player in players:
        hub.register(player)
    await hub.broadcast_hub_session("welcome")
    for player in players:
        (message,) = player.sent
        assert message["type"] == "HUB_SESSION"
        assert message["msg"] == "welcome"
        assert message["data"]["owner"] == 3


@pytest.mark.asyncio
async def test_relink_only_when_started():
    hub = Hub(1, 1)
    player = FakePlayer(1, "a")
    hub.register(player)
    hub.register(FakePlayer(2, "b"))
    await hub.info_player_relink_session(1)
    assert player.sent == []
    hub.session.setup([1, 2])
    hub.is_started = True
    await hub.info_player_relink_session(1)
    assert player.sent[-1]["type"] == "RELINK_SESSION"