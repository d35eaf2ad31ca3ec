# scratchkit

scratchkit is a small toolkit built around a three-card poker game engine.
It also has a few text helpers, table and column descriptions with the data
needed to render a model type from them, and a tiny echo command. It has no
dependencies beyond the standard library.

## Three-card poker

A card is an integer. The hundreds digit gives the suit (0 spades, 1 hearts,
2 clubs, 3 diamonds) and the remainder gives the rank, from 2 up to 14 (ace).
So `14` is the ace of spades and `302` is the two of diamonds.

```python
from scratchkit.cards import Deck, compare

deck = Deck()                # a fresh, full 52-card deck
first = deck.deal()          # a HandCard of three cards
second = deck.deal()

print(first.score(), second.score())
print(compare(first, second))   # True when the first hand scores higher
```

Hands rank, from strongest to weakest: leopard (three of a kind), royal
flush (straight flush), flush, straight, pair and high card. `HandCard`
answers `is_leopard()`, `is_royal_flush()`, `is_flush()`, `is_straight()`
and `is_pair()`, and `score()` folds the hand's class and the sum of its
ranks into one number (in an A-2-3 straight the ace counts low).
`HandCard.to_json()` gives the hand's wire form, `{"cards": [...]}`.

`Deck.cut_the_deck()` gathers all cards back and starts a new deck version.
Between cuts a deck deals at most 17 hands; asking for more raises
`DealError`.

The game itself is driven by three layers, all built on `asyncio`. Players
are reached through callables you supply: an async `caller(player_id, data)`
that delivers a message, an async `receiver(player_id)` that returns the
player's next message, and a `get_player_name(player_id)` function.

- `scratchkit.round.RoundSession` plays one round: the blind, the betting
  turns and the showdown, and returns the winner's id. Players send JSON
  actions, parsed by `to_action` into an `Action` (see `ActionType`): ready,
  call (`ACTION_IN`), fold (`ACTION_OUT`), look at their cards
  (`ACTION_VIEW`) or show against another player (`ACTION_SHOW`). A move
  that cannot be parsed or is not allowed raises `ActionError`; during a
  round the player is told why and asked again.
- `scratchkit.session.W3cSession` plays a whole match: three rounds per
  player, waiting before each round until every player has sent a ready
  action, then settling the stakes into `score_map`. It raises
  `SessionError` when it cannot start, for example with fewer than two
  players.
- `scratchkit.hub.Hub` is a game room. Rooms are opened and looked up
  through a `HubRegistry` (`create_hub`, `get_hub`); a room expires two
  hours after it is opened. Players join with `register` and leave with
  `unregister` (both refused with `HubError` once a game is running), and
  `start` plays a whole match with the seated players. `close` closes the
  room and its players; a running game is cancelled only when forced.

Messages to players are JSON documents, as UTF-8 bytes, built by the
functions in `scratchkit.w3c_messages` and by
`scratchkit.hub.gen_hub_session_msg`.

`scratchkit.local_player.LocalPlayer` is a player that logs what it is sent
and reads each move as a line from standard input, prompting on standard
error, handy for trying a game at a terminal.

## Text helpers

```python
from scratchkit.textutil import fmt_han, reverse, to_upper

reverse("Hello")      # 'olleH'
to_upper("Hello")     # 'HELLO'
fmt_han(30, "中文")    # right-aligned to 30 columns, non-ASCII characters taking two
```

`scratchkit.fzsx` has `split_line`, which returns text wrapped about every
thirty wide characters while keeping `${...}` spans whole, and
`contents_print`, which prints one entry wrapped, or several entries as a
numbered list.

## Table models

`scratchkit.schema` holds `Table` and `Column`, dataclasses describing a
database table and its columns; a `None` value becomes `""` or `0`.
`scratchkit.model.Model(table, columns, pkg_name)` prepares them for
rendering: its `columns` are `ModelColumn`s in ordinal order, each with a
camel-case name and a mapped type, its `imports` list the packages those
types need, and it offers `model_name` and `receiver_name`.

```python
from scratchkit.model import map_type, snake_to_camel

snake_to_camel("user_name")   # 'UserName'
map_type("bigint")            # 'int64'
```

`map_type` raises `UnknownTypeError` for a data type it does not know, and
`import_packages` lists the imports a set of columns needs.

## A small example module

`scratchkit.mydoc` has `Stu` (with `study()` and a `code` counter),
`Teacher`, `meet`, which prints their greetings, and `version`:

```python
from scratchkit.mydoc import version
version()   # prints v1.0.0 and returns it
```

## Echo

`scratchkit-echo` prints its arguments joined by spaces, without a trailing
newline. With no arguments it copies standard input, line by line, with the
line endings removed. It always exits with status 2.

```
scratchkit-echo hello world
```

## What it does not do

- There is no game server: no HTTP endpoints, logins, tokens or network
  players. Games run only with the callables you pass in, or with
  `LocalPlayer` at a terminal.
- Table and column descriptions are not read from a database; you build
  them yourself.
- `Model` gathers the data for a model type but does not render or write
  source text.
- The note-wrapping helpers have no command line and no bundled notes.