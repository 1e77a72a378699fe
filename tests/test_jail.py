"""
Tests specifically for jail mechanics.
"""

from dataclasses import replace

from tycoon.jail import pay_jail_fine, resolve_jail_state, use_jail_release_card
from tycoon.state import GamePhase, update_player


def _jail(state, player_id, **changes):
    players = update_player(state.players, player_id, in_jail=True, position=10, **changes)
    return replace(state, players=players)


def test_not_jailed_player_moves(ctx, two_player_game):
    state = two_player_game
    outcome = resolve_jail_state("player-1", 2, 3, state.players, state.property_state, state.logs, ctx)

    assert outcome.can_move
    assert outcome.players == state.players


def test_release_card_is_used_first(ctx, two_player_game):
    state = _jail(two_player_game, "player-1", has_get_out_of_jail=True)

    outcome = resolve_jail_state("player-1", 2, 3, state.players, state.property_state, state.logs, ctx)

    alice = outcome.players[0]
    assert outcome.can_move
    assert not alice.in_jail
    assert not alice.has_get_out_of_jail
    assert outcome.logs[-1] == "Alice used a release permit to leave city hall."


def test_doubles_release_the_player(ctx, two_player_game):
    state = _jail(two_player_game, "player-1")

    outcome = resolve_jail_state("player-1", 4, 4, state.players, state.property_state, state.logs, ctx)

    assert outcome.can_move
    assert not outcome.players[0].in_jail
    assert outcome.players[0].funds == 1500


def test_failed_attempt_keeps_player_in_jail(ctx, two_player_game):
    state = _jail(two_player_game, "player-1")

    outcome = resolve_jail_state("player-1", 1, 2, state.players, state.property_state, state.logs, ctx)

    assert not outcome.can_move
    assert outcome.players[0].in_jail
    assert outcome.players[0].jail_turns == 1
    assert outcome.logs[-1] == "Alice waits in city hall (1/3)."


def test_third_failed_attempt_forces_the_fine(ctx, two_player_game):
    state = _jail(two_player_game, "player-1", jail_turns=2)

    outcome = resolve_jail_state("player-1", 1, 2, state.players, state.property_state, state.logs, ctx)

    alice = outcome.players[0]
    assert outcome.can_move
    assert not alice.in_jail
    assert alice.jail_turns == 0
    assert alice.funds == 1500 - ctx.config.jail_fine
    assert outcome.logs[-1] == "Alice paid ZC 50 to exit city hall."


def test_forced_fine_can_bankrupt(ctx, two_player_game):
    state = _jail(two_player_game, "player-1", jail_turns=2, funds=30)

    outcome = resolve_jail_state("player-1", 1, 2, state.players, state.property_state, state.logs, ctx)

    assert not outcome.can_move
    assert outcome.removed_index == 0
    assert [p.player_id for p in outcome.players] == ["player-2"]


def test_pay_jail_fine(ctx, two_player_game):
    state = _jail(two_player_game, "player-1")

    next_state = pay_jail_fine(state, ctx, "player-1")

    assert not next_state.players[0].in_jail
    assert next_state.players[0].funds == 1450


def test_pay_jail_fine_requires_jail(ctx, two_player_game):
    assert pay_jail_fine(two_player_game, ctx, "player-1") is two_player_game
    assert pay_jail_fine(two_player_game, ctx, "nobody") is two_player_game


def test_pay_jail_fine_bankruptcy_ends_two_player_game(ctx, two_player_game):
    state = _jail(two_player_game, "player-1", funds=10)

    next_state = pay_jail_fine(state, ctx, "player-1")

    assert [p.player_id for p in next_state.players] == ["player-2"]
    assert next_state.current_turn_index == 0
    assert next_state.winner_id == "player-2"
    assert next_state.phase == GamePhase.SUMMARY
    assert next_state.logs[-1] == "Bob wins the game!"


def test_use_jail_release_card(ctx, two_player_game):
    state = _jail(two_player_game, "player-2", has_get_out_of_jail=True)

    next_state = use_jail_release_card(state, ctx, "player-2")

    bob = next_state.players[1]
    assert not bob.in_jail
    assert not bob.has_get_out_of_jail


def test_use_jail_release_card_without_card_is_noop(ctx, two_player_game):
    state = _jail(two_player_game, "player-2")

    assert use_jail_release_card(state, ctx, "player-2") is state
