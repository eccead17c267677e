from __future__ import annotations

from typing import List

import pytest

from snap.cards import Card, Deck, Rank, Suit
from snap.clock import ManualTimer
from snap.game import SnapConfig, SnapGame


class KeepOrder:
    """Shuffle stand-in that leaves the deck untouched and counts calls."""

    def __init__(self) -> None:
        self.calls = 0

    def shuffle(self, seq: List[Card]) -> None:
        self.calls += 1


def _cards(*ranks: Rank) -> list[Card]:
    suits = list(Suit)
    return [Card(rank=rank, suit=suits[idx % len(suits)]) for idx, rank in enumerate(ranks)]


def _game(*ranks: Rank, flip_time: int = 1000, **config: object) -> tuple[SnapGame, ManualTimer, KeepOrder]:
    rng = KeepOrder()
    timer = ManualTimer()
    deck = Deck.from_cards(_cards(*ranks), rng=rng)
    game = SnapGame(deck=deck, timer=timer, config=SnapConfig(flip_time=flip_time, **config))
    return game, timer, rng


def test_new_game_initial_state() -> None:
    game = SnapGame()

    assert game.cards_remain
    assert game.top_card is None
    assert game.previous_card is None
    assert not game.is_started
    assert game.score(0) == 0
    assert game.score(1) == 0
    assert game.flip_time == 1000


def test_first_flip_fills_only_top_slot() -> None:
    game = SnapGame()

    game.flip_next_card()

    assert game.previous_card is None
    assert game.top_card is not None
    assert game.top_card.face_up


def test_flip_shifts_top_card_down() -> None:
    game, _, _ = _game(Rank.ACE, Rank.TWO, Rank.THREE)

    game.flip_next_card()
    first = game.top_card
    game.flip_next_card()

    assert game.previous_card is first
    assert game.top_card.rank == Rank.TWO


def test_flip_on_empty_deck_is_noop() -> None:
    game, _, _ = _game(Rank.ACE)
    game.flip_next_card()
    top = game.top_card

    game.flip_next_card()

    assert not game.cards_remain
    assert game.top_card is top
    assert game.previous_card is None


def test_start_shuffles_and_flips_once() -> None:
    game, _, rng = _game(Rank.ACE, Rank.TWO, Rank.THREE)

    game.start()

    assert game.is_started
    assert rng.calls == 1
    assert game.top_card is not None
    assert game.top_card.rank == Rank.ACE
    assert game.round_number == 1


def test_second_start_is_noop() -> None:
    game, _, rng = _game(Rank.ACE, Rank.TWO, Rank.THREE)
    game.start()
    top = game.top_card

    game.start()

    assert rng.calls == 1
    assert game.top_card is top
    assert game.round_number == 1


def test_second_start_keeps_default_deck_order() -> None:
    deck = Deck()
    game = SnapGame(deck=deck, timer=ManualTimer())
    game.start()
    order = deck.peek_order()

    game.start()

    assert deck.peek_order() == order
    assert deck.cards_remaining() == 51


def test_hit_on_matching_ranks_awards_point() -> None:
    game, _, _ = _game(Rank.SEVEN, Rank.SEVEN, Rank.KING)
    game.start()
    game.flip_next_card()

    outcome = game.hit(0)

    assert outcome is not None
    assert outcome.snapped
    assert outcome.delta == 1
    assert game.score(0) == 1
    assert game.score(1) == 0
    assert not game.is_started


def test_hit_on_mismatch_penalises() -> None:
    game, _, _ = _game(Rank.SEVEN, Rank.EIGHT)
    game.start()
    game.flip_next_card()

    outcome = game.hit(1)

    assert outcome is not None
    assert not outcome.snapped
    assert game.score(1) == -1
    assert not game.is_started


def test_hit_with_single_card_penalises() -> None:
    game, _, _ = _game(Rank.SEVEN, Rank.SEVEN)
    game.start()

    game.hit(1)

    assert game.score(1) == -1


def test_scores_can_go_negative_across_rounds() -> None:
    game, _, _ = _game(Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR)
    for _ in range(3):
        game.start()
        game.hit(0)

    assert game.score(0) == -3
    assert game.round_number == 3


def test_hit_while_not_started_is_ignored() -> None:
    game, _, _ = _game(Rank.SEVEN, Rank.SEVEN)
    game.flip_next_card()
    game.flip_next_card()

    assert game.hit(0) is None
    assert game.score(0) == 0


@pytest.mark.parametrize("player", [-1, 2, 99])
def test_out_of_range_hit_changes_nothing(player: int) -> None:
    game, _, _ = _game(Rank.SEVEN, Rank.SEVEN)
    game.start()

    assert game.hit(player) is None
    assert game.scores == (0, 0)
    assert game.is_started


@pytest.mark.parametrize("idx", [-1, 2, 99])
def test_out_of_range_score_is_zero(idx: int) -> None:
    game, _, _ = _game(Rank.SEVEN, Rank.SEVEN)
    game.start()
    game.hit(0)

    assert game.score(idx) == 0


def test_only_first_hit_counts() -> None:
    game, _, _ = _game(Rank.SEVEN, Rank.SEVEN)
    game.start()
    game.flip_next_card()

    game.hit(1)
    game.hit(0)

    assert game.scores == (0, 1)


def test_update_flips_only_after_interval() -> None:
    game, timer, _ = _game(Rank.ACE, Rank.TWO, Rank.THREE, flip_time=500)
    game.start()
    first = game.top_card

    timer.advance(500)
    game.update()
    assert game.top_card is first

    timer.advance(1)
    game.update()
    assert game.top_card.rank == Rank.TWO
    assert game.previous_card is first
    assert timer.elapsed == 0

    game.update()
    assert game.top_card.rank == Rank.TWO


def test_update_does_not_advance_after_hit() -> None:
    game, timer, _ = _game(Rank.ACE, Rank.TWO, Rank.THREE, flip_time=100)
    game.start()
    game.hit(0)
    top = game.top_card

    for _ in range(5):
        timer.advance(1000)
        game.update()

    assert game.top_card is top

    game.start()
    timer.advance(101)
    game.update()
    assert game.top_card.rank == Rank.THREE


def test_update_keeps_running_on_exhausted_deck() -> None:
    game, timer, _ = _game(Rank.ACE, Rank.TWO, flip_time=10)
    game.start()
    for _ in range(4):
        timer.advance(11)
        game.update()

    assert game.is_started
    assert not game.cards_remain
    assert game.top_card.rank == Rank.TWO
    assert timer.elapsed == 0


def test_end_on_exhaustion_closes_round() -> None:
    game, timer, _ = _game(Rank.ACE, Rank.TWO, flip_time=10, end_on_exhaustion=True)
    game.start()
    timer.advance(11)
    game.update()
    assert game.is_started

    timer.advance(11)
    game.update()

    assert not game.is_started
    assert game.scores == (0, 0)
    summary = game.history.rounds[-1]
    assert summary.hitter_index is None
    assert summary.flips == 2


def test_zero_flip_time_flips_every_update() -> None:
    game, timer, _ = _game(Rank.ACE, Rank.TWO, Rank.THREE, flip_time=0)
    game.start()

    timer.advance(1)
    game.update()
    timer.advance(1)
    game.update()

    assert game.top_card.rank == Rank.THREE


def test_flip_time_is_mutable() -> None:
    game = SnapGame(timer=ManualTimer())
    game.flip_time = -5

    assert game.flip_time == -5


def test_hits_are_recorded_in_history() -> None:
    game, _, _ = _game(Rank.SEVEN, Rank.SEVEN, Rank.TWO, Rank.NINE)
    game.start()
    game.flip_next_card()
    game.hit(0)
    game.start()
    game.flip_next_card()
    game.hit(1)

    rounds = game.history.rounds
    assert [summary.hitter_index for summary in rounds] == [0, 1]
    assert [summary.snapped for summary in rounds] == [True, False]
    totals = game.history.totals()
    assert totals[0].snaps == 1
    assert totals[1].misses == 1


def test_config_requires_players() -> None:
    with pytest.raises(ValueError):
        SnapConfig(num_players=0)


def test_three_player_table() -> None:
    game, _, _ = _game(Rank.SEVEN, Rank.SEVEN, num_players=3)
    game.start()
    game.flip_next_card()

    game.hit(2)

    assert game.scores == (0, 0, 1)
