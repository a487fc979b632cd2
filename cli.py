#!/usr/bin/env python3
"""
Terminal front end for the Hold'em table.

Usage:
    python cli.py                        # you + 5 bots, blinds 1/2, stacks 200
    python cli.py --players 3            # you + 2 bots
    python cli.py --speed instant        # no pause between bot actions
    python cli.py --hands 10             # play 10 hands then stop
    python cli.py --watch                # your seat is played by a bot too
    python cli.py --stats-file ~/.holdem.json
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from holdem.ai.bot import BotPlayer
from holdem.core.card import Card
from holdem.core.hand_evaluator import evaluate
from holdem.game.betting import BettingAction
from holdem.game.config import Speed, TableConfig
from holdem.game.game import PokerGame
from holdem.game.game_state import GamePhase, HandOutcome, PlayerSnapshot, TableSnapshot
from holdem.game.player import MAX_PLAYERS, MIN_PLAYERS
from holdem.managers.stats_store import JsonFileStore, StatsStore

logger = logging.getLogger(__name__)


# -- ANSI colors ---------------------------------------------------------------

RESET  = "\033[0m"
BOLD   = "\033[1m"
DIM    = "\033[2m"
RED    = "\033[91m"
GREEN  = "\033[92m"
YELLOW = "\033[93m"
BLUE   = "\033[94m"
CYAN   = "\033[96m"
WHITE  = "\033[97m"

SUIT_SYMBOLS = {"c": "♣", "d": "♦", "h": "♥", "s": "♠"}
SUIT_COLORS  = {"c": GREEN, "d": BLUE, "h": RED, "s": WHITE}


def fmt_card(card: Optional[Card]) -> str:
    """Pretty-print a card like Ah → colored 'A♥'; None is a face-down card."""
    if card is None:
        return f"{DIM}[??]{RESET}"
    text = str(card)
    rank, suit_ch = text[:-1], text[-1]
    return f"{SUIT_COLORS.get(suit_ch, '')}{BOLD}{rank}{SUIT_SYMBOLS.get(suit_ch, suit_ch)}{RESET}"


def fmt_cards(cards) -> str:
    return " ".join(fmt_card(c) for c in cards)


def fmt_chips(n: int) -> str:
    return f"{YELLOW}${n:,}{RESET}"


# -- Display helpers -----------------------------------------------------------

def print_divider(label: str = "") -> None:
    if label:
        print(f"\n{DIM}{'─' * 20} {BOLD}{WHITE}{label} {DIM}{'─' * 20}{RESET}")
    else:
        print(f"{DIM}{'─' * 60}{RESET}")


def print_table(snap: TableSnapshot, viewer_id: Optional[int] = 0) -> None:
    """Print the table as seen from viewer_id (None reveals every hand)."""
    if snap.community_cards:
        print(f"\n  Board: {fmt_cards(snap.community_cards)}")
    else:
        print(f"\n  Board: {DIM}(no community cards yet){RESET}")
    print(f"  Pot:   {fmt_chips(snap.pot)}")
    print()

    showdown = snap.phase == GamePhase.SHOWDOWN
    for i, p in enumerate(snap.players):
        visible = viewer_id is None or p.player_id == viewer_id or (showdown and not p.folded)
        shown = p.hole_cards if visible else [None] * len(p.hole_cards)
        cards = fmt_cards(shown) if p.hole_cards else ""
        bet = f"  bet {fmt_chips(p.bet)}" if p.bet else ""
        pointer = f"{CYAN}>{RESET} " if i == snap.current_player_index else "  "
        print(f"  {pointer}{p.name:<12} {fmt_chips(p.chips):>18}  {cards}{bet}"
              f"{seat_tags(p, i == snap.dealer_index)}")

    print()


def seat_tags(p: PlayerSnapshot, is_dealer: bool) -> str:
    tags = [
        tag for flag, tag in (
            (is_dealer, f"{YELLOW}D{RESET}"),
            (p.folded, f"{DIM}folded{RESET}"),
            (p.all_in, f"{RED}{BOLD}ALL-IN{RESET}"),
            (p.sitting_out, f"{DIM}sitting out{RESET}"),
        ) if flag
    ]
    return f" ({', '.join(tags)})" if tags else ""


def print_hand_result(outcome: HandOutcome) -> None:
    """Print showdown hands (if any) and the winners."""
    shown = [p for p in outcome.ranked if p.hand_result is not None]
    if len(shown) > 1:
        print_divider("SHOWDOWN")
        for p in shown:
            print(f"  {p.name:<12} {fmt_cards(p.hole_cards)}  {CYAN}{p.hand_result.name}{RESET}")
        print()

    for w in outcome.winners:
        amount = outcome.payouts.get(w.player_id, 0)
        how = w.hand_result.name if w.hand_result else "everyone else folded"
        print(f"  {GREEN}{BOLD}{w.name} wins {fmt_chips(amount)}{RESET}  ({how})")

    colour = GREEN if outcome.profit >= 0 else RED
    print(f"  Your result this hand: {colour}{outcome.profit:+,}{RESET}\n")


def describe_hand(hole_cards, community) -> str:
    """Describe the best hand the human currently holds."""
    cards = list(hole_cards) + list(community)
    if len(cards) < 5:
        return ""
    return evaluate(cards).name


# -- Input helpers -------------------------------------------------------------

def prompt_action(snap: TableSnapshot, player: PlayerSnapshot) -> Tuple[BettingAction, int]:
    """Prompt the human player for their action."""
    hand_desc = describe_hand(player.hole_cards, snap.community_cards)
    if hand_desc:
        print(f"  Your hand: {CYAN}{hand_desc}{RESET}")

    can_raise = BettingAction.RAISE in snap.valid_actions
    options = [f"  {RED}[f]{RESET} Fold"]
    if snap.can_check:
        options.append(f"  {GREEN}[c]{RESET} Check")
    else:
        options.append(f"  {BLUE}[c]{RESET} Call {fmt_chips(snap.call_amount)}")
    if can_raise:
        options.append(
            f"  {YELLOW}[r]{RESET} Raise ({fmt_chips(snap.min_raise_total)}–{fmt_chips(snap.max_raise_total)})"
        )
        options.append(f"  {RED}{BOLD}[a]{RESET} All-in ({fmt_chips(snap.max_raise_total)})")
    print("\n".join(options))

    while True:
        try:
            raw = input(f"\n  {BOLD}Your action: {RESET}").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            sys.exit(0)

        if raw in ("f", "fold"):
            return BettingAction.FOLD, 0
        elif raw in ("c", "call", "check"):
            if snap.can_check:
                return BettingAction.CHECK, 0
            return BettingAction.CALL, snap.call_amount
        elif raw in ("a", "allin", "all-in", "all_in"):
            if can_raise:
                return BettingAction.RAISE, snap.max_raise_total
            # a short stack can only call for the rest of its chips
            return BettingAction.CALL, snap.call_amount
        elif raw.startswith("r"):
            if not can_raise:
                print(f"  {RED}Cannot raise.{RESET}")
                continue
            parts = raw.split()
            try:
                if len(parts) >= 2:
                    amount = int(parts[1])
                else:
                    amount = int(input(f"  Raise to ({snap.min_raise_total}–{snap.max_raise_total}): "))
            except (ValueError, EOFError, KeyboardInterrupt):
                print(f"  {RED}Invalid amount.{RESET}")
                continue
            amount = max(snap.min_raise_total, min(amount, snap.max_raise_total))
            return BettingAction.RAISE, amount
        else:
            print(f"  {DIM}Enter f/c/r/a (or 'r 12' to raise to 12){RESET}")


def confirm(question: str) -> bool:
    try:
        raw = input(f"  {question} [Y/n] ").strip().lower()
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return raw in ("", "y", "yes")


# -- Synchronous driver ----------------------------------------------------------

class CLIGame:
    """Drive a PokerGame from the terminal, pacing bots with the table's scheduler."""

    def __init__(
        self,
        players: int = 6,
        speed: Speed = Speed.NORMAL,
        max_hands: int = 0,
        stats_file: Optional[str] = None,
        watch: bool = False,
    ) -> None:
        store = StatsStore(JsonFileStore(stats_file)) if stats_file else StatsStore()
        self.game = PokerGame(players, config=TableConfig(speed=speed), store=store)
        self.game.on_state_change = self._on_state_change
        self.game.on_action = self._on_action
        self.game.on_hand_complete = self._on_hand_complete
        self.max_hands = max_hands
        self.watch = watch
        self._autopilot = BotPlayer() if watch else None
        self._last_phase: Optional[GamePhase] = None

    @property
    def viewer(self) -> Optional[int]:
        return None if self.watch else 0

    def run(self) -> None:
        config = self.game.config
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Texas Hold'em — No-Limit  ({config.small_blind}/{config.big_blind}){RESET}")
        print(f"  {len(self.game.players)} players, {fmt_chips(config.starting_stack)} starting stack")
        if self.max_hands:
            print(f"  Playing {self.max_hands} hand(s)")
        print(f"{BOLD}{'=' * 60}{RESET}")

        played = 0
        while True:
            if self.max_hands and played >= self.max_hands:
                break
            if not self.game.start_hand():
                break
            self._play_out_hand()
            played += 1
            if not self.max_hands and not self.watch and not confirm("Deal another hand?"):
                break

        self._print_summary()

    def _play_out_hand(self) -> None:
        game = self.game
        while game.hand_in_progress:
            snap = game.get_state()
            current = snap.current_player
            if current is not None and current.is_human and snap.valid_actions:
                if self._autopilot is not None:
                    decision = self._autopilot.decide(snap)
                else:
                    print_table(snap, self.viewer)
                    decision = prompt_action(snap, current)
                if decision is None:
                    break
                game.perform_action(decision[0], decision[1], player_id=current.player_id)
            elif game.scheduler.pending:
                game.scheduler.run_until_idle()
            else:
                logger.error(f"Hand #{snap.hand_number} stalled in {snap.phase.value}")
                break

    # -- engine hooks ------------------------------------------------------------

    def _on_state_change(self) -> None:
        snap = self.game.get_state()
        if snap.phase == self._last_phase:
            return
        self._last_phase = snap.phase
        if snap.phase == GamePhase.PREFLOP:
            dealer = snap.players[snap.dealer_index]
            print_divider(f"HAND #{snap.hand_number}")
            print(f"  Dealer: {dealer.name}  |  Blinds: {fmt_chips(snap.small_blind)}/{fmt_chips(snap.big_blind)}")
            print_table(snap, self.viewer)
        elif snap.phase in (GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER):
            print_divider(snap.phase.value.upper())
            print(f"  Board: {fmt_cards(snap.community_cards)}   Pot: {fmt_chips(snap.pot)}")

    def _on_action(self, player: PlayerSnapshot, action: BettingAction, bet: int) -> None:
        if action == BettingAction.RAISE:
            text = f"raises to {fmt_chips(bet)}"
        elif action == BettingAction.CALL:
            text = f"calls ({fmt_chips(bet)} in)"
        else:
            text = action.value + "s"
        if player.all_in:
            text += f" {RED}ALL-IN{RESET}"
        print(f"  {DIM}{player.name}: {text}{RESET}")

    def _on_hand_complete(self, outcome: HandOutcome) -> None:
        print_hand_result(outcome)

    def _print_summary(self) -> None:
        stats = self.game.stats
        print_divider("SESSION")
        print(f"  Hands played: {stats.hands_played}   Won: {stats.hands_won}   "
              f"Win rate: {stats.win_rate:.0%}   Total profit: {stats.total_profit:+,}")
        if self.game.leaderboard:
            print_divider("BEST HANDS")
            for i, entry in enumerate(self.game.leaderboard[:5]):
                print(f"  {i + 1}. {entry.date}  {entry.profit:+,}")
        print()


# -- Entry point ---------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Texas Hold'em — CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python cli.py                        you + 5 bots
  python cli.py --players 2            heads-up against one bot
  python cli.py --watch --hands 20     spectate 20 bot-only hands
  python cli.py --speed slow
""",
    )
    parser.add_argument("--players", type=int, default=6,
                        help=f"seats at the table, {MIN_PLAYERS}-{MAX_PLAYERS} (default: 6)")
    parser.add_argument("--speed", choices=[s.name.lower() for s in Speed], default="normal")
    parser.add_argument("--hands", type=int, default=0, help="number of hands to play (0=ask)")
    parser.add_argument("--stats-file", default=None, help="JSON file for stats and leaderboard")
    parser.add_argument("--watch", action="store_true", help="let a bot play your seat")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    args = parser.parse_args(argv)
    if not MIN_PLAYERS <= args.players <= MAX_PLAYERS:
        parser.error(f"--players must be between {MIN_PLAYERS} and {MAX_PLAYERS}")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    game = CLIGame(
        players=args.players,
        speed=Speed[args.speed.upper()],
        max_hands=args.hands,
        stats_file=args.stats_file,
        watch=args.watch,
    )
    game.run()


if __name__ == "__main__":
    main()
