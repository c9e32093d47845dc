#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional

from websockets.asyncio.client import ClientConnection, connect

logging.basicConfig(level=logging.INFO)

# ManualClient plays a quick-play session from the terminal.


class ManualClient:
    def __init__(self, name: str, game: str, url: str, seed: Optional[int] = None) -> None:
        self.name = name
        self.game = game
        self.url = url
        self.seed = seed
        self.websocket: Optional[ClientConnection] = None
        self.last_prompted: Optional[int] = None
        self.last_state: Optional[Dict[str, Any]] = None

    async def run(self) -> None:
        async with connect(self.url) as ws:
            self.websocket = ws
            start: Dict[str, Any] = {"type": "start", "game": self.game, "name": self.name}
            if self.seed is not None:
                start["seed"] = self.seed
            await self._send(start)
            await self._loop()

    async def _loop(self) -> None:
        assert self.websocket is not None
        async for raw in self.websocket:
            msg = json.loads(raw)
            msg_type = msg.get("type")
            if msg_type == "error":
                print(f"Error {msg.get('code')}: {msg.get('msg')}")
                self.last_prompted = None
                payload = self._prompt(self.last_state) if self.last_state else None
                if payload is not None:
                    await self._send(payload)
            elif msg_type == "state":
                self.last_state = msg
                self._render(msg)
                if msg["game"] == "spades" and msg["game_over"]:
                    print(f"Game over. Winner: {msg['winner']}")
                    break
                payload = self._prompt(msg)
                if payload is not None:
                    await self._send(payload)

    def _prompt(self, msg: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        legal = msg["legal"]
        wants_input = legal["your_turn"] or (msg["game"] != "spades" and legal.get("can_next_hand"))
        # Only prompt once per state version; bot moves arrive as further states.
        if not wants_input or self.last_prompted == msg["version"]:
            return None
        self.last_prompted = msg["version"]
        if msg["game"] == "spades":
            return self._prompt_spades(legal)
        return self._prompt_omaha(legal)

    def _prompt_spades(self, legal: Dict[str, Any]) -> Dict[str, Any]:
        if legal["can_bid"]:
            while True:
                value = input("Bid [0-13]: ").strip()
                if value.isdigit():
                    return {"type": "bid", "bid": int(value)}
                print("Enter a whole number")
        playable = legal["playable"]
        while True:
            choice = input(f"Play [{' '.join(playable)}]: ").strip()
            if choice in playable:
                return {"type": "play", "card": choice}
            print("Illegal selection. Try again.")

    def _prompt_omaha(self, legal: Dict[str, Any]) -> Dict[str, Any]:
        if legal["can_next_hand"]:
            input("Press enter to deal the next hand")
            return {"type": "next_hand"}
        options = ["fold", "bet"]
        if legal["can_check"]:
            options.insert(0, "check")
        if legal["can_call"]:
            options.insert(0, f"call({legal['call_amount']})")
        while True:
            choice = input(f"Action [{'/'.join(options)}]: ").strip().lower()
            if choice.startswith("call") and legal["can_call"]:
                return {"type": "action", "action": "call"}
            if choice in ("check", "fold") and choice in options:
                return {"type": "action", "action": choice}
            if choice == "bet":
                amount = input("Bet to (street total): ").strip()
                if amount.isdigit():
                    return {"type": "action", "action": "bet", "amount": int(amount)}
                print("Enter a valid integer")
                continue
            print("Illegal selection. Try again.")

    def _render(self, msg: Dict[str, Any]) -> None:
        print(f"\n>>> v{msg['version']} turn={msg['current_player']}")
        if msg["game"] == "spades":
            trick = " ".join(f"{c['player_id']}:{c['card']}" for c in msg["current_trick"]["cards"]) or "--"
            print(f"Hand {msg['hand_number']} | Trick {trick} | Spades broken={msg['spades_broken']}")
            for player in msg["players"]:
                hand = " ".join(player.get("hand", []))
                print(
                    f"  {player['name']:<8} bid={player['bid']} tricks={player['tricks_won']} "
                    f"score={player['total_score']} {hand}"
                )
            return
        board = " ".join(msg["community"]) or "--"
        print(f"Hand {msg['hand_number']} | {msg['street']} | Board {board} | Pot={msg['pot']} | Bet={msg['current_bet']}")
        for player in msg["players"]:
            tags = [tag for tag, on in (("D", player["is_dealer"]), ("FOLD", player["folded"])) if on]
            hole = " ".join(player.get("hole", []))
            print(f"  {player['name']:<8} chips={player['chips']:>5} bet={player['current_bet']:>4} {','.join(tags)} {hole}")
        if msg["game_over"]:
            print(f"Winner: {msg['winner']} ({msg['winning_hand']})")

    async def _send(self, payload: Dict[str, Any]) -> None:
        assert self.websocket is not None
        await self.websocket.send(json.dumps(payload))


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Quick-play manual client")
    parser.add_argument("--url", default="ws://127.0.0.1:8766")
    parser.add_argument("--name", required=True)
    parser.add_argument("--game", choices=["spades", "omaha4Card"], default="spades")
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: list[str]) -> None:
    args = parse_args(argv)
    client = ManualClient(name=args.name, game=args.game, url=args.url, seed=args.seed)
    try:
        asyncio.run(client.run())
    except KeyboardInterrupt:
        print("\nSession closed")


if __name__ == "__main__":
    main(sys.argv[1:])
