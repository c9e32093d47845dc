import argparse
import asyncio
import logging

from session.models import SessionConfig

from .server import QuickPlayServer

logging.basicConfig(level=logging.INFO)


def main() -> None:
    parser = argparse.ArgumentParser(description="Quick-play Spades/Omaha host")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8766)
    parser.add_argument(
        "--bot-delay-ms",
        type=int,
        default=700,
        help="Pause between consecutive bot actions (milliseconds)",
    )
    parser.add_argument(
        "--max-bot-iterations",
        type=int,
        default=100,
        help="Upper bound on bot actions processed after a single human action",
    )
    args = parser.parse_args()

    config = SessionConfig(bot_delay_ms=args.bot_delay_ms, max_bot_iterations=args.max_bot_iterations)
    server = QuickPlayServer(config)
    asyncio.run(server.start(host=args.host, port=args.port))


if __name__ == "__main__":
    main()
