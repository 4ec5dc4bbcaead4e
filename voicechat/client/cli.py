import argparse
import asyncio
import sys
from typing import Optional
import httpx
from voicechat.client.orchestrator import ChatClient, Notice
from voicechat.utils.logger import setup_logger


def print_notice(notice: Notice):
    print(f"! {notice.message}", file=sys.stderr)


async def chat_loop(url: str, speak: bool, transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    player = None
    if speak:
        from voicechat.client.player import Player
        player = Player()

    async with httpx.AsyncClient(base_url=url, timeout=60.0, transport=transport) as http:
        client = ChatClient(http, player=player, on_notice=print_notice)

        while True:
            try:
                text = await asyncio.to_thread(input, "> ")
            except EOFError:
                break

            text = text.strip()
            if not text:
                continue
            if text in ("/quit", "/exit"):
                break

            if await client.submit(text):
                reply = client.history[-1]
                print(f"{reply.content} ({reply.latency:.0f}ms)")

    if player is not None:
        player.close()
    return 0


def main() -> int:
    p = argparse.ArgumentParser(description="Chat with a running voicechat server.")
    p.add_argument("--url", default="http://127.0.0.1:8000")
    p.add_argument("--speak", action="store_true", help="play the synthesized replies")
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args()

    setup_logger(args.log_level)
    return asyncio.run(chat_loop(args.url, args.speak))


if __name__ == "__main__":
    raise SystemExit(main())
