"""Command-line capture client: capture elements, inspect and drain the local queue."""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from designtaste.client.browser import capture_element
from designtaste.client.local_queue import DEFAULT_PRIORITY, LocalProcessingQueue, QueueStorage
from designtaste.config import settings


def _queue(args) -> LocalProcessingQueue:
    return LocalProcessingQueue(QueueStorage(args.queue_file) if args.queue_file else None, backend_url=args.backend)


def cmd_capture(args) -> int:
    snapshot, screenshot = asyncio.run(capture_element(args.url, args.selector))
    queue = _queue(args)
    if args.prompt:
        # the cropped element doubles as the context screenshot here
        element_id = queue.enqueue_inspiration_request(snapshot, args.prompt, args.url, screenshot, screenshot)
    else:
        element_id = queue.enqueue(snapshot, screenshot, args.url, priority=args.priority)
    print(f"Queued {snapshot['tagName'].lower() or 'element'} as {element_id} ({queue.queued_count} waiting)")
    if args.drain:
        asyncio.run(queue.run_until_idle())
        _print_items(queue)
    return 0


def _print_items(queue: LocalProcessingQueue):
    if not queue.items:
        print("Queue is empty")
        return
    for item in queue.items:
        tag = (item.element_data.get("tagName") or "?").lower()
        line = f"{item.id:<40} {item.status:<11} p{item.priority} {tag:<8} {item.url}"
        if item.error_message:
            line += f"  [{item.error_message}]"
        print(line)


def cmd_list(args) -> int:
    _print_items(_queue(args))
    return 0


def cmd_drain(args) -> int:
    queue = _queue(args)
    asyncio.run(queue.run_until_idle())
    _print_items(queue)
    return 0 if all(item.status != "error" for item in queue.items) else 1


def cmd_clear(args) -> int:
    _queue(args).clear()
    print("Queue cleared")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="designtaste", description="DesignTaste capture client")
    parser.add_argument("--backend", default=settings.backend_url, help="Backend base URL")
    parser.add_argument("--queue-file", type=Path, default=None, help="Path of the local queue JSON file")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    capture = sub.add_parser("capture", help="Capture an element from a page and queue it")
    capture.add_argument("url")
    capture.add_argument("selector", help="CSS selector; the first match is captured")
    capture.add_argument("--prompt", help="Queue as an inspiration request with this prompt")
    capture.add_argument("--priority", type=int, default=DEFAULT_PRIORITY)
    capture.add_argument("--drain", action="store_true", help="Send the queue to the backend right away")
    capture.set_defaults(func=cmd_capture)

    sub.add_parser("list", help="Show queued elements").set_defaults(func=cmd_list)
    sub.add_parser("drain", help="Send queued elements to the backend").set_defaults(func=cmd_drain)
    sub.add_parser("clear", help="Remove every element from the local queue").set_defaults(func=cmd_clear)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
