"""Weatherly - search current weather by city and show it in the terminal."""
import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from rich.console import Console

from fetch_state import Success
from fetch_state_machine import FetchStateMachine, mask_credential
from openweather_client import DEFAULT_BASE_URL, OpenWeatherClient
from screen import ScreenRenderer

QUIT_COMMANDS = {"quit", "exit"}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Weatherly current weather search")
    parser.add_argument("--city", action="append", default=[],
                        help="Fetch weather for this city and exit (repeatable)")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--timeout", type=float, default=None,
                        help="HTTP timeout in seconds (default: no timeout)")
    parser.add_argument("--width", type=int, default=56, help="Panel width in columns")
    parser.add_argument("--no-color", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_config() -> Tuple[str, str]:
    """
    Read the API key and base URL from the environment (and .env).

    A missing key is not fatal here: it comes back as "" and the
    state machine reports it on the first search.
    """
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY", "")
    base_url = os.getenv("WEATHER_BASE_URL") or DEFAULT_BASE_URL

    if not api_key.strip():
        logging.warning("WEATHER_API_KEY is not set")
    logging.info(f"Configuration loaded: api_key={mask_credential(api_key)} base_url={base_url}")
    return api_key, base_url


def build_state_machine(api_key: str, base_url: str, args: argparse.Namespace) -> FetchStateMachine:
    client = OpenWeatherClient(base_url=base_url, timeout=args.timeout)
    machine = FetchStateMachine(client=client, credential=api_key)
    logging.info(f"State machine ready (timeout={args.timeout})")
    return machine


async def run_once(machine: FetchStateMachine, cities: List[str]) -> bool:
    """Search each city in turn; True when every search succeeded."""
    ok = True
    for city in cities:
        task = machine.request_fetch(city)
        if task is not None:
            await task
        ok = ok and isinstance(machine.state, Success)
    return ok


def interactive_loop(machine: FetchStateMachine, console: Console) -> None:
    """
    Prompt for cities until quit or end of input.

    The prompt is read on the main thread so Ctrl-C interrupts it;
    each search runs on its own event loop.
    """
    while True:
        try:
            city = console.input("City name (quit to exit): ")
        except EOFError:
            break
        if city.strip().lower() in QUIT_COMMANDS:
            break
        asyncio.run(run_once(machine, [city]))


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    api_key, base_url = load_config()

    console = Console(no_color=args.no_color)
    renderer = ScreenRenderer(console=console, width=args.width)
    machine = build_state_machine(api_key, base_url, args)
    machine.subscribe(renderer)

    if args.city:
        ok = asyncio.run(run_once(machine, args.city))
        sys.exit(0 if ok else 1)

    renderer.render(machine.state)
    try:
        interactive_loop(machine, console)
    except KeyboardInterrupt:
        logging.info("Interrupted")
    console.print("Bye.")


if __name__ == "__main__":
    main()
