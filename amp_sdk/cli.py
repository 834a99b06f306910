"""CLI entry point for Amp SDK."""

import argparse
import asyncio
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .api.client import AmpClient
from .errors import AmpError
from .models.decision import CandidateField
from .models.options import AmpOptions


DEMO_CANDIDATES = [
    CandidateField(name="color", values=["red", "green", "blue"]),
    CandidateField(name="count", values=[10, 100]),
]
DEMO_CONTEXT = {"browser_height": 1740, "browser_width": 360}
DEMO_CLICK = {"url": "google.com", "pageNumber": 1}


async def run_demo(overrides: Dict[str, Any], user_id: Optional[str] = None,
                   timeout_ms: int = 3000) -> int:
    """Run one decideWithContext and one observe call against an agent.

    Options not given in ``overrides`` are read from AMP_* environment variables.
    """
    try:
        client = await AmpClient.create(AmpOptions.from_env(**overrides))
    except AmpError as e:
        print(f"Error: {e}")
        return 1

    async with client:
        session = client.create_session(user_id=user_id)

        response = await session.decide_with_context(
            "AmpSession", DEMO_CONTEXT, "Decide", DEMO_CANDIDATES, timeout_ms
        )
        token = response.amp_token
        print(f"Returned ampToken: {token} of length {len(token)}")
        print(f"Returned decision: {response.decision}")
        if response.fallback:
            print("Decision NOT successfully obtained from amp-agent. Using a fallback instead.")
            print(f"The reason is: {response.failure_reason}")
        else:
            print("Decision successfully obtained from amp-agent")

        try:
            await session.observe("Click", DEMO_CLICK)
        except AmpError as e:
            print(f"Observe call failed with an error: {e}")
        else:
            print("Observed the outcome successfully")

    return 0


def main(argv=None) -> int:
    """Main CLI function."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="Amp SDK CLI")
    parser.add_argument('--verbose', '-v', action='store_true', help='Log SDK activity')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    demo_parser = subparsers.add_parser('demo', help='Make a sample decide and observe call')
    demo_parser.add_argument('project_key', nargs='?', help='Project key (default: $AMP_PROJECT_KEY)')
    demo_parser.add_argument('agent', nargs='?', help='Amp agent base URL (default: $AMP_AGENTS)')
    demo_parser.add_argument('--user-id', help='User id (random if omitted)')
    demo_parser.add_argument('--timeout-ms', type=int, default=3000, help='Decide timeout in milliseconds')
    demo_parser.add_argument('--no-register', action='store_true', help='Skip project registration')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.command == 'demo':
        overrides: Dict[str, Any] = {"register_project": not args.no_register}
        if args.project_key:
            overrides["project_key"] = args.project_key
        if args.agent:
            overrides["agents"] = [args.agent]
        return asyncio.run(run_demo(overrides, user_id=args.user_id, timeout_ms=args.timeout_ms))

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
