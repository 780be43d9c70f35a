#!/usr/bin/env python3
"""
Terminal front end for the search proxy.

Commands:
    <text>   search for <text>
    :N       expand/collapse the answer of follow-up N
    ?N       load follow-up N into the input (does not search)
    r        retry the current query
    q        quit
"""

import asyncio
import logging
import sys

from src.client.api_client import SearchClient
from src.client.submitter import QuerySubmitter, SubmitterState

logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

API_BASE = "http://localhost:8000"


def render(submitter: QuerySubmitter):
    if submitter.state == SubmitterState.ERROR:
        print(f"\n❌ {submitter.error}")
        print("   (r to try again)")
        return

    if submitter.state != SubmitterState.SUCCESS or submitter.results is None:
        return

    print(f"\n{submitter.results.direct_answer}\n")
    print("People also ask:")
    for index, item in enumerate(submitter.results.people_also_ask, start=1):
        marker = "-" if submitter.is_expanded(index - 1) else "+"
        print(f"  {marker} [{index}] {item.question}")
        answer = submitter.visible_answer(index - 1)
        if answer:
            print(f"        {answer}")


def parse_index(arg: str) -> int | None:
    try:
        return int(arg) - 1
    except ValueError:
        return None


async def handle(submitter: QuerySubmitter, line: str) -> bool:
    """Apply one input line. Returns False when the user asked to quit."""
    line = line.strip()

    if line == "q":
        return False

    if line == "r":
        print("Searching...")
        await submitter.retry()
    elif line[:1] in (":", "?") and parse_index(line[1:]) is not None:
        index = parse_index(line[1:])
        try:
            if line[0] == ":":
                submitter.toggle_expansion(index)
            else:
                print(f"Query set to: {submitter.select_question(index)}")
                return True
        except IndexError:
            print(f"No follow-up #{line[1:]}")
            return True
    elif line:
        submitter.query = line
        print("Searching...")
        await submitter.submit()
    else:
        return True

    render(submitter)
    return True


async def main(base_url: str):
    async with SearchClient(base_url) as client:
        submitter = QuerySubmitter(client)
        print("AI Search Assistant. Ask me anything (q to quit).")
        while True:
            prompt = f"\n[{submitter.query}] > " if submitter.query else "\n> "
            line = await asyncio.to_thread(input, prompt)
            if not await handle(submitter, line):
                break


if __name__ == "__main__":
    base_url = sys.argv[1] if len(sys.argv) > 1 else API_BASE
    try:
        asyncio.run(main(base_url))
    except (KeyboardInterrupt, EOFError):
        print("\nBye.")
        sys.exit(0)
