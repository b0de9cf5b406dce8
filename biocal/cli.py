"""Command-line entrypoint for the multi-model council.

Usage:
  biocal-council ask "paste error + context"
  biocal-council ask --members deepseek,sonar "question"
  biocal-council smart [--all] "question"
  biocal-council enhanced --category debug "question"
  biocal-council vote "Should I use approach A or B?"
  biocal-council compare middleware-v1.py middleware-v2.py
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from biocal.middleware.logging import configure_structured_logging
from biocal.schemas.council import CouncilSession
from biocal.services.council_service import (
	MEMBERS,
	ROLE_PANEL,
	CouncilClient,
	CouncilConfigError,
	category_system_prompt,
	detect_question_type,
	estimate_tokens,
	resolve_members,
)

RULE = "=" * 80
THIN_RULE = "─" * 80

EXIT_OK = 0
EXIT_ALL_FAILED = 1
EXIT_CONFIG = 2


def _roster_help() -> str:
	return "\n".join(
		f"  {member.key.ljust(15)} : {member.description.ljust(30)} ({member.cost})"
		for member in MEMBERS.values()
	)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="biocal-council",
		description="Ask several hosted LLMs the same question and compare their answers.",
		epilog=f"Council members:\n{_roster_help()}",
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	commands = parser.add_subparsers(dest="command", required=True)

	ask = commands.add_parser("ask", help="ask every member (or a chosen subset) in parallel")
	ask.add_argument("--members", help="comma-separated member keys")
	ask.add_argument("prompt", nargs="+")

	smart = commands.add_parser("smart", help="auto-select members from the question type")
	smart.add_argument("--all", action="store_true", help="ask every member instead")
	smart.add_argument("prompt", nargs="+")

	enhanced = commands.add_parser("enhanced", help="role-specialised panel with a category prompt")
	enhanced.add_argument("--category", default="general", help="debug, design, code or general")
	enhanced.add_argument("prompt", nargs="+")

	vote = commands.add_parser("vote", help="gather answers, then synthesise a verdict")
	vote.add_argument("prompt", nargs="+")

	compare = commands.add_parser("compare", help="compare two files or approach descriptions")
	compare.add_argument("approach_a")
	compare.add_argument("approach_b")
	return parser


def read_approach(value: str) -> str:
	"""Inline a file's contents when ``value`` names an existing file."""
	path = Path(value)
	if path.is_file():
		return f"File: {value}\n```\n{path.read_text(encoding='utf-8')}\n```"
	return value


def render_session(session: CouncilSession, heading: str) -> str:
	lines = ["", heading, f"Question: {session.question}", RULE]
	for reply in session.replies:
		member = reply.member
		lines.append("")
		lines.append(THIN_RULE)
		if reply.success:
			lines.append(f"{member.key.upper()} ({member.description})")
		else:
			lines.append(f"{member.key.upper()} - FAILED")
		lines.append(f"   Model: {member.model}")
		lines.append(THIN_RULE)
		lines.append("")
		lines.append(reply.response if reply.success else f"Error: {reply.error}")

	if session.synthesis is not None:
		lines.extend(["", RULE, "", "SYNTHESIS", "", session.synthesis])

	lines.extend(
		[
			"",
			RULE,
			f"Complete: {session.succeeded}/{len(session.replies)} members responded, "
			f"{session.failed} failed, {session.elapsed_seconds:.2f}s total",
		]
	)
	return "\n".join(lines)


async def _run(args: argparse.Namespace, client: CouncilClient) -> tuple[CouncilSession, str]:
	if args.command == "ask":
		prompt = " ".join(args.prompt)
		keys = args.members.split(",") if args.members else list(MEMBERS)
		session = await client.convene(resolve_members([key.strip() for key in keys]), prompt)
		return session, f"AI COUNCIL - {len(session.replies)} members"

	if args.command == "smart":
		prompt = " ".join(args.prompt)
		route = detect_question_type(prompt)
		keys = list(MEMBERS) if args.all else list(route.members)
		session = await client.convene(resolve_members(keys), prompt)
		heading = (
			f"SMART AI COUNCIL\nDetected type: {route.type.upper()}\nStrategy: {route.reason}\n"
			f"Selected: {len(keys)}/{len(MEMBERS)} ({', '.join(keys)})\n"
			f"Estimated tokens: ~{estimate_tokens(prompt, len(keys))}"
		)
		return session, heading

	if args.command == "enhanced":
		prompt = " ".join(args.prompt)
		session = await client.convene(
			list(ROLE_PANEL.values()),
			prompt,
			system_prompt=category_system_prompt(args.category),
		)
		return session, f"AI COUNCIL - Category: {args.category.upper()}"

	if args.command == "vote":
		session = await client.vote(" ".join(args.prompt))
		return session, "AI COUNCIL VOTE"

	session = await client.compare(read_approach(args.approach_a), read_approach(args.approach_b))
	return session, "AI COUNCIL COMPARISON"


def main(argv: Sequence[str] | None = None, client: CouncilClient | None = None) -> int:
	args = build_parser().parse_args(argv)
	configure_structured_logging()
	client = client or CouncilClient()
	try:
		session, heading = asyncio.run(_run(args, client))
	except CouncilConfigError as exc:
		print(f"Configuration error: {exc}", file=sys.stderr)
		return EXIT_CONFIG
	except ValueError as exc:
		print(f"Error: {exc}", file=sys.stderr)
		return EXIT_CONFIG

	print(render_session(session, heading))
	return EXIT_OK if session.succeeded else EXIT_ALL_FAILED


if __name__ == "__main__":  # pragma: no cover - script entry
	raise SystemExit(main())
