"""Multi-model council: fan one prompt out to several hosted LLMs and collect replies.

All members are reached through a single OpenAI-compatible chat-completions
endpoint (OpenRouter by default). Calls run concurrently; each one carries its
own timeout and its own failure, so one slow or broken model never blocks or
aborts its siblings.
"""

from __future__ import annotations

import asyncio
import re
import time
from collections.abc import Sequence
from typing import Any

import httpx
import structlog

from biocal.config import Settings, get_settings
from biocal.schemas.council import CouncilMember, CouncilReply, CouncilSession, QuestionRoute

_logger = structlog.get_logger("biocal.council")

NO_RESPONSE = "(no response)"


def _member(key: str, name: str, model: str, description: str, **extra: Any) -> CouncilMember:
	return CouncilMember(key=key, name=name, model=model, description=description, **extra)


# ── Rosters ─────────────────────────────────────────────────────────────────

MEMBERS: dict[str, CouncilMember] = {
	member.key: member
	for member in (
		_member("deepseek", "DeepSeek", "deepseek/deepseek-chat", "Fast analytical reasoning",
			tags=("debug", "analysis", "fast", "cheap"), cost="cheap"),
		_member("gemini_flash", "Gemini Flash", "google/gemini-2.0-flash", "Quick practical insights",
			tags=("quick", "general", "fast", "cheap"), cost="cheap"),
		_member("openai_mini", "GPT-4.1 mini", "openai/gpt-4.1-mini", "Balanced performance",
			tags=("general", "balanced", "reliable"), cost="moderate"),
		_member("mistral_large", "Mistral Large", "mistralai/mistral-large", "Large context window",
			tags=("multilingual", "context", "analysis"), cost="moderate"),
		_member("qwen_coder", "Qwen Coder", "qwen/qwen-2.5-coder-32b-instruct", "Code generation specialist",
			tags=("code", "optimization", "debug", "cheap"), cost="cheap"),
		_member("llama_70b", "Llama 3.1 70B", "meta-llama/llama-3.1-70b-instruct", "Strong reasoning",
			tags=("reasoning", "general", "cheap"), cost="cheap"),
		_member("command_r_plus", "Command R+", "cohere/command-r-plus", "RAG and structured output",
			tags=("rag", "structured", "citations"), cost="moderate"),
		_member("grok", "Grok 2", "x-ai/grok-2", "Real-time information",
			tags=("realtime", "current", "expensive"), cost="expensive"),
		_member("sonar", "Sonar", "perplexity/sonar", "Web search integration",
			tags=("search", "current", "web"), cost="moderate"),
	)
}

ROLE_PANEL: dict[str, CouncilMember] = {
	"reasoning": _member("reasoning", "DeepSeek R1", "deepseek/deepseek-r1",
		"Analytical debugger - focuses on root cause analysis", temperature=0.1),
	"coding": _member("coding", "Claude Sonnet 4.5", "anthropic/claude-sonnet-4.5",
		"Code architect - provides detailed implementation solutions", temperature=0.2),
	"quick": _member("quick", "Gemini Flash 2.0", "google/gemini-2.0-flash",
		"Quick advisor - gives rapid, practical suggestions", temperature=0.3),
	"creative": _member("creative", "GPT-4o", "openai/gpt-4o",
		"Creative problem solver - suggests alternative approaches", temperature=0.7),
}

REVIEW_PANEL: dict[str, CouncilMember] = {
	"architect": _member("architect", "Claude Sonnet 4.5", "anthropic/claude-sonnet-4.5",
		"Architecture & design patterns"),
	"performance": _member("performance", "DeepSeek R1", "deepseek/deepseek-r1",
		"Performance & optimization"),
	"security": _member("security", "GPT-4o", "openai/gpt-4o", "Security & edge cases"),
	"maintainability": _member("maintainability", "Gemini Flash 2.0", "google/gemini-2.0-flash",
		"Maintainability & DX"),
}

VOTE_PANEL: tuple[CouncilMember, ...] = (
	ROLE_PANEL["reasoning"],
	ROLE_PANEL["coding"],
	ROLE_PANEL["quick"],
	ROLE_PANEL["creative"],
)

# ── Question routing ────────────────────────────────────────────────────────

_ROUTES: tuple[tuple[re.Pattern[str], QuestionRoute], ...] = (
	(
		re.compile(r"debug|error|fix|broken|not working|issue", re.IGNORECASE),
		QuestionRoute(
			type="debug",
			members=("deepseek", "qwen_coder", "gemini_flash"),
			reason="Debugging requires fast analytical reasoning and code expertise",
		),
	),
	(
		re.compile(r"code|implement|function|how to write|example", re.IGNORECASE),
		QuestionRoute(
			type="code",
			members=("qwen_coder", "deepseek", "llama_70b"),
			reason="Code generation benefits from specialized code models",
		),
	),
	(
		re.compile(r"compare|versus|vs|which|better|choose", re.IGNORECASE),
		QuestionRoute(
			type="decision",
			members=("llama_70b", "mistral_large", "openai_mini", "command_r_plus"),
			reason="Decisions need diverse reasoning perspectives",
		),
	),
	(
		re.compile(r"current|latest|recent|news|2024|2025", re.IGNORECASE),
		QuestionRoute(
			type="current",
			members=("sonar", "grok", "gemini_flash"),
			reason="Current info requires web search and real-time data",
		),
	),
	(
		re.compile(r"explain|what is|how does|why|understand", re.IGNORECASE),
		QuestionRoute(
			type="explanation",
			members=("gemini_flash", "mistral_large", "openai_mini"),
			reason="Explanations need clear, accessible language",
		),
	),
	(
		re.compile(r"optimize|performance|faster|slow", re.IGNORECASE),
		QuestionRoute(
			type="optimization",
			members=("qwen_coder", "deepseek", "llama_70b"),
			reason="Optimization needs technical depth and analysis",
		),
	),
)

_GENERAL_ROUTE = QuestionRoute(
	type="general",
	members=("gemini_flash", "deepseek", "openai_mini"),
	reason="General questions use fast, balanced models",
)

_CATEGORY_PROMPTS: dict[str, str] = {
	"debug": "You are debugging an error. Focus on: 1) Root cause, 2) Fix, 3) Prevention. Be concise.",
	"design": "You are reviewing architecture. Focus on: 1) Trade-offs, 2) Best practices, 3) Alternatives.",
	"code": "You are writing code. Provide: 1) Working solution, 2) Explanation, 3) Edge cases to handle.",
}


class CouncilConfigError(RuntimeError):
	"""Raised when the council cannot run with the current settings."""


def detect_question_type(question: str) -> QuestionRoute:
	for pattern, route in _ROUTES:
		if pattern.search(question):
			return route
	return _GENERAL_ROUTE


def category_system_prompt(category: str) -> str | None:
	return _CATEGORY_PROMPTS.get(category)


def build_messages(prompt: str, system_prompt: str | None = None) -> list[dict[str, str]]:
	messages: list[dict[str, str]] = []
	if system_prompt:
		messages.append({"role": "system", "content": system_prompt})
	messages.append({"role": "user", "content": prompt})
	return messages


def resolve_members(keys: Sequence[str]) -> list[CouncilMember]:
	unknown = [key for key in keys if key not in MEMBERS]
	if unknown:
		raise ValueError(f"Unknown council members: {', '.join(unknown)}")
	return [MEMBERS[key] for key in keys]


def vote_synthesis_prompt(question: str, replies: Sequence[CouncilReply]) -> str:
	answered = [reply for reply in replies if reply.success]
	blocks = "\n---\n\n".join(
		f"**Model {index}: {reply.member.name}**\n{reply.response}\n"
		for index, reply in enumerate(answered, start=1)
	)
	return (
		f"You are reviewing responses from {len(answered)} AI models to this question:\n\n"
		f'"{question}"\n\n'
		f"Here are their responses:\n\n{blocks}\n\n"
		"Your task:\n"
		"1. Identify common themes and consensus points\n"
		"2. Highlight key disagreements or alternative viewpoints\n"
		"3. Provide a balanced synthesis\n"
		"4. Recommend the strongest approach with reasoning\n\n"
		"Format your response as:\n"
		"## Consensus\n## Disagreements\n## Recommended Approach\n## Reasoning"
	)


def comparison_prompt(approach_a: str, approach_b: str) -> str:
	return (
		"Compare these two approaches:\n\n"
		f"**Approach A:**\n{approach_a}\n\n"
		f"**Approach B:**\n{approach_b}\n\n"
		"Analyze from your area of expertise. Provide:\n"
		"1. Key differences\n"
		"2. Strengths of each approach\n"
		"3. Weaknesses/risks\n"
		"4. Your recommendation\n"
		"5. Score (1-10) for each approach from your perspective\n\n"
		"Be specific and practical."
	)


def verdict_prompt(replies: Sequence[CouncilReply]) -> str:
	blocks = "\n---\n\n".join(
		f"**{reply.member.name} ({reply.member.description}):**\n{reply.response}\n"
		for reply in replies
		if reply.success
	)
	return (
		"Review these expert opinions comparing two approaches:\n\n"
		f"{blocks}\n\n"
		"Synthesize all perspectives into:\n"
		"1. Overall winner and why\n"
		"2. Use case recommendations (when to use each)\n"
		"3. Risk summary for each approach\n"
		"4. Action items if choosing each approach\n\n"
		"Be decisive but fair."
	)


def estimate_tokens(prompt: str, replies: int) -> int:
	"""Rough usage estimate: 1.3 tokens per prompt word, per reply."""
	return round(len(prompt.split(" ")) * 1.3 * replies)


class CouncilClient:
	def __init__(
		self,
		settings: Settings | None = None,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self.settings = settings or get_settings()
		self.transport = transport

	def _headers(self) -> dict[str, str]:
		if not self.settings.openrouter_api_key:
			raise CouncilConfigError("OPENROUTER_API_KEY is not configured")
		return {
			"authorization": f"Bearer {self.settings.openrouter_api_key}",
			"content-type": "application/json",
		}

	def _client(self) -> httpx.AsyncClient:
		return httpx.AsyncClient(
			base_url=self.settings.openrouter_base_url.rstrip("/") + "/",
			headers=self._headers(),
			transport=self.transport,
			timeout=None,
		)

	async def ask(
		self,
		client: httpx.AsyncClient,
		member: CouncilMember,
		messages: list[dict[str, str]],
		temperature: float | None = None,
	) -> str:
		if temperature is None:
			temperature = member.temperature
		if temperature is None:
			temperature = self.settings.council_temperature
		body = {
			"model": member.model,
			"messages": messages,
			"temperature": temperature,
		}
		request = client.post("chat/completions", json=body)
		response = await asyncio.wait_for(request, timeout=self.settings.council_timeout_seconds)
		response.raise_for_status()
		return _extract_content(response.json())

	async def _timed_ask(
		self,
		client: httpx.AsyncClient,
		member: CouncilMember,
		messages: list[dict[str, str]],
		temperature: float | None,
	) -> CouncilReply:
		start = time.perf_counter()
		try:
			text = await self.ask(client, member, messages, temperature)
		except TimeoutError:
			error = f"timed out after {self.settings.council_timeout_seconds:g}s"
		except httpx.HTTPStatusError as exc:
			error = f"HTTP {exc.response.status_code}: {exc.response.text[:200]}"
		except (httpx.HTTPError, ValueError) as exc:
			error = str(exc) or exc.__class__.__name__
		else:
			duration = time.perf_counter() - start
			_logger.info("council_call", member=member.key, model=member.model, duration_s=round(duration, 2))
			return CouncilReply(member=member, success=True, response=text, duration_seconds=duration)

		duration = time.perf_counter() - start
		_logger.warning(
			"council_call_failed",
			member=member.key,
			model=member.model,
			duration_s=round(duration, 2),
			error=error,
		)
		return CouncilReply(member=member, success=False, error=error, duration_seconds=duration)

	async def convene(
		self,
		members: Sequence[CouncilMember],
		prompt: str,
		*,
		system_prompt: str | None = None,
		temperature: float | None = None,
	) -> CouncilSession:
		"""Ask every member concurrently; replies keep the order of ``members``."""
		messages = build_messages(prompt, system_prompt)
		start = time.perf_counter()
		async with self._client() as client:
			replies = await asyncio.gather(
				*(self._timed_ask(client, member, messages, temperature) for member in members)
			)
		return CouncilSession(
			question=prompt,
			replies=list(replies),
			elapsed_seconds=time.perf_counter() - start,
		)

	async def synthesize(self, synthesis_prompt: str, temperature: float = 0.3) -> str:
		synthesizer = CouncilMember(
			key="synthesizer",
			name="Synthesizer",
			model=self.settings.council_synthesizer_model,
			description="Meta-analysis of council replies",
		)
		async with self._client() as client:
			return await self.ask(client, synthesizer, build_messages(synthesis_prompt), temperature)

	async def _try_synthesize(self, synthesis_prompt: str, temperature: float = 0.3) -> str | None:
		try:
			return await self.synthesize(synthesis_prompt, temperature)
		except (TimeoutError, httpx.HTTPError, ValueError) as exc:
			_logger.warning("council_synthesis_failed", error=str(exc) or exc.__class__.__name__)
			return None

	async def vote(self, question: str, members: Sequence[CouncilMember] = VOTE_PANEL) -> CouncilSession:
		session = await self.convene(members, question)
		if session.succeeded == 0:
			return session
		session.synthesis = await self._try_synthesize(vote_synthesis_prompt(question, session.replies))
		return session

	async def compare(
		self,
		approach_a: str,
		approach_b: str,
		members: Sequence[CouncilMember] = tuple(REVIEW_PANEL.values()),
	) -> CouncilSession:
		session = await self.convene(members, comparison_prompt(approach_a, approach_b))
		if session.succeeded == 0:
			return session
		session.synthesis = await self._try_synthesize(verdict_prompt(session.replies), temperature=0.2)
		return session


def _extract_content(payload: Any) -> str:
	if not isinstance(payload, dict):
		return NO_RESPONSE
	choices = payload.get("choices")
	if not isinstance(choices, list) or not choices:
		return NO_RESPONSE
	message = choices[0].get("message") if isinstance(choices[0], dict) else None
	if not isinstance(message, dict):
		return NO_RESPONSE
	content = message.get("content")
	if not content:
		return NO_RESPONSE
	return str(content)
