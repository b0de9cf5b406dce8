"""Pydantic schemas for the multi-model council."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CouncilMember(BaseModel):
	model_config = ConfigDict(frozen=True)

	key: str
	name: str
	model: str
	description: str
	tags: tuple[str, ...] = ()
	cost: str = ""
	temperature: float | None = None


class QuestionRoute(BaseModel):
	model_config = ConfigDict(frozen=True)

	type: str
	members: tuple[str, ...]
	reason: str


class CouncilReply(BaseModel):
	member: CouncilMember
	success: bool
	response: str | None = None
	error: str | None = None
	duration_seconds: float = Field(default=0.0, ge=0.0)


class CouncilSession(BaseModel):
	question: str
	replies: list[CouncilReply]
	elapsed_seconds: float = Field(ge=0.0)
	synthesis: str | None = None

	@property
	def succeeded(self) -> int:
		return sum(1 for reply in self.replies if reply.success)

	@property
	def failed(self) -> int:
		return len(self.replies) - self.succeeded
