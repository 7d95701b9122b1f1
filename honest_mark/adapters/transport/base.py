from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TransportResponse:
	"""Raw HTTP outcome handed back to the request pipeline."""

	status_code: int
	body: str


class AbstractTransport(ABC):
	"""Interface for HTTP transports used by the document client."""

	@abstractmethod
	async def send(
		self,
		method: str,
		url: str,
		headers: dict[str, str],
		body: str,
	) -> TransportResponse:
		"""Perform a single HTTP call.

		Args:
			method: HTTP method, e.g. "POST".
			url: Absolute endpoint URL.
			headers: Request headers.
			body: Serialized request body.

		Returns:
			TransportResponse with the status code and decoded body text.

		Raises:
			TransportAppError: If the connection fails or times out.
		"""
		...

	@abstractmethod
	async def close(self) -> None:
		"""Release connection resources. Must be safe to call twice."""
		...
