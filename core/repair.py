"""
Repair loop - re-requests a single missing section with bounded retries.

Per section:  Missing → Requesting → Recovered | Missing (retry) | Exhausted

Each attempt sends a one-section repair prompt. A failed call or a reply
that still extracts to nothing counts as a failed attempt; between attempts
the loop waits ``attempt * base_delay`` seconds. The wait is injected so
tests run without real delays.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from core.extractor import SectionMarkers, extract_section
from core.llm_client import CompletionClient
from core.metadata import DocumentMetadata
from core.prompt import PromptComposer


SleepFn = Callable[[float], Awaitable[None]]


class RepairState(str, Enum):
    RECOVERED = "recovered"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RetryPolicy:
    """How many repair attempts a section gets and how long to wait between them."""
    max_attempts: int = 2
    base_delay: float = 1.0

    def delay_for(self, attempt: int) -> float:
        """Backoff after the given (1-based) failed attempt."""
        return attempt * self.base_delay


@dataclass
class RepairOutcome:
    index: int
    state: RepairState
    content: str = ""
    attempts: int = 0


class SectionRepairer:
    """Drives the repair loop for one section at a time."""

    def __init__(
        self,
        client: CompletionClient,
        composer: PromptComposer,
        markers: SectionMarkers,
        policy: RetryPolicy,
        sleep: SleepFn = asyncio.sleep,
        verbose: bool = True,
    ):
        self.client = client
        self.composer = composer
        self.markers = markers
        self.policy = policy
        self.sleep = sleep
        self.verbose = verbose

    async def repair(
        self,
        index: int,
        heading: str,
        metadata: DocumentMetadata,
        code: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> RepairOutcome:
        """
        Try to recover section *index*.

        Returns a RECOVERED outcome with the extracted text, EXHAUSTED after
        ``policy.max_attempts`` failed attempts, or CANCELLED if the cancel
        event is set before an attempt starts.
        """
        prompt = self.composer.compose_repair(index, heading, metadata, code)
        attempt = 0

        while attempt < self.policy.max_attempts:
            if cancel_event is not None and cancel_event.is_set():
                return RepairOutcome(index, RepairState.CANCELLED, attempts=attempt)

            attempt += 1
            if self.verbose:
                print(f"🔁 Retrying section {index} (attempt {attempt}/{self.policy.max_attempts})")

            result = await self.client.generate(prompt)
            if result.ok:
                content = extract_section(result.text, index, self.markers)
                if content:
                    if self.verbose:
                        print(f"✅ Recovered content for section {index}.")
                    return RepairOutcome(index, RepairState.RECOVERED, content, attempt)
                if self.verbose:
                    print(f"⚠️  Re-requested content for section {index} was still empty or invalid.")
            elif self.verbose:
                print(f"⚠️  Re-request for section {index} got no response.")

            if attempt < self.policy.max_attempts:
                await self.sleep(self.policy.delay_for(attempt))

        return RepairOutcome(index, RepairState.EXHAUSTED, attempts=attempt)
