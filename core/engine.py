"""
Note generator - turns one raw completion into a complete analysis note.

Pipeline:  compose prompt → initial completion → extract sections →
repair missing sections (sequentially) → assemble.

Sections are repaired one after another against the shared completion
client. A section that cannot be recovered gets the placeholder text and a
single warning; it never stops the remaining sections. A cancel event is
checked before every repair attempt.
"""

import asyncio
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, Field

from config.settings import NoteConfig
from core.assembler import assemble_document
from core.extractor import SectionMarkers, parse_sections
from core.llm_client import CompletionClient, CompletionFailure
from core.metadata import DocumentMetadata
from core.prompt import PromptComposer
from core.repair import RepairState, RetryPolicy, SectionRepairer, SleepFn


# ──────────────────────────────────────────────
# Request / result models
# ──────────────────────────────────────────────

class GenerationRequest(BaseModel):
    """Caller input for one note."""
    code: str
    language: Optional[str] = None
    platform: Optional[str] = None
    problem_id: Optional[str] = None
    title: Optional[str] = None
    analyzed_at: Optional[str] = Field(default=None, description="Override for the generation date")

    def metadata(self) -> DocumentMetadata:
        return DocumentMetadata.build(
            platform=self.platform,
            problem_id=self.problem_id,
            title=self.title,
            language=self.language,
            analyzed_at=self.analyzed_at,
        )


class GenerationStatus(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class GenerationResult(BaseModel):
    status: GenerationStatus
    document: Optional[str] = None
    metadata: Optional[DocumentMetadata] = None
    sections: dict[int, str] = Field(default_factory=dict)
    recovered: list[int] = Field(default_factory=list, description="Sections filled by a repair request")
    placeholders: list[int] = Field(default_factory=list, description="Sections that fell back to placeholder text")
    failure: Optional[CompletionFailure] = None
    completion_calls: int = Field(default=0, description="Completion requests made, initial one included")


class NoteGenerator:
    """Generates analysis notes, repairing sections the model left out."""

    def __init__(
        self,
        client: CompletionClient,
        config: Optional[NoteConfig] = None,
        composer: Optional[PromptComposer] = None,
        sleep: SleepFn = asyncio.sleep,
        verbose: bool = True,
        on_section_start: Optional[Callable[[int, int, str], None]] = None,
        on_warning: Optional[Callable[[str], None]] = None,
    ):
        self.client = client
        self.config = config or NoteConfig()
        self.verbose = verbose
        self.markers = SectionMarkers(
            start_prefix=self.config.start_marker_prefix,
            end_prefix=self.config.end_marker_prefix,
            suffix=self.config.marker_suffix,
        )
        self.composer = composer or PromptComposer(
            self.config.template_path, markers=self.markers, verbose=verbose,
        )
        self.repairer = SectionRepairer(
            client,
            self.composer,
            self.markers,
            RetryPolicy(self.config.max_retry_attempts, self.config.retry_base_delay),
            sleep=sleep,
            verbose=verbose,
        )
        self.on_section_start = on_section_start
        self.on_warning = on_warning

    async def generate(
        self,
        request: GenerationRequest,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> GenerationResult:
        """Run the full pipeline for *request*. A failed initial completion aborts the run."""
        metadata = request.metadata()
        prompt = self.composer.compose(metadata, request.code)

        if self.verbose:
            print("🤖 Requesting analysis from the model...")
        result = await self.client.generate(prompt)
        if not result.ok:
            if self.verbose:
                print("❌ The model returned no content; nothing to assemble.")
            return GenerationResult(
                status=GenerationStatus.FAILED,
                metadata=metadata,
                failure=result.failure,
                completion_calls=1,
            )

        processed = await self.process(result.text, request, cancel_event, metadata=metadata)
        processed.completion_calls += 1
        return processed

    async def process(
        self,
        raw_response: str,
        request: GenerationRequest,
        cancel_event: Optional[asyncio.Event] = None,
        metadata: Optional[DocumentMetadata] = None,
    ) -> GenerationResult:
        """
        Extract, repair and assemble the note from *raw_response*.

        Args:
            raw_response: Raw text of the initial completion. Never modified.
            request: The original request (code and metadata inputs).
            cancel_event: When set, the run stops before the next repair attempt
                and returns the sections resolved so far with no document.
            metadata: Pre-built metadata; built from *request* when omitted.
        """
        metadata = metadata or request.metadata()
        indices = self.config.section_indices
        total = self.config.section_count
        parsed = parse_sections(raw_response, indices, self.markers)

        sections: dict[int, str] = {}
        recovered: list[int] = []
        placeholders: list[int] = []
        repair_calls = 0

        for index in indices:
            heading = self.config.heading_for(index)
            if self.on_section_start:
                self.on_section_start(index, total, heading)

            content = parsed[index]
            if content is not None:
                sections[index] = content
                continue

            if self.verbose:
                print(f"⚠️  Section {index} is missing or empty. Attempting re-request.")
            outcome = await self.repairer.repair(
                index, heading, metadata, request.code, cancel_event,
            )
            repair_calls += outcome.attempts

            if outcome.state == RepairState.CANCELLED:
                if self.verbose:
                    print(f"🛑 Generation cancelled before repairing section {index}.")
                return GenerationResult(
                    status=GenerationStatus.CANCELLED,
                    metadata=metadata,
                    sections=sections,
                    recovered=recovered,
                    placeholders=placeholders,
                    completion_calls=repair_calls,
                )

            if outcome.state == RepairState.RECOVERED:
                sections[index] = outcome.content
                recovered.append(index)
            else:
                sections[index] = self.config.placeholder_for(index)
                placeholders.append(index)
                self._warn(
                    f"The AI could not generate section {index} after "
                    f"{outcome.attempts} attempt(s). You may need to add it manually."
                )

        document = assemble_document(metadata, sections, self.config.section_headings)
        if self.verbose:
            print(f"✅ Note assembled: {total} sections, {len(placeholders)} placeholder(s).")

        return GenerationResult(
            status=GenerationStatus.COMPLETED,
            document=document,
            metadata=metadata,
            sections=sections,
            recovered=recovered,
            placeholders=placeholders,
            completion_calls=repair_calls,
        )

    def _warn(self, message: str):
        if self.on_warning:
            self.on_warning(message)
        else:
            print(f"⚠️  {message}")
