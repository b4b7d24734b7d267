"""
Task extraction through the completion model.

Each call captures one reference instant, sends a single request to Claude,
recovers the JSON payload and runs every extracted record through the
due-date normalizer. Failures never escape: callers always get an
ExtractionResult envelope.
"""
import json
import logging
from datetime import datetime, tzinfo
from typing import Any, Optional

import anthropic

import config
from dates import normalize_task, normalize_tasks
from models import DEFAULT_PRIORITY, PRIORITIES, ExtractionResult, TaskRecord
from prompts import build_system_prompt, build_user_prompt

logger = logging.getLogger(__name__)

TASK_ERROR = "Failed to parse task"
TRANSCRIPT_ERROR = "Failed to parse transcript"


class ExtractionError(Exception):
    """Base class for failures that abort a whole extraction call."""


class UpstreamFailure(ExtractionError):
    """The completion API could not be reached or returned an error."""


class UpstreamTimeout(UpstreamFailure):
    """The completion API did not answer within the configured timeout."""


class MalformedResponse(ExtractionError):
    """The completion text is not JSON of the expected shape."""


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if present."""
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        lines = lines[1:]  # Remove first line (```json)
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines)
    return text


def parse_json_object(text: str) -> dict:
    try:
        parsed = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"Response is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise MalformedResponse(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_priority(value: Any) -> str:
    if value is None:
        return DEFAULT_PRIORITY
    priority = str(value).strip().upper()
    if priority not in PRIORITIES:
        logger.warning("Unknown priority %r, defaulting to %s", value, DEFAULT_PRIORITY)
        return DEFAULT_PRIORITY
    return priority


def coerce_task(raw: dict) -> TaskRecord:
    """Build a TaskRecord from model output, tolerating missing or odd-typed keys."""
    due_date = raw.get("dueDate")
    if not isinstance(due_date, str) or not due_date.strip():
        due_date = None
    return TaskRecord(
        title=_as_text(raw.get("title")).strip(),
        assignee=_as_text(raw.get("assignee")).strip(),
        due_date=due_date,
        priority=_as_priority(raw.get("priority")),
        original_due=_as_text(raw.get("originalDue")),
    )


class TaskExtractor:
    def __init__(
        self,
        client: Optional[anthropic.AsyncAnthropic] = None,
        model: str = config.ANTHROPIC_MODEL,
        timezone_name: str = config.TIMEZONE_NAME,
        tz: tzinfo = config.TIMEZONE,
    ):
        self._client = client
        self.model = model
        self.timezone_name = timezone_name
        self.tz = tz

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            if not config.ANTHROPIC_API_KEY or config.ANTHROPIC_API_KEY == "your-api-key-here":
                raise UpstreamFailure("API key not configured")
            self._client = anthropic.AsyncAnthropic(api_key=config.ANTHROPIC_API_KEY)
        return self._client

    @property
    def utc_offset(self) -> str:
        offset = datetime.now(self.tz).strftime("%z")
        return f"{offset[:3]}:{offset[3:]}"

    def reference_instant(self, now: Optional[datetime] = None) -> datetime:
        """Capture "now" once per call, expressed in the fixed timezone."""
        return (now or datetime.now(self.tz)).astimezone(self.tz)

    async def _complete(self, text: str, now: datetime, transcript: bool) -> dict:
        system_prompt = build_system_prompt(now, self.timezone_name, self.utc_offset, transcript)
        user_prompt = build_user_prompt(now, self.timezone_name, text, transcript)

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=config.ANTHROPIC_MAX_TOKENS,
                temperature=config.ANTHROPIC_TEMPERATURE,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                timeout=config.ANTHROPIC_TIMEOUT,
            )
        except anthropic.APITimeoutError as e:
            raise UpstreamTimeout(f"Completion timed out: {e}") from e
        except anthropic.APIError as e:
            raise UpstreamFailure(f"API error: {e}") from e

        ai_text = "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )
        logger.debug("Claude response: %s", ai_text)
        return parse_json_object(ai_text)

    async def parse_task(self, task_text: str, now: Optional[datetime] = None) -> ExtractionResult:
        reference = self.reference_instant(now)
        try:
            raw = await self._complete(task_text, reference, transcript=False)
            task = normalize_task(coerce_task(raw), task_text, reference, self.tz)
        except ExtractionError as e:
            logger.error("Task parsing error: %s", e)
            return ExtractionResult(success=False, error=TASK_ERROR)
        except Exception:
            logger.exception("Unexpected error while parsing task")
            return ExtractionResult(success=False, error=TASK_ERROR)
        return ExtractionResult(success=True, data=task)

    async def parse_transcript(self, transcript: str, now: Optional[datetime] = None) -> ExtractionResult:
        reference = self.reference_instant(now)
        try:
            raw = await self._complete(transcript, reference, transcript=True)
            raw_tasks = raw.get("tasks")
            if not isinstance(raw_tasks, list):
                raise MalformedResponse("Invalid response format: missing tasks array")

            tasks = []
            for index, item in enumerate(raw_tasks):
                if not isinstance(item, dict):
                    logger.warning("Skipping task %d: expected an object, got %r", index, item)
                    continue
                tasks.append(coerce_task(item))
            tasks = normalize_tasks(tasks, transcript, reference, self.tz)
        except ExtractionError as e:
            logger.error("Transcript parsing error: %s", e)
            return ExtractionResult(success=False, error=TRANSCRIPT_ERROR)
        except Exception:
            logger.exception("Unexpected error while parsing transcript")
            return ExtractionResult(success=False, error=TRANSCRIPT_ERROR)
        return ExtractionResult(success=True, data=tasks)
