"""
Tests for the prompt text sent to Claude (prompts.py).
"""
import pytest
import sys
import os
from datetime import datetime

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from prompts import (
    TASK_PARSING_PROMPT,
    build_system_prompt,
    build_user_prompt,
    format_reference_time,
)


class TestReferenceTime:
    """Tests for the way the current time is quoted to the model."""

    @pytest.mark.parametrize("moment,expected", [
        (datetime(2024, 2, 20, 15, 4, 5), "2/20/2024, 3:04:05 PM"),
        (datetime(2025, 1, 1, 0, 0, 0), "1/1/2025, 12:00:00 AM"),
        (datetime(2025, 12, 31, 12, 30, 0), "12/31/2025, 12:30:00 PM"),
    ])
    def test_format(self, moment, expected):
        assert format_reference_time(moment) == expected


class TestSystemPrompt:
    """Tests for system prompt assembly."""

    def test_template_placeholders(self):
        for placeholder in ("{timezone}", "{current_time}", "{current_year}", "{utc_offset}"):
            assert placeholder in TASK_PARSING_PROMPT

    def test_single_task_prompt(self):
        now = datetime(2025, 3, 4, 9, 15, tzinfo=config.TIMEZONE)
        prompt = build_system_prompt(now, "Asia/Kolkata", "+05:30")

        assert "Asia/Kolkata" in prompt
        assert "3/4/2025, 9:15:00 AM" in prompt
        assert "use current year (2025)" in prompt
        assert "23:59:59" in prompt
        assert '"originalDue": "tomorrow at 3pm"' in prompt
        assert '"tasks"' not in prompt
        assert "{" + "utc_offset" + "}" not in prompt

    def test_transcript_prompt(self):
        now = datetime(2025, 3, 4, 9, 15, tzinfo=config.TIMEZONE)
        prompt = build_system_prompt(now, "Asia/Kolkata", "+05:30", transcript=True)

        assert "MULTIPLE tasks" in prompt
        assert '"tasks": [' in prompt
        assert "2024-02-21T15:00:00+05:30" in prompt

    def test_user_prompt_keeps_braces_in_text(self):
        now = datetime(2025, 3, 4, 9, 15)
        prompt = build_user_prompt(now, "Asia/Kolkata", "Fix {config} parser by Friday")
        assert 'Task: "Fix {config} parser by Friday"' in prompt
