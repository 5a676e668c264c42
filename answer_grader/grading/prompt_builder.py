"""
Prompt builder for 5-point subjective grading.

Constructs the grading prompt that asks the LLM for:
- An integer score from 1 to 5
- An upgraded answer template one band above the current score
- Structured feedback (strengths, weaknesses, suggestions)
- A single fenced JSON block as output
"""

import json
from typing import Any

from answer_grader.models import MAX_SCORE, GradingRequest


class PromptBuilder:
    """
    Builds grading prompts for subjective questions.

    The prompt embeds a strict JSON template so the reply can be decoded
    without guessing at its structure.
    """

    SYSTEM_PROMPT = (
        "You are a professional education assessment expert who grades subjective "
        "questions on a 5-point scale. Your feedback is encouraging, specific and "
        "practical. Always return valid JSON."
    )

    # Placeholder values double as an example of the expected reply
    OUTPUT_TEMPLATE: dict[str, Any] = {
        "score": 3,
        "scoreLabel": "average",
        "upgradeAnswer": {
            "targetScore": 4,
            "templateAnswer": (
                "Building on the student's answer, to reach the next score band "
                "use the following answer template: ..."
            ),
            "keyPoints": ["Key point 1", "Key point 2", "Key point 3"],
        },
        "feedback": {
            "strengths": ["Strength"],
            "weaknesses": ["Weakness 1", "Weakness 2"],
            "suggestions": ["Suggestion 1", "Suggestion 2", "Suggestion 3"],
        },
    }

    @staticmethod
    def build_grading_prompt(request: GradingRequest) -> str:
        """
        Build the user prompt for grading.

        Args:
            request: The grading request.

        Returns:
            The formatted user prompt.
        """
        if request.current_score is not None:
            target = (
                f"target score {min(MAX_SCORE, request.current_score + 1)} "
                f"(current score {request.current_score} + 1)"
            )
        else:
            target = "target: the current score + 1"

        template = PromptBuilder.render_output_template()

        prompt = f"""As a professional education assessment expert, grade the student's answer on a 5-point scale and produce study advice.

**Question:**
{request.question_text}

**Reference answer:**
{request.reference_answer}

**Scoring rubric:**
{request.scoring_criteria}

**Student answer:**
{request.student_answer}

---

**Task requirements:**
1. Assign an integer score on a 5-point scale (1-5)
2. Produce an upgraded answer template ({target}, with 3-5 key scoring points)
3. Detailed feedback: exactly 1 strength, at least 2 weaknesses, at least 3 study suggestions

---

**Output format:**
Output a single ```json code block and follow these rules strictly:
- Use ASCII double quotes only; never use typographic quotes
- Write line breaks inside strings as \\n
- Make sure the JSON is complete and properly closed

```json
{template}
```"""

        return prompt

    @staticmethod
    def render_output_template() -> str:
        """Render the placeholder JSON template embedded in the prompt."""
        return json.dumps(PromptBuilder.OUTPUT_TEMPLATE, indent=2, ensure_ascii=False)

    @staticmethod
    def get_system_prompt() -> str:
        """Get the system prompt shared by all providers."""
        return PromptBuilder.SYSTEM_PROMPT


def build_grading_prompt(request: GradingRequest) -> str:
    """Module-level shortcut for `PromptBuilder.build_grading_prompt`."""
    return PromptBuilder.build_grading_prompt(request)
