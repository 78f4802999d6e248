"""
AI Reasoning Layer for MockPrep

Handles all AI-powered operations:
- Interview evaluation
- Question generation

Calls Gemini through the Generative Language REST API.
Integrated with Langfuse for observability and tracing.
"""

import json
import logging
import re
from typing import Any

import httpx
from langfuse import Langfuse
from pydantic import ValidationError

from mockprep.config.settings import Settings, get_settings
from mockprep.models.evaluation import EvaluationResult
from mockprep.models.question import QuestionRequest
from mockprep.models.transcript import QAPair
from mockprep.prompts.evaluator import EvaluatorPrompts
from mockprep.prompts.interviewer import InterviewerPrompts

logger = logging.getLogger(__name__)

_FENCE_START = re.compile(r"^\s*```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_END = re.compile(r"\n?\s*```\s*$")
_SPOKEN_UNSAFE = re.compile(r"[*#_`|\\]")


class EvaluationError(Exception):
    """Raised when the model call fails or its output cannot be used."""
    pass


def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence wrapped around a model response."""
    text = _FENCE_START.sub("", text.strip(), count=1)
    return _FENCE_END.sub("", text).strip()


class AIReasoningLayer:
    """
    Central AI reasoning component using Gemini.

    Every public operation either returns a validated result or raises
    EvaluationError. Retrying and falling back are the caller's decision.

    Observability:
    - Langfuse integration for tracing all LLM calls
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize AI reasoning layer.

        Args:
            settings: Application settings (cached settings if omitted)
            client: HTTP client to use instead of building one
        """
        self.settings = settings or get_settings()

        # HTTP client for API calls
        self.client = client or httpx.AsyncClient(
            base_url=self.settings.gemini_base_url.rstrip("/"),
            headers={
                "Content-Type": "application/json",
            },
            timeout=self.settings.request_timeout_seconds,
        )

        # Prompt templates
        self.interviewer_prompts = InterviewerPrompts()
        self.evaluator_prompts = EvaluatorPrompts()

        # Initialize Langfuse for observability
        self.langfuse = None
        if self.settings.langfuse_enabled:
            if self.settings.langfuse_secret_key and self.settings.langfuse_public_key:
                try:
                    self.langfuse = Langfuse(
                        secret_key=self.settings.langfuse_secret_key,
                        public_key=self.settings.langfuse_public_key,
                        host=self.settings.langfuse_base_url,
                    )
                    logger.info("Langfuse initialized for LLM observability")
                except Exception as e:
                    logger.warning(f"Failed to initialize Langfuse: {e}")
            else:
                logger.info("Langfuse keys not configured, tracing disabled")

    async def close(self):
        """Close the HTTP client and flush Langfuse."""
        await self.client.aclose()
        if self.langfuse:
            try:
                self.langfuse.flush()
            except Exception as e:
                logger.warning(f"Failed to flush Langfuse: {e}")

    # =========================================================================
    # TRACING
    # =========================================================================

    def _start_span(self, name: str, metadata: dict[str, Any]):
        if not self.langfuse:
            return None
        try:
            return self.langfuse.start_span(name=name, metadata=metadata)
        except Exception as lf_err:
            logger.warning(f"Langfuse span start failed: {lf_err}")
            return None

    def _end_span(
        self,
        span,
        output: dict[str, Any],
        score: float | None = None,
        comment: str | None = None,
    ) -> None:
        if not span:
            return
        try:
            if score is not None:
                span.score(name="overall_score", value=score, comment=comment)
            span.update(output=output)
            span.end()
        except Exception as lf_err:
            logger.warning(f"Langfuse span end failed: {lf_err}")

    # =========================================================================
    # CORE AI OPERATIONS
    # =========================================================================

    def _extract_content(self, result: dict) -> str:
        """Extract text content from a generateContent response."""
        candidates = result.get("candidates") or []
        if not candidates:
            feedback = result.get("promptFeedback", {})
            raise EvaluationError(f"Model returned no candidates: {feedback or 'empty response'}")

        parts = candidates[0].get("content", {}).get("parts", [])
        text_parts = []
        for part in parts:
            if isinstance(part, str):
                text_parts.append(part)
            elif isinstance(part, dict) and "text" in part:
                text_parts.append(part["text"])

        content = "".join(text_parts)
        if not content.strip():
            raise EvaluationError("Model returned an empty response")
        return content

    async def _call_gemini(
        self,
        prompt: str,
        response_schema: dict[str, Any] | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """
        Call Gemini and return the raw response text.

        Args:
            prompt: The prompt to send
            response_schema: JSON schema the response should follow
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature

        Returns:
            Model response text
        """
        generation_config: dict[str, Any] = {
            "temperature": self.settings.gemini_temperature if temperature is None else temperature,
            "topP": self.settings.gemini_top_p,
            "maxOutputTokens": max_tokens or self.settings.gemini_max_output_tokens,
        }
        if response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema

        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ],
            "generationConfig": generation_config,
        }

        try:
            response = await self.client.post(
                f"/v1beta/models/{self.settings.gemini_model}:generateContent",
                json=payload,
                headers={"x-goog-api-key": self.settings.gemini_api_key},
            )
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Gemini API error: {e}")
            raise EvaluationError(f"Gemini API error: {e}") from e
        except ValueError as e:
            raise EvaluationError(f"Gemini returned invalid JSON: {e}") from e

        return self._extract_content(result)

    def _parse_json(self, response: str) -> Any:
        """Parse a JSON document out of a model response."""
        cleaned = strip_code_fences(response)
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse model JSON: {e}")
            raise EvaluationError(f"Model response is not valid JSON: {e}") from e

    # =========================================================================
    # INTERVIEW EVALUATION
    # =========================================================================

    async def evaluate_interview(
        self,
        pairs: list[QAPair],
        job_role: str,
        trace_id: str | None = None,
    ) -> EvaluationResult:
        """
        Evaluate an interview from its Q&A pairs.

        Only the first ``max_qa_pairs`` pairs are sent to keep the prompt
        small.

        Args:
            pairs: Question/answer pairs in interview order
            job_role: Role the candidate interviewed for
            trace_id: Identifier used to group traces (e.g. the record id)

        Returns:
            Validated EvaluationResult

        Raises:
            EvaluationError: If the call fails or the output is unusable
        """
        selected = pairs[:self.settings.max_qa_pairs]
        prompt = self.evaluator_prompts.generate_evaluation_prompt(selected, job_role)

        span = self._start_span("evaluate_interview", {
            "trace_id": trace_id,
            "job_role": job_role,
            "qa_pairs": len(selected),
            "qa_pairs_dropped": len(pairs) - len(selected),
        })

        try:
            response = await self._call_gemini(
                prompt,
                response_schema=self.evaluator_prompts.RESPONSE_SCHEMA,
            )
            evaluation = self._parse_evaluation_response(response)
        except EvaluationError as e:
            self._end_span(span, {"error": str(e)})
            raise

        logger.info(
            f"Evaluation complete: overall={evaluation.overall_score:.1f} "
            f"({evaluation.level.value}) from {len(selected)} Q&A pairs"
        )
        self._end_span(
            span,
            {"overall_score": evaluation.overall_score},
            score=evaluation.overall_score,
            comment=f"Role: {job_role}",
        )
        return evaluation

    def _parse_evaluation_response(self, response: str) -> EvaluationResult:
        """Parse AI response into EvaluationResult."""
        data = self._parse_json(response)
        if not isinstance(data, dict):
            raise EvaluationError("Evaluation response is not a JSON object")

        try:
            return EvaluationResult.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Evaluation JSON failed validation: {e}")
            raise EvaluationError(f"Evaluation response failed validation: {e}") from e

    # =========================================================================
    # QUESTION GENERATION
    # =========================================================================

    async def generate_questions(self, request: QuestionRequest) -> list[str]:
        """
        Generate the questions the voice assistant will ask.

        Args:
            request: Role, level, tech stack, focus and amount

        Returns:
            Up to ``request.amount`` questions safe to read aloud

        Raises:
            EvaluationError: If the call fails or no questions come back
        """
        prompt = self.interviewer_prompts.generate_questions_prompt(request)

        span = self._start_span("generate_questions", {
            "role": request.role,
            "level": request.level,
            "focus": request.focus.value,
            "amount": request.amount,
        })

        try:
            response = await self._call_gemini(
                prompt,
                response_schema=self.interviewer_prompts.RESPONSE_SCHEMA,
                temperature=0.8,
            )
            questions = self._parse_questions_response(response)
        except EvaluationError as e:
            self._end_span(span, {"error": str(e)})
            raise

        questions = questions[:request.amount]
        logger.info(f"Generated {len(questions)} questions for {request.role} ({request.level})")
        self._end_span(span, {"questions": len(questions)})
        return questions

    def _parse_questions_response(self, response: str) -> list[str]:
        """Parse AI response into a list of spoken-safe questions."""
        data = self._parse_json(response)
        if isinstance(data, dict):
            data = data.get("questions")
        if not isinstance(data, list):
            raise EvaluationError("Question response is not a JSON array")

        questions = []
        for item in data:
            if not isinstance(item, str):
                continue
            text = _SPOKEN_UNSAFE.sub("", item.replace("/", " or "))
            text = " ".join(text.split())
            if text:
                questions.append(text)

        if not questions:
            raise EvaluationError("Model returned no usable questions")
        return questions
