# mummytrack/services/advisor.py
"""
Gateway verso Gemini (REST generateContent).

Ogni operazione pubblica ritorna un valore di default sicuro in caso di errore
(rete, HTTP, JSON malformato, schema diverso): i chiamanti controllano solo se
il risultato è vuoto.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from mummytrack.schemas.advice import (
    BreakdownReply,
    GlobalCompetitor,
    RankingReply,
    StandingsReply,
    TaskDigest,
)
from mummytrack.schemas.assignment import Assignment

logger = logging.getLogger(__name__)

MOM_SYSTEM_INSTRUCTION = """
  You are an "Indian Mother" who is the Supervisor-in-Chief of her child's homework.
  Your tone is strict but deeply caring. You use phrases like "Beta", "Concentrate!", "Shaurya next door is already done",
  and "I do everything for you, just study!". You emphasize neatness, discipline, and the fact that
  education is the only path to a "Nawab" (noble/successful) life. You are judgmental about non-STEM subjects
  and never satisfied with less than 100%.
"""

WISDOM_EMPTY = "Just study."
WISDOM_FAILED = "Study now."
JUDGE_EMPTY = "Where are the marks?"
JUDGE_FAILED = "I see."

STEPS_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {"steps": {"type": "ARRAY", "items": {"type": "STRING"}}},
}

ORDER_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {"orderedIds": {"type": "ARRAY", "items": {"type": "STRING"}}},
}

COMPETITORS_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "competitors": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "achievement": {"type": "STRING"},
                    "sourceUrl": {"type": "STRING"},
                    "momComment": {"type": "STRING"},
                },
                "required": ["name", "achievement", "sourceUrl", "momComment"],
            },
        }
    },
}

GOOGLE_SEARCH_TOOL = [{"google_search": {}}]


class AdvisoryUnavailable(RuntimeError):
    pass


def _number(value: float) -> str:
    # come un template JS: 98.0 -> "98", 1234567.0 -> "1234567", 97.5 -> "97.5"
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        parts = text.split("```")
        text = parts[1] if len(parts) > 1 else text
        if text.startswith("json"):
            text = text[4:]
        text = text.strip()
    return text


def extract_text(payload: Dict[str, Any]) -> str:
    """Concatena le parti di testo del primo candidato."""
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))


class AdvisoryGateway:
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str,
        pro_model: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
    ):
        self.client = client
        self.api_key = api_key
        self.model = model
        self.pro_model = pro_model
        self.base_url = base_url.rstrip("/")

    async def _generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        schema: Optional[Dict[str, Any]] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> str:
        if not self.api_key:
            raise AdvisoryUnavailable("Gemini API key non configurata")

        body: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if schema is not None:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            }
        if tools:
            body["tools"] = tools

        url = f"{self.base_url}/models/{model or self.model}:generateContent"
        logger.debug("generateContent %s", url)
        response = await self.client.post(url, json=body, headers={"x-goog-api-key": self.api_key})
        response.raise_for_status()
        return extract_text(response.json())

    async def break_down(self, assignment: Assignment, crisis: bool = False) -> List[str]:
        nudge = (
            "ARRE! You told me about this project at 9 PM?! Sit down, we are doing it together now."
            if crisis
            else "Don't delay it. Break it down into 4-6 small steps."
        )
        prompt = (
            f"{MOM_SYSTEM_INSTRUCTION}\n"
            f"Beta, I see you have this task: {assignment.title} ({assignment.subject}). {nudge}\n"
            "Give me steps in a JSON array called 'steps'."
        )
        try:
            text = await self._generate(prompt, schema=STEPS_SCHEMA)
            return BreakdownReply.model_validate_json(_strip_fences(text) or "{}").steps
        except Exception:
            logger.exception("Breakdown fallito per %s", assignment.id)
            return []

    async def mom_wisdom(self, assignment: Assignment) -> str:
        prompt = f'{MOM_SYSTEM_INSTRUCTION}\nGive me 3 pieces of "Mummy Wisdom" for: {assignment.title}.'
        try:
            text = await self._generate(prompt)
        except Exception:
            logger.exception("Wisdom fallita per %s", assignment.id)
            return WISDOM_FAILED
        return text or WISDOM_EMPTY

    async def judge_grade(self, subject: str, score: float, total: float) -> str:
        prompt = (
            f"{MOM_SYSTEM_INSTRUCTION}\n"
            f"My child got {_number(score)}/{_number(total)} in {subject}. Reaction?"
        )
        try:
            text = await self._generate(prompt)
        except Exception:
            logger.exception("Giudizio voto fallito (%s)", subject)
            return JUDGE_FAILED
        return text or JUDGE_EMPTY

    async def global_standards(self, completion_rate: int) -> List[GlobalCompetitor]:
        prompt = (
            "Search for the latest real-world academic news, like 2024/2025 Board exam toppers, "
            "JEE toppers, UPSC results, or SAT records.\n"
            'Then, acting as an Indian Mother, list 3 real-world "toppers" and compare them to my child '
            f"who only has a {completion_rate}% completion rate on their homework.\n"
            "Format the output as a JSON object with an array 'competitors'.\n"
            "Each competitor should have: 'name', 'achievement', 'sourceUrl', and 'momComment'."
        )
        try:
            text = await self._generate(
                prompt, model=self.pro_model, schema=COMPETITORS_SCHEMA, tools=GOOGLE_SEARCH_TOOL
            )
            return StandingsReply.model_validate_json(_strip_fences(text) or "{}").competitors
        except Exception:
            logger.exception("Ricerca classifica globale fallita")
            return []

    async def prioritize(self, assignments: Sequence[Assignment]) -> List[str]:
        if not assignments:
            return []
        digest = [TaskDigest(id=a.id, title=a.title, subject=a.subject).model_dump() for a in assignments]
        prompt = (
            f"{MOM_SYSTEM_INSTRUCTION}\n"
            f"Order these tasks: {json.dumps(digest, separators=(',', ':'), ensure_ascii=False)}"
        )
        try:
            text = await self._generate(prompt, schema=ORDER_SCHEMA)
            return RankingReply.model_validate_json(_strip_fences(text) or "{}").orderedIds
        except Exception:
            logger.exception("Prioritizzazione fallita")
            return []
