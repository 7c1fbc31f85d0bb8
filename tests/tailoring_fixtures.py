from __future__ import annotations

import asyncio
import copy
import json
import sys
from pathlib import Path
from typing import Any

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from career_tailor.client.auth import StaticSessionProvider  # noqa: E402
from career_tailor.client.functions import FunctionsClient  # noqa: E402

FUNCTIONS_URL = "https://functions.test/functions/v1"

RESUME_TEXT = (
    "Jane Doe\n"
    "Senior Backend Engineer\n"
    "Experience\n"
    "- Built Python microservices for payments used by 1.2M users.\n"
    "- Reduced API latency by 38% across core services.\n"
    "Skills:\n"
    "Python, PostgreSQL, Docker\n"
)

JOB_DESCRIPTION = (
    "We are hiring a Senior Backend Engineer with Python, Kubernetes and "
    "distributed systems experience to scale our payments platform."
)

BENCHMARK_PAYLOAD: dict[str, Any] = {
    "roleTitle": "Senior Backend Engineer",
    "level": "senior",
    "industry": "Fintech",
    "synthesisReasoning": "Payments platform at scale needs strong distributed systems skills.",
    "yearsOfExperience": {"min": 5, "max": 10, "median": 7, "reasoning": "Senior IC scope."},
    "coreSkills": [
        {
            "skill": "Python",
            "criticality": "must-have",
            "whyMatters": "Primary service language.",
            "evidenceOfMastery": "Owned production Python services.",
        },
        {
            "skill": "Kubernetes",
            "criticality": "must-have",
            "whyMatters": "All services deploy to Kubernetes.",
            "evidenceOfMastery": "Operated workloads on Kubernetes in production.",
        },
        {
            "skill": "Terraform",
            "criticality": "nice-to-have",
            "whyMatters": "Infrastructure is managed as code.",
            "evidenceOfMastery": "",
        },
    ],
    "expectedAccomplishments": [
        {
            "type": "mentorship",
            "description": "Show that you grew other engineers.",
            "exampleBullet": "Mentored 4 engineers through promotion to senior level.",
            "metricsToInclude": ["engineers mentored"],
        }
    ],
    "typicalMetrics": ["latency reduction", "uptime", "cost savings", "throughput"],
    "redFlags": ["No production ownership"],
}

SCORE_PAYLOAD: dict[str, Any] = {
    "overallScore": 64,
    "scoreExplanation": "Moderate match for Senior Backend Engineer role.",
    "categories": {
        "keywords": {
            "score": 55,
            "matched": ["Python"],
            "missing": ["Kubernetes", "Terraform"],
            "missingByPriority": [
                {"keyword": "Kubernetes", "criticality": "must-have"},
                {"keyword": "Terraform", "criticality": "nice-to-have"},
            ],
            "summary": "1 of 3 skills matched.",
        },
        "experience": {
            "score": 70,
            "userYearsOfExperience": 4,
            "benchmarkYearsOfExperience": {"min": 5, "max": 10, "median": 7},
            "levelMatch": "below",
            "gaps": ["No on-call ownership mentioned"],
            "summary": "Slightly below the benchmark range.",
        },
        "accomplishments": {
            "score": 45,
            "userHasMetrics": True,
            "userMetrics": ["1.2M users", "38%"],
            "benchmarkMetrics": ["latency reduction", "uptime"],
            "missingMetrics": ["Uptime"],
            "accomplishmentTypes": [
                {"type": "optimization", "found": True, "evidence": "Reduced API latency by 38%"},
                {"type": "mentorship", "found": False},
            ],
            "summary": "Some quantified results.",
        },
        "atsCompliance": {
            "score": 82,
            "issues": ["Remove graphics from header"],
            "warnings": ["Dates use inconsistent formats"],
            "sectionsFound": ["Experience", "Skills"],
            "sectionsMissing": ["Summary"],
            "summary": "Mostly ATS friendly.",
        },
    },
    "strengths": ["Resume includes quantified achievements"],
    "gaps": ["Skill gaps: missing 1 must-have skills"],
    "weights": {"keywords": 0.4, "experience": 0.25, "accomplishments": 0.2, "atsCompliance": 0.15},
}

CHECKLIST_PAYLOAD: list[dict[str, Any]] = [
    {
        "id": "gap_kw",
        "gapType": "keyword",
        "severity": "high",
        "issue": 'Missing "Kubernetes" (required for this role)',
        "impact": "Adding this could increase match score by ~3-5%",
        "action": "add",
        "actionDescription": 'Add "Kubernetes" to your skills section.',
        "suggestedKeyword": "Kubernetes",
        "section": "skills",
        "uiOrder": 0,
    },
    {
        "id": "gap_bullet",
        "gapType": "accomplishment",
        "severity": "medium",
        "issue": 'Missing "Mentorship" accomplishment',
        "impact": "Adding this type of accomplishment demonstrates breadth of impact",
        "action": "add-new-bullet",
        "actionDescription": "Show that you grew other engineers.",
        "suggestedBullet": "Mentored 4 engineers through promotion to senior level.",
        "section": "experience",
        "uiOrder": 1,
    },
    {
        "id": "gap_metrics",
        "gapType": "accomplishment",
        "severity": "low",
        "issue": "Consider adding metric: Uptime",
        "impact": "This metric type is commonly expected for this role",
        "action": "strengthen",
        "actionDescription": "Look for opportunities to quantify your work with uptime.",
        "section": "experience",
        "uiOrder": 2,
    },
]

_PAYLOAD_KEYS = {
    "analyze-benchmark": "benchmark",
    "score-vs-benchmark": "score",
    "generate-gap-checklist": "checklist",
}


class FakeFunctionsBackend:
    """In-process stand-in for the three remote analysis functions."""

    def __init__(self):
        self.calls: list[dict[str, Any]] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.responses: dict[str, tuple[int, Any]] = {
            "analyze-benchmark": (
                200,
                {"success": True, "benchmark": copy.deepcopy(BENCHMARK_PAYLOAD), "metrics": {"executionTimeMs": 12}},
            ),
            "score-vs-benchmark": (200, {"success": True, "score": copy.deepcopy(SCORE_PAYLOAD)}),
            "generate-gap-checklist": (
                200,
                {
                    "success": True,
                    "checklist": copy.deepcopy(CHECKLIST_PAYLOAD),
                    "totalGaps": 3,
                    "highPriorityCount": 1,
                },
            ),
        }
        self._http_clients: list[httpx.AsyncClient] = []

    def fail(self, name: str, message: str, status_code: int = 500) -> None:
        self.responses[name] = (status_code, {"success": False, _PAYLOAD_KEYS[name]: None, "error": message})

    def names(self) -> list[str]:
        return [call["name"] for call in self.calls]

    def bodies(self, name: str) -> list[dict[str, Any]]:
        return [call["body"] for call in self.calls if call["name"] == name]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        self.calls.append(
            {
                "name": name,
                "body": json.loads(request.content or b"{}"),
                "authorization": request.headers.get("authorization"),
                "apikey": request.headers.get("apikey"),
            }
        )
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        status_code, body = self.responses[name]
        return httpx.Response(status_code, json=body)

    def client(self, token: str | None = "test-token") -> FunctionsClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        self._http_clients.append(http)
        return FunctionsClient(
            StaticSessionProvider(token),
            base_url=FUNCTIONS_URL,
            anon_key="anon-key",
            http_client=http,
        )

    async def aclose(self) -> None:
        for http in self._http_clients:
            await http.aclose()


class _FakeHandle:
    def __init__(self, when: float, callback, args: tuple):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeTimer:
    """Drop-in for ``loop.call_later`` driven by ``advance``."""

    def __init__(self):
        self.now = 0.0
        self._handles: list[_FakeHandle] = []

    def call_later(self, delay: float, callback, *args) -> _FakeHandle:
        handle = _FakeHandle(self.now + delay, callback, args)
        self._handles.append(handle)
        return handle

    @property
    def active(self) -> int:
        return sum(1 for handle in self._handles if not handle.cancelled)

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (handle for handle in self._handles if not handle.cancelled and handle.when <= self.now),
            key=lambda handle: handle.when,
        )
        for handle in due:
            handle.cancelled = True
            handle.callback(*handle.args)
        self._handles = [handle for handle in self._handles if not handle.cancelled]
