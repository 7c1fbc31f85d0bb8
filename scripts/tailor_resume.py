from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from career_tailor.client.auth import StaticSessionProvider, SupabasePasswordSession  # noqa: E402
from career_tailor.client.functions import FunctionsClient  # noqa: E402
from career_tailor.core.config import settings  # noqa: E402
from career_tailor.tailoring import TailoringSession  # noqa: E402


def _session_provider():
    token = os.getenv("SUPABASE_ACCESS_TOKEN", "").strip()
    if token:
        return StaticSessionProvider(token)
    email = os.getenv("SUPABASE_EMAIL", "").strip()
    password = os.getenv("SUPABASE_PASSWORD", "")
    if email and password and settings.supabase_url and settings.supabase_anon_key:
        return SupabasePasswordSession(
            supabase_url=settings.supabase_url,
            anon_key=settings.supabase_anon_key,
            email=email,
            password=password,
        )
    return StaticSessionProvider(None)


def _print_report(session: TailoringSession) -> None:
    state = session.state
    if state.benchmark is not None:
        print(f"Role: {state.benchmark.role_title} ({state.benchmark.level})")
    if state.score_breakdown is not None:
        score = state.score_breakdown
        categories = score.categories
        print(f"Overall match: {score.overall_score}/100")
        print(
            f"  keywords {categories.keywords.score}  experience {categories.experience.score}  "
            f"accomplishments {categories.accomplishments.score}  ats {categories.ats_compliance.score}"
        )
    if state.gap_checklist is not None:
        print(f"Gaps ({state.gap_checklist.total_gaps} found, {state.gap_checklist.high_priority_count} high):")
        for gap in state.gap_checklist.items:
            print(f"  [{gap.severity}] {gap.id} {gap.action}: {gap.issue}")
    if state.error:
        print(f"Error: {state.error}", file=sys.stderr)


async def _run(args: argparse.Namespace) -> int:
    resume_text = Path(args.resume).read_text(encoding="utf-8")
    job_description = Path(args.job).read_text(encoding="utf-8")

    async with FunctionsClient(_session_provider()) as functions:
        async with TailoringSession(functions) as session:
            ok = await session.analyze_job(
                resume_text,
                job_description,
                job_title=args.title,
                company_name=args.company,
                industry=args.industry,
            )
            for _ in range(args.apply_top):
                checklist = session.state.gap_checklist
                if not ok or checklist is None or not checklist.items:
                    break
                ok = await session.apply_gap_action(checklist.items[0].id)
            _print_report(session)
            if ok:
                out_path = session.export_resume(args.out)
                print(f"Exported: {out_path}")
    return 0 if ok else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Score a resume against a job description and list the gaps.")
    parser.add_argument("--resume", required=True, help="Plain-text resume path")
    parser.add_argument("--job", required=True, help="Plain-text job description path")
    parser.add_argument("--title", default=None, help="Job title")
    parser.add_argument("--company", default=None, help="Company name")
    parser.add_argument("--industry", default=None, help="Industry")
    parser.add_argument("--apply-top", type=int, default=0, help="Apply the top-ranked gap this many times, rescoring after each")
    parser.add_argument("--out", default=None, help="Export directory (defaults to EXPORT_DIR)")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level, format="%(message)s")
    raise SystemExit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
