from fastapi import APIRouter

from career_tailor.core.config import settings
from career_tailor.core.tailoring_rules import get_rule_value

router = APIRouter()


@router.get("/health", summary="Health Check", description="Report service status and checklist configuration.")
async def health_check():
    return {
        "status": "healthy",
        "functions_auth_mode": settings.functions_auth_mode,
        "max_gaps": get_rule_value("checklist.max_gaps"),
    }
