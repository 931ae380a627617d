from fastapi import HTTPException, Request

from portfolio_advisor.services.advisor_service import AdvisorService


def get_advisor(request: Request) -> AdvisorService:
    """AdvisorService built during app startup"""
    advisor = getattr(request.app.state, "advisor", None)
    if advisor is None:
        raise HTTPException(status_code=503, detail="Advisor service not initialized")
    return advisor
