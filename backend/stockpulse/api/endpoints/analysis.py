from fastapi import APIRouter, Depends

from stockpulse.analysis.recommender import recommend, validate_bundle
from stockpulse.api.dependencies import get_current_user
from stockpulse.models.user import User
from stockpulse.schemas.analysis import Recommendation, RecommendRequest

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


@router.post("/recommend", response_model=Recommendation)
async def recommend_from_scores(
    body: RecommendRequest,
    current_user: User = Depends(get_current_user)
):
    """Aggregate client-supplied category scores into a recommendation."""
    return recommend(validate_bundle(body.scores, body.details))
