"""Rating endpoints.

GET /           - Average rating of every rated game, highest first.
GET /{game_id}  - The current user's rating of a game (0 if unrated).
PUT /{game_id}  - Set the current user's rating of a game (1-5).

Routers are thin: storage goes through the RatingRepository.
"""

from fastapi import APIRouter, Depends, HTTPException, Path

from game_ratings.deps import get_current_user, get_repository
from game_ratings.schemas import ApiError, AvgRating, Rating, RatingUpdate, User
from game_ratings.stores import RatingRepository, RatingValidationError, RepositoryError

router = APIRouter()


@router.get("/", response_model=list[AvgRating])
async def get_ratings(
    user: User = Depends(get_current_user),
    repository: RatingRepository = Depends(get_repository),
) -> list[AvgRating]:
    """Get averaged ratings for all games.

    Returns:
        List of {game_id, rating} sorted by rating descending, [] if none.
    """
    try:
        return await repository.get_avg_ratings()
    except RepositoryError:
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{game_id}", response_model=Rating)
async def get_rating(
    game_id: str = Path(description="Game identifier", min_length=1),
    user: User = Depends(get_current_user),
    repository: RatingRepository = Depends(get_repository),
) -> Rating:
    """Get the current user's rating for a game.

    A game the user has not rated yet returns rating 0.
    """
    try:
        return await repository.get_rating(game_id, user.id)
    except RepositoryError:
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/{game_id}", response_model=Rating)
async def put_rating(
    update: RatingUpdate,
    game_id: str = Path(description="Game identifier", min_length=1),
    user: User = Depends(get_current_user),
    repository: RatingRepository = Depends(get_repository),
) -> Rating:
    """Set the current user's rating for a game.

    Body: {"rating": <integer 1-5>}. Responds like GET /{game_id}
    with the stored rating after the write.
    """
    rating = Rating(game_id=game_id, user_id=user.id, rating=update.rating)

    try:
        await repository.put_rating(rating)
    except RatingValidationError:
        raise HTTPException(status_code=400, detail="Rating must be an integer between 1 and 5")
    except RepositoryError:
        raise ApiError(status_code=400, code="RATING_NOT_SAVED", detail="Rating could not be saved")

    return await get_rating(game_id=game_id, user=user, repository=repository)
