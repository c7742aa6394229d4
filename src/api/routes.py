"""HTTP routes. Thin layer: every route hands its request model to the CheckersService."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.models import (
    BlowRequest,
    BlowResponse,
    ChatRequest,
    CreateGameRequest,
    DeleteGameRequest,
    DrawRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LeaderboardResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    RatingResponse,
    ResignRequest,
    RespondDrawRequest,
)
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository, SQLRatingRepository
from src.services.checkers_service import CheckersService

router = APIRouter()


def get_service(db: Annotated[Session, Depends(get_db)]) -> CheckersService:
    return CheckersService(SQLGameRepository(db), SQLRatingRepository(db))


Service = Annotated[CheckersService, Depends(get_service)]


@router.post("/games", status_code=status.HTTP_201_CREATED)
def create_game(request: CreateGameRequest, service: Service) -> GameResponse:
    return service.create_new_game(request)


@router.post("/games/join")
def join_game(request: JoinGameRequest, service: Service) -> GameResponse:
    return service.join_game(request)


@router.get("/games/{game_id}")
def get_game(game_id: UUID, service: Service) -> GameResponse:
    return service.get_game_state(GetGameRequest(game_id=game_id))


@router.get("/games/{game_id}/legal-moves")
def legal_moves(game_id: UUID, player_name: str, service: Service) -> LegalMovesResponse:
    return service.legal_moves(
        LegalMovesRequest(game_id=game_id, player_name=player_name)
    )


@router.post("/games/move")
def make_move(request: MoveRequest, service: Service) -> GameResponse:
    return service.make_move(request)


@router.post("/games/blow")
def blow_piece(request: BlowRequest, service: Service) -> BlowResponse:
    return service.blow_piece(request)


@router.post("/games/chat")
def post_message(request: ChatRequest, service: Service) -> GameResponse:
    return service.post_message(request)


@router.post("/games/draw")
def request_draw(request: DrawRequest, service: Service) -> GameResponse:
    return service.request_draw(request)


@router.post("/games/draw/response")
def respond_draw(request: RespondDrawRequest, service: Service) -> GameResponse:
    return service.respond_draw(request)


@router.post("/games/resign")
def resign(request: ResignRequest, service: Service) -> GameResponse:
    return service.resign(request)


@router.delete("/games/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(game_id: UUID, service: Service) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))


@router.get("/ratings")
def get_leaderboard(service: Service) -> LeaderboardResponse:
    return service.get_leaderboard()


@router.get("/ratings/{player_name}")
def get_rating(player_name: str, service: Service) -> RatingResponse:
    return service.get_rating(player_name)
