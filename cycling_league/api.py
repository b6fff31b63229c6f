"""FastAPI application exposing standings, race results and the advisor chat."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from . import config
from .advisor import AdvisorClient, AdvisorMode, ChatMessage, ChatRole, ChatStatus, Source, Transcript
from .links import race_profile_url
from .models import Race
from .repository import LeagueRepository
from .standings import (
    compute_evolution_series,
    compute_global_stats,
    compute_league_summary,
    filter_races_by_category,
    race_winner_ids,
    rank_mortadelas,
    rank_standings,
)


logger = logging.getLogger(__name__)

app = FastAPI(title="Cycling League API")

_repository = LeagueRepository.season_2026()


@app.on_event("startup")
def _configure_logging() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "Serving %d players, %d races, %d results",
        len(_repository.list_players()),
        len(_repository.list_races()),
        len(_repository.list_results()),
    )


def get_repository() -> LeagueRepository:
    """Provide the repository instance for FastAPI dependencies."""

    return _repository


def get_advisor() -> AdvisorClient:
    return AdvisorClient.from_env()


class PlayerResponse(BaseModel):
    id: str
    name: str
    color: str


class CategoryResponse(BaseModel):
    id: str
    name: str


class StandingResponse(BaseModel):
    position: int
    player_id: str
    player_name: str
    player_color: str
    total_points: int
    races_won: int
    average_points: float


class SummaryResponse(BaseModel):
    leader_name: str
    leader_color: str
    total_races: int
    completed_races: int
    most_wins_players: List[str]
    most_wins: int
    top_score: int
    top_score_player: str


class EvolutionPointResponse(BaseModel):
    race_id: str
    race_name: str
    date: date
    totals: Dict[str, int]


class RaceResponse(BaseModel):
    id: str
    name: str
    category_id: str
    category_name: Optional[str]
    date: date
    status: str
    profile_url: str


class RaceResultResponse(BaseModel):
    player_id: str
    player_name: str
    points: Optional[int]
    is_winner: bool


class RaceDetailResponse(RaceResponse):
    results: List[RaceResultResponse]


class MortadelaResponse(BaseModel):
    cyclist: str
    points: int
    player_id: str
    race_name: str


class WithdrawalResponse(BaseModel):
    player_id: str
    races: Dict[str, str]
    total: int


class SourceModel(BaseModel):
    uri: str
    title: str


class ChatMessageModel(BaseModel):
    role: ChatRole
    text: str
    sources: List[SourceModel] = Field(default_factory=list)
    is_error: bool = False


class AdvisorRequest(BaseModel):
    question: str = Field(..., min_length=1)
    mode: AdvisorMode = AdvisorMode.PCS
    transcript: Optional[List[ChatMessageModel]] = None
    retry: bool = False


class AdvisorResponse(BaseModel):
    status: ChatStatus
    messages: List[ChatMessageModel]


def _race_to_response(race: Race, repository: LeagueRepository) -> RaceResponse:
    category = repository.get_category(race.category_id)
    return RaceResponse(
        id=race.id,
        name=race.name,
        category_id=race.category_id,
        category_name=category.name if category else None,
        date=race.date,
        status=race.status.value,
        profile_url=race_profile_url(race.name),
    )


def _message_from_model(model: ChatMessageModel) -> ChatMessage:
    return ChatMessage(
        role=model.role,
        text=model.text,
        sources=tuple(Source(uri=source.uri, title=source.title) for source in model.sources),
        is_error=model.is_error,
    )


def _message_to_model(message: ChatMessage) -> ChatMessageModel:
    return ChatMessageModel(
        role=message.role,
        text=message.text,
        sources=[SourceModel(uri=source.uri, title=source.title) for source in message.sources],
        is_error=message.is_error,
    )


@app.get("/players", response_model=List[PlayerResponse])
def list_players(
    repository: LeagueRepository = Depends(get_repository),
) -> List[PlayerResponse]:
    return [
        PlayerResponse(id=player.id, name=player.name, color=player.color)
        for player in repository.list_players()
    ]


@app.get("/categories", response_model=List[CategoryResponse])
def list_categories(
    repository: LeagueRepository = Depends(get_repository),
) -> List[CategoryResponse]:
    return [
        CategoryResponse(id=category.id, name=category.name)
        for category in repository.list_categories()
    ]


@app.get("/standings", response_model=List[StandingResponse])
def get_standings(
    repository: LeagueRepository = Depends(get_repository),
) -> List[StandingResponse]:
    players = {player.id: player for player in repository.list_players()}
    stats = compute_global_stats(players.values(), repository.list_races(), repository.list_results())
    return [
        StandingResponse(
            position=position,
            player_id=entry.player_id,
            player_name=players[entry.player_id].name,
            player_color=players[entry.player_id].color,
            total_points=entry.total_points,
            races_won=entry.races_won,
            average_points=entry.average_points,
        )
        for position, entry in enumerate(rank_standings(stats), start=1)
    ]


@app.get("/summary", response_model=SummaryResponse)
def get_summary(
    repository: LeagueRepository = Depends(get_repository),
) -> SummaryResponse:
    players = repository.list_players()
    races = repository.list_races()
    results = repository.list_results()
    summary = compute_league_summary(
        players,
        compute_global_stats(players, races, results),
        races,
        results,
    )
    return SummaryResponse(
        leader_name=summary.leader_name,
        leader_color=summary.leader_color,
        total_races=summary.total_races,
        completed_races=summary.completed_races,
        most_wins_players=list(summary.most_wins_players),
        most_wins=summary.most_wins,
        top_score=summary.top_score,
        top_score_player=summary.top_score_player,
    )


@app.get("/evolution", response_model=List[EvolutionPointResponse])
def get_evolution(
    repository: LeagueRepository = Depends(get_repository),
) -> List[EvolutionPointResponse]:
    series = compute_evolution_series(
        repository.list_players(), repository.list_races(), repository.list_results()
    )
    return [
        EvolutionPointResponse(
            race_id=point.race_id,
            race_name=point.race_name,
            date=point.date,
            totals=dict(point.totals),
        )
        for point in series
    ]


@app.get("/races", response_model=List[RaceResponse])
def list_races(
    category_id: Optional[str] = None,
    repository: LeagueRepository = Depends(get_repository),
) -> List[RaceResponse]:
    races = filter_races_by_category(repository.list_races(), category_id)
    return [_race_to_response(race, repository) for race in races]


@app.get("/races/{race_id}", response_model=RaceDetailResponse)
def get_race(
    race_id: str,
    repository: LeagueRepository = Depends(get_repository),
) -> RaceDetailResponse:
    race = repository.get_race(race_id)
    if race is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Race not found")

    results = repository.list_results(race.id)
    points = {result.player_id: result.points for result in results}
    winners = set(race_winner_ids(race.id, results))
    base = _race_to_response(race, repository)
    return RaceDetailResponse(
        **base.model_dump(),
        results=[
            RaceResultResponse(
                player_id=player.id,
                player_name=player.name,
                points=points.get(player.id),
                is_winner=player.id in winners,
            )
            for player in repository.list_players()
        ],
    )


@app.get("/records/mortadelas", response_model=List[MortadelaResponse])
def list_mortadelas(
    repository: LeagueRepository = Depends(get_repository),
) -> List[MortadelaResponse]:
    return [
        MortadelaResponse(
            cyclist=entry.cyclist,
            points=entry.points,
            player_id=entry.player_id,
            race_name=entry.race_name,
        )
        for entry in rank_mortadelas(repository.list_mortadelas())
    ]


@app.get("/records/withdrawals", response_model=List[WithdrawalResponse])
def list_withdrawals(
    repository: LeagueRepository = Depends(get_repository),
) -> List[WithdrawalResponse]:
    return [
        WithdrawalResponse(player_id=record.player_id, races=dict(record.races), total=record.total)
        for record in repository.list_withdrawals()
    ]


@app.post("/advisor/messages", response_model=AdvisorResponse)
def send_advisor_message(
    payload: AdvisorRequest,
    advisor: AdvisorClient = Depends(get_advisor),
) -> AdvisorResponse:
    if payload.transcript is None:
        transcript = Transcript()
    else:
        transcript = Transcript(messages=[_message_from_model(message) for message in payload.transcript])

    transcript.send(advisor, payload.question, payload.mode, retry=payload.retry)
    return AdvisorResponse(
        status=transcript.status,
        messages=[_message_to_model(message) for message in transcript.messages],
    )
