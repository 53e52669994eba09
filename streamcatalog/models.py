"""Pydantic models describing plans, viewers and playable content."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    PrivateAttr,
    TypeAdapter,
    model_validator,
)

logger = logging.getLogger(__name__)

ContentType = Literal["movie", "series"]

MIN_RATING = 0.0
MAX_RATING = 10.0


class Plan(BaseModel):
    """A subscription tier."""

    id: str
    name: str
    monthly_price: float = Field(
        ge=0,
        validation_alias=AliasChoices("monthly_price", "monthlyPrice", "price"),
    )
    screen_limit: int = Field(
        default=1,
        ge=1,
        validation_alias=AliasChoices("screen_limit", "screenLimit", "screens"),
    )
    quality: str = "HD"


class Content(BaseModel, ABC):
    """Shared metadata for anything a user can press play on.

    ``play`` is the only behaviour that differs between variants; callers
    hold a ``Content`` reference and let dispatch pick the implementation.
    """

    id: str
    title: str
    genre: str
    year: int
    rating: float = Field(
        default=MIN_RATING,
        ge=MIN_RATING,
        le=MAX_RATING,
        validation_alias=AliasChoices("rating", "averageRating"),
    )
    rating_count: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("rating_count", "ratingCount"),
    )

    @model_validator(mode="after")
    def _count_seed_rating(self) -> "Content":
        """Treat an explicitly supplied rating as the first submission."""

        if (
            "rating" in self.model_fields_set
            and "rating_count" not in self.model_fields_set
        ):
            self.rating_count = 1
        return self

    @abstractmethod
    def play(self, user: "User") -> bool:
        """Play the content for ``user`` and record it in their history."""

    def update_rating(self, new_rating: float) -> bool:
        """Fold ``new_rating`` into the running average.

        Ratings outside ``[0, 10]`` are rejected and leave the item untouched.
        Only the mean and the submission count are kept.
        """

        if not MIN_RATING <= new_rating <= MAX_RATING:
            logger.warning(
                "Rejected rating %s for %s; ratings must be between %s and %s",
                new_rating,
                self.title,
                MIN_RATING,
                MAX_RATING,
            )
            return False

        total = self.rating * self.rating_count + new_rating
        self.rating_count += 1
        self.rating = total / self.rating_count
        logger.info(
            "Updated rating for %s to %.2f (%d ratings)",
            self.title,
            self.rating,
            self.rating_count,
        )
        return True


class Movie(Content):
    """Content that plays as one atomic unit."""

    type: Literal["movie"] = "movie"
    duration_minutes: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("duration_minutes", "durationMinutes", "duration"),
    )
    director: str | None = None
    exclusive: bool = Field(
        default=False,
        validation_alias=AliasChoices("exclusive", "isExclusive"),
    )

    def play(self, user: "User") -> bool:
        logger.info("%s watched movie %s in full", user.name, self.title)
        user.record_watch(self)
        return True


class Series(Content):
    """Episodic content that remembers where each viewer left off."""

    type: Literal["series"] = "series"
    episode_count: int = Field(
        ge=1,
        validation_alias=AliasChoices("episode_count", "episodeCount", "episodes"),
    )
    episode_minutes: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices(
            "episode_minutes", "episodeMinutes", "avgEpisodeDuration"
        ),
    )
    showrunner: str | None = None

    _progress: dict[str, int] = PrivateAttr(default_factory=dict)

    def last_watched_episode(self, user: "User") -> int:
        """Return the user's last-watched episode, or 0 if never watched."""

        return self._progress.get(user.id, 0)

    def is_finished_by(self, user: "User") -> bool:
        return self.last_watched_episode(user) == self.episode_count

    def play(self, user: "User") -> bool:
        """Resume from the episode after the last one watched.

        Once the final episode has been reached, resuming replays it.
        """

        next_episode = min(self.last_watched_episode(user) + 1, self.episode_count)
        return self.play_episode(user, next_episode)

    def play_episode(self, user: "User", episode_number: int) -> bool:
        """Play a specific episode, overwriting the user's progress."""

        if not 1 <= episode_number <= self.episode_count:
            logger.warning(
                "Invalid episode %s for %s; expected 1-%d",
                episode_number,
                self.title,
                self.episode_count,
            )
            return False

        self._progress[user.id] = episode_number
        logger.info(
            "%s watched %s episode %d/%d",
            user.name,
            self.title,
            episode_number,
            self.episode_count,
        )
        user.record_watch(self)
        return True


CatalogEntry = Annotated[Union[Movie, Series], Field(discriminator="type")]

_CONTENT_ADAPTER: TypeAdapter[Movie | Series] = TypeAdapter(CatalogEntry)


def parse_content(payload: Mapping[str, Any]) -> Content:
    """Build a ``Movie`` or ``Series`` from a mapping keyed by ``type``."""

    data = dict(payload)
    if isinstance(data.get("type"), str):
        data["type"] = data["type"].strip().lower()
    return _CONTENT_ADAPTER.validate_python(data)


class User(BaseModel):
    """A viewer with subscription state, a watchlist and a watch history."""

    id: str
    name: str
    email: str
    active: bool = True

    _plan: Plan | None = PrivateAttr(default=None)
    _watchlist: dict[str, Content] = PrivateAttr(default_factory=dict)
    _history: list[Content] = PrivateAttr(default_factory=list)

    @property
    def plan(self) -> Plan | None:
        return self._plan

    @property
    def watchlist(self) -> tuple[Content, ...]:
        """Watchlist entries in the order they were added."""

        return tuple(self._watchlist.values())

    @property
    def watch_history(self) -> tuple[Content, ...]:
        return tuple(self._history)

    def _set_active_plan(self, plan: Plan | None) -> None:
        # Only CatalogService calls this, after its subscription guards pass.
        self._plan = plan

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def add_to_watchlist(self, content: Content) -> bool:
        if content.id in self._watchlist:
            return False
        self._watchlist[content.id] = content
        return True

    def remove_from_watchlist(self, content: Content) -> bool:
        return self._watchlist.pop(content.id, None) is not None

    def record_watch(self, content: Content) -> None:
        self._history.append(content)

    def has_watched(self, content: Content) -> bool:
        return any(entry.id == content.id for entry in self._history)
