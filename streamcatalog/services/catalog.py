"""High level orchestration for plans, viewers and playback."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Mapping

from ..config import Settings, get_settings
from ..models import Content, Plan, User, parse_content
from ..utils import normalise_genre, rank_by

logger = logging.getLogger(__name__)


class CatalogService:
    """Own the catalog registries and coordinate playback and analytics."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._plans: dict[str, Plan] = {}
        self._users: dict[str, User] = {}
        self._contents: dict[str, Content] = {}
        self._play_counts: dict[str, int] = {}

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Registries
    # ------------------------------------------------------------------
    def add_plan(self, plan: Plan) -> None:
        if plan.id in self._plans:
            logger.debug("Replacing plan %s", plan.id)
        self._plans[plan.id] = plan

    def add_user(self, user: User) -> None:
        if user.id in self._users:
            logger.debug("Replacing user %s", user.id)
        self._users[user.id] = user

    def add_content(self, content: Content) -> None:
        if content.id in self._contents:
            logger.debug("Replacing content %s", content.id)
        self._contents[content.id] = content

    def get_plan(self, plan_id: str) -> Plan | None:
        return self._plans.get(plan_id)

    def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def get_content(self, content_id: str) -> Content | None:
        return self._contents.get(content_id)

    @property
    def plans(self) -> tuple[Plan, ...]:
        return tuple(self._plans.values())

    @property
    def users(self) -> tuple[User, ...]:
        return tuple(self._users.values())

    @property
    def contents(self) -> tuple[Content, ...]:
        return tuple(self._contents.values())

    def load(self, payload: Mapping[str, Any]) -> None:
        """Seed the registries from a mapping of plans, content and users.

        User entries may name a plan id under ``plan``; it is applied through
        :meth:`subscribe` so the usual guards still run.
        """

        for entry in payload.get("plans") or []:
            if isinstance(entry, Mapping):
                self.add_plan(Plan.model_validate(entry))

        for entry in payload.get("content") or []:
            if isinstance(entry, Mapping):
                self.add_content(parse_content(entry))

        for entry in payload.get("users") or []:
            if not isinstance(entry, Mapping):
                continue
            user_data = dict(entry)
            plan_id = user_data.pop("plan", None)
            user = User.model_validate(user_data)
            self.add_user(user)
            if plan_id is not None:
                plan = self.get_plan(str(plan_id))
                if plan is None:
                    logger.warning(
                        "User %s references unknown plan %s", user.id, plan_id
                    )
                    continue
                self.subscribe(user, plan)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------
    def _registered_plan(self, plan: Plan) -> Plan | None:
        return self._plans.get(plan.id)

    def subscribe(self, user: User | None, plan: Plan | None) -> bool:
        """Put ``user`` on ``plan`` unless they are already on it.

        The user's active flag is not consulted here.
        """

        if user is None or plan is None:
            logger.warning("Cannot subscribe without both a user and a plan")
            return False
        registered = self._registered_plan(plan)
        if registered is None:
            logger.warning("Plan %s is not offered by this catalog", plan.id)
            return False
        current = user.plan
        if current is not None and current.id == plan.id:
            logger.warning("%s is already subscribed to %s", user.name, plan.name)
            return False

        user._set_active_plan(registered)
        logger.info("%s subscribed to %s", user.name, plan.name)
        return True

    def change_plan(self, user: User | None, new_plan: Plan | None) -> bool:
        """Move an active user onto ``new_plan``.

        Unlike :meth:`subscribe` this does not reject a switch to the plan
        the user already has.
        """

        if user is None or new_plan is None:
            logger.warning("Cannot change plan without both a user and a plan")
            return False
        registered = self._registered_plan(new_plan)
        if registered is None:
            logger.warning("Plan %s is not offered by this catalog", new_plan.id)
            return False
        if not user.active:
            logger.warning("Cannot change plan for inactive user %s", user.name)
            return False

        user._set_active_plan(registered)
        logger.info("%s changed plan to %s", user.name, registered.name)
        return True

    def activate_user(self, user_id: str) -> bool:
        user = self.get_user(user_id)
        if user is None:
            return False
        user.activate()
        return True

    def deactivate_user(self, user_id: str) -> bool:
        user = self.get_user(user_id)
        if user is None:
            return False
        user.deactivate()
        return True

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    def play_content(self, user: User | None, content: Content | None) -> bool:
        """Play ``content`` for ``user`` and count the play.

        Plays are counted whenever dispatch happens, including a series
        replaying its final episode.
        """

        if user is None or content is None:
            logger.warning("Cannot play without both a user and content")
            return False

        played = content.play(user)
        self._play_counts[content.id] = self._play_counts.get(content.id, 0) + 1
        return played

    def play_by_id(self, user_id: str, content_id: str) -> bool:
        user = self.get_user(user_id)
        content = self.get_content(content_id)
        if user is None or content is None:
            logger.warning("Unknown user %s or content %s", user_id, content_id)
            return False
        return self.play_content(user, content)

    def play_count(self, content_id: str) -> int:
        return self._play_counts.get(content_id, 0)

    def update_rating(self, content: Content | None, rating: float) -> bool:
        if content is None:
            logger.warning("Cannot rate missing content")
            return False
        return content.update_rating(rating)

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    def top_watched(self, n: int | None = None) -> list[Content]:
        """Return the most played content, most played first.

        Ties keep the order in which the content was first played.
        """

        limit = self._settings.top_watched_limit if n is None else n
        counted = [
            (content_id, count)
            for content_id, count in self._play_counts.items()
            if content_id in self._contents
        ]
        ranked = rank_by(counted, key=lambda pair: pair[1], limit=limit)
        return [self._contents[content_id] for content_id, _ in ranked]

    def plan_wise_revenue(self) -> dict[str, float]:
        """Sum monthly revenue per plan name across subscribed users."""

        revenue: defaultdict[str, float] = defaultdict(float)
        for user in self._users.values():
            plan = user.plan
            if plan is not None:
                revenue[plan.name] += plan.monthly_price
        return dict(revenue)

    def _unwatched(self, user: User) -> list[Content]:
        watched = {content.id for content in user.watch_history}
        return [
            content
            for content in self._contents.values()
            if content.id not in watched
        ]

    def recommend(self, user: User | None) -> list[Content]:
        """Highest rated content the user has not watched yet."""

        if user is None:
            return []
        return rank_by(
            self._unwatched(user),
            key=lambda content: content.rating,
            limit=self._settings.recommendation_limit,
        )

    def recommend_by_genre(self, user: User | None, genre: str) -> list[Content]:
        if user is None:
            return []
        wanted = normalise_genre(genre)
        candidates = [
            content
            for content in self._unwatched(user)
            if normalise_genre(content.genre) == wanted
        ]
        return rank_by(
            candidates,
            key=lambda content: content.rating,
            limit=self._settings.genre_recommendation_limit,
        )

    def recommend_by_year_and_rating(
        self,
        user: User | None,
        min_year: int,
        min_rating: float,
    ) -> list[Content]:
        """Unwatched content released in or after ``min_year`` rated at least
        ``min_rating``."""

        if user is None:
            return []
        candidates = [
            content
            for content in self._unwatched(user)
            if content.year >= min_year and content.rating >= min_rating
        ]
        return rank_by(
            candidates,
            key=lambda content: content.rating,
            limit=self._settings.filtered_recommendation_limit,
        )
