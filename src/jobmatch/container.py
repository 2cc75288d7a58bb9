"""Dependency injection container for the match engine."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .adapters import AirtableJobAdapter, PlatformJobAdapter
from .core import (
    ExperienceFitScorer,
    FacetEvaluator,
    GoalAlignmentScorer,
    MatchEngine,
    MatchScorer,
    RelaxationStrategy,
    ResultAssembler,
    SkillsOverlapScorer,
    WorkplaceFitScorer,
)
from .core.facets import FacetConfig
from .core.scoring import ExperienceConfig, GoalsConfig, SkillsConfig, WorkplaceConfig
from .pipeline import AdapterRegistry, MatchPipeline


class MatchContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    platform_adapter = providers.Singleton(PlatformJobAdapter)
    airtable_adapter = providers.Singleton(AirtableJobAdapter)

    adapter_registry = providers.Singleton(
        AdapterRegistry,
        adapters=providers.List(platform_adapter, airtable_adapter),
    )

    skills_scorer = providers.Singleton(SkillsOverlapScorer)
    experience_scorer = providers.Singleton(ExperienceFitScorer)
    workplace_scorer = providers.Singleton(WorkplaceFitScorer)
    goals_scorer = providers.Singleton(GoalAlignmentScorer)

    components = providers.List(
        skills_scorer,
        experience_scorer,
        workplace_scorer,
        goals_scorer,
    )

    match_scorer = providers.Singleton(
        MatchScorer,
        components=components,
        fallback_score=config.core.fallback_score,
    )

    facet_evaluator = providers.Singleton(FacetEvaluator)

    relaxation = providers.Singleton(
        RelaxationStrategy,
        facets=facet_evaluator,
        scorer=match_scorer,
        threshold=config.core.relaxation_threshold,
    )

    assembler = providers.Singleton(ResultAssembler, scorer=match_scorer)

    engine = providers.Singleton(
        MatchEngine,
        relaxation=relaxation,
        assembler=assembler,
    )

    pipeline = providers.Factory(
        MatchPipeline,
        engine=engine,
        registry=adapter_registry,
        pending_max_age_days=config.session.pending_max_age_days,
    )


def create_container(*, settings: dict[str, Any] | None = None) -> MatchContainer:
    """Instantiate container with optional overrides."""

    container = MatchContainer()

    if not settings:
        return container

    config_settings = {
        key: settings[key]
        for key in ("core", "session")
        if isinstance(settings.get(key), dict)
    }
    if config_settings:
        container.config.from_dict(config_settings)

    scorer_settings = settings.get("scorers", {}) if isinstance(settings, dict) else {}

    if "skills" in scorer_settings:
        skills_config = SkillsConfig(**scorer_settings["skills"])
        container.skills_scorer.override(
            providers.Singleton(SkillsOverlapScorer, config=skills_config)
        )

    if "experience" in scorer_settings:
        experience_options = dict(scorer_settings["experience"])
        if "brackets" in experience_options:
            experience_options["brackets"] = {
                keyword: tuple(bounds)
                for keyword, bounds in experience_options["brackets"].items()
            }
        experience_config = ExperienceConfig(**experience_options)
        container.experience_scorer.override(
            providers.Singleton(ExperienceFitScorer, config=experience_config)
        )

    if "workplace" in scorer_settings:
        workplace_options = dict(scorer_settings["workplace"])
        if "preferences" in workplace_options:
            workplace_options["preferences"] = tuple(workplace_options["preferences"])
        workplace_config = WorkplaceConfig(**workplace_options)
        container.workplace_scorer.override(
            providers.Singleton(WorkplaceFitScorer, config=workplace_config)
        )

    if "goals" in scorer_settings:
        goals_config = GoalsConfig(**scorer_settings["goals"])
        container.goals_scorer.override(providers.Singleton(GoalAlignmentScorer, config=goals_config))

    filter_settings = settings.get("filters", {}) if isinstance(settings, dict) else {}
    if filter_settings:
        facet_config = FacetConfig(**filter_settings)
        container.facet_evaluator.override(
            providers.Singleton(FacetEvaluator, config=facet_config)
        )

    return container
