from __future__ import annotations

import pytest
from pydantic import ValidationError

from jobmatch.config import load_settings
from jobmatch.container import create_container
from jobmatch.schemas.config import AppConfig, load_config


def test_create_container_with_overrides():
    container = create_container(
        settings={
            "core": {"relaxation_threshold": 5, "fallback_score": 40},
            "scorers": {
                "skills": {"max_points": 50.0},
                "experience": {"brackets": {"principal": [8, None]}},
                "workplace": {"preferences": ["remote"]},
                "goals": {"max_points": 5.0},
            },
            "filters": {"country_aliases": {"de": ["germany", "deutschland"]}},
            "session": {"pending_max_age_days": 3},
        }
    )

    skills = container.skills_scorer()
    experience = container.experience_scorer()
    workplace = container.workplace_scorer()
    goals = container.goals_scorer()
    facets = container.facet_evaluator()
    relaxation = container.relaxation()
    scorer = container.match_scorer()
    pipeline = container.pipeline()

    assert skills._config.max_points == 50.0
    assert experience._config.brackets == {"principal": (8, None)}
    assert workplace._config.preferences == ("remote",)
    assert goals._config.max_points == 5.0
    assert facets._config.country_aliases == {"de": ["germany", "deutschland"]}
    assert facets._config.date_posted_days["week"] == 7
    assert relaxation.threshold == 5
    assert scorer._fallback_score == 40
    assert pipeline._pending_max_age_days == 3


def test_create_container_defaults():
    container = create_container()

    assert container.relaxation().threshold == 3
    assert container.match_scorer()._fallback_score == 50
    assert container.pipeline()._pending_max_age_days == 7.0


def test_load_config_validation():
    data = {
        "core": {"relaxation_threshold": 2},
        "scorers": {"skills": {"neutral_points": 20.0}},
        "filters": {"default_date_window_days": 180},
    }
    app_config = load_config(data)
    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings == {
        "core": {"relaxation_threshold": 2},
        "scorers": {"skills": {"neutral_points": 20.0}},
        "filters": {"default_date_window_days": 180},
    }


def test_load_config_rejects_non_mapping():
    with pytest.raises(ValidationError):
        load_config(["core"])


def test_load_settings_reads_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "core:\n  relaxation_threshold: 4\nsession:\n  pending_max_age_days: 1.5\n",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings == {
        "core": {"relaxation_threshold": 4},
        "session": {"pending_max_age_days": 1.5},
    }
    assert create_container(settings=settings).relaxation().threshold == 4
