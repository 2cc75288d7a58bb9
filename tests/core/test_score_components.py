from __future__ import annotations

import pytest

from jobmatch.core.scoring import (
    ExperienceConfig,
    ExperienceFitScorer,
    GoalAlignmentScorer,
    SkillsOverlapScorer,
    WorkplaceFitScorer,
)
from jobmatch.schemas import CandidateProfile, JobPosting


def years(count: int) -> list[dict]:
    return [{"company": f"Co {idx}"} for idx in range(count)]


def test_skills_match_substrings_in_both_directions():
    scorer = SkillsOverlapScorer()
    job = JobPosting(job_id="1", skills=["React Native", "TypeScript", "GraphQL"])
    profile = CandidateProfile(skills=["react", "typescript 5"])

    result = scorer.evaluate(job, profile)

    assert result["metadata"]["matched"] == ["React Native", "TypeScript"]
    assert result["points"] == pytest.approx(80 / 3)


def test_skills_neutral_without_job_skills():
    scorer = SkillsOverlapScorer()

    result = scorer.evaluate(JobPosting(job_id="1"), CandidateProfile(skills=["go"]))

    assert result["points"] == 25
    assert result["metadata"]["status"] == "insufficient_data"


@pytest.mark.parametrize(
    ("level", "experience", "expected"),
    [
        ("Entry level", 2, 30),
        ("Entry level", 3, 0),
        ("Junior", 3, 30),
        ("Mid-Senior", 4, 30),
        ("Mid", 1, 0),
        ("Mid", 6, 0),
        ("Senior", 5, 30),
        ("Senior", 4, 0),
        ("Principal", 10, 0),
    ],
)
def test_experience_brackets_are_all_or_nothing(level, experience, expected):
    scorer = ExperienceFitScorer()
    job = JobPosting(job_id="1", experience_level=level)

    result = scorer.evaluate(job, CandidateProfile(experience=years(experience)))

    assert result["points"] == expected


def test_experience_neutral_when_either_side_missing():
    scorer = ExperienceFitScorer()

    no_level = scorer.evaluate(JobPosting(job_id="1"), CandidateProfile(experience=years(3)))
    no_history = scorer.evaluate(JobPosting(job_id="1", experience_level="Senior"), CandidateProfile())

    assert no_level["points"] == 15
    assert no_history["points"] == 15


def test_experience_non_list_history_counts_as_zero_years():
    scorer = ExperienceFitScorer()
    job = JobPosting(job_id="1", experience_level="Entry")

    result = scorer.evaluate(job, CandidateProfile(experience="five years at Acme"))

    assert result["metadata"]["experience_years"] == 0
    assert result["points"] == 30


def test_experience_brackets_are_configurable():
    scorer = ExperienceFitScorer(
        config=ExperienceConfig(brackets={"lead": (8, None)})
    )
    job = JobPosting(job_id="1", experience_level="Tech Lead")

    assert scorer.evaluate(job, CandidateProfile(experience=years(8)))["points"] == 30
    assert scorer.evaluate(job, CandidateProfile(experience=years(7)))["points"] == 0


def test_workplace_fit_checks_employment_type():
    scorer = WorkplaceFitScorer()
    job = JobPosting(job_id="1", location="Madrid", employment_type="Office based")

    office = scorer.evaluate(job, CandidateProfile(work_style="Prefers office work"))
    remote = scorer.evaluate(job, CandidateProfile(work_style="remote"))

    assert office["points"] == 20
    assert remote["points"] == 0
    assert remote["metadata"]["status"] == "mismatch"


def test_workplace_fit_neutral_without_location():
    scorer = WorkplaceFitScorer()
    job = JobPosting(job_id="1", employment_type="Remote")

    assert scorer.evaluate(job, CandidateProfile(work_style="remote"))["points"] == 10


def test_workplace_style_list_is_coerced_to_text():
    scorer = WorkplaceFitScorer()
    job = JobPosting(job_id="1", location="Anywhere", employment_type="Remote")

    result = scorer.evaluate(job, CandidateProfile(work_style=["async", "remote"]))

    assert result["points"] == 20


def test_goal_bonus_uses_leading_words():
    scorer = GoalAlignmentScorer()
    job = JobPosting(
        job_id="1",
        title="Product Manager",
        description="Own the roadmap for our payments platform.",
    )

    by_goal = scorer.evaluate(job, CandidateProfile(career_goals="Payments expertise"))
    by_title = scorer.evaluate(job, CandidateProfile(career_goals="Become a product leader"))
    neither = scorer.evaluate(job, CandidateProfile(career_goals="Teach chemistry"))

    assert by_goal["points"] == 10
    assert by_title["points"] == 10
    assert neither["points"] == 0


def test_goal_bonus_has_no_neutral_default():
    scorer = GoalAlignmentScorer()

    result = scorer.evaluate(JobPosting(job_id="1", description="x"), CandidateProfile())

    assert result["points"] == 0


def test_goal_bonus_awarded_for_blank_title_lead_word():
    scorer = GoalAlignmentScorer()
    profile = CandidateProfile(career_goals="zzz")

    untitled = scorer.evaluate(JobPosting(job_id="1", title="", description="Build things"), profile)
    padded = scorer.evaluate(
        JobPosting(job_id="2", title=" Chef", description="Build things"), profile
    )

    assert untitled["points"] == 10
    assert untitled["metadata"]["title_word"] == ""
    assert padded["points"] == 10


def test_goal_lead_word_splits_on_single_spaces():
    scorer = GoalAlignmentScorer()
    job = JobPosting(job_id="1", title="Chef", description="plan menus daily")

    result = scorer.evaluate(job, CandidateProfile(career_goals="plan\tahead"))

    assert result["metadata"]["goal_word"] == "plan\tahead"
    assert result["points"] == 0


def test_empty_experience_mapping_counts_as_zero_years():
    scorer = ExperienceFitScorer()
    job = JobPosting(job_id="1", experience_level="Entry level")

    result = scorer.evaluate(job, CandidateProfile(experience={}))

    assert result["metadata"]["experience_years"] == 0
    assert result["points"] == 30


def test_empty_work_style_list_scores_as_mismatch():
    scorer = WorkplaceFitScorer()
    job = JobPosting(job_id="1", location="Remote - EU", employment_type="Remote")

    result = scorer.evaluate(job, CandidateProfile(work_style=[]))

    assert result["points"] == 0
    assert result["metadata"]["status"] == "mismatch"
