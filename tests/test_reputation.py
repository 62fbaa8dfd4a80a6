from datetime import timedelta

from skillbridge.modules.meetings import MeetingService
from skillbridge.modules.reputation import ReputationService
from skillbridge.modules.users import UserService


async def _complete_and_rate(meetings, learner, result, rating):
    await meetings.sweep_expired(learner.id, now=result.meeting.ends_at + timedelta(seconds=1))
    await meetings.rate(learner.id, result.meeting.id, rating)


async def test_running_average_over_three_sessions(session, make_user, schedule):
    teacher = await make_user("Teacher")
    learner = await make_user("Learner")
    users = UserService.with_session(session)
    await users.add_teaching_skill(teacher.id, "Python")
    meetings = MeetingService.with_session(session)

    results = [
        await schedule(teacher, learner, session_type="teaching", skill="Python", hours_from_now=hours)
        for hours in (-30, -20, -10)
    ]
    for result, rating in zip(results, (5, 4, 3)):
        await _complete_and_rate(meetings, learner, result, rating)

    profile = await users.require(teacher.id)
    skill = profile.find_teaching_skill("python")
    assert skill.sessions == 3
    assert skill.rating == 4.0
    assert profile.stats.avg_rating == 4.0
    assert profile.stats.sessions_taught == 3


async def test_overall_average_is_mean_of_rated_skills(session, make_user, schedule):
    teacher = await make_user("Teacher")
    learner = await make_user("Learner")
    users = UserService.with_session(session)
    for name in ("Python", "Go", "Rust"):
        await users.add_teaching_skill(teacher.id, name)
    meetings = MeetingService.with_session(session)

    python = await schedule(teacher, learner, session_type="teaching", skill="Python", hours_from_now=-10)
    await _complete_and_rate(meetings, learner, python, 5)
    go = await schedule(teacher, learner, session_type="teaching", skill="Go", hours_from_now=-5)
    await _complete_and_rate(meetings, learner, go, 2)

    profile = await users.require(teacher.id)
    # Rust has no rating yet and does not drag the mean down
    assert profile.stats.avg_rating == 3.5


async def test_rating_for_unlisted_skill_changes_nothing(session, make_user, schedule):
    teacher = await make_user("Teacher")
    learner = await make_user("Learner")
    meetings = MeetingService.with_session(session)

    result = await schedule(teacher, learner, session_type="teaching", skill="Juggling", hours_from_now=-3)
    await _complete_and_rate(meetings, learner, result, 5)

    profile = await UserService.with_session(session).require(teacher.id)
    assert profile.skills_teaching == []
    assert profile.stats.avg_rating == 0.0
    assert (await meetings.get(learner.id, result.meeting.id)).rating == 5


async def test_skill_added_after_completion_counts_as_one_session(session, make_user):
    teacher = await make_user()
    users = UserService.with_session(session)
    await users.add_teaching_skill(teacher.id, "Drawing")
    reputation = ReputationService.with_session(session)

    matched = await reputation.apply_session_rating(teacher.id, "DRAWING", 3)

    assert matched is True
    assert (await users.require(teacher.id)).find_teaching_skill("Drawing").rating == 3.0
    assert await reputation.apply_session_rating(teacher.id, None, 3) is False


async def test_session_counts_without_skill_still_count_for_both_roles(session, make_user, schedule):
    teacher = await make_user()
    learner = await make_user()
    await schedule(learner, teacher, session_type="learning", skill=None, hours_from_now=-4)

    await MeetingService.with_session(session).sweep_expired(teacher.id)

    users = UserService.with_session(session)
    assert (await users.require(teacher.id)).stats.sessions_taught == 1
    assert (await users.require(learner.id)).stats.sessions_learned == 1
    assert (await users.require(learner.id)).stats.sessions_taught == 0


async def test_non_ascii_skill_name_is_counted_and_rated(session, make_user, schedule):
    teacher = await make_user("Teacher")
    learner = await make_user("Learner")
    users = UserService.with_session(session)
    await users.add_teaching_skill(teacher.id, "Énglish")
    meetings = MeetingService.with_session(session)

    result = await schedule(teacher, learner, session_type="teaching", skill="Énglish", hours_from_now=-3)
    await _complete_and_rate(meetings, learner, result, 5)

    skill = (await users.require(teacher.id)).find_teaching_skill("énglish")
    assert skill.sessions == 1
    assert skill.rating == 5.0
    assert await ReputationService.with_session(session).apply_session_rating(teacher.id, "ÉNGLISH", 5) is True


async def test_rating_after_every_session_completed_uses_the_final_count(session, make_user, schedule):
    teacher = await make_user("Teacher")
    learner = await make_user("Learner")
    users = UserService.with_session(session)
    await users.add_teaching_skill(teacher.id, "Python")
    meetings = MeetingService.with_session(session)
    results = [
        await schedule(teacher, learner, session_type="teaching", skill="Python", hours_from_now=hours)
        for hours in (-30, -20, -10)
    ]

    await meetings.sweep_expired(learner.id, now=results[-1].meeting.ends_at + timedelta(seconds=1))
    for result, rating in zip(results, (5, 4, 3)):
        await meetings.rate(learner.id, result.meeting.id, rating)

    skill = (await users.require(teacher.id)).find_teaching_skill("Python")
    assert skill.sessions == 3
    # each fold divides by 3: 5/3, then (5/3*2+4)/3, then (22/9*2+3)/3
    assert skill.rating == 2.6
